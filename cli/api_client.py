"""REST API client for arvo server."""

import requests


class ArvoAPIClient:
    """Client for communicating with the arvo REST API."""

    def __init__(self, base_url: str = "http://localhost:8000", user_id: str = "default"):
        self.base_url = base_url.rstrip('/')
        self.user_id = user_id
        self.session = requests.Session()

    def _get(self, endpoint: str, params: dict = None) -> dict:
        """Make a GET request."""
        if params is None:
            params = {}
        params['user_id'] = self.user_id
        response = self.session.get(f"{self.base_url}{endpoint}", params=params)
        response.raise_for_status()
        return response.json()

    def _post(self, endpoint: str, data: dict) -> dict:
        """Make a POST request."""
        response = self.session.post(f"{self.base_url}{endpoint}", json=data)
        response.raise_for_status()
        return response.json()

    def health_check(self) -> dict:
        """Check if the server is running."""
        response = self.session.get(f"{self.base_url}/")
        response.raise_for_status()
        return response.json()

    def get_status(self) -> dict:
        """Get learner progress summary."""
        return self._get("/api/status")

    def get_cards(self, category: str = None, difficulty: str = None) -> dict:
        """Browse the catalog."""
        params = {}
        if category:
            params['category'] = category
        if difficulty:
            params['difficulty'] = difficulty
        return self._get("/api/cards", params)

    def get_due_cards(self) -> dict:
        """Get cards due for review."""
        return self._get("/api/cards/due")

    def get_card_progress(self, card_id: str) -> dict:
        return self._get(f"/api/cards/{card_id}/progress")

    def review_card(self, card_id: str, rating: int) -> dict:
        """Submit a 1-5 recall rating for a card."""
        return self._post(f"/api/cards/{card_id}/review", {
            'rating': rating,
            'user_id': self.user_id
        })

    def evaluate_pronunciation(self, target: str, spoken: str, alternatives: list[str] = None) -> dict:
        """Score what the recognizer heard against a target phrase."""
        return self._post("/api/pronunciation", {
            'target': target,
            'spoken': spoken,
            'alternatives': alternatives or []
        })

    def reset_progress(self) -> dict:
        """Delete all of this learner's progress."""
        response = self.session.delete(f"{self.base_url}/api/progress", params={'user_id': self.user_id})
        response.raise_for_status()
        return response.json()
