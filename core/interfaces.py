"""Abstract base classes for dependency injection."""

from abc import ABC, abstractmethod


class Storage(ABC):
    """Abstract base class for config and per-learner progress storage.

    Progress records travel as plain dicts (CardProgress.to_dict() shape),
    keyed by card id.
    """

    @abstractmethod
    def load_config(self) -> dict:
        """Load configuration. Raises FileNotFoundError if there is none."""
        pass

    @abstractmethod
    def load_progress(self, user_id: str = "default") -> dict[str, dict]:
        """Load all progress records for a learner. Returns {} if none."""
        pass

    @abstractmethod
    def save_card_progress(self, user_id: str, progress: dict) -> None:
        """Insert or replace the progress record for one card."""
        pass

    @abstractmethod
    def reset_progress(self, user_id: str) -> int:
        """Delete every progress record for a learner. Returns how many were removed."""
        pass

    @abstractmethod
    def list_users(self) -> list[str]:
        """List learners with stored progress."""
        pass
