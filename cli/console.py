"""Console UI for arvo application."""

import requests

from core.config import MIN_RATING, MAX_RATING
from core.vocabulary import CATEGORY_DISPLAY_NAMES, DIFFICULTY_DISPLAY_NAMES
from cli.api_client import ArvoAPIClient

RATING_LABELS = {
    1: "Didn't know",
    2: 'Hard',
    3: 'Good',
    4: 'Easy',
    5: 'Perfect!',
}


class ConsoleUI:
    """Console user interface for arvo application."""

    def __init__(self, client: ArvoAPIClient):
        self.client = client

    def print_card_front(self, card: dict, position: int, total: int):
        print('\n' + '=' * 50)
        print(f'Card {position} of {total}  [{card["level_label"]}]  '
              f'{CATEGORY_DISPLAY_NAMES.get(card["category"], card["category"])}')
        print('=' * 50)
        print(f'\n  {card["term"]}\n')

    def print_card_back(self, card: dict):
        print(f'  Meaning: {card["meaning"]}')
        print(f'  Example: "{card["example"]}"')
        print(f'  Difficulty: {DIFFICULTY_DISPLAY_NAMES.get(card["difficulty"], card["difficulty"])}')

    def print_match(self, result: dict):
        """Print pronunciation feedback."""
        print('-' * 40)
        print(f'Heard: {result["transcript"]}')
        print(f'Score: {result["score"]} ({result["tier"]})')
        print(result['message'])
        print('-' * 40)

    def print_status(self, status: dict):
        """Print detailed status."""
        print('\n' + '=' * 50)
        print('STATUS SUMMARY')
        print('=' * 50)
        total = status['total_cards']
        learned = status['learned_count']
        percent = round(learned / total * 100) if total else 0
        print(f'\nLearned: {learned}/{total} ({percent}%)')
        print(f'Mastered: {status["mastered_count"]}')
        print(f'Due for review: {status["due_count"]}')

        print('\nBy category:')
        for category, stats in status['category_stats'].items():
            name = CATEGORY_DISPLAY_NAMES.get(category, category)
            print(f'  {name:<14} {stats["learned"]}/{stats["total"]} learned, {stats["mastered"]} mastered')

        session = status['session']
        if session['reviewed']:
            print(f'\nThis session: {session["correct"]}/{session["reviewed"]} recalled ({session["accuracy"]}%)')
        print('\n' + '=' * 50 + '\n')

    def read_rating(self) -> int | None:
        """Prompt until a valid rating is entered. None means stop reviewing."""
        options = ', '.join(f'{r}={label}' for r, label in RATING_LABELS.items())
        while True:
            user_input = input(f'How well did you know this? ({options}, q=stop) ==> ').strip().lower()
            if user_input == 'q':
                return None
            if user_input.isdigit() and MIN_RATING <= int(user_input) <= MAX_RATING:
                return int(user_input)
            print(f'Please enter a number from {MIN_RATING} to {MAX_RATING}.')

    def review(self):
        """Work through the cards due now."""
        due = self.client.get_due_cards()
        cards = due['cards']
        if not cards:
            print('No cards due for review right now. Check back later!')
            return

        for position, card in enumerate(cards, start=1):
            self.print_card_front(card, position, len(cards))
            input('Press Enter to flip... ')
            self.print_card_back(card)

            rating = self.read_rating()
            if rating is None:
                break
            result = self.client.review_card(card['id'], rating)
            progress = result['progress']
            print(f'Level {result["previous_level"]} -> {progress["level"]} ({progress["level_label"]})')

        status = self.client.get_status()
        session = status['session']
        print(f'\nSession: {session["correct"]}/{session["reviewed"]} recalled')

    def pronounce(self):
        """Practise saying a phrase; type what the recognizer heard."""
        target = input('Phrase to practise ==> ').strip()
        if not target:
            return
        while True:
            spoken = input('What was heard (blank to stop) ==> ').strip()
            if not spoken:
                return
            result = self.client.evaluate_pronunciation(target, spoken)
            self.print_match(result)
            if result['passed']:
                return

    def run(self):
        """Run the main application loop."""
        # Check server connection
        try:
            health = self.client.health_check()
            print(f"Connected to arvo server ({health['cards']} cards)")
        except requests.RequestException:
            print(f"Error: Cannot connect to server at {self.client.base_url}")
            print("Make sure the server is running: python run_server.py")
            return

        print('Commands: "review", "say", "status", "reset", "exit"\n')

        while True:
            command = input('arvo> ').strip().lower()
            try:
                if command == 'exit':
                    print('Hooroo!')
                    return
                elif command == 'review':
                    self.review()
                elif command == 'say':
                    self.pronounce()
                elif command == 'status':
                    self.print_status(self.client.get_status())
                elif command == 'reset':
                    if input('Delete all progress? (y/N) ==> ').strip().lower() == 'y':
                        result = self.client.reset_progress()
                        print(f'Removed {result["removed"]} progress records.')
                elif command:
                    print(f'Unknown command: {command}')
            except requests.RequestException as e:
                print(f"Error talking to server: {e}")
