"""Domain models for arvo application."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from .config import MIN_LEVEL, MAX_LEVEL, PASSING_RATING
from .utils import parse_timestamp, format_timestamp


class Category(str, Enum):
    """Fixed domain tags for slang terms."""
    GREETINGS = 'greetings'
    FOOD = 'food'
    PEOPLE = 'people'
    PLACES = 'places'
    EXPRESSIONS = 'expressions'
    WORKPLACE = 'workplace'


class Difficulty(str, Enum):
    BEGINNER = 'beginner'
    INTERMEDIATE = 'intermediate'
    ADVANCED = 'advanced'


@dataclass(frozen=True)
class VocabularyCard:
    """A single catalog entry. Reference data, never mutated."""
    id: str
    term: str
    meaning: str
    example: str
    category: Category
    difficulty: Difficulty

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'term': self.term,
            'meaning': self.meaning,
            'example': self.example,
            'category': self.category.value,
            'difficulty': self.difficulty.value
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'VocabularyCard':
        return cls(
            id=data['id'],
            term=data['term'],
            meaning=data['meaning'],
            example=data.get('example', ''),
            category=Category(data['category']),
            difficulty=Difficulty(data['difficulty'])
        )


@dataclass(frozen=True)
class CardProgress:
    """A learner's mastery state for one card.

    level runs from 0 (unseen) to 5 (mastered). A missing due_at means the
    card is due right away.
    """
    card_id: str
    level: int = MIN_LEVEL
    last_reviewed_at: datetime | None = None
    due_at: datetime | None = None

    def __post_init__(self):
        if not MIN_LEVEL <= self.level <= MAX_LEVEL:
            raise ValueError(f"level must be between {MIN_LEVEL} and {MAX_LEVEL}, got {self.level}")
        if self.due_at and self.last_reviewed_at and self.due_at < self.last_reviewed_at:
            raise ValueError("due_at must not be earlier than last_reviewed_at")

    @property
    def is_new(self) -> bool:
        return self.last_reviewed_at is None

    def to_dict(self) -> dict:
        return {
            'card_id': self.card_id,
            'level': self.level,
            'last_reviewed_at': format_timestamp(self.last_reviewed_at),
            'due_at': format_timestamp(self.due_at)
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'CardProgress':
        return cls(
            card_id=data['card_id'],
            level=int(data.get('level', MIN_LEVEL)),
            last_reviewed_at=parse_timestamp(data.get('last_reviewed_at')),
            due_at=parse_timestamp(data.get('due_at'))
        )


def get_card_progress(progress: dict, card_id: str) -> CardProgress:
    """Look up progress for a card, or a fresh unseen record if there is none."""
    existing = progress.get(card_id)
    if existing is None:
        return CardProgress(card_id=card_id)
    return existing


class SessionStats:
    """Counts reviews within one sitting. Not persisted."""

    def __init__(self):
        self.reviewed = 0
        self.correct = 0

    def record(self, rating: int) -> None:
        self.reviewed += 1
        if rating >= PASSING_RATING:
            self.correct += 1

    @property
    def accuracy(self) -> int:
        """Percentage of reviews rated as recalled."""
        if self.reviewed == 0:
            return 0
        return round(self.correct / self.reviewed * 100)

    def to_dict(self) -> dict:
        return {
            'reviewed': self.reviewed,
            'correct': self.correct,
            'accuracy': self.accuracy
        }
