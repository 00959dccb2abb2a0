from .models import Category, Difficulty, VocabularyCard, CardProgress, SessionStats, get_card_progress
from .matching import Tier, MatchResult, similarity, edit_distance, classify_match, evaluate_pronunciation
from .scheduler import InvalidRating, record_review, interval_for_level, validate_intervals
from .selection import (
    is_due, iter_due_cards, get_due_cards, filter_cards,
    learned_count, mastered_count, category_stats
)
from .interfaces import Storage
from .utils import normalize_text
from .vocabulary import CATALOG, get_card

__all__ = [
    'Category', 'Difficulty', 'VocabularyCard', 'CardProgress', 'SessionStats', 'get_card_progress',
    'Tier', 'MatchResult', 'similarity', 'edit_distance', 'classify_match', 'evaluate_pronunciation',
    'InvalidRating', 'record_review', 'interval_for_level', 'validate_intervals',
    'is_due', 'iter_due_cards', 'get_due_cards', 'filter_cards',
    'learned_count', 'mastered_count', 'category_stats',
    'Storage',
    'normalize_text',
    'CATALOG', 'get_card'
]
