"""Due-card selection, catalog filtering and progress statistics."""

from datetime import datetime
from typing import Iterable, Iterator

from .config import LEARNED_LEVEL, MAX_LEVEL
from .models import CardProgress, Category, Difficulty, VocabularyCard
from .utils import ensure_utc, utc_now


def is_due(progress: CardProgress | None, now: datetime) -> bool:
    """A card is due if it was never seen, has no due date, or the date has arrived."""
    if progress is None or progress.due_at is None:
        return True
    return ensure_utc(progress.due_at) <= ensure_utc(now)


def iter_due_cards(catalog: Iterable[VocabularyCard], progress: dict[str, CardProgress],
                   now: datetime | None = None) -> Iterator[VocabularyCard]:
    """Yield due cards: never-seen cards first, then by ascending level.

    Equal keys keep catalog order. Every call starts over from the catalog.
    """
    now = now if now is not None else utc_now()
    due = []
    for position, card in enumerate(catalog):
        record = progress.get(card.id)
        if not is_due(record, now):
            continue
        if record is None:
            key = (0, 0, position)
        else:
            key = (1, record.level, position)
        due.append((key, card))
    due.sort(key=lambda item: item[0])
    for _, card in due:
        yield card


def get_due_cards(catalog: Iterable[VocabularyCard], progress: dict[str, CardProgress],
                  now: datetime | None = None) -> list[VocabularyCard]:
    """Cards currently due for review, in presentation order."""
    return list(iter_due_cards(catalog, progress, now))


def filter_cards(catalog: Iterable[VocabularyCard], category: Category | str | None = None,
                 difficulty: Difficulty | str | None = None) -> list[VocabularyCard]:
    """Browse the catalog by category and/or difficulty. None means any."""
    if category is not None:
        category = Category(category)
    if difficulty is not None:
        difficulty = Difficulty(difficulty)
    return [
        card for card in catalog
        if (category is None or card.category == category)
        and (difficulty is None or card.difficulty == difficulty)
    ]


def learned_count(progress: dict[str, CardProgress]) -> int:
    return sum(1 for record in progress.values() if record.level >= LEARNED_LEVEL)


def mastered_count(progress: dict[str, CardProgress]) -> int:
    return sum(1 for record in progress.values() if record.level >= MAX_LEVEL)


def category_stats(catalog: Iterable[VocabularyCard], progress: dict[str, CardProgress]) -> dict[str, dict]:
    """Per-category totals: {category: {total, learned, mastered}}."""
    stats = {}
    for card in catalog:
        entry = stats.setdefault(card.category.value, {'total': 0, 'learned': 0, 'mastered': 0})
        entry['total'] += 1
        record = progress.get(card.id)
        if record is None:
            continue
        if record.level >= LEARNED_LEVEL:
            entry['learned'] += 1
        if record.level >= MAX_LEVEL:
            entry['mastered'] += 1
    return stats
