"""Leveled spaced-repetition scheduling."""

import logging
from dataclasses import replace
from datetime import datetime, timedelta

from .config import (
    MIN_LEVEL, MAX_LEVEL, MIN_RATING, MAX_RATING, PASSING_RATING,
    REVIEW_INTERVAL_DAYS
)
from .models import CardProgress
from .utils import ensure_utc, utc_now

logger = logging.getLogger(__name__)


class InvalidRating(ValueError):
    """Raised when a recall rating is outside 1-5."""

    def __init__(self, rating):
        self.rating = rating
        super().__init__(f"Rating must be an integer from {MIN_RATING} to {MAX_RATING}, got {rating!r}")


def validate_rating(rating) -> int:
    # bool is an int subclass but never a rating
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise InvalidRating(rating)
    if not MIN_RATING <= rating <= MAX_RATING:
        raise InvalidRating(rating)
    return rating


def validate_intervals(intervals: dict) -> dict[int, int]:
    """Check an interval table covers every level and never shrinks as level rises.

    Keys may be strings (as loaded from JSON). Returns a normalized copy.
    """
    table = {int(level): int(days) for level, days in intervals.items()}
    expected = set(range(MIN_LEVEL, MAX_LEVEL + 1))
    if set(table) != expected:
        raise ValueError(f"Interval table must have exactly levels {sorted(expected)}, got {sorted(table)}")
    previous = None
    for level in sorted(table):
        days = table[level]
        if days < 0:
            raise ValueError(f"Interval for level {level} is negative: {days}")
        if previous is not None and days < previous:
            raise ValueError(f"Interval for level {level} ({days}d) is shorter than level {level - 1} ({previous}d)")
        previous = days
    return table


def interval_for_level(level: int, intervals: dict[int, int] | None = None) -> timedelta:
    """Time from a review until the card is due again at the given level."""
    table = intervals if intervals is not None else REVIEW_INTERVAL_DAYS
    return timedelta(days=table[level])


def next_level(level: int, rating: int) -> int:
    """Promote on a passing rating, demote otherwise, within the level bounds."""
    if rating >= PASSING_RATING:
        return min(level + 1, MAX_LEVEL)
    return max(level - 1, MIN_LEVEL)


def record_review(progress: CardProgress, rating: int, now: datetime | None = None,
                  intervals: dict[int, int] | None = None) -> CardProgress:
    """Apply a 1-5 recall rating and return the updated progress.

    The input record is left untouched. Raises InvalidRating for anything
    outside 1-5.
    """
    validate_rating(rating)
    now = ensure_utc(now) if now is not None else utc_now()

    level = next_level(progress.level, rating)
    due_at = now + interval_for_level(level, intervals)
    logger.debug(f"Card {progress.card_id}: rating {rating}, level {progress.level} -> {level}, due {due_at.isoformat()}")

    return replace(progress, level=level, last_reviewed_at=now, due_at=due_at)
