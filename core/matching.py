"""Pronunciation matching: edit-distance similarity and feedback tiers."""

from dataclasses import dataclass
from enum import Enum

from .config import (
    PERFECT_SCORE, ALTERNATIVE_MATCH_SCORE,
    CONTAINS_TARGET_MIN_SCORE, PARTIAL_MATCH_MIN_SCORE, PARTIAL_MATCH_MIN_LENGTH,
    GOOD_THRESHOLD, CLOSE_THRESHOLD, TRY_AGAIN_THRESHOLD
)
from .utils import normalize_text


class Tier(str, Enum):
    """Feedback category for a pronunciation attempt, best first."""
    PERFECT = 'perfect'
    EXCELLENT = 'excellent'
    GOOD = 'good'
    PARTIAL = 'partial'
    CLOSE = 'close'
    TRY_AGAIN = 'tryagain'
    DIFFERENT = 'different'

    @property
    def passed(self) -> bool:
        return self in (Tier.PERFECT, Tier.EXCELLENT, Tier.GOOD)


FEEDBACK_MESSAGES = {
    Tier.PERFECT: "Spot on! Perfect pronunciation.",
    Tier.EXCELLENT: "Excellent! You nailed it.",
    Tier.GOOD: "Good job, that's it.",
    Tier.PARTIAL: "Part of the way there. Say the whole phrase.",
    Tier.CLOSE: "Close! Have another go.",
    Tier.TRY_AGAIN: "Not quite. Listen and try again.",
    Tier.DIFFERENT: "That sounded like something else. Try again.",
}


@dataclass(frozen=True)
class MatchResult:
    score: int
    tier: Tier
    normalized_target: str
    transcript: str = ''

    @property
    def message(self) -> str:
        return FEEDBACK_MESSAGES[self.tier]

    def to_dict(self) -> dict:
        return {
            'score': self.score,
            'tier': self.tier.value,
            'normalized_target': self.normalized_target,
            'transcript': self.transcript,
            'message': self.message
        }


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance with unit insert, delete and substitute costs."""
    if len(a) < len(b):
        a, b = b, a
    # b is the shorter string; keep one row of len(b) + 1
    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            cost = 0 if char_a == char_b else 1
            current.append(min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + cost
            ))
        previous = current
    return previous[-1]


def similarity(a: str, b: str) -> int:
    """Similarity of two strings as an integer percentage (0-100)."""
    a = normalize_text(a)
    b = normalize_text(b)
    if not a and not b:
        return 100
    if not a or not b:
        return 0
    distance = edit_distance(a, b)
    ratio = 1 - distance / max(len(a), len(b))
    # Round half up
    score = int(ratio * 100 + 0.5)
    return max(0, min(100, score))


def classify_match(target: str, spoken: str, alternatives: list[str] | None = None) -> MatchResult:
    """Score a spoken attempt against the target phrase.

    Rules are checked in order and the first one that applies wins:
    exact match, exact alternative, spoken contains target, target contains
    spoken, then plain similarity thresholds.
    """
    normalized_target = normalize_text(target)
    normalized_spoken = normalize_text(spoken)
    transcript = spoken or ''

    def result(score: int, tier: Tier) -> MatchResult:
        return MatchResult(score, tier, normalized_target, transcript)

    if normalized_spoken == normalized_target:
        return result(PERFECT_SCORE, Tier.PERFECT)

    for alternative in alternatives or []:
        if normalize_text(alternative) == normalized_target:
            return result(ALTERNATIVE_MATCH_SCORE, Tier.EXCELLENT)

    score = similarity(normalized_target, normalized_spoken)

    if normalized_target in normalized_spoken:
        return result(max(score, CONTAINS_TARGET_MIN_SCORE), Tier.GOOD)

    if normalized_spoken in normalized_target and len(normalized_spoken) > PARTIAL_MATCH_MIN_LENGTH:
        return result(max(score, PARTIAL_MATCH_MIN_SCORE), Tier.PARTIAL)

    if score >= GOOD_THRESHOLD:
        return result(score, Tier.GOOD)
    if score >= CLOSE_THRESHOLD:
        return result(score, Tier.CLOSE)
    if score >= TRY_AGAIN_THRESHOLD:
        return result(score, Tier.TRY_AGAIN)
    return result(score, Tier.DIFFERENT)


def evaluate_pronunciation(target: str, spoken_primary: str, alternatives: list[str] | None = None) -> MatchResult:
    """Evaluate a recognizer result for a target phrase.

    spoken_primary is the recognizer's best guess; alternatives are its other
    candidates in ranked order.
    """
    return classify_match(target, spoken_primary, alternatives)
