"""Unit tests for arvo core module."""

import unittest
from dataclasses import FrozenInstanceError
from datetime import datetime, timedelta, timezone
from types import GeneratorType

from core.config import MIN_LEVEL, MAX_LEVEL, MIN_RATING, MAX_RATING, REVIEW_INTERVAL_DAYS
from core.matching import Tier, MatchResult, edit_distance, similarity, classify_match, evaluate_pronunciation
from core.models import Category, Difficulty, VocabularyCard, CardProgress, SessionStats, get_card_progress
from core.scheduler import InvalidRating, record_review, interval_for_level, next_level, validate_intervals
from core.selection import (
    is_due, iter_due_cards, get_due_cards, filter_cards,
    learned_count, mastered_count, category_stats
)
from core.utils import normalize_text, parse_timestamp
from core.vocabulary import CATALOG, CARDS_BY_ID, CATEGORY_DISPLAY_NAMES, LEVEL_LABELS, get_card


NOW = datetime(2026, 10, 17, 9, 0, tzinfo=timezone.utc)
YESTERDAY = NOW - timedelta(days=1)
TOMORROW = NOW + timedelta(days=1)


# ============================================================================
# Helpers
# ============================================================================

def make_card(card_id: str, category: Category = Category.FOOD,
              difficulty: Difficulty = Difficulty.BEGINNER) -> VocabularyCard:
    return VocabularyCard(
        id=card_id,
        term=card_id,
        meaning=f'meaning of {card_id}',
        example=f'example with {card_id}',
        category=category,
        difficulty=difficulty
    )


def make_progress(card_id: str, level: int, due_at: datetime | None = None,
                  last_reviewed_at: datetime | None = None) -> CardProgress:
    if due_at is not None and last_reviewed_at is None:
        last_reviewed_at = min(due_at, NOW) - timedelta(days=1)
    return CardProgress(card_id=card_id, level=level, last_reviewed_at=last_reviewed_at, due_at=due_at)


# ============================================================================
# Test Cases
# ============================================================================

class TestNormalizeText(unittest.TestCase):
    """Tests for normalize_text utility function."""

    def test_lowercases_and_trims(self):
        self.assertEqual(normalize_text("  Hello,   World!  "), "hello world")

    def test_strips_punctuation(self):
        self.assertEqual(normalize_text("G'day Mate"), "gday mate")

    def test_keeps_digits(self):
        self.assertEqual(normalize_text("Route 66"), "route 66")

    def test_strips_non_ascii_letters(self):
        self.assertEqual(normalize_text("Café 123"), "caf 123")

    def test_collapses_mixed_whitespace(self):
        self.assertEqual(normalize_text("no\tworries\n  mate"), "no worries mate")

    def test_punctuation_only_becomes_empty(self):
        self.assertEqual(normalize_text("!!! ???"), "")

    def test_leading_symbol_leaves_no_space(self):
        self.assertEqual(normalize_text(" ! hi"), "hi")

    def test_empty_and_none(self):
        self.assertEqual(normalize_text(""), "")
        self.assertEqual(normalize_text(None), "")

    def test_idempotent(self):
        samples = ["  Hello,   World!  ", " ! hi", "G'day\t\tMATE!!", "", "ça   va?", "a - b"]
        for sample in samples:
            once = normalize_text(sample)
            self.assertEqual(normalize_text(once), once)


class TestEditDistance(unittest.TestCase):
    """Tests for edit_distance."""

    def test_classic_examples(self):
        self.assertEqual(edit_distance("kitten", "sitting"), 3)
        self.assertEqual(edit_distance("flaw", "lawn"), 2)

    def test_identical(self):
        self.assertEqual(edit_distance("arvo", "arvo"), 0)

    def test_against_empty(self):
        self.assertEqual(edit_distance("", "abc"), 3)
        self.assertEqual(edit_distance("abc", ""), 3)

    def test_morning_afternoon(self):
        self.assertEqual(edit_distance("morning", "afternoon"), 7)


class TestSimilarity(unittest.TestCase):
    """Tests for similarity scoring."""

    def test_identical_strings_score_100(self):
        for s in ["a", "arvo", "good morning", "fair dinkum mate"]:
            self.assertEqual(similarity(s, s), 100)

    def test_both_empty_score_100(self):
        self.assertEqual(similarity("", ""), 100)

    def test_one_empty_scores_0(self):
        self.assertEqual(similarity("arvo", ""), 0)
        self.assertEqual(similarity("", "arvo"), 0)

    def test_empty_after_normalization(self):
        self.assertEqual(similarity("!!!", ""), 100)
        self.assertEqual(similarity("?", "arvo"), 0)

    def test_symmetric(self):
        pairs = [("kitten", "sitting"), ("good morning", "good afternoon"), ("servo", "se"), ("a", "")]
        for a, b in pairs:
            self.assertEqual(similarity(a, b), similarity(b, a))

    def test_formula(self):
        # distance 3 over 7 characters
        self.assertEqual(similarity("kitten", "sitting"), 57)

    def test_rounds_half_up(self):
        # distance 3 over 8 characters is 62.5
        self.assertEqual(similarity("abcdefgh", "abcdexyz"), 63)

    def test_good_morning_afternoon(self):
        self.assertEqual(similarity("good morning", "good afternoon"), 50)

    def test_within_bounds(self):
        for a, b in [("a", "zzzzzzzz"), ("ripper", "hello"), ("x", "x y z")]:
            self.assertTrue(0 <= similarity(a, b) <= 100)


class TestClassifyMatch(unittest.TestCase):
    """Tests for the ordered pronunciation rules."""

    def test_exact_match_is_perfect(self):
        result = classify_match("good morning", "good morning", [])
        self.assertEqual(result.score, 100)
        self.assertEqual(result.tier, Tier.PERFECT)

    def test_exact_match_after_normalization(self):
        result = classify_match("G'day mate!", "gday MATE", [])
        self.assertEqual(result.tier, Tier.PERFECT)
        self.assertEqual(result.normalized_target, "gday mate")

    def test_alternative_match_is_excellent(self):
        result = classify_match("fair dinkum", "fair drinking", ["fair drinking", "Fair dinkum!"])
        self.assertEqual(result.score, 95)
        self.assertEqual(result.tier, Tier.EXCELLENT)

    def test_primary_match_wins_over_alternatives(self):
        result = classify_match("arvo", "arvo", ["arvo"])
        self.assertEqual(result.tier, Tier.PERFECT)

    def test_spoken_contains_target_is_good_with_floor(self):
        result = classify_match("arvo", "this arvo", [])
        self.assertEqual(result.tier, Tier.GOOD)
        self.assertEqual(result.score, 85)

    def test_spoken_contains_target_keeps_higher_similarity(self):
        result = classify_match("mozzie", "mozzies", [])
        self.assertEqual(result.tier, Tier.GOOD)
        self.assertEqual(result.score, 86)

    def test_target_contains_spoken_is_partial(self):
        result = classify_match("no worries mate", "no worries", [])
        self.assertEqual(result.tier, Tier.PARTIAL)
        self.assertEqual(result.score, 70)

    def test_short_fragment_is_not_partial(self):
        result = classify_match("servo", "se", [])
        self.assertEqual(result.tier, Tier.TRY_AGAIN)
        self.assertEqual(result.score, 40)

    def test_high_similarity_is_good(self):
        result = classify_match("fair dinkum", "fair dinkun", [])
        self.assertEqual(result.tier, Tier.GOOD)
        self.assertEqual(result.score, 91)

    def test_close(self):
        result = classify_match("barbie", "barby", [])
        self.assertEqual(result.tier, Tier.CLOSE)
        self.assertEqual(result.score, 67)

    def test_good_morning_vs_afternoon_is_try_again(self):
        result = classify_match("good morning", "good afternoon", [])
        self.assertEqual(result.score, 50)
        self.assertEqual(result.tier, Tier.TRY_AGAIN)

    def test_unrelated_is_different(self):
        result = classify_match("ripper", "hello", [])
        self.assertEqual(result.tier, Tier.DIFFERENT)
        self.assertEqual(result.score, 0)

    def test_empty_spoken_is_different(self):
        result = classify_match("arvo", "", [])
        self.assertEqual(result.tier, Tier.DIFFERENT)
        self.assertEqual(result.score, 0)

    def test_everything_empty_is_perfect(self):
        result = classify_match("", "", [])
        self.assertEqual(result.tier, Tier.PERFECT)

    def test_alternatives_optional(self):
        self.assertEqual(classify_match("arvo", "arvo").tier, Tier.PERFECT)
        self.assertEqual(classify_match("arvo", "avro", None).score, similarity("arvo", "avro"))

    def test_transcript_kept_verbatim(self):
        result = classify_match("arvo", "This Arvo!", [])
        self.assertEqual(result.transcript, "This Arvo!")

    def test_deterministic(self):
        first = classify_match("hard yakka", "hard yacker", ["hard yakker"])
        second = classify_match("hard yakka", "hard yacker", ["hard yakker"])
        self.assertEqual(first, second)

    def test_every_catalog_term_matches_itself(self):
        for card in CATALOG:
            self.assertEqual(evaluate_pronunciation(card.term, card.term, []).tier, Tier.PERFECT)


class TestMatchResult(unittest.TestCase):
    """Tests for MatchResult and Tier helpers."""

    def test_to_dict(self):
        result = evaluate_pronunciation("Fair dinkum", "fair dinkum", [])
        data = result.to_dict()
        self.assertEqual(data['score'], 100)
        self.assertEqual(data['tier'], 'perfect')
        self.assertEqual(data['normalized_target'], 'fair dinkum')
        self.assertTrue(data['message'])

    def test_tier_values(self):
        self.assertEqual(Tier.TRY_AGAIN.value, 'tryagain')
        self.assertEqual(Tier('different'), Tier.DIFFERENT)

    def test_passed(self):
        self.assertTrue(Tier.PERFECT.passed)
        self.assertTrue(Tier.GOOD.passed)
        self.assertFalse(Tier.PARTIAL.passed)
        self.assertFalse(Tier.DIFFERENT.passed)

    def test_every_tier_has_message(self):
        for tier in Tier:
            self.assertTrue(MatchResult(0, tier, '').message)


class TestCardProgress(unittest.TestCase):
    """Tests for CardProgress model."""

    def test_defaults(self):
        progress = CardProgress(card_id='arvo')
        self.assertEqual(progress.level, 0)
        self.assertIsNone(progress.due_at)
        self.assertIsNone(progress.last_reviewed_at)
        self.assertTrue(progress.is_new)

    def test_level_out_of_range(self):
        with self.assertRaises(ValueError):
            CardProgress(card_id='arvo', level=6)
        with self.assertRaises(ValueError):
            CardProgress(card_id='arvo', level=-1)

    def test_due_before_last_review_rejected(self):
        with self.assertRaises(ValueError):
            CardProgress(card_id='arvo', level=1, last_reviewed_at=NOW, due_at=YESTERDAY)

    def test_frozen(self):
        progress = CardProgress(card_id='arvo')
        with self.assertRaises(FrozenInstanceError):
            progress.level = 3

    def test_to_dict_and_from_dict_roundtrip(self):
        progress = CardProgress(card_id='arvo', level=2, last_reviewed_at=NOW, due_at=NOW + timedelta(days=3))
        data = progress.to_dict()
        self.assertEqual(data['due_at'], '2026-10-20T09:00:00+00:00')
        self.assertEqual(CardProgress.from_dict(data), progress)

    def test_from_dict_unseen(self):
        progress = CardProgress.from_dict({'card_id': 'arvo'})
        self.assertEqual(progress, CardProgress(card_id='arvo'))

    def test_from_dict_accepts_datetimes(self):
        naive = datetime(2026, 10, 17, 9, 0)
        progress = CardProgress.from_dict({'card_id': 'arvo', 'level': 1,
                                           'last_reviewed_at': naive, 'due_at': naive})
        self.assertEqual(progress.due_at, NOW)
        self.assertEqual(progress.due_at.tzinfo, timezone.utc)

    def test_parse_timestamp_empty(self):
        self.assertIsNone(parse_timestamp(None))
        self.assertIsNone(parse_timestamp(''))


class TestGetCardProgress(unittest.TestCase):
    """Tests for get_card_progress."""

    def test_absent_returns_unseen_record(self):
        progress = get_card_progress({}, 'arvo')
        self.assertEqual(progress.card_id, 'arvo')
        self.assertEqual(progress.level, 0)
        self.assertTrue(is_due(progress, NOW))

    def test_present_returns_stored_record(self):
        stored = make_progress('arvo', 3, due_at=TOMORROW)
        self.assertIs(get_card_progress({'arvo': stored}, 'arvo'), stored)

    def test_does_not_insert(self):
        progress = {}
        get_card_progress(progress, 'arvo')
        self.assertEqual(progress, {})


class TestRecordReview(unittest.TestCase):
    """Tests for the spaced-repetition scheduler."""

    def test_passing_rating_promotes(self):
        updated = record_review(CardProgress(card_id='arvo'), 3, NOW)
        self.assertEqual(updated.level, 1)
        self.assertEqual(updated.due_at, NOW + timedelta(days=1))
        self.assertEqual(updated.last_reviewed_at, NOW)

    def test_failing_rating_demotes(self):
        updated = record_review(make_progress('arvo', 3, due_at=YESTERDAY), 2, NOW)
        self.assertEqual(updated.level, 2)
        self.assertEqual(updated.due_at, NOW + timedelta(days=3))

    def test_failing_at_unseen_stays_due_now(self):
        updated = record_review(CardProgress(card_id='arvo'), 1, NOW)
        self.assertEqual(updated.level, 0)
        self.assertEqual(updated.due_at, NOW)
        self.assertTrue(is_due(updated, NOW))

    def test_mastered_stays_mastered(self):
        updated = record_review(make_progress('arvo', 5, due_at=YESTERDAY), 5, NOW)
        self.assertEqual(updated.level, 5)
        self.assertEqual(updated.due_at, NOW + timedelta(days=30))

    def test_level_bounds_for_all_inputs(self):
        for level in range(MIN_LEVEL, MAX_LEVEL + 1):
            for rating in range(MIN_RATING, MAX_RATING + 1):
                updated = record_review(CardProgress(card_id='x', level=level), rating, NOW)
                self.assertTrue(MIN_LEVEL <= updated.level <= MAX_LEVEL)
                self.assertGreaterEqual(updated.due_at, updated.last_reviewed_at)

    def test_input_left_unchanged(self):
        original = make_progress('arvo', 2, due_at=YESTERDAY)
        record_review(original, 5, NOW)
        self.assertEqual(original.level, 2)
        self.assertEqual(original.due_at, YESTERDAY)

    def test_invalid_ratings(self):
        for rating in [0, 6, -1, 3.5, '3', True, None]:
            with self.assertRaises(InvalidRating):
                record_review(CardProgress(card_id='arvo'), rating, NOW)

    def test_invalid_rating_is_value_error(self):
        with self.assertRaises(ValueError) as ctx:
            record_review(CardProgress(card_id='arvo'), 0, NOW)
        self.assertEqual(ctx.exception.rating, 0)

    def test_naive_now_treated_as_utc(self):
        updated = record_review(CardProgress(card_id='arvo'), 4, datetime(2026, 10, 17, 9, 0))
        self.assertEqual(updated.last_reviewed_at, NOW)

    def test_now_defaults_to_current_time(self):
        before = datetime.now(timezone.utc)
        updated = record_review(CardProgress(card_id='arvo'), 4)
        self.assertGreaterEqual(updated.last_reviewed_at, before)

    def test_custom_intervals(self):
        intervals = {0: 0, 1: 2, 2: 4, 3: 8, 4: 16, 5: 60}
        updated = record_review(CardProgress(card_id='arvo', level=4), 5, NOW, intervals)
        self.assertEqual(updated.due_at, NOW + timedelta(days=60))

    def test_next_level(self):
        self.assertEqual(next_level(0, 3), 1)
        self.assertEqual(next_level(5, 4), 5)
        self.assertEqual(next_level(0, 2), 0)
        self.assertEqual(next_level(4, 1), 3)


class TestIntervals(unittest.TestCase):
    """Tests for the review interval table."""

    def test_default_table(self):
        expected_days = [0, 1, 3, 7, 14, 30]
        for level, days in enumerate(expected_days):
            self.assertEqual(interval_for_level(level), timedelta(days=days))

    def test_monotonic(self):
        for level in range(MIN_LEVEL, MAX_LEVEL):
            self.assertLessEqual(interval_for_level(level), interval_for_level(level + 1))

    def test_default_table_is_valid(self):
        self.assertEqual(validate_intervals(REVIEW_INTERVAL_DAYS), REVIEW_INTERVAL_DAYS)

    def test_validate_accepts_string_keys(self):
        table = validate_intervals({'0': 0, '1': 1, '2': 2, '3': 5, '4': 10, '5': 20})
        self.assertEqual(table[3], 5)

    def test_validate_rejects_shrinking_table(self):
        with self.assertRaises(ValueError):
            validate_intervals({0: 0, 1: 3, 2: 1, 3: 7, 4: 14, 5: 30})

    def test_validate_rejects_missing_level(self):
        with self.assertRaises(ValueError):
            validate_intervals({0: 0, 1: 1, 2: 3, 3: 7, 4: 14})

    def test_validate_rejects_negative(self):
        with self.assertRaises(ValueError):
            validate_intervals({0: -1, 1: 1, 2: 3, 3: 7, 4: 14, 5: 30})


class TestDueCards(unittest.TestCase):
    """Tests for due card selection."""

    def test_unseen_before_leveled(self):
        a = make_card('a')
        b = make_card('b')
        progress = {'b': make_progress('b', 3, due_at=YESTERDAY)}
        self.assertEqual(get_due_cards([a, b], progress, NOW), [a, b])

    def test_unseen_first_even_when_later_in_catalog(self):
        b = make_card('b')
        a = make_card('a')
        progress = {'b': make_progress('b', 3, due_at=YESTERDAY)}
        self.assertEqual(get_due_cards([b, a], progress, NOW), [a, b])

    def test_excludes_future_due(self):
        card = make_card('a')
        progress = {'a': make_progress('a', 2, due_at=NOW + timedelta(seconds=1))}
        self.assertEqual(get_due_cards([card], progress, NOW), [])

    def test_includes_due_exactly_now(self):
        card = make_card('a')
        progress = {'a': make_progress('a', 2, due_at=NOW)}
        self.assertEqual(get_due_cards([card], progress, NOW), [card])

    def test_missing_due_at_is_due(self):
        card = make_card('a')
        progress = {'a': CardProgress(card_id='a', level=1)}
        self.assertEqual(get_due_cards([card], progress, NOW), [card])

    def test_order_by_level_then_catalog(self):
        cards = [make_card(f'c{i}') for i in range(1, 6)]
        progress = {
            'c1': make_progress('c1', 2, due_at=YESTERDAY),
            'c3': make_progress('c3', 0, due_at=YESTERDAY),
            'c4': make_progress('c4', 2, due_at=YESTERDAY),
        }
        due = get_due_cards(cards, progress, NOW)
        self.assertEqual([c.id for c in due], ['c2', 'c5', 'c3', 'c1', 'c4'])

    def test_iter_is_generator_and_restartable(self):
        cards = [make_card('a'), make_card('b')]
        progress = {'a': make_progress('a', 1, due_at=TOMORROW)}
        it = iter_due_cards(cards, progress, NOW)
        self.assertIsInstance(it, GeneratorType)
        self.assertEqual(list(it), [cards[1]])
        self.assertEqual(list(iter_due_cards(cards, progress, NOW)), [cards[1]])

    def test_naive_now(self):
        card = make_card('a')
        progress = {'a': make_progress('a', 1, due_at=NOW)}
        self.assertEqual(get_due_cards([card], progress, datetime(2026, 10, 17, 9, 0)), [card])

    def test_reviewed_card_leaves_due_list(self):
        card = make_card('a')
        updated = record_review(CardProgress(card_id='a'), 4, NOW)
        self.assertEqual(get_due_cards([card], {'a': updated}, NOW), [])
        self.assertEqual(get_due_cards([card], {'a': updated}, NOW + timedelta(days=1)), [card])


class TestStatistics(unittest.TestCase):
    """Tests for aggregate progress statistics."""

    def setUp(self):
        self.cards = [
            make_card('a', Category.FOOD),
            make_card('b', Category.FOOD),
            make_card('c', Category.PEOPLE),
        ]
        self.progress = {
            'a': make_progress('a', 5, due_at=TOMORROW),
            'b': make_progress('b', 0, due_at=NOW),
            'c': make_progress('c', 1, due_at=TOMORROW),
        }

    def test_learned_count(self):
        self.assertEqual(learned_count(self.progress), 2)

    def test_mastered_count(self):
        self.assertEqual(mastered_count(self.progress), 1)

    def test_empty(self):
        self.assertEqual(learned_count({}), 0)
        self.assertEqual(mastered_count({}), 0)

    def test_category_stats(self):
        stats = category_stats(self.cards, self.progress)
        self.assertEqual(stats['food'], {'total': 2, 'learned': 1, 'mastered': 1})
        self.assertEqual(stats['people'], {'total': 1, 'learned': 1, 'mastered': 0})

    def test_category_stats_without_progress(self):
        stats = category_stats(self.cards, {})
        self.assertEqual(stats['food'], {'total': 2, 'learned': 0, 'mastered': 0})


class TestFilterCards(unittest.TestCase):
    """Tests for catalog browsing."""

    def setUp(self):
        self.cards = [
            make_card('a', Category.FOOD, Difficulty.BEGINNER),
            make_card('b', Category.FOOD, Difficulty.ADVANCED),
            make_card('c', Category.PEOPLE, Difficulty.BEGINNER),
        ]

    def test_no_filter(self):
        self.assertEqual(filter_cards(self.cards), self.cards)

    def test_by_category_string(self):
        self.assertEqual([c.id for c in filter_cards(self.cards, 'food')], ['a', 'b'])

    def test_by_difficulty_enum(self):
        self.assertEqual([c.id for c in filter_cards(self.cards, difficulty=Difficulty.BEGINNER)], ['a', 'c'])

    def test_by_both(self):
        self.assertEqual([c.id for c in filter_cards(self.cards, Category.FOOD, 'advanced')], ['b'])

    def test_unknown_category(self):
        with self.assertRaises(ValueError):
            filter_cards(self.cards, 'sport')


class TestSessionStats(unittest.TestCase):
    """Tests for SessionStats."""

    def test_empty(self):
        stats = SessionStats()
        self.assertEqual(stats.to_dict(), {'reviewed': 0, 'correct': 0, 'accuracy': 0})

    def test_record(self):
        stats = SessionStats()
        for rating in [5, 3, 2, 1]:
            stats.record(rating)
        self.assertEqual(stats.reviewed, 4)
        self.assertEqual(stats.correct, 2)
        self.assertEqual(stats.accuracy, 50)


class TestVocabulary(unittest.TestCase):
    """Tests for the static catalog."""

    def test_ids_unique(self):
        self.assertEqual(len(CARDS_BY_ID), len(CATALOG))

    def test_every_category_named(self):
        for card in CATALOG:
            self.assertIn(card.category.value, CATEGORY_DISPLAY_NAMES)

    def test_cards_are_immutable(self):
        with self.assertRaises(FrozenInstanceError):
            CATALOG[0].term = 'changed'

    def test_level_labels_cover_levels(self):
        self.assertEqual(len(LEVEL_LABELS), MAX_LEVEL - MIN_LEVEL + 1)

    def test_get_card(self):
        self.assertEqual(get_card('arvo').meaning, 'afternoon')
        self.assertIsNone(get_card('not-a-card'))

    def test_card_dict_roundtrip(self):
        card = get_card('fair-dinkum')
        self.assertEqual(VocabularyCard.from_dict(card.to_dict()), card)


if __name__ == '__main__':
    unittest.main()
