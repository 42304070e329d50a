"""Tests for the SRS engine: SM-2 intervals, confidence labels, due-set selection."""

from datetime import date, timedelta

import pytest

from conftest import NOW, make_record
from lingo.srs.confidence import Confidence, classify
from lingo.srs.errors import InvalidRating
from lingo.srs.queue import words_due_for_review
from lingo.srs.records import LexicalData, find_by_word, new_word_record, review_date
from lingo.srs.sm2 import MIN_EASE_FACTOR, compute_next_schedule, round_half_up
from lingo.srs.stats import LearningStats, StatsAction, update_stats

# --- SM-2 Interval Engine ---


class TestComputeNextSchedule:
    def test_first_perfect_review(self) -> None:
        result = compute_next_schedule(quality=5, repetitions=0, ease_factor=2.5, prior_interval_days=1)
        assert result.repetitions == 1
        assert result.interval_days == 1
        assert result.ease_factor == pytest.approx(2.6)

    def test_second_review_is_six_days(self) -> None:
        result = compute_next_schedule(quality=4, repetitions=1, ease_factor=2.6, prior_interval_days=1)
        assert result.repetitions == 2
        assert result.interval_days == 6

    def test_third_review_multiplies_prior_interval(self) -> None:
        result = compute_next_schedule(quality=4, repetitions=2, ease_factor=2.6, prior_interval_days=6)
        assert result.repetitions == 3
        assert result.ease_factor == pytest.approx(2.6)
        assert result.interval_days == round_half_up(6 * result.ease_factor) == 16

    def test_failing_review_resets_schedule(self) -> None:
        result = compute_next_schedule(quality=0, repetitions=4, ease_factor=2.5, prior_interval_days=20)
        assert result.repetitions == 0
        assert result.interval_days == 1
        assert MIN_EASE_FACTOR <= result.ease_factor < 2.5
        assert result.ease_factor == pytest.approx(1.7)

    def test_failure_keeps_lowered_ease(self) -> None:
        # Ease is adjusted, not reset to the default
        result = compute_next_schedule(quality=2, repetitions=3, ease_factor=2.0, prior_interval_days=10)
        assert result.ease_factor == pytest.approx(2.0 + (0.1 - 3 * (0.08 + 3 * 0.02)))

    def test_quality_three_lowers_ease(self) -> None:
        result = compute_next_schedule(quality=3, repetitions=0, ease_factor=2.5, prior_interval_days=1)
        assert result.ease_factor == pytest.approx(2.36)
        assert result.repetitions == 1

    def test_ease_floor(self) -> None:
        result = compute_next_schedule(quality=0, repetitions=0, ease_factor=1.3, prior_interval_days=1)
        assert result.ease_factor == MIN_EASE_FACTOR

    def test_prior_interval_floored_to_one(self) -> None:
        result = compute_next_schedule(quality=5, repetitions=5, ease_factor=2.5, prior_interval_days=0)
        assert result.interval_days == 3  # round(1 * 2.6)

    def test_deterministic(self) -> None:
        a = compute_next_schedule(quality=4, repetitions=3, ease_factor=2.2, prior_interval_days=9)
        b = compute_next_schedule(quality=4, repetitions=3, ease_factor=2.2, prior_interval_days=9)
        assert a == b

    @pytest.mark.parametrize("quality", [-1, 6, 10, 2.5, "3", None, True])
    def test_invalid_quality_rejected(self, quality) -> None:
        with pytest.raises(InvalidRating) as exc_info:
            compute_next_schedule(quality=quality, repetitions=0, ease_factor=2.5, prior_interval_days=1)
        assert exc_info.value.quality == quality

    def test_invalid_rating_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            compute_next_schedule(quality=7, repetitions=0, ease_factor=2.5, prior_interval_days=1)

    @pytest.mark.parametrize("quality", [3, 4, 5])
    @pytest.mark.parametrize("repetitions", [0, 1, 2, 7])
    def test_passing_grades_advance(self, quality: int, repetitions: int) -> None:
        result = compute_next_schedule(quality, repetitions, ease_factor=1.3, prior_interval_days=1)
        assert result.repetitions == repetitions + 1
        assert result.interval_days >= 1
        assert result.ease_factor >= MIN_EASE_FACTOR

    @pytest.mark.parametrize("quality", [0, 1, 2])
    @pytest.mark.parametrize("repetitions,prior", [(0, 1), (3, 15), (9, 200)])
    def test_failing_grades_reset(self, quality: int, repetitions: int, prior: int) -> None:
        result = compute_next_schedule(quality, repetitions, ease_factor=1.4, prior_interval_days=prior)
        assert result.repetitions == 0
        assert result.interval_days == 1
        assert result.ease_factor >= MIN_EASE_FACTOR

    def test_repeated_failures_never_drop_below_floor(self) -> None:
        ease = 2.5
        for _ in range(20):
            ease = compute_next_schedule(0, 0, ease, 1).ease_factor
        assert ease == MIN_EASE_FACTOR


class TestRoundHalfUp:
    def test_ties_round_away_from_zero(self) -> None:
        assert round_half_up(2.5) == 3
        assert round_half_up(12.5) == 13
        assert round_half_up(-2.5) == -3

    def test_nearest(self) -> None:
        assert round_half_up(15.6) == 16
        assert round_half_up(15.4) == 15


# --- Confidence Classifier ---


class TestClassify:
    @pytest.mark.parametrize(
        "count,expected",
        [
            (0, Confidence.LEARNING),
            (1, Confidence.LEARNING),
            (2, Confidence.FAMILIAR),
            (4, Confidence.FAMILIAR),
            (5, Confidence.MASTERED),
            (40, Confidence.MASTERED),
        ],
    )
    def test_thresholds(self, count: int, expected: Confidence) -> None:
        assert classify(count) is expected

    def test_monotonic(self) -> None:
        ranks = [classify(n).rank for n in range(12)]
        assert ranks == sorted(ranks)

    def test_values(self) -> None:
        assert {c.value for c in Confidence} == {"learning", "familiar", "mastered"}


# --- Due-Set Selector ---


class TestWordsDueForReview:
    def test_yesterday_and_today_due_tomorrow_not(self) -> None:
        today = NOW
        yesterday = make_record("a", next_review=today - timedelta(days=1))
        due_today = make_record("b", next_review=today)
        tomorrow = make_record("c", next_review=today + timedelta(days=1))
        result = words_due_for_review([yesterday, due_today, tomorrow], today)
        assert result == [yesterday, due_today]

    def test_preserves_input_order(self) -> None:
        records = [
            make_record("late", next_review=NOW - timedelta(hours=1)),
            make_record("early", next_review=NOW - timedelta(days=30)),
        ]
        assert [r.word for r in words_due_for_review(records, NOW)] == ["late", "early"]

    def test_empty_collection(self) -> None:
        assert words_due_for_review([], NOW) == []

    def test_idempotent(self) -> None:
        records = [make_record(w, next_review=NOW - timedelta(days=i)) for i, w in enumerate("abc")]
        assert words_due_for_review(records, NOW) == words_due_for_review(records, NOW)

    def test_does_not_mutate_input(self) -> None:
        records = [make_record("a", next_review=NOW + timedelta(days=2)), make_record("b")]
        before = list(records)
        words_due_for_review(records, NOW)
        assert records == before

    def test_limit(self) -> None:
        records = [make_record(w) for w in "abcd"]
        assert [r.word for r in words_due_for_review(records, NOW, limit=2)] == ["a", "b"]

    def test_non_positive_limit_keeps_every_due_word(self) -> None:
        records = [make_record(w) for w in "abc"]
        assert len(words_due_for_review(records, NOW, limit=-1)) == 3
        assert len(words_due_for_review(records, NOW, limit=0)) == 3

    def test_accepts_iterables(self) -> None:
        records = (make_record(w) for w in "ab")
        assert len(words_due_for_review(records, NOW)) == 2


# --- Records ---


class TestRecords:
    def test_new_word_due_tomorrow_midnight(self) -> None:
        record = new_word_record(LexicalData(word="ephemeral", translation="短暂的"), NOW)
        assert record.review_count == 0
        assert record.ease_factor == 2.5
        assert record.confidence is Confidence.LEARNING
        assert record.last_reviewed == NOW
        assert record.next_review == (NOW + timedelta(days=1)).replace(hour=0, minute=0)
        assert record.translation == "短暂的"

    def test_ids_unique(self) -> None:
        data = LexicalData(word="x")
        assert new_word_record(data, NOW).id != new_word_record(data, NOW).id

    def test_review_date_zeroes_time(self) -> None:
        due = review_date(NOW.replace(second=42, microsecond=7), 6)
        assert due == NOW.replace(hour=0, minute=0) + timedelta(days=6)

    def test_scheduled_interval_floors_partial_days(self) -> None:
        record = make_record(last_reviewed=NOW, next_review=review_date(NOW, 6))
        assert record.scheduled_interval_days() == 5

    def test_scheduled_interval_defaults_to_one(self) -> None:
        inverted = make_record(last_reviewed=NOW, next_review=NOW - timedelta(days=3))
        assert inverted.scheduled_interval_days() == 1
        same_day = make_record(last_reviewed=NOW, next_review=NOW + timedelta(hours=5))
        assert same_day.scheduled_interval_days() == 1

    def test_find_by_word_case_insensitive(self) -> None:
        records = [make_record("Apple"), make_record("pear")]
        assert find_by_word(records, " apple ") is records[0]
        assert find_by_word(records, "plum") is None

    def test_lexical_passthrough(self) -> None:
        record = make_record("cat", mnemonic="a cat on a mat", part_of_speech="noun")
        assert record.lexical.mnemonic == "a cat on a mat"
        assert record.lexical.part_of_speech == "noun"


# --- Learning Stats ---


class TestUpdateStats:
    today = date(2024, 3, 15)

    def test_first_event_starts_streak(self) -> None:
        stats = update_stats(StatsAction.NEW_WORD, LearningStats(), self.today)
        assert stats.streak == 1
        assert stats.total_words == 1
        assert stats.words_today == 1
        assert stats.last_study_date == self.today

    def test_same_day_accumulates(self) -> None:
        stats = LearningStats(total_words=3, words_today=1, reviews_today=2, streak=4, last_study_date=self.today)
        stats = update_stats(StatsAction.REVIEW, stats, self.today)
        assert stats.reviews_today == 3
        assert stats.streak == 4
        assert stats.total_words == 3

    def test_consecutive_day_extends_streak(self) -> None:
        stats = LearningStats(words_today=5, reviews_today=9, streak=2, last_study_date=self.today - timedelta(days=1))
        stats = update_stats(StatsAction.REVIEW, stats, self.today)
        assert stats.streak == 3
        assert stats.words_today == 0
        assert stats.reviews_today == 1

    def test_gap_resets_streak(self) -> None:
        stats = LearningStats(streak=10, last_study_date=self.today - timedelta(days=3))
        stats = update_stats(StatsAction.NEW_WORD, stats, self.today)
        assert stats.streak == 1

    def test_input_not_mutated(self) -> None:
        original = LearningStats()
        update_stats(StatsAction.REVIEW, original, self.today)
        assert original == LearningStats()
