"""SM-2 (SuperMemo-2) interval engine.

Maps a review quality and a word's prior scheduling state to its next
interval, ease factor and repetition count.

Key concepts:
- Quality: 0-5 self-rating (0=complete blackout, 5=perfect response).
  Anything below 3 is a failing grade.
- Repetitions: consecutive passing reviews since the last failure.
- Ease factor (EF): interval multiplier, never below 1.3.
- Interval: whole days until the word is due again.
"""

import math
from dataclasses import dataclass

from lingo.srs.errors import InvalidRating

MIN_QUALITY = 0
MAX_QUALITY = 5
PASSING_QUALITY = 3

MIN_EASE_FACTOR = 1.3
DEFAULT_EASE_FACTOR = 2.5

FIRST_INTERVAL_DAYS = 1
SECOND_INTERVAL_DAYS = 6


@dataclass(frozen=True)
class Schedule:
    """The outcome of applying one rating."""

    interval_days: int
    ease_factor: float
    repetitions: int


def validate_quality(quality: int) -> int:
    """Return ``quality`` unchanged or raise InvalidRating."""
    if isinstance(quality, bool) or not isinstance(quality, int):
        raise InvalidRating(quality)
    if not MIN_QUALITY <= quality <= MAX_QUALITY:
        raise InvalidRating(quality)
    return quality


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties away from zero."""
    return int(math.floor(value + 0.5)) if value >= 0 else -int(math.floor(-value + 0.5))


def next_ease_factor(ease_factor: float, quality: int) -> float:
    """EF' = EF + (0.1 - (5 - q) * (0.08 + (5 - q) * 0.02)), floored at 1.3."""
    miss = MAX_QUALITY - quality
    return max(MIN_EASE_FACTOR, ease_factor + (0.1 - miss * (0.08 + miss * 0.02)))


def compute_next_schedule(
    quality: int,
    repetitions: int,
    ease_factor: float,
    prior_interval_days: int,
) -> Schedule:
    """Compute the next schedule for a word.

    Args:
        quality: Review quality (0-5).
        repetitions: Consecutive passing reviews so far.
        ease_factor: Current ease factor.
        prior_interval_days: The interval that led to this review. Values
            below 1 are treated as 1.

    Returns:
        Schedule with the new interval, ease factor and repetition count.

    Raises:
        InvalidRating: If quality is not an integer in [0, 5].
    """
    validate_quality(quality)
    prior_interval_days = max(1, prior_interval_days)

    # Ease moves on every review, pass or fail
    ease = next_ease_factor(ease_factor, quality)

    if quality < PASSING_QUALITY:
        return Schedule(interval_days=FIRST_INTERVAL_DAYS, ease_factor=ease, repetitions=0)

    reps = repetitions + 1
    if reps == 1:
        interval = FIRST_INTERVAL_DAYS
    elif reps == 2:
        interval = SECOND_INTERVAL_DAYS
    else:
        interval = max(1, round_half_up(prior_interval_days * ease))

    return Schedule(interval_days=interval, ease_factor=ease, repetitions=reps)
