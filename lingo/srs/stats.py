"""Daily learning statistics: word and review counters plus study streak."""

from dataclasses import dataclass, replace
from datetime import date, timedelta
from enum import Enum


class StatsAction(Enum):
    """The events that move the counters."""

    NEW_WORD = "new_word"
    REVIEW = "review"


@dataclass(frozen=True)
class LearningStats:
    total_words: int = 0
    words_today: int = 0
    reviews_today: int = 0
    streak: int = 0
    last_study_date: date | None = None


def update_stats(action: StatsAction, stats: LearningStats, today: date) -> LearningStats:
    """Apply one study event to ``stats`` and return the new counters.

    On the first event of a new day the daily counters reset and the streak
    either continues (last study was yesterday) or restarts at 1.
    """
    updated = stats
    if stats.last_study_date != today:
        yesterday = today - timedelta(days=1)
        streak = stats.streak
        if stats.last_study_date == yesterday:
            streak += 1
        elif stats.last_study_date is None or stats.last_study_date < yesterday:
            streak = 1
        updated = replace(
            stats,
            words_today=0,
            reviews_today=0,
            streak=streak,
            last_study_date=today,
        )
    elif stats.streak == 0:
        updated = replace(stats, streak=1)

    if action is StatsAction.NEW_WORD:
        return replace(
            updated,
            total_words=updated.total_words + 1,
            words_today=updated.words_today + 1,
        )
    return replace(updated, reviews_today=updated.reviews_today + 1)
