"""Host-side operations on the word collection and learning stats.

The API and CLI both go through these so a new word and a review always
update the stats the same way.
"""

import logging
from datetime import datetime

from lingo.config import settings
from lingo.srs.records import LexicalData, WordRecord, find_by_word, new_word_record
from lingo.srs.stats import LearningStats, StatsAction, update_stats
from lingo.storage import StatsStore, WordStore

logger = logging.getLogger(__name__)


async def add_word(
    words: WordStore,
    stats: StatsStore,
    data: LexicalData,
    now: datetime,
) -> tuple[WordRecord, bool]:
    """Store a new word unless it is already known.

    Returns:
        Tuple of (record, created). ``created`` is False when an existing
        record with the same word (case-insensitive) was returned instead.
    """
    existing = find_by_word(await words.load(), data.word)
    if existing is not None:
        logger.info("Word %r already in collection (id=%s)", data.word, existing.id)
        return existing, False

    record = new_word_record(
        data,
        now,
        ease_factor=settings.initial_ease_factor,
        first_review_days=settings.first_review_delay_days,
    )
    await words.save([record])
    await record_event(stats, StatsAction.NEW_WORD, now)
    logger.info("Added word %r (id=%s), first review %s", record.word, record.id, record.next_review.date())
    return record, True


async def record_event(stats: StatsStore, action: StatsAction, now: datetime) -> LearningStats:
    """Apply one study event to the persisted stats."""
    updated = update_stats(action, await stats.load(), now.date())
    await stats.save(updated)
    return updated
