"""API routes for learning statistics and dashboard data."""

import logging
from collections import Counter

from fastapi import APIRouter, Depends

from lingo.api.deps import get_clock, get_stats_store, get_word_store
from lingo.api.schemas import LearningStatsResponse
from lingo.srs.queue import words_due_for_review
from lingo.srs.session import Clock
from lingo.storage import StatsStore, WordStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/stats", tags=["stats"])


@router.get("", response_model=LearningStatsResponse)
async def get_learning_stats(
    words: WordStore = Depends(get_word_store),
    stats: StatsStore = Depends(get_stats_store),
    clock: Clock = Depends(get_clock),
) -> LearningStatsResponse:
    """Get the daily counters plus a breakdown of the collection."""
    collection = await words.load()
    words_due = len(words_due_for_review(collection, clock()))
    by_confidence = Counter(r.confidence.value for r in collection)
    return LearningStatsResponse.build(await stats.load(), words_due, dict(by_confidence))
