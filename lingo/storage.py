"""Storage collaborators for word records and learning statistics.

The scheduler only needs ``load()`` and ``save()``. ``InMemoryWordStore``
backs tests and throwaway hosts; ``SqlWordStore`` persists through an
``AsyncSession``. Each ``save`` call is atomic: either every record in it
is written or none are.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import replace
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from lingo.models.study_stats import StudyStats
from lingo.models.word import Word
from lingo.srs.confidence import classify
from lingo.srs.errors import StorageError
from lingo.srs.records import WordRecord
from lingo.srs.stats import LearningStats

logger = logging.getLogger(__name__)


class WordStore(Protocol):
    async def load(self) -> list[WordRecord]: ...

    async def save(self, records: Sequence[WordRecord]) -> None: ...


class StatsStore(Protocol):
    async def load(self) -> LearningStats: ...

    async def save(self, stats: LearningStats) -> None: ...


def _normalized(record: WordRecord) -> WordRecord:
    """Recompute the derived confidence label before persisting."""
    confidence = classify(record.review_count)
    if record.confidence is confidence:
        return record
    return replace(record, confidence=confidence)


# --- In-memory ---


class InMemoryWordStore:
    """Dict-backed store keeping insertion order."""

    def __init__(self, records: Iterable[WordRecord] = ()) -> None:
        self._records: dict[str, WordRecord] = {r.id: _normalized(r) for r in records}
        self.save_calls = 0

    async def load(self) -> list[WordRecord]:
        return list(self._records.values())

    async def save(self, records: Sequence[WordRecord]) -> None:
        self.save_calls += 1
        for record in records:
            self._records[record.id] = _normalized(record)

    def get(self, record_id: str) -> WordRecord | None:
        return self._records.get(record_id)


class InMemoryStatsStore:
    def __init__(self, stats: LearningStats | None = None) -> None:
        self._stats = stats or LearningStats()

    async def load(self) -> LearningStats:
        return self._stats

    async def save(self, stats: LearningStats) -> None:
        self._stats = stats


# --- SQLAlchemy ---


def word_to_record(row: Word) -> WordRecord:
    """Convert an ORM row into an immutable WordRecord."""
    return WordRecord(
        id=row.id,
        word=row.word,
        translation=row.translation,
        pronunciation=row.pronunciation,
        definition=row.definition,
        part_of_speech=row.part_of_speech,
        mnemonic=row.mnemonic,
        image_prompt=row.image_prompt,
        example_sentence=row.example_sentence,
        review_count=row.review_count,
        ease_factor=row.ease_factor,
        last_reviewed=row.last_reviewed,
        next_review=row.next_review,
        confidence=classify(row.review_count),
        created_at=row.created_at,
    )


def apply_record(row: Word, record: WordRecord) -> None:
    """Copy a WordRecord's fields onto an ORM row."""
    row.word = record.word
    row.translation = record.translation
    row.pronunciation = record.pronunciation
    row.definition = record.definition
    row.part_of_speech = record.part_of_speech
    row.mnemonic = record.mnemonic
    row.image_prompt = record.image_prompt
    row.example_sentence = record.example_sentence
    row.review_count = record.review_count
    row.ease_factor = record.ease_factor
    row.last_reviewed = record.last_reviewed
    row.next_review = record.next_review
    row.confidence = classify(record.review_count).value
    if record.created_at is not None:
        row.created_at = record.created_at


class SqlWordStore:
    """Persists word records through an async SQLAlchemy session."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def load(self) -> list[WordRecord]:
        """Return all words, newest first."""
        try:
            result = await self.db.execute(select(Word).order_by(Word.created_at.desc(), Word.id))
        except SQLAlchemyError as exc:
            raise StorageError("Failed to load words") from exc
        return [word_to_record(row) for row in result.scalars().all()]

    async def save(self, records: Sequence[WordRecord]) -> None:
        """Upsert ``records`` in one transaction."""
        try:
            for record in records:
                row = await self.db.get(Word, record.id)
                if row is None:
                    row = Word(id=record.id)
                    self.db.add(row)
                apply_record(row, record)
            await self.db.commit()
        except SQLAlchemyError as exc:
            await self.db.rollback()
            logger.error("Failed to save %d word(s): %s", len(records), exc)
            raise StorageError(f"Failed to save {len(records)} word(s)") from exc
        logger.debug("Saved %d word(s)", len(records))


class SqlStatsStore:
    """Reads and writes the single ``study_stats`` row."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def _row(self) -> StudyStats | None:
        result = await self.db.execute(select(StudyStats).order_by(StudyStats.id).limit(1))
        return result.scalar_one_or_none()

    async def load(self) -> LearningStats:
        try:
            row = await self._row()
        except SQLAlchemyError as exc:
            raise StorageError("Failed to load learning stats") from exc
        if row is None:
            return LearningStats()
        return LearningStats(
            total_words=row.total_words,
            words_today=row.words_today,
            reviews_today=row.reviews_today,
            streak=row.streak,
            last_study_date=row.last_study_date,
        )

    async def save(self, stats: LearningStats) -> None:
        try:
            row = await self._row()
            if row is None:
                row = StudyStats()
                self.db.add(row)
            row.total_words = stats.total_words
            row.words_today = stats.words_today
            row.reviews_today = stats.reviews_today
            row.streak = stats.streak
            row.last_study_date = stats.last_study_date
            await self.db.commit()
        except SQLAlchemyError as exc:
            await self.db.rollback()
            raise StorageError("Failed to save learning stats") from exc


class ScopedWordStore:
    """Opens a fresh database session for every call.

    For hosts whose review sessions outlive a single request.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def load(self) -> list[WordRecord]:
        async with self.session_factory() as db:
            return await SqlWordStore(db).load()

    async def save(self, records: Sequence[WordRecord]) -> None:
        async with self.session_factory() as db:
            await SqlWordStore(db).save(records)


class ScopedStatsStore:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def load(self) -> LearningStats:
        async with self.session_factory() as db:
            return await SqlStatsStore(db).load()

    async def save(self, stats: LearningStats) -> None:
        async with self.session_factory() as db:
            await SqlStatsStore(db).save(stats)


__all__ = [
    "InMemoryStatsStore",
    "InMemoryWordStore",
    "ScopedStatsStore",
    "ScopedWordStore",
    "SqlStatsStore",
    "SqlWordStore",
    "StatsStore",
    "WordStore",
]
