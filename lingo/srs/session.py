"""Review session driver.

Walks a fixed snapshot of due words, applies the SM-2 engine to each
rating, hands the updated record to the word store, and advances. The
snapshot is taken once at ``start`` and never changes for the rest of the
session, even if the underlying collection does.

States: IDLE -> ACTIVE -> COMPLETE. A session may be abandoned at any
point; already-rated words stay saved and unrated ones are untouched.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from lingo.config import utcnow
from lingo.srs.errors import EmptySession, NoActiveSession
from lingo.srs.queue import words_due_for_review
from lingo.srs.records import WordRecord
from lingo.srs.sm2 import compute_next_schedule, validate_quality
from lingo.storage import WordStore

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class SessionState(Enum):
    IDLE = "idle"
    ACTIVE = "active"
    COMPLETE = "complete"


@dataclass(frozen=True)
class RatingOutcome:
    """What happened when a word was rated."""

    record: WordRecord  # The updated, persisted record
    previous: WordRecord  # The snapshot entry that was rated
    quality: int
    interval_days: int
    state: SessionState
    remaining: int

    @property
    def session_complete(self) -> bool:
        return self.state is SessionState.COMPLETE


@dataclass
class SessionStats:
    """Running counts for the current session."""

    rated: int = 0
    passed: int = 0
    failed: int = 0

    @property
    def accuracy(self) -> float:
        return self.passed / self.rated if self.rated else 1.0


@dataclass
class ReviewSession:
    """Drives one review pass over a snapshot of due words."""

    store: WordStore
    clock: Clock = utcnow
    stats: SessionStats = field(default_factory=SessionStats)
    _snapshot: tuple[WordRecord, ...] = ()
    _index: int = 0
    _state: SessionState = SessionState.IDLE
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False, compare=False)

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def snapshot(self) -> tuple[WordRecord, ...]:
        return self._snapshot

    @property
    def index(self) -> int:
        return self._index

    @property
    def total(self) -> int:
        return len(self._snapshot)

    @property
    def remaining(self) -> int:
        """Number of words still to rate, including the current one."""
        if self._state is not SessionState.ACTIVE:
            return 0
        return len(self._snapshot) - self._index

    @property
    def is_active(self) -> bool:
        return self._state is SessionState.ACTIVE

    @property
    def is_complete(self) -> bool:
        return self._state is SessionState.COMPLETE

    @property
    def current(self) -> WordRecord | None:
        """The word awaiting a rating, or None outside an active session."""
        if self._state is not SessionState.ACTIVE:
            return None
        return self._snapshot[self._index]

    def start(self, snapshot: Sequence[WordRecord]) -> None:
        """Begin a session over ``snapshot``.

        Raises:
            EmptySession: If there is nothing to review.
        """
        if not snapshot:
            raise EmptySession()
        self._snapshot = tuple(snapshot)
        self._index = 0
        self._state = SessionState.ACTIVE
        self.stats = SessionStats()
        logger.info("Started review session: %d words", len(self._snapshot))

    async def rate(self, quality: int) -> RatingOutcome:
        """Apply ``quality`` to the current word, persist it and advance.

        The index only advances after the store accepts the record, so a
        failed save can be retried with the same rating. Overlapping calls
        are serialized: each one rates the word that is current once the
        previous rating has finished.

        Raises:
            NoActiveSession: If the session is idle or complete.
            InvalidRating: If quality is outside 0-5.
            StorageError: If the store fails; the session does not advance.
        """
        async with self._lock:
            return await self._rate_current(quality)

    async def _rate_current(self, quality: int) -> RatingOutcome:
        if self._state is not SessionState.ACTIVE:
            raise NoActiveSession(self._state.value)
        validate_quality(quality)

        word = self._snapshot[self._index]
        prior_interval = word.scheduled_interval_days()
        schedule = compute_next_schedule(
            quality=quality,
            repetitions=word.review_count,
            ease_factor=word.ease_factor,
            prior_interval_days=prior_interval,
        )
        updated = word.with_schedule(schedule, self.clock())

        await self.store.save([updated])

        self.stats.rated += 1
        if schedule.repetitions > 0:
            self.stats.passed += 1
        else:
            self.stats.failed += 1

        if self._index + 1 < len(self._snapshot):
            self._index += 1
        else:
            self._state = SessionState.COMPLETE
            logger.info(
                "Review session complete: %d rated, %d passed, %d failed",
                self.stats.rated,
                self.stats.passed,
                self.stats.failed,
            )

        logger.debug(
            "Rated %r q=%d: interval %d -> %d days, ease %.2f -> %.2f",
            word.word,
            quality,
            prior_interval,
            schedule.interval_days,
            word.ease_factor,
            schedule.ease_factor,
        )
        return RatingOutcome(
            record=updated,
            previous=word,
            quality=quality,
            interval_days=schedule.interval_days,
            state=self._state,
            remaining=self.remaining,
        )


async def start_session(
    store: WordStore,
    clock: Clock = utcnow,
    limit: int | None = None,
) -> ReviewSession:
    """Load the collection, snapshot the due set and start a session.

    Raises:
        EmptySession: If nothing is due.
    """
    collection = await store.load()
    due = words_due_for_review(collection, clock(), limit=limit)
    session = ReviewSession(store=store, clock=clock)
    session.start(due)
    return session
