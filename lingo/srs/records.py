"""Word records and the scheduling fields the review scheduler owns.

A ``WordRecord`` is an immutable value. Every rating produces a new record
via ``dataclasses.replace``; storage collaborators persist the copies.
"""

import uuid
from collections.abc import Iterable
from dataclasses import asdict, dataclass, field, replace
from datetime import datetime, timedelta

from lingo.srs.confidence import Confidence, classify
from lingo.srs.sm2 import DEFAULT_EASE_FACTOR, Schedule

SECONDS_PER_DAY = 86400


@dataclass(frozen=True)
class LexicalData:
    """Content-generator output for a word. Opaque to the scheduler."""

    word: str
    translation: str = ""
    pronunciation: str = ""
    definition: str = ""
    part_of_speech: str | None = None
    mnemonic: str = ""
    image_prompt: str = ""
    example_sentence: str = ""


@dataclass(frozen=True)
class WordRecord:
    """A word plus its spaced-repetition state."""

    id: str
    word: str
    last_reviewed: datetime
    next_review: datetime
    review_count: int = 0
    ease_factor: float = DEFAULT_EASE_FACTOR
    confidence: Confidence = Confidence.LEARNING
    translation: str = ""
    pronunciation: str = ""
    definition: str = ""
    part_of_speech: str | None = None
    mnemonic: str = ""
    image_prompt: str = ""
    example_sentence: str = ""
    created_at: datetime | None = field(default=None, compare=False)

    @property
    def lexical(self) -> LexicalData:
        return LexicalData(
            word=self.word,
            translation=self.translation,
            pronunciation=self.pronunciation,
            definition=self.definition,
            part_of_speech=self.part_of_speech,
            mnemonic=self.mnemonic,
            image_prompt=self.image_prompt,
            example_sentence=self.example_sentence,
        )

    def scheduled_interval_days(self) -> int:
        """Whole days between last review and next due date, at least 1.

        This is the scheduled interval, not the time actually elapsed
        before the learner got round to reviewing.
        """
        seconds = (self.next_review - self.last_reviewed).total_seconds()
        days = int(seconds // SECONDS_PER_DAY)
        return days if days > 0 else 1

    def with_schedule(self, schedule: Schedule, now: datetime) -> "WordRecord":
        """Return a copy carrying ``schedule``, stamped as reviewed at ``now``."""
        return replace(
            self,
            review_count=schedule.repetitions,
            ease_factor=schedule.ease_factor,
            last_reviewed=now,
            next_review=review_date(now, schedule.interval_days),
            confidence=classify(schedule.repetitions),
        )


def review_date(now: datetime, interval_days: int) -> datetime:
    """Return ``now`` plus ``interval_days`` with the time of day zeroed."""
    due = now + timedelta(days=interval_days)
    return due.replace(hour=0, minute=0, second=0, microsecond=0)


def generate_id() -> str:
    return uuid.uuid4().hex


def new_word_record(
    data: LexicalData,
    now: datetime,
    ease_factor: float = DEFAULT_EASE_FACTOR,
    first_review_days: int = 1,
) -> WordRecord:
    """Create the record for a freshly generated word, due tomorrow."""
    return WordRecord(
        id=generate_id(),
        last_reviewed=now,
        next_review=review_date(now, first_review_days),
        review_count=0,
        ease_factor=ease_factor,
        confidence=Confidence.LEARNING,
        created_at=now,
        **asdict(data),
    )


def find_by_word(collection: Iterable[WordRecord], word: str) -> WordRecord | None:
    """Case-insensitive lookup of a record by its display text."""
    needle = word.strip().casefold()
    for record in collection:
        if record.word.strip().casefold() == needle:
            return record
    return None
