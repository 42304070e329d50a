import os
import tempfile
from pathlib import Path

# Must run before lingo.config is imported anywhere
_db_dir = tempfile.mkdtemp(prefix="lingo-test-")
os.environ["LINGO_DATABASE_URL"] = f"sqlite+aiosqlite:///{Path(_db_dir) / 'test.db'}"
os.environ["LINGO_ANTHROPIC_API_KEY"] = ""

from datetime import datetime, timedelta  # noqa: E402

import pytest  # noqa: E402

from lingo.srs.records import WordRecord  # noqa: E402

NOW = datetime(2024, 3, 15, 10, 30)


def make_record(
    word: str = "serendipity",
    record_id: str | None = None,
    review_count: int = 0,
    ease_factor: float = 2.5,
    last_reviewed: datetime | None = None,
    next_review: datetime | None = None,
    **kwargs,
) -> WordRecord:
    last_reviewed = last_reviewed or NOW - timedelta(days=1)
    return WordRecord(
        id=record_id or f"id-{word}",
        word=word,
        review_count=review_count,
        ease_factor=ease_factor,
        last_reviewed=last_reviewed,
        next_review=next_review or NOW.replace(hour=0, minute=0),
        translation=kwargs.pop("translation", "happy accident"),
        **kwargs,
    )


class FakeClock:
    """Injectable clock that only moves when told to."""

    def __init__(self, now: datetime = NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
