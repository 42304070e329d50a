"""A learner's word with its lexical content and SM-2 scheduling state."""

from datetime import datetime

from sqlalchemy import DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from lingo.config import utcnow
from lingo.models.base import Base, TimestampMixin


class Word(Base, TimestampMixin):
    __tablename__ = "words"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    word: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    translation: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    pronunciation: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    definition: Mapped[str] = mapped_column(Text, nullable=False, default="")
    part_of_speech: Mapped[str | None] = mapped_column(String(50), nullable=True)
    mnemonic: Mapped[str] = mapped_column(Text, nullable=False, default="")
    image_prompt: Mapped[str] = mapped_column(Text, nullable=False, default="")
    example_sentence: Mapped[str] = mapped_column(Text, nullable=False, default="")

    review_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    ease_factor: Mapped[float] = mapped_column(Float, nullable=False, default=2.5)
    last_reviewed: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    next_review: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
    confidence: Mapped[str] = mapped_column(
        String(20), nullable=False, default="learning"
    )  # learning, familiar, mastered
