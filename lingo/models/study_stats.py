from datetime import date

from sqlalchemy import Date, Integer
from sqlalchemy.orm import Mapped, mapped_column

from lingo.models.base import Base, TimestampMixin


class StudyStats(Base, TimestampMixin):
    """Single-row table holding the daily learning counters."""

    __tablename__ = "study_stats"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    total_words: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    words_today: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    reviews_today: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    streak: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_study_date: Mapped[date | None] = mapped_column(Date, nullable=True)
