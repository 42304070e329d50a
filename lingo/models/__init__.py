"""SQLAlchemy ORM models for the Lingo database."""

from lingo.models.base import Base
from lingo.models.study_stats import StudyStats
from lingo.models.word import Word

__all__ = ["Base", "StudyStats", "Word"]
