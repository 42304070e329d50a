"""Spaced-repetition scheduling: SM-2 engine, due-set selection, confidence labels."""

from lingo.srs.confidence import Confidence, classify
from lingo.srs.errors import EmptySession, InvalidRating, NoActiveSession, StorageError
from lingo.srs.queue import words_due_for_review
from lingo.srs.records import LexicalData, WordRecord, new_word_record
from lingo.srs.sm2 import Schedule, compute_next_schedule

__all__ = [
    "Confidence",
    "EmptySession",
    "InvalidRating",
    "LexicalData",
    "NoActiveSession",
    "Schedule",
    "StorageError",
    "WordRecord",
    "classify",
    "compute_next_schedule",
    "new_word_record",
    "words_due_for_review",
]
