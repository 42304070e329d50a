"""Lingo: a personal vocabulary notebook with SM-2 spaced repetition."""

__version__ = "0.1.0"
