"""Exceptions raised by the review scheduler and its storage collaborators."""


class SchedulerError(Exception):
    """Base class for scheduler failures."""


class InvalidRating(SchedulerError, ValueError):
    """A review quality outside the 0-5 scale."""

    def __init__(self, quality: object) -> None:
        self.quality = quality
        super().__init__(f"Review quality must be an integer from 0 to 5, got {quality!r}")


class EmptySession(SchedulerError):
    """A review session was started with nothing due."""

    def __init__(self) -> None:
        super().__init__("No words are due for review")


class NoActiveSession(SchedulerError, RuntimeError):
    """A rating was submitted while no session is active."""

    def __init__(self, state: str) -> None:
        self.state = state
        super().__init__(f"Cannot rate a word: session is {state}")


class StorageError(SchedulerError):
    """The storage collaborator failed to load or save records."""
