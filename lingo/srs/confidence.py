"""Coarse mastery labels derived from a word's repetition count."""

from enum import Enum

FAMILIAR_THRESHOLD = 2
MASTERED_THRESHOLD = 5


class Confidence(Enum):
    """How well a word is known."""

    LEARNING = "learning"    # 0-1 consecutive passes
    FAMILIAR = "familiar"    # 2-4
    MASTERED = "mastered"    # 5+

    @property
    def rank(self) -> int:
        return _RANK[self]


_RANK = {
    Confidence.LEARNING: 0,
    Confidence.FAMILIAR: 1,
    Confidence.MASTERED: 2,
}


def classify(review_count: int) -> Confidence:
    """Return the confidence label for a repetition count."""
    if review_count >= MASTERED_THRESHOLD:
        return Confidence.MASTERED
    if review_count >= FAMILIAR_THRESHOLD:
        return Confidence.FAMILIAR
    return Confidence.LEARNING
