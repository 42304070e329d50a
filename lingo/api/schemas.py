"""Pydantic schemas for API request/response models."""

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field

from lingo.srs.records import WordRecord
from lingo.srs.stats import LearningStats

# --- Words ---


class AddWordRequest(BaseModel):
    """Request to add a word; study material is generated by the LLM."""

    word: str = Field(min_length=1, max_length=200)


class WordResponse(BaseModel):
    """A word with its study material and scheduling state."""

    id: str
    word: str
    translation: str
    pronunciation: str
    definition: str
    part_of_speech: str | None = None
    mnemonic: str
    image_prompt: str
    example_sentence: str
    review_count: int
    ease_factor: float
    last_reviewed: datetime
    next_review: datetime
    confidence: str

    @classmethod
    def from_record(cls, record: WordRecord) -> "WordResponse":
        return cls(
            id=record.id,
            word=record.word,
            translation=record.translation,
            pronunciation=record.pronunciation,
            definition=record.definition,
            part_of_speech=record.part_of_speech,
            mnemonic=record.mnemonic,
            image_prompt=record.image_prompt,
            example_sentence=record.example_sentence,
            review_count=record.review_count,
            ease_factor=record.ease_factor,
            last_reviewed=record.last_reviewed,
            next_review=record.next_review,
            confidence=record.confidence.value,
        )


class AddWordResponse(BaseModel):
    word: WordResponse
    created: bool


# --- Session ---


class SessionStartResponse(BaseModel):
    """Response when starting a new review session."""

    session_id: str
    total_words: int
    current: WordResponse


class SessionStatusResponse(BaseModel):
    """Where a review session currently stands."""

    session_id: str
    state: str  # active, complete
    position: int  # 1-based index of the current word
    total_words: int
    remaining: int
    current: WordResponse | None = None


class RateRequest(BaseModel):
    """Self-rating for the current word: 0=blackout ... 5=perfect."""

    quality: int


class RateResponse(BaseModel):
    """Response after rating a word."""

    word: WordResponse
    interval_days: int
    remaining: int
    session_complete: bool
    next: WordResponse | None = None


class SessionEndResponse(BaseModel):
    status: str
    rated: int
    passed: int
    failed: int


# --- Stats ---


class LearningStatsResponse(BaseModel):
    """Overall learning statistics."""

    total_words: int
    words_today: int
    reviews_today: int
    streak: int
    last_study_date: date | None
    words_due: int
    learning: int
    familiar: int
    mastered: int

    @classmethod
    def build(cls, stats: LearningStats, words_due: int, by_confidence: dict[str, int]) -> "LearningStatsResponse":
        return cls(
            total_words=stats.total_words,
            words_today=stats.words_today,
            reviews_today=stats.reviews_today,
            streak=stats.streak,
            last_study_date=stats.last_study_date,
            words_due=words_due,
            learning=by_confidence.get("learning", 0),
            familiar=by_confidence.get("familiar", 0),
            mastered=by_confidence.get("mastered", 0),
        )


# --- Chat ---


class ChatTurn(BaseModel):
    role: Literal["user", "assistant"]
    content: str = Field(min_length=1)


class ChatRequest(BaseModel):
    """Conversation about one stored word; the last turn is the question."""

    word_id: str
    messages: list[ChatTurn] = Field(min_length=1)


class ChatResponse(BaseModel):
    reply: str
