"""API routes for review sessions."""

import logging
import time
import uuid

from fastapi import APIRouter, Depends, HTTPException

from lingo.api.deps import get_clock, get_stats_store, get_word_store
from lingo.api.schemas import (
    RateRequest,
    RateResponse,
    SessionEndResponse,
    SessionStartResponse,
    SessionStatusResponse,
    WordResponse,
)
from lingo.config import settings
from lingo.srs.errors import EmptySession, InvalidRating, NoActiveSession, StorageError
from lingo.srs.session import Clock, ReviewSession, start_session
from lingo.srs.stats import StatsAction
from lingo.storage import StatsStore, WordStore
from lingo.words import record_event

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/session", tags=["session"])

# In-memory session store: session id -> (session, last touched, monotonic)
_active_sessions: dict[str, tuple[ReviewSession, float]] = {}


def _prune_expired() -> None:
    cutoff = time.monotonic() - settings.session_ttl_seconds
    for session_id in [k for k, (_, touched) in _active_sessions.items() if touched < cutoff]:
        logger.info("Discarding idle review session %s", session_id)
        del _active_sessions[session_id]


def _get_session(session_id: str) -> ReviewSession:
    _prune_expired()
    entry = _active_sessions.get(session_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Session not found")
    review_session = entry[0]
    _active_sessions[session_id] = (review_session, time.monotonic())
    return review_session


def _current(review_session: ReviewSession) -> WordResponse | None:
    current = review_session.current
    return WordResponse.from_record(current) if current else None


@router.post("/start", response_model=SessionStartResponse)
async def session_start(
    words: WordStore = Depends(get_word_store),
    clock: Clock = Depends(get_clock),
) -> SessionStartResponse:
    """Snapshot the words due now and start reviewing them."""
    _prune_expired()
    try:
        review_session = await start_session(
            words, clock=clock, limit=settings.max_reviews_per_session or None
        )
    except EmptySession as exc:
        raise HTTPException(status_code=404, detail="No words due for review") from exc
    except StorageError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc

    session_id = str(uuid.uuid4())
    _active_sessions[session_id] = (review_session, time.monotonic())

    return SessionStartResponse(
        session_id=session_id,
        total_words=review_session.total,
        current=_current(review_session),
    )


@router.get("/{session_id}", response_model=SessionStatusResponse)
async def session_status(session_id: str) -> SessionStatusResponse:
    """Get the current word and progress."""
    review_session = _get_session(session_id)
    return SessionStatusResponse(
        session_id=session_id,
        state=review_session.state.value,
        position=min(review_session.index + 1, review_session.total),
        total_words=review_session.total,
        remaining=review_session.remaining,
        current=_current(review_session),
    )


@router.post("/{session_id}/rate", response_model=RateResponse)
async def session_rate(
    session_id: str,
    request: RateRequest,
    stats: StatsStore = Depends(get_stats_store),
    clock: Clock = Depends(get_clock),
) -> RateResponse:
    """Rate the current word and move to the next one."""
    review_session = _get_session(session_id)

    try:
        outcome = await review_session.rate(request.quality)
    except InvalidRating as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except NoActiveSession as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except StorageError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc

    try:
        await record_event(stats, StatsAction.REVIEW, clock())
    except StorageError:
        # Rating is already persisted
        logger.exception("Failed to update review stats")

    return RateResponse(
        word=WordResponse.from_record(outcome.record),
        interval_days=outcome.interval_days,
        remaining=outcome.remaining,
        session_complete=outcome.session_complete,
        next=_current(review_session),
    )


@router.post("/{session_id}/end", response_model=SessionEndResponse)
async def session_end(session_id: str) -> SessionEndResponse:
    """End (or abandon) a session and clean up."""
    entry = _active_sessions.pop(session_id, None)
    if entry is None:
        raise HTTPException(status_code=404, detail="Session not found")

    review_session = entry[0]
    s = review_session.stats
    return SessionEndResponse(
        status="complete" if review_session.is_complete else "abandoned",
        rated=s.rated,
        passed=s.passed,
        failed=s.failed,
    )
