"""API routes for adding and listing words."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.concurrency import run_in_threadpool

from agents.content_agent import ContentAgent, GenerationError
from lingo.api.deps import get_clock, get_content_agent, get_stats_store, get_word_store
from lingo.api.schemas import AddWordRequest, AddWordResponse, WordResponse
from lingo.srs.queue import words_due_for_review
from lingo.srs.records import find_by_word
from lingo.srs.session import Clock
from lingo.storage import StatsStore, WordStore
from lingo.words import add_word

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/words", tags=["words"])


@router.post("", response_model=AddWordResponse)
async def create_word(
    request: AddWordRequest,
    words: WordStore = Depends(get_word_store),
    stats: StatsStore = Depends(get_stats_store),
    agent: ContentAgent = Depends(get_content_agent),
    clock: Clock = Depends(get_clock),
) -> AddWordResponse:
    """Generate study material for a word and schedule its first review."""
    existing = find_by_word(await words.load(), request.word)
    if existing is not None:
        return AddWordResponse(word=WordResponse.from_record(existing), created=False)

    try:
        data = await run_in_threadpool(agent.generate, request.word)
    except GenerationError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    record, created = await add_word(words, stats, data, clock())
    return AddWordResponse(word=WordResponse.from_record(record), created=created)


@router.get("", response_model=list[WordResponse])
async def list_words(words: WordStore = Depends(get_word_store)) -> list[WordResponse]:
    """Return every word in the collection."""
    return [WordResponse.from_record(r) for r in await words.load()]


@router.get("/due", response_model=list[WordResponse])
async def list_due_words(
    words: WordStore = Depends(get_word_store),
    clock: Clock = Depends(get_clock),
) -> list[WordResponse]:
    """Return the words due for review right now."""
    due = words_due_for_review(await words.load(), clock())
    return [WordResponse.from_record(r) for r in due]
