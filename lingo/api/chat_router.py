"""API route for chatting with the tutor about a word."""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.concurrency import run_in_threadpool

from agents.base import ChatMessage
from agents.tutor_agent import TutorAgent
from lingo.api.deps import get_tutor_agent, get_word_store
from lingo.api.schemas import ChatRequest, ChatResponse
from lingo.storage import WordStore

router = APIRouter(prefix="/api/chat", tags=["chat"])


@router.post("", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    words: WordStore = Depends(get_word_store),
    tutor: TutorAgent = Depends(get_tutor_agent),
) -> ChatResponse:
    """Answer the learner's latest question about a stored word."""
    record = next((r for r in await words.load() if r.id == request.word_id), None)
    if record is None:
        raise HTTPException(status_code=404, detail="Word not found")
    if request.messages[-1].role != "user":
        raise HTTPException(status_code=422, detail="Last message must be from the user")

    history = [ChatMessage(role=m.role, content=m.content) for m in request.messages]
    reply = await run_in_threadpool(tutor.reply, record, history)
    return ChatResponse(reply=reply)
