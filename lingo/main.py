"""FastAPI application entry point and configuration."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from lingo import __version__
from lingo.api.chat_router import router as chat_router
from lingo.api.session_router import router as session_router
from lingo.api.stats_router import router as stats_router
from lingo.api.words_router import router as words_router
from lingo.database import async_session, engine, init_db


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Initialize database on startup and cleanup on shutdown."""
    await init_db()
    yield
    await engine.dispose()


app = FastAPI(
    title="Lingo",
    description="Vocabulary notebook with LLM-generated study material and SM-2 reviews",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:5173", "http://localhost:3000"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(words_router)
app.include_router(session_router)
app.include_router(stats_router)
app.include_router(chat_router)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Check database connectivity and return status."""
    async with async_session() as session:
        await session.execute(text("SELECT 1"))
    return {"status": "ok"}
