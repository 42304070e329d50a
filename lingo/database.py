"""Database engine and session management."""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from lingo.config import settings

engine_kwargs: dict = {"echo": settings.debug}
if settings.database_url.startswith("sqlite"):
    # Pooled aiosqlite connections are bound to the loop that opened them
    engine_kwargs["poolclass"] = NullPool

engine = create_async_engine(settings.database_url, **engine_kwargs)
async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_db() -> None:
    """Create tables if they don't exist."""
    from lingo.models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
