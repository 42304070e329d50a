"""FastAPI dependencies for stores, clock and agents."""

from agents.content_agent import ContentAgent
from agents.tutor_agent import TutorAgent
from lingo.config import utcnow
from lingo.database import async_session
from lingo.llm_client import get_llm_client
from lingo.srs.session import Clock
from lingo.storage import ScopedStatsStore, ScopedWordStore, StatsStore, WordStore


def get_word_store() -> WordStore:
    return ScopedWordStore(async_session)


def get_stats_store() -> StatsStore:
    return ScopedStatsStore(async_session)


def get_clock() -> Clock:
    return utcnow


def get_content_agent() -> ContentAgent:
    return ContentAgent(llm=get_llm_client())


def get_tutor_agent() -> TutorAgent:
    return TutorAgent(llm=get_llm_client())
