"""Base agent interface and the chat message type shared by agents."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass

from lingo.llm_client import LLMClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChatMessage:
    """One turn of a conversation about a word."""

    role: str  # "user" or "assistant"
    content: str

    def to_api(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


class BaseAgent(ABC):
    """Abstract base class for LLM-backed agents.

    Agents run without an LLM client too; each decides its own fallback
    (raise, or answer from templates).
    """

    def __init__(self, llm: LLMClient | None = None) -> None:
        """Initialize the agent with an optional LLM client."""
        self.llm = llm
        self.logger = logging.getLogger(f"agents.{self.name}")

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique agent identifier."""
        ...

    @property
    @abstractmethod
    def description(self) -> str:
        """What this agent does, for logging and debugging."""
        ...
