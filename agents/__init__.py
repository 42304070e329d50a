"""LLM-backed helpers around the scheduler.

- ContentAgent: generates study material for a new word
- TutorAgent: answers questions about a word in a chat
"""

from agents.base import BaseAgent, ChatMessage
from agents.content_agent import ContentAgent, GenerationError
from agents.tutor_agent import TutorAgent

__all__ = [
    "BaseAgent",
    "ChatMessage",
    "ContentAgent",
    "GenerationError",
    "TutorAgent",
]
