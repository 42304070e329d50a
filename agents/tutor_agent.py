"""Tutor Agent: answers free-form questions about the word being studied."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from agents.base import BaseAgent, ChatMessage
from lingo.srs.records import WordRecord

logger = logging.getLogger(__name__)

CHAT_SYSTEM = """\
You are a helpful language learning assistant. The user is learning about \
the word "{word}". Answer their questions clearly and concisely. Provide \
examples, usage tips, and cultural context when relevant. Keep responses \
focused and educational."""

MAX_REPLY_TOKENS = 500


class TutorAgent(BaseAgent):
    """Chats with the learner about a single word."""

    @property
    def name(self) -> str:
        """Return the agent identifier."""
        return "tutor"

    @property
    def description(self) -> str:
        """Return what this agent does."""
        return "Answers questions about a word with examples and usage tips"

    def reply(self, record: WordRecord, history: Sequence[ChatMessage]) -> str:
        """Answer the last user message in ``history``.

        Falls back to a summary of the stored word when no LLM is
        configured or the request fails.
        """
        if not history or history[-1].role != "user":
            raise ValueError("Conversation must end with a user message")

        if self.llm is None:
            return self._template_reply(record)

        try:
            return self.llm.chat(
                [m.to_api() for m in history],
                system=CHAT_SYSTEM.format(word=record.word),
                max_tokens=MAX_REPLY_TOKENS,
                temperature=0.7,
            )
        except Exception:
            logger.exception("Chat reply failed for %r", record.word)
            return self._template_reply(record)

    def _template_reply(self, record: WordRecord) -> str:
        """Build a reply from the stored lexical data (no LLM needed)."""
        parts = [f"**{record.word}**"]
        if record.pronunciation:
            parts[0] += f" {record.pronunciation}"
        if record.translation:
            parts.append(f"means \"{record.translation}\".")
        if record.definition:
            parts.append(f"Definition: {record.definition}")
        if record.example_sentence:
            parts.append(f"Example: {record.example_sentence}")
        if record.mnemonic:
            parts.append(f"Memory aid: {record.mnemonic}")
        return " ".join(parts)
