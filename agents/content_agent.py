"""Content Agent: turns a bare word into study material.

Asks the LLM for translation, pronunciation, definition, part of speech,
a mnemonic, an illustration prompt and an example sentence, and validates
the reply before it becomes a WordRecord.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from agents.base import BaseAgent
from agents.utils import parse_llm_json_response
from lingo.srs.records import LexicalData

logger = logging.getLogger(__name__)

GENERATION_SYSTEM = """\
You are a language learning assistant. When given a word, provide a \
comprehensive analysis in JSON format with the following structure:
{
  "word": "the original word",
  "translation": "Chinese translation",
  "pronunciation": "IPA pronunciation",
  "definition": "English definition",
  "partOfSpeech": "noun/verb/adjective/etc",
  "mnemonic": "A creative memory technique or story to remember this word",
  "image_prompt": "A detailed description for AI image generation that visually represents the word's meaning",
  "example_sentence": "A natural example sentence using this word"
}

Make the mnemonic creative and memorable. The image_prompt should be \
descriptive and suitable for educational illustration. Return JSON only."""


class GenerationError(Exception):
    """The word's study material could not be generated."""


class GeneratedWord(BaseModel):
    """Shape of the LLM's JSON reply."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    word: str = Field(min_length=1)
    translation: str
    pronunciation: str = ""
    definition: str
    part_of_speech: str | None = Field(default=None, alias="partOfSpeech")
    mnemonic: str = ""
    image_prompt: str = ""
    example_sentence: str = ""

    def to_lexical(self) -> LexicalData:
        return LexicalData(**self.model_dump())


class ContentAgent(BaseAgent):
    """Generates lexical data for new words."""

    @property
    def name(self) -> str:
        return "content"

    @property
    def description(self) -> str:
        return "Generates translation, definition, mnemonic and example for a word"

    def generate(self, word: str) -> LexicalData:
        """Generate study material for ``word``.

        Raises:
            GenerationError: If no LLM is configured, the call fails, or the
                reply is not the expected JSON.
        """
        word = word.strip()
        if not word:
            raise GenerationError("Word must not be empty")
        if self.llm is None:
            raise GenerationError("No LLM client configured; set LINGO_ANTHROPIC_API_KEY")

        try:
            response = self.llm.create_message(
                prompt=f'Analyze the word: "{word}"',
                system=GENERATION_SYSTEM,
                max_tokens=1024,
                temperature=0.7,
            )
        except Exception as exc:
            logger.exception("Word generation failed for %r", word)
            raise GenerationError(f"LLM request failed: {exc}") from exc

        return self.parse(response, word)

    def parse(self, response: str, word: str) -> LexicalData:
        """Validate an LLM reply into LexicalData."""
        data = parse_llm_json_response(response, context="word generation")
        if not isinstance(data, dict) or not data:
            raise GenerationError(
                "Failed to parse AI response. The model may not support JSON output."
            )
        data.setdefault("word", word)
        try:
            generated = GeneratedWord.model_validate(data)
        except ValidationError as exc:
            logger.warning("Generated data for %r failed validation: %s", word, exc)
            raise GenerationError(f"Incomplete word data for {word!r}") from exc
        return generated.to_lexical()
