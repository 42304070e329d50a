"""Helpers for handling LLM output."""

import json
import logging

logger = logging.getLogger(__name__)


def strip_code_fence(text: str) -> str:
    """Remove a surrounding markdown code fence (```json ... ```), if any."""
    text = text.strip()
    if text.startswith("```"):
        # Remove opening fence and optional language identifier
        text = text.split("\n", 1)[1] if "\n" in text else text[3:]
        if text.endswith("```"):
            text = text[:-3]
        text = text.strip()
    return text


def parse_llm_json_response(response: str, context: str = "LLM response") -> dict | list:
    """Extract and parse JSON from an LLM response.

    Handles direct JSON output and JSON wrapped in markdown code blocks.

    Args:
        response: Raw LLM response text.
        context: Description for error logging (e.g., "word generation").

    Returns:
        Parsed JSON as dict or list. Returns empty dict on parse failure.
    """
    text = strip_code_fence(response)
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        logger.error("Failed to parse %s as JSON", context)
        logger.debug("Response was: %s", text[:500])
        return {}
