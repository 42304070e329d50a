"""Tests for settings validation."""

import pytest
from pydantic import ValidationError

from lingo.config import Settings


def test_session_cap_defaults_to_unlimited() -> None:
    assert Settings().max_reviews_per_session == 0


def test_negative_session_cap_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(max_reviews_per_session=-1)
