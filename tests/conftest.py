"""Shared pytest fixtures for all tests."""

from __future__ import annotations

import pytest

from shelfkit.config import Settings
from shelfkit.services.translit import TransliterationReverter, reset_reverter


@pytest.fixture
def settings() -> Settings:
    """Default settings for tests."""
    return Settings(keep_partial_conversions=False)


@pytest.fixture
def reverter() -> TransliterationReverter:
    """Fresh reverter with the built-in rule table."""
    return TransliterationReverter()


@pytest.fixture
def partial_reverter() -> TransliterationReverter:
    """Reverter that keeps partial conversions (no residual-Latin guard)."""
    return TransliterationReverter(keep_partial=True)


@pytest.fixture(autouse=True)
def _reset_singletons():
    reset_reverter()
    yield
    reset_reverter()
