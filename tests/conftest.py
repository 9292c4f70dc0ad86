#!/usr/bin/env python3
"""
Pytest configuration and fixtures for the test suite.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

GEMINI_KEYS = ["AIza" + c * 35 for c in "ABC"]
OPENAI_KEYS = ["sk-" + c * 24 for c in "abc"]


class FakeApiError(Exception):
    """Stand-in for an SDK error carrying a numeric code."""

    def __init__(self, code, message=""):
        self.code = code
        super().__init__(message or f"error {code}")


class FakeGeminiSdk:
    """Records the key of every SDK client built and replays scripted outcomes per key."""

    def __init__(self, outcomes):
        # key -> text to return or exception to raise
        self.outcomes = outcomes
        self.keys_used = []
        self.calls = []
        self.closed = []

    def __call__(self, api_key):
        self.keys_used.append(api_key)

        async def generate_content(model, contents, config=None):
            self.calls.append({"key": api_key, "model": model, "contents": contents, "config": config})
            outcome = self.outcomes[api_key]
            if isinstance(outcome, BaseException):
                raise outcome
            return SimpleNamespace(text=outcome)

        async def aclose():
            self.closed.append(api_key)

        models = SimpleNamespace(generate_content=generate_content)
        return SimpleNamespace(aio=SimpleNamespace(models=models, aclose=aclose))


@pytest.fixture(autouse=True)
def clear_api_key_env(monkeypatch):
    """Keep real keys from the environment out of every test."""
    for name in ("GEMINI_API_KEY", "OPENAI_API_KEY"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def gemini_keys():
    return list(GEMINI_KEYS)


@pytest.fixture
def openai_keys():
    return list(OPENAI_KEYS)


@pytest.fixture
def mock_generate_text(monkeypatch):
    """Patch the generation entry point used by the content generators."""
    mock = AsyncMock(return_value="")
    monkeypatch.setattr("audiobook_studio.content.generators.generate_text", mock)
    return mock
