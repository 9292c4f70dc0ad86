"""Tests for key pool parsing."""

import pytest

from audiobook_studio.constants import GEMINI_KEY_PATTERN
from audiobook_studio.exceptions import MissingApiKeyError
from audiobook_studio.providers.keys import key_fingerprint, parse_key_pool, require_key_pool

from .conftest import GEMINI_KEYS, OPENAI_KEYS


class TestParseKeyPool:
    def test_empty_input_gives_empty_pool(self):
        assert parse_key_pool(None) == []
        assert parse_key_pool("") == []
        assert parse_key_pool("\n  \n\t\n") == []

    def test_keeps_input_order(self):
        blob = "\n".join(GEMINI_KEYS)
        assert parse_key_pool(blob, GEMINI_KEY_PATTERN) == GEMINI_KEYS

    def test_drops_duplicates_keeping_first(self):
        k1, k2, _ = GEMINI_KEYS
        blob = f"{k1}\n{k2}\n{k1}\n"
        assert parse_key_pool(blob, GEMINI_KEY_PATTERN) == [k1, k2]

    def test_pattern_extracts_key_from_noisy_line(self):
        k1 = GEMINI_KEYS[0]
        blob = f'GEMINI_API_KEY="{k1}",\n'
        assert parse_key_pool(blob, GEMINI_KEY_PATTERN) == [k1]

    def test_unmatched_line_is_trimmed_and_stripped(self):
        blob = "  'custom-key\u200b-1'  \r\n"
        assert parse_key_pool(blob, GEMINI_KEY_PATTERN) == ["custom-key-1"]

    def test_windows_line_endings(self):
        k1, k2 = OPENAI_KEYS[:2]
        assert parse_key_pool(f"{k1}\r\n{k2}\r\n") == [k1, k2]

    def test_without_pattern_key_is_kept_as_typed(self):
        key = "sk-abcdefghijklmnopqrstuvwx.yz0123"
        assert parse_key_pool(f'  "{key}"\r\n') == [key]

    def test_without_pattern_inner_characters_are_not_stripped(self):
        assert parse_key_pool("sk-proj+ab/cd==\n") == ["sk-proj+ab/cd=="]

    def test_without_pattern_uses_cleaned_lines(self):
        assert parse_key_pool(' "abc" \n`def`\n') == ["abc", "def"]


class TestRequireKeyPool:
    def test_missing_keys_raise(self):
        with pytest.raises(MissingApiKeyError) as exc_info:
            require_key_pool("   ", "gemini", GEMINI_KEY_PATTERN)
        assert exc_info.value.provider == "gemini"
        assert "Missing API Key" in str(exc_info.value)

    def test_returns_pool(self):
        assert require_key_pool(OPENAI_KEYS[0], "openai") == [OPENAI_KEYS[0]]


def test_key_fingerprint_hides_middle():
    key = GEMINI_KEYS[0]
    fingerprint = key_fingerprint(key)
    assert fingerprint.startswith(key[:8])
    assert fingerprint.endswith(key[-4:])
    assert key not in fingerprint
    assert key_fingerprint("short") == "sh..."
