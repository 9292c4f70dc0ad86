"""Key pool parsing for user-supplied API key blobs."""

import re
from typing import Optional, Pattern

from audiobook_studio.constants import KEY_STRIP_CHARS
from audiobook_studio.exceptions import MissingApiKeyError

_NON_PRINTABLE = re.compile(r"[^\x21-\x7E]")


def _clean_key_line(line: str, pattern: Optional[Pattern[str]]) -> str:
    """Extract a key from a single line of user input."""
    trimmed = line.strip(KEY_STRIP_CHARS)
    if pattern is None:
        return trimmed
    match = pattern.search(line)
    if match:
        return match.group(0)
    return _NON_PRINTABLE.sub("", trimmed)


def parse_key_pool(raw: Optional[str], pattern: Optional[Pattern[str]] = None) -> list[str]:
    """
    Parse a raw key blob into an ordered pool of keys.

    Each line holds one key. Without a ``pattern`` a line is only trimmed of
    whitespace and quotes, and the key is otherwise kept as typed. When
    ``pattern`` matches inside a line the matched substring is used, which
    tolerates stray text around a valid key. A line it does not match is
    trimmed and stripped of non-printable characters. Blank lines and
    duplicates are dropped.

    Args:
        raw: Raw user input, possibly empty or None
        pattern: Provider-specific key shape

    Returns:
        list[str]: Keys in input order, which is the failover order
    """
    if not raw:
        return []

    pool: list[str] = []
    for line in raw.splitlines():
        key = _clean_key_line(line, pattern)
        if key and key not in pool:
            pool.append(key)
    return pool


def require_key_pool(raw: Optional[str], provider: str, pattern: Optional[Pattern[str]] = None) -> list[str]:
    """Parse a key blob and fail fast when it holds no keys."""
    pool = parse_key_pool(raw, pattern)
    if not pool:
        raise MissingApiKeyError(provider)
    return pool


def key_fingerprint(key: str) -> str:
    """Shorten a key for log output."""
    if len(key) <= 12:
        return f"{key[:2]}..."
    return f"{key[:8]}...{key[-4:]}"
