"""Text helpers for uploads, file names and durations."""

import re
import unicodedata

from audiobook_studio.constants import DEFAULT_CHUNK_CHARS, DEFAULT_SLUG, MIN_CHAPTERS, MINUTES_PER_CHAPTER


def chunk_text(text: str, max_chars: int = DEFAULT_CHUNK_CHARS) -> list[str]:
    """
    Split text into chunks of whole paragraphs.

    A chunk is closed before the paragraph that would push it past
    ``max_chars``. A single paragraph longer than ``max_chars`` becomes its
    own chunk. Every paragraph keeps its trailing newline.

    Args:
        text: Text to split on newlines
        max_chars: Soft upper bound for a chunk

    Returns:
        list[str]: Chunks in order; whitespace-only trailing chunks are dropped
    """
    chunks: list[str] = []
    current = ""
    for paragraph in text.split("\n"):
        if len(current) + len(paragraph) > max_chars and current:
            chunks.append(current)
            current = ""
        current += paragraph + "\n"
    if current.strip():
        chunks.append(current)
    return chunks


def slugify(text: str) -> str:
    """Make a lowercase ASCII file-name slug, dropping diacritics."""
    # "đ" has no decomposition
    normalized = unicodedata.normalize("NFD", (text or DEFAULT_SLUG).replace("đ", "d").replace("Đ", "D"))
    ascii_text = "".join(ch for ch in normalized if not unicodedata.combining(ch)).lower()
    slug = re.sub(r"[^a-z0-9]+", "-", ascii_text)
    return slug.strip("-")


def format_duration(minutes: int) -> str:
    """Format minutes as ``1H05M``."""
    return f"{minutes // 60}H{minutes % 60:02d}M"


def calculate_chapter_count(duration_min: int) -> int:
    """Default chapter count for a target duration."""
    return max(MIN_CHAPTERS, round(duration_min / MINUTES_PER_CHAPTER))
