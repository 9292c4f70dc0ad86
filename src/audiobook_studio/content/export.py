"""CSV and text exports of generated content."""

import csv
import io
from pathlib import Path
from typing import Sequence

from .models import Language, ScriptBlock, StoryBlock
from .text_utils import slugify

# Excel needs the BOM to open UTF-8 CSV files correctly
CSV_BOM = "\ufeff"

HEADERS = {
    "script": {Language.VI: ["STT", "Chương", "Review Script"], Language.EN: ["No.", "Chapter", "Review Script"]},
    "story": {Language.VI: ["STT", "Chương", "Nội dung Truyện"], Language.EN: ["No.", "Chapter", "Story Content"]},
    "prompts": {Language.VI: ["STT", "Prompt"], Language.EN: ["No.", "Prompt"]},
}

FILE_PREFIXES = {"script": "review", "story": "truyen", "prompts": "prompts"}


def to_csv(rows: Sequence[Sequence[str]]) -> str:
    """Render rows as CSV with every cell quoted and CRLF line endings."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\r\n")
    writer.writerows([[cell or "" for cell in row] for row in rows])
    # No line terminator after the last row
    return CSV_BOM + buffer.getvalue().removesuffix("\r\n")


def script_rows(blocks: Sequence[ScriptBlock], language: Language = Language.VI) -> list[list[str]]:
    return [HEADERS["script"][language]] + [[str(b.index), b.chapter, b.text] for b in blocks]


def story_rows(blocks: Sequence[StoryBlock], language: Language = Language.VI) -> list[list[str]]:
    return [HEADERS["story"][language]] + [[str(b.index), b.title, b.content] for b in blocks]


def prompt_rows(prompts: Sequence[str], language: Language = Language.VI) -> list[list[str]]:
    return [HEADERS["prompts"][language]] + [[str(i), p] for i, p in enumerate(prompts, start=1)]


def export_filename(kind: str, book_title: str, extension: str = "csv") -> str:
    """File name for an export, e.g. ``review_my-book.csv``."""
    return f"{FILE_PREFIXES[kind]}_{slugify(book_title)}.{extension}"


def write_csv(path: Path, rows: Sequence[Sequence[str]]) -> Path:
    """Write rows to ``path`` as CSV and return the path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    # newline="" keeps the CRLF separators untranslated
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(to_csv(rows))
    return path


def script_to_text(blocks: Sequence[ScriptBlock]) -> str:
    """Join the review script into one narration text."""
    return "\n\n".join(block.text.strip() for block in blocks) + "\n"
