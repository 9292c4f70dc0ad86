"""
Shared utilities for CLI commands.

This module provides key loading, progress output and the writing of the
session file and exports used by several commands.
"""

import asyncio
from pathlib import Path
from typing import Optional

import click

from audiobook_studio.content import export
from audiobook_studio.content.models import SavedSession
from audiobook_studio.content.session import SessionStore, save_session_file
from audiobook_studio.providers.types import ApiKeyConfig


def read_key_file(path: Optional[Path]) -> Optional[str]:
    """Read a key blob from a file, one key per line."""
    if path is None:
        return None
    return path.read_text(encoding="utf-8")


def load_keys(gemini_keys_file: Optional[Path], openai_keys_file: Optional[Path]) -> ApiKeyConfig:
    """
    Build the key configuration from key files.

    Providers without a key file fall back to the environment settings.
    """
    return ApiKeyConfig(google=read_key_file(gemini_keys_file), openai=read_key_file(openai_keys_file))


def echo_progress(stage: str, index: Optional[int], status: str, message: Optional[str] = None) -> None:
    """Progress callback printing one line per event."""
    label = stage if index is None else f"{stage} #{index}"
    line = f"[{label}] {status}"
    if message:
        line += f": {message}"
    click.echo(line, err=status == "failed")


def write_outputs(session: SavedSession, output_dir: Path, session_path: Optional[Path] = None) -> list[Path]:
    """
    Save the session and every non-empty export into ``output_dir``.

    The session goes to ``session_path`` when given, else to ``<id>.json``.

    Returns:
        list[Path]: Written files, session file first
    """
    if session_path is not None:
        written = [save_session_file(session, session_path)]
    else:
        written = [SessionStore(output_dir).save(session)]
    language = session.language

    if session.story_blocks:
        written.append(
            export.write_csv(
                output_dir / export.export_filename("story", session.book_title),
                export.story_rows(session.story_blocks, language),
            )
        )
    if session.script_blocks:
        written.append(
            export.write_csv(
                output_dir / export.export_filename("script", session.book_title),
                export.script_rows(session.script_blocks, language),
            )
        )
        text_path = output_dir / export.export_filename("script", session.book_title, extension="txt")
        text_path.write_text(export.script_to_text(session.script_blocks), encoding="utf-8")
        written.append(text_path)
    if session.video_prompts:
        written.append(
            export.write_csv(
                output_dir / export.export_filename("prompts", session.book_title),
                export.prompt_rows(session.video_prompts, language),
            )
        )
    return written


def run_async(coro):
    """Run a coroutine from a synchronous click command."""
    return asyncio.run(coro)
