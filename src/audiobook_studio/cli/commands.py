"""
Content generation commands.

Each command drives a ``ContentPipeline`` and writes the session file and
exports to an output directory.
"""

import sys
from pathlib import Path
from typing import Any, Optional

import click
from loguru import logger

from audiobook_studio.config import settings
from audiobook_studio.constants import DEFAULT_DURATION_MINUTES, DEFAULT_FRAME_RATIO, LOGICAL_MODELS
from audiobook_studio.content.models import Language, SavedSession
from audiobook_studio.content.pipeline import ContentPipeline
from audiobook_studio.content.session import load_session_file, save_session_file
from audiobook_studio.exceptions import LlmModelError

from .common import echo_progress, load_keys, run_async, write_outputs

key_options = [
    click.option(
        "--gemini-keys-file",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        help="File with Gemini API keys, one per line, tried in order.",
    ),
    click.option(
        "--openai-keys-file",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        help="File with OpenAI-compatible API keys, one per line, tried in order.",
    ),
    click.option("--model", default=None, help=f"Logical model id ({', '.join(LOGICAL_MODELS)})."),
]


def with_key_options(func):
    for option in reversed(key_options):
        func = option(func)
    return func


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _run_step(step) -> Any:
    """Run one pipeline coroutine, turning expected failures into CLI errors."""
    try:
        return run_async(step)
    except (LlmModelError, ValueError) as e:
        logger.error(f"Step failed: {e}")
        _fail(str(e))


@click.command("generate")
@click.argument("book_title")
@click.option("--idea", default="", help="Core idea or context for the story.")
@click.option("--channel", "channel_name", default="", help="YouTube channel name.")
@click.option("--host", "mc_name", default="", help="Host/MC name used in the narration.")
@click.option(
    "--language",
    type=click.Choice([lang.value for lang in Language]),
    default=Language.VI.value,
    show_default=True,
)
@click.option(
    "--duration",
    "duration_min",
    type=int,
    default=DEFAULT_DURATION_MINUTES,
    show_default=True,
    help="Target video length in minutes.",
)
@click.option("--auto-duration", is_flag=True, help="Let the model pick the chapter count for a 40-60 minute video.")
@click.option("--chapters", "chapters_count", type=int, default=0, help="Chapter count (default: from duration).")
@click.option("--frame-ratio", default=DEFAULT_FRAME_RATIO, show_default=True)
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("output"),
    show_default=True,
)
@with_key_options
@click.help_option("--help", "-h")
def generate_command(
    book_title: str,
    idea: str,
    channel_name: str,
    mc_name: str,
    language: str,
    duration_min: int,
    auto_duration: bool,
    chapters_count: int,
    frame_ratio: str,
    output_dir: Path,
    gemini_keys_file: Optional[Path],
    openai_keys_file: Optional[Path],
    model: Optional[str],
) -> None:
    """
    Generate a full content package for BOOK_TITLE.

    Outline, story, review script, SEO metadata, video prompts and thumbnail
    texts are written to the output directory.

    Examples:
      audiobook-studio generate "The Little Prince" --language en --duration 45
      audiobook-studio generate "Truyện Kiều" --auto-duration --model gpt-5.2-pro
    """
    session = SavedSession(
        book_title=book_title,
        book_idea=idea,
        channel_name=channel_name,
        mc_name=mc_name,
        language=Language(language),
        duration_min=duration_min,
        is_auto_duration=auto_duration,
        chapters_count=chapters_count,
        frame_ratio=frame_ratio,
    )
    pipeline = ContentPipeline(
        session,
        model=model or settings.default_model,
        keys=load_keys(gemini_keys_file, openai_keys_file),
        progress_callback=echo_progress,
    )
    _run_step(pipeline.run_all())

    for path in write_outputs(session, output_dir):
        click.echo(f"✓ Wrote {path}")


@click.command("upload")
@click.argument("text_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--title", default=None, help="Book title (default: file name without extension).")
@click.option("--channel", "channel_name", default="")
@click.option("--host", "mc_name", default="")
@click.option(
    "--language",
    type=click.Choice([lang.value for lang in Language]),
    default=Language.VI.value,
    show_default=True,
)
@click.option("--duration", "duration_min", type=int, default=DEFAULT_DURATION_MINUTES, show_default=True)
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("output"),
    show_default=True,
)
@with_key_options
@click.help_option("--help", "-h")
def upload_command(
    text_file: Path,
    title: Optional[str],
    channel_name: str,
    mc_name: str,
    language: str,
    duration_min: int,
    output_dir: Path,
    gemini_keys_file: Optional[Path],
    openai_keys_file: Optional[Path],
    model: Optional[str],
) -> None:
    """
    Build the review script and metadata for a pre-written story in TEXT_FILE.

    The text is split into blocks that are reviewed one by one.
    """
    session = SavedSession(
        book_title=title or text_file.stem,
        channel_name=channel_name,
        mc_name=mc_name,
        language=Language(language),
        duration_min=duration_min,
    )
    pipeline = ContentPipeline(
        session,
        model=model or settings.default_model,
        keys=load_keys(gemini_keys_file, openai_keys_file),
        progress_callback=echo_progress,
    )
    pipeline.load_upload(text_file.read_text(encoding="utf-8"))
    click.echo(f"Loaded {len(session.story_blocks)} blocks from {text_file}")
    _run_step(pipeline.run_all())

    for path in write_outputs(session, output_dir):
        click.echo(f"✓ Wrote {path}")


@click.command("rewrite")
@click.argument("session_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--feedback", required=True, help="Editor feedback to apply.")
@click.option("--block", "block_number", type=int, default=None, help="1-based block to rewrite (default: all).")
@with_key_options
@click.help_option("--help", "-h")
def rewrite_command(
    session_file: Path,
    feedback: str,
    block_number: Optional[int],
    gemini_keys_file: Optional[Path],
    openai_keys_file: Optional[Path],
    model: Optional[str],
) -> None:
    """
    Rewrite one or all story blocks of the session in SESSION_FILE.

    Rewriting all blocks continues past failed blocks and reports them.
    """
    session = load_session_file(session_file)
    if block_number is not None and not 1 <= block_number <= len(session.story_blocks):
        _fail(f"Block {block_number} is out of range (1-{len(session.story_blocks)}).")

    pipeline = ContentPipeline(
        session,
        model=model or settings.default_model,
        keys=load_keys(gemini_keys_file, openai_keys_file),
        progress_callback=echo_progress,
    )

    if block_number is not None:
        _run_step(pipeline.rewrite_block(block_number - 1, feedback))
    else:
        failures = _run_step(pipeline.rewrite_all(feedback))
        if failures and len(failures) == len(session.story_blocks):
            _fail("No block could be rewritten; the session was left unchanged.")
        if failures:
            click.echo(f"{len(failures)} block(s) could not be rewritten and were left unchanged.", err=True)

    for path in write_outputs(session, session_file.parent, session_path=session_file):
        click.echo(f"✓ Wrote {path}")


@click.command("evaluate")
@click.argument("session_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@with_key_options
@click.help_option("--help", "-h")
def evaluate_command(
    session_file: Path,
    gemini_keys_file: Optional[Path],
    openai_keys_file: Optional[Path],
    model: Optional[str],
) -> None:
    """Evaluate the story in SESSION_FILE and store the critique in the session."""
    session = load_session_file(session_file)
    pipeline = ContentPipeline(
        session,
        model=model or settings.default_model,
        keys=load_keys(gemini_keys_file, openai_keys_file),
    )
    _run_step(pipeline.evaluate())
    click.echo(session.evaluation_result)
    save_session_file(session, session_file)
