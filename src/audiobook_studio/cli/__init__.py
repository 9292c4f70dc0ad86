"""
Command-line interface for Audiobook Studio.

Usage:
    audiobook-studio <command> [args...]
    python -m audiobook_studio.cli --help

Available commands:
    generate  Generate a full content package from a book title
    upload    Build the review script and metadata for an existing story
    rewrite   Rewrite story blocks of a saved session with editor feedback
    evaluate  Critique the story of a saved session
"""

import sys

import click

from audiobook_studio.config import settings
from audiobook_studio.logging_config import setup_logging

from .commands import evaluate_command, generate_command, rewrite_command, upload_command


@click.group()
@click.help_option("--help", "-h")
def cli():
    """Audiobook Studio - AI content packages for YouTube audiobook videos."""
    setup_logging(level=settings.log_level)


cli.add_command(generate_command)
cli.add_command(upload_command)
cli.add_command(rewrite_command)
cli.add_command(evaluate_command)


def main() -> None:
    """
    Main function to handle CLI execution with error handling.
    """
    try:
        cli()
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.")
        sys.exit(1)
    except Exception as e:
        print(f"An unexpected error occurred: {e}")
        sys.exit(1)
