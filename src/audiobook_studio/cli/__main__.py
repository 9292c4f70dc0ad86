"""
Entry point for running the CLI as a module.

This allows the CLI to be executed with:
    python -m audiobook_studio.cli
"""


def _main() -> None:
    """Run the CLI."""
    from . import main

    main()


if __name__ == "__main__":
    _main()
