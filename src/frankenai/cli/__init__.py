"""Command-line interface for franken-ai."""

from __future__ import annotations

from typing import Iterable, Optional

from frankenai.cli.runner import CLIRunner, get_version


def main(argv: Optional[Iterable[str]] = None) -> int:
    """CLI entrypoint.

    Args:
        argv: Command-line arguments (defaults to sys.argv).

    Returns:
        Exit code.
    """
    return CLIRunner().run(argv)


__all__ = ["CLIRunner", "get_version", "main"]
