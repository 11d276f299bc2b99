"""Argument parser construction for the franken-ai CLI.

Subcommands:
- franken-ai detect  - Show the detected stack without writing files
- franken-ai init    - Generate CLAUDE.md for a project
- franken-ai update  - Regenerate one section of an existing CLAUDE.md
- franken-ai modules - List the available modules
"""

from __future__ import annotations

import argparse
from pathlib import Path

from frankenai.core.models import ModuleType

UPDATE_SECTIONS = ["stack", "commands", "workflow", "guidelines", "all"]


def _add_global_options(parser: argparse.ArgumentParser) -> None:
    """Add global options available to all commands."""
    parser.add_argument(
        "--version",
        action="store_true",
        help="Show franken-ai version and exit.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging.",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (info-level) logging.",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Reduce logging output to errors only.",
    )
    parser.add_argument(
        "--config",
        metavar="PATH",
        type=Path,
        help="Path to config file (default: .frankenai.yml in project root).",
    )


def _build_detect_parser(subparsers: argparse._SubParsersAction) -> None:
    """Build the 'detect' subcommand parser."""
    detect_parser = subparsers.add_parser(
        "detect",
        help="Show the detected stack without writing any file.",
        description=(
            "Run every enabled module against the project and print the "
            "surviving technologies, exclusions, commands and guidelines."
        ),
    )
    detect_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Project directory (default: current directory).",
    )
    detect_parser.add_argument(
        "--json",
        action="store_true",
        help="Print the detection report as JSON.",
    )
    detect_parser.add_argument(
        "--evidence",
        action="store_true",
        help="Include per-module evidence and raw results.",
    )


def _build_init_parser(subparsers: argparse._SubParsersAction) -> None:
    """Build the 'init' subcommand parser."""
    init_parser = subparsers.add_parser(
        "init",
        help="Generate CLAUDE.md for the current project.",
        description=(
            "Detect the project stack and write CLAUDE.md with the stack, "
            "commands, workflow and guideline sections."
        ),
    )
    init_parser.add_argument(
        "--force", "-f",
        action="store_true",
        help="Update an existing CLAUDE.md without asking.",
    )
    init_parser.add_argument(
        "--safe",
        action="store_true",
        help="Stop if CLAUDE.md already exists.",
    )
    init_parser.add_argument(
        "--yes", "-y",
        action="store_true",
        help="Auto-accept all prompts.",
    )
    init_parser.add_argument(
        "--non-interactive",
        action="store_true",
        help="Fail instead of prompting when input would be needed.",
    )
    init_parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help="Project directory to initialize (default: current directory).",
    )


def _build_update_parser(subparsers: argparse._SubParsersAction) -> None:
    """Build the 'update' subcommand parser."""
    update_parser = subparsers.add_parser(
        "update",
        help="Regenerate a section of an existing CLAUDE.md.",
        description=(
            f"Regenerate one section ({', '.join(UPDATE_SECTIONS)}) in place, "
            "keeping everything outside the generated sections untouched."
        ),
    )
    update_parser.add_argument(
        "section",
        nargs="?",
        help="Section to regenerate (prompted for when omitted).",
    )
    update_parser.add_argument(
        "path",
        nargs="?",
        help="Project directory (default: current directory).",
    )


def _build_modules_parser(subparsers: argparse._SubParsersAction) -> None:
    """Build the 'modules' subcommand parser."""
    modules_parser = subparsers.add_parser(
        "modules",
        help="List available modules.",
        description="Display the module catalog with type, priority and enabled state.",
    )
    modules_parser.add_argument(
        "--type", "-t",
        dest="module_type",
        choices=[t.value for t in ModuleType],
        help="Only show modules of this type.",
    )
    state_group = modules_parser.add_mutually_exclusive_group()
    state_group.add_argument(
        "--enabled",
        action="store_true",
        help="Only show enabled modules.",
    )
    state_group.add_argument(
        "--disabled",
        action="store_true",
        help="Only show disabled modules.",
    )
    modules_parser.add_argument(
        "--format",
        choices=["table", "json"],
        default="table",
        help="Output format (default: table).",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build and return the argument parser for the franken-ai CLI.

    Returns:
        Configured ArgumentParser instance with subcommands.
    """
    parser = argparse.ArgumentParser(
        prog="franken-ai",
        description="FrankenAI - stack-aware guidelines for AI coding assistants.",
        epilog=(
            "Examples:\n"
            "  franken-ai detect                 # Show the detected stack\n"
            "  franken-ai detect --json          # Machine-readable report\n"
            "  franken-ai init                   # Generate CLAUDE.md\n"
            "  franken-ai init --force           # Refresh an existing CLAUDE.md\n"
            "  franken-ai update commands        # Regenerate the commands section\n"
            "  franken-ai modules --type tool    # List tool modules\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    _add_global_options(parser)

    subparsers = parser.add_subparsers(
        dest="command",
        title="commands",
        description="Available commands:",
        metavar="COMMAND",
    )

    _build_detect_parser(subparsers)
    _build_init_parser(subparsers)
    _build_update_parser(subparsers)
    _build_modules_parser(subparsers)

    return parser
