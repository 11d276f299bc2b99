"""Update command implementation."""

from __future__ import annotations

from argparse import Namespace
from pathlib import Path
from typing import Optional

import questionary

from frankenai.cli.arguments import UPDATE_SECTIONS
from frankenai.cli.commands import Command
from frankenai.cli.commands.init import STYLE, is_interactive
from frankenai.cli.exit_codes import (
    EXIT_ABORTED,
    EXIT_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_SUCCESS,
)
from frankenai.config.models import FrankenAIConfig
from frankenai.core.logging import get_logger
from frankenai.detection import StackDetector
from frankenai.guidelines.document import SECTION_NAMES, build_sections, extract_sections, replace_section

LOGGER = get_logger(__name__)

SECTION_CHOICES = [
    questionary.Choice("Tech stack detection", value="stack"),
    questionary.Choice("Commands", value="commands"),
    questionary.Choice("Workflow", value="workflow"),
    questionary.Choice("Guidelines", value="guidelines"),
    questionary.Choice("All sections", value="all"),
]


def normalize_update_args(args: Namespace) -> None:
    """Treat a lone positional that is not a section name as the path."""
    section = getattr(args, "section", None)
    if section and section not in UPDATE_SECTIONS and getattr(args, "path", None) is None:
        args.path = section
        args.section = None
    if getattr(args, "path", None) is None:
        args.path = "."


class UpdateCommand(Command):
    """Regenerates sections of an existing CLAUDE.md in place."""

    @property
    def name(self) -> str:
        """Command identifier."""
        return "update"

    def execute(self, args: Namespace, config: Optional[FrankenAIConfig] = None) -> int:
        """Execute the update command.

        Args:
            args: Parsed command-line arguments.
            config: Loaded configuration.

        Returns:
            Exit code.
        """
        config = config or FrankenAIConfig()
        normalize_update_args(args)
        project_root = Path(args.path).resolve()
        output_path = project_root / config.output.file

        if not output_path.exists():
            print(f"Error: No {output_path.name} found in {project_root}")
            print("Run: franken-ai init first")
            return EXIT_FAILURE

        existing = output_path.read_text(encoding="utf-8")
        if not extract_sections(existing):
            print(f"Error: {output_path.name} has no FrankenAI sections to update")
            print("Run: franken-ai init --force to add them")
            return EXIT_FAILURE

        section = args.section
        if section is None:
            if not is_interactive():
                print(f"Error: specify a section ({', '.join(UPDATE_SECTIONS)})")
                return EXIT_INVALID_USAGE
            section = questionary.select(
                "Which section would you like to update?",
                choices=SECTION_CHOICES,
                style=STYLE,
            ).ask()
            if section is None:
                print("Aborted.")
                return EXIT_ABORTED

        if section not in UPDATE_SECTIONS:
            print(f"Error: unknown section '{section}' (choose from {', '.join(UPDATE_SECTIONS)})")
            return EXIT_INVALID_USAGE

        report = StackDetector(config=config).detect(project_root)
        bodies, resolved = build_sections(report, strict=config.guidelines.strict)

        names = SECTION_NAMES if section == "all" else (section,)
        updated = existing
        for name in names:
            updated = replace_section(updated, name, bodies[name])

        for key in resolved.missing:
            print(f"  Warning: guideline not available: {key}")

        if updated == existing:
            print("No changes detected")
            return EXIT_SUCCESS

        output_path.write_text(updated, encoding="utf-8")
        LOGGER.info(f"Updated sections {', '.join(names)} in {output_path}")
        print(f"Updated {section} section in {output_path.name}")
        return EXIT_SUCCESS
