"""Init command implementation.

Generates the assistant document for a project:
1. Detects the project stack
2. Resolves guidelines and commands for the surviving modules
3. Writes CLAUDE.md, or refreshes the generated sections of an existing one
"""

from __future__ import annotations

import sys
from argparse import Namespace
from pathlib import Path
from typing import Optional

import questionary
from questionary import Style

from frankenai.cli.commands import Command
from frankenai.cli.exit_codes import EXIT_ABORTED, EXIT_INVALID_USAGE, EXIT_SUCCESS
from frankenai.config.models import FrankenAIConfig
from frankenai.core.logging import get_logger
from frankenai.detection import StackDetector, StackReport
from frankenai.guidelines.document import DOCUMENT_TITLE, extract_sections, merge_document, render_document

LOGGER = get_logger(__name__)

# Custom questionary style
STYLE = Style([
    ("qmark", "fg:cyan bold"),
    ("question", "bold"),
    ("answer", "fg:cyan"),
    ("pointer", "fg:cyan bold"),
    ("highlighted", "fg:cyan bold"),
    ("selected", "fg:green"),
    ("separator", "fg:gray"),
    ("instruction", "fg:gray"),
])


def is_interactive() -> bool:
    """Whether prompts can be shown on this terminal."""
    return sys.stdin.isatty()


def has_frankenai_content(content: str) -> bool:
    return DOCUMENT_TITLE in content or bool(extract_sections(content))


class InitCommand(Command):
    """Writes CLAUDE.md for the detected stack."""

    @property
    def name(self) -> str:
        """Command identifier."""
        return "init"

    def execute(self, args: Namespace, config: Optional[FrankenAIConfig] = None) -> int:
        """Execute the init command.

        Args:
            args: Parsed command-line arguments.
            config: Loaded configuration.

        Returns:
            Exit code.
        """
        config = config or FrankenAIConfig()
        project_root = Path(args.path).resolve()

        if not project_root.is_dir():
            print(f"Error: {project_root} is not a directory")
            return EXIT_INVALID_USAGE

        output_path = project_root / config.output.file
        existing: Optional[str] = None

        if output_path.exists():
            existing = output_path.read_text(encoding="utf-8")
            decision = self._confirm_existing(args, output_path, existing)
            if decision is not None:
                return decision

        print("\nAnalyzing project...\n")
        report = StackDetector(config=config).detect(project_root)
        self._display_detection(report)

        rendered = render_document(report, strict=config.guidelines.strict)

        if existing is None:
            content = rendered.content
            action = "Created"
        elif has_frankenai_content(existing):
            content = merge_document(existing, rendered.content)
            action = "Updated"
        else:
            content = f"{existing.rstrip()}\n\n{rendered.content}"
            action = "Added FrankenAI configuration to"

        output_path.write_text(content, encoding="utf-8")
        LOGGER.info(f"Wrote {output_path}")

        print(f"\n{action} {output_path.name}")
        for key in rendered.missing:
            print(f"  Warning: guideline not available: {key}")
        return EXIT_SUCCESS

    def _confirm_existing(self, args: Namespace, output_path: Path, existing: str) -> Optional[int]:
        """Decide whether an existing document may be changed.

        Returns:
            None to continue, otherwise the exit code to return.
        """
        if getattr(args, "force", False):
            return None

        if getattr(args, "safe", False):
            print(f"{output_path.name} already exists. Use --force to update it.")
            return EXIT_ABORTED

        if getattr(args, "yes", False):
            return None

        if getattr(args, "non_interactive", False) or not is_interactive():
            print(
                f"Error: {output_path.name} already exists. "
                "Use --force or --yes to update it in non-interactive mode."
            )
            return EXIT_INVALID_USAGE

        if has_frankenai_content(existing):
            question = "Update existing FrankenAI configuration?"
        else:
            question = f"Add FrankenAI configuration to existing {output_path.name}?"

        proceed = questionary.confirm(question, default=True, style=STYLE).ask()
        if not proceed:
            print("Aborted.")
            return EXIT_ABORTED
        return None

    def _display_detection(self, report: StackReport) -> None:
        if not report.modules:
            print("  No specific technologies detected, using generic configuration")
            return

        print("Detected:")
        for module in report.modules:
            version = report.versions.get(module.id)
            suffix = f" {version}" if version else ""
            print(f"  {module.display_name}{suffix}")
