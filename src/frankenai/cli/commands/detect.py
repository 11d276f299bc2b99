"""Detect command implementation."""

from __future__ import annotations

import json
from argparse import Namespace
from pathlib import Path
from typing import Optional

from frankenai.cli.commands import Command
from frankenai.cli.exit_codes import EXIT_INVALID_USAGE, EXIT_SUCCESS
from frankenai.config.models import FrankenAIConfig
from frankenai.detection import StackDetector, StackReport


class DetectCommand(Command):
    """Prints the detected stack without writing anything."""

    def __init__(self, version: str) -> None:
        self._version = version

    @property
    def name(self) -> str:
        """Command identifier."""
        return "detect"

    def execute(self, args: Namespace, config: Optional[FrankenAIConfig] = None) -> int:
        """Execute the detect command.

        Args:
            args: Parsed command-line arguments.
            config: Loaded configuration.

        Returns:
            Exit code.
        """
        project_root = Path(args.path).resolve()
        if not project_root.is_dir():
            print(f"Error: {project_root} is not a directory")
            return EXIT_INVALID_USAGE

        report = StackDetector(config=config).detect(project_root)

        if getattr(args, "json", False):
            data = report.to_dict(include_evidence=getattr(args, "evidence", False))
            data["version"] = self._version
            print(json.dumps(data, indent=2))
            return EXIT_SUCCESS

        self._display_report(report, show_evidence=getattr(args, "evidence", False))
        return EXIT_SUCCESS

    def _display_report(self, report: StackReport, show_evidence: bool = False) -> None:
        names = report.display_names
        print(f"\nProject: {report.project_root}\n")

        if not report.modules:
            print("No technologies detected.")
        else:
            print("Detected:")
            for module in report.modules:
                result = report.results[module.id]
                version = report.versions.get(module.id)
                version_str = f" {version}" if version else ""
                print(
                    f"  {module.display_name}{version_str}"
                    f" ({module.module_type.value}, confidence {result.confidence:.2f})"
                )
                if show_evidence:
                    for line in result.evidence:
                        print(f"    - {line}")

        if report.excluded:
            print("\nExcluded:")
            for module_id, by in report.excluded.items():
                print(f"  {module_id} (excluded by {', '.join(names.get(b, b) for b in by)})")

        if report.failures:
            print("\nFailed:")
            for module_id, error in report.failures.items():
                print(f"  {module_id}: {error}")

        commands = report.commands.to_dict()
        if any(commands.values()):
            print("\nCommands:")
            for category, entries in commands.items():
                for command in entries:
                    print(f"  [{category}] {command}")

        if report.guidelines:
            print("\nGuidelines:")
            for entry in report.guidelines:
                print(f"  {entry.path}")
        print()
