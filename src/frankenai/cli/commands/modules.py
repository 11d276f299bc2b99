"""Modules command implementation."""

from __future__ import annotations

import json
from argparse import Namespace
from typing import Any, Dict, List, Optional

from frankenai.cli.commands import Command
from frankenai.cli.exit_codes import EXIT_SUCCESS
from frankenai.config.models import FrankenAIConfig
from frankenai.modules.registry import ModuleRegistry, create_default_registry

TABLE_COLUMNS = [("id", "ID"), ("name", "Name"), ("type", "Type"), ("priority", "Priority"), ("status", "Status")]


class ModulesCommand(Command):
    """Lists the module catalog."""

    def __init__(self, registry: Optional[ModuleRegistry] = None) -> None:
        self._registry = registry

    @property
    def name(self) -> str:
        """Command identifier."""
        return "modules"

    def execute(self, args: Namespace, config: Optional[FrankenAIConfig] = None) -> int:
        """Execute the modules command.

        Args:
            args: Parsed command-line arguments.
            config: Loaded configuration; its disabled ids are applied.

        Returns:
            Exit code (always 0 for modules).
        """
        config = config or FrankenAIConfig()
        registry = self._registry
        if registry is None:
            registry = create_default_registry(disabled=config.modules.disabled)

        rows = self._filter(self.describe(registry), args)

        if getattr(args, "format", "table") == "json":
            print(json.dumps(rows, indent=2))
            return EXIT_SUCCESS

        if not rows:
            print("No modules found matching the specified criteria.")
            return EXIT_SUCCESS

        self._print_table(rows)
        enabled = sum(1 for row in rows if row["enabled"])
        print(f"\nTotal: {len(rows)} modules ({enabled} enabled, {len(rows) - enabled} disabled)")
        return EXIT_SUCCESS

    @staticmethod
    def describe(registry: ModuleRegistry) -> List[Dict[str, Any]]:
        """One row per registration, in registration order."""
        rows: List[Dict[str, Any]] = []
        for registration in registry.get_all():
            row: Dict[str, Any] = {
                "id": registration.id,
                "name": registration.id,
                "type": "unknown",
                "priority": "unknown",
                "enabled": registration.enabled,
            }
            try:
                module = registration.factory()
                row["name"] = module.display_name
                row["type"] = module.module_type.value
                row["priority"] = getattr(module.priority_type, "value", str(module.priority_type))
            except Exception as e:
                row["error"] = str(e)
            rows.append(row)
        return rows

    @staticmethod
    def _filter(rows: List[Dict[str, Any]], args: Namespace) -> List[Dict[str, Any]]:
        module_type = getattr(args, "module_type", None)
        if module_type:
            rows = [row for row in rows if row["type"] == module_type]
        if getattr(args, "enabled", False):
            rows = [row for row in rows if row["enabled"]]
        elif getattr(args, "disabled", False):
            rows = [row for row in rows if not row["enabled"]]
        return rows

    @staticmethod
    def _print_table(rows: List[Dict[str, Any]]) -> None:
        cells = [
            {**row, "status": "enabled" if row["enabled"] else "disabled"}
            for row in rows
        ]
        widths = {
            key: max(len(title), *(len(str(cell[key])) for cell in cells))
            for key, title in TABLE_COLUMNS
        }
        print("  ".join(title.ljust(widths[key]) for key, title in TABLE_COLUMNS).rstrip())
        print("  ".join("-" * widths[key] for key, _ in TABLE_COLUMNS))
        for cell in cells:
            print("  ".join(str(cell[key]).ljust(widths[key]) for key, _ in TABLE_COLUMNS).rstrip())
