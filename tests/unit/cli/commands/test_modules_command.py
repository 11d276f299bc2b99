"""Tests for the modules command."""

from __future__ import annotations

import json
from argparse import Namespace

from frankenai.cli.commands.modules import ModulesCommand
from frankenai.cli.exit_codes import EXIT_SUCCESS
from frankenai.config.models import FrankenAIConfig, ModulesConfig
from frankenai.modules.builtin import BUILTIN_MODULES, LaravelModule
from frankenai.modules.registry import ModuleRegistry


def _args(**overrides) -> Namespace:
    values = {"module_type": None, "enabled": False, "disabled": False, "format": "table"}
    values.update(overrides)
    return Namespace(**values)


def _builtin_registry(disabled=()) -> ModuleRegistry:
    registry = ModuleRegistry()
    for module_id, module_class in BUILTIN_MODULES:
        registry.register(module_id, module_class, enabled=module_id not in disabled)
    return registry


def _broken_factory():
    raise RuntimeError("cannot build")


class TestModulesCommand:
    """Tests for ModulesCommand."""

    def test_name(self) -> None:
        assert ModulesCommand().name == "modules"

    def test_table_lists_every_module(self, capsys) -> None:
        """Test the default table output."""
        result = ModulesCommand(_builtin_registry(disabled={"bootstrap"})).execute(_args())

        assert result == EXIT_SUCCESS
        out = capsys.readouterr().out
        lines = out.splitlines()
        assert lines[0].split() == ["ID", "Name", "Type", "Priority", "Status"]
        assert any(line.startswith("laravel-boost ") for line in lines)
        assert f"Total: {len(BUILTIN_MODULES)} modules ({len(BUILTIN_MODULES) - 1} enabled, 1 disabled)" in out

    def test_config_disables_modules(self, capsys) -> None:
        """Test that the default registry honours modules.disabled."""
        config = FrankenAIConfig(modules=ModulesConfig(disabled=["pint"]))

        ModulesCommand().execute(_args(disabled=True, format="json"), config)

        rows = json.loads(capsys.readouterr().out)
        assert [row["id"] for row in rows] == ["pint"]

    def test_filter_by_type(self, capsys) -> None:
        ModulesCommand(_builtin_registry()).execute(_args(module_type="language", format="json"))

        rows = json.loads(capsys.readouterr().out)
        assert [row["id"] for row in rows] == ["typescript", "php", "javascript"]
        assert all(row["type"] == "language" for row in rows)

    def test_enabled_filter_without_matches(self, capsys) -> None:
        ModulesCommand(_builtin_registry()).execute(_args(disabled=True))
        assert "No modules found matching the specified criteria." in capsys.readouterr().out

    def test_row_shape(self) -> None:
        """Test describe() for a working module."""
        registry = ModuleRegistry()
        registry.register("laravel", LaravelModule)

        assert ModulesCommand.describe(registry) == [
            {
                "id": "laravel",
                "name": "Laravel",
                "type": "framework",
                "priority": "meta-framework",
                "enabled": True,
            }
        ]

    def test_broken_factory(self) -> None:
        """Test that a module that cannot be built is still listed."""
        registry = ModuleRegistry()
        registry.register("broken", _broken_factory)

        row = ModulesCommand.describe(registry)[0]

        assert row["type"] == "unknown"
        assert row["error"] == "cannot build"

    def test_empty_registry(self, capsys) -> None:
        ModulesCommand(ModuleRegistry()).execute(_args())
        assert "No modules found" in capsys.readouterr().out
