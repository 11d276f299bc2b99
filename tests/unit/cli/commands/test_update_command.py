"""Tests for the update command."""

from __future__ import annotations

from argparse import Namespace
from pathlib import Path
from unittest.mock import patch

import pytest

from frankenai.cli.commands.init import InitCommand
from frankenai.cli.commands.update import UpdateCommand, normalize_update_args
from frankenai.cli.exit_codes import (
    EXIT_ABORTED,
    EXIT_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_SUCCESS,
)
from frankenai.config.models import FrankenAIConfig
from frankenai.guidelines.document import WORKFLOW_BODY, extract_sections, wrap_section


def _args(path: Path, section=None) -> Namespace:
    return Namespace(path=str(path), section=section)


def _init(project: Path) -> None:
    args = Namespace(path=str(project), force=True, safe=False, yes=False, non_interactive=False)
    assert InitCommand().execute(args, FrankenAIConfig()) == EXIT_SUCCESS


class TestNormalizeUpdateArgs:
    """Tests for normalize_update_args."""

    def test_lone_path_is_moved(self) -> None:
        args = Namespace(section="apps/web", path=None)
        normalize_update_args(args)
        assert (args.section, args.path) == (None, "apps/web")

    def test_section_and_path(self) -> None:
        args = Namespace(section="commands", path="apps/web")
        normalize_update_args(args)
        assert (args.section, args.path) == ("commands", "apps/web")

    def test_defaults_to_current_directory(self) -> None:
        args = Namespace(section="stack", path=None)
        normalize_update_args(args)
        assert args.path == "."


class TestUpdateCommand:
    """Tests for UpdateCommand."""

    def test_missing_document(self, tmp_path: Path, capsys) -> None:
        result = UpdateCommand().execute(_args(tmp_path, "all"), FrankenAIConfig())

        assert result == EXIT_FAILURE
        assert "Run: franken-ai init first" in capsys.readouterr().out

    def test_document_without_sections(self, tmp_path: Path) -> None:
        (tmp_path / "CLAUDE.md").write_text("# Notes\n")
        assert UpdateCommand().execute(_args(tmp_path, "all"), FrankenAIConfig()) == EXIT_FAILURE

    def test_updates_one_section(self, laravel_project: Path, capsys) -> None:
        """Test that only the chosen section changes."""
        document = laravel_project / "CLAUDE.md"
        document.write_text(
            "\n\n".join(
                [
                    "# Notes",
                    wrap_section("stack", "old stack"),
                    "Between sections.",
                    wrap_section("commands", "old commands"),
                ]
            )
            + "\n"
        )

        result = UpdateCommand().execute(_args(laravel_project, "commands"), FrankenAIConfig())

        assert result == EXIT_SUCCESS
        sections = extract_sections(document.read_text())
        assert sections["stack"] == "old stack"
        assert "- `php artisan serve`" in sections["commands"]
        assert "Between sections." in document.read_text()
        assert "Updated commands section in CLAUDE.md" in capsys.readouterr().out

    def test_adds_missing_section(self, laravel_project: Path) -> None:
        """Test that a section absent from the document is appended."""
        document = laravel_project / "CLAUDE.md"
        document.write_text(wrap_section("stack", "old") + "\n")

        assert UpdateCommand().execute(_args(laravel_project, "workflow"), FrankenAIConfig()) == EXIT_SUCCESS
        assert extract_sections(document.read_text())["workflow"] == WORKFLOW_BODY.strip()

    def test_all_sections_unchanged(self, laravel_project: Path, capsys) -> None:
        """Test that regenerating a fresh document reports no changes."""
        _init(laravel_project)
        before = (laravel_project / "CLAUDE.md").read_text()
        capsys.readouterr()

        result = UpdateCommand().execute(_args(laravel_project, "all"), FrankenAIConfig())

        assert result == EXIT_SUCCESS
        assert "No changes detected" in capsys.readouterr().out
        assert (laravel_project / "CLAUDE.md").read_text() == before

    def test_unknown_section(self, laravel_project: Path) -> None:
        _init(laravel_project)
        result = UpdateCommand().execute(_args(laravel_project, "bogus"), FrankenAIConfig())
        assert result == EXIT_INVALID_USAGE

    def test_no_section_without_terminal(self, laravel_project: Path) -> None:
        _init(laravel_project)
        with patch("frankenai.cli.commands.update.is_interactive", return_value=False):
            result = UpdateCommand().execute(_args(laravel_project), FrankenAIConfig())
        assert result == EXIT_INVALID_USAGE

    @pytest.mark.parametrize("answer,expected", [("workflow", EXIT_SUCCESS), (None, EXIT_ABORTED)])
    def test_interactive_section_choice(self, laravel_project: Path, answer, expected) -> None:
        """Test the section picker."""
        _init(laravel_project)
        with patch("frankenai.cli.commands.update.is_interactive", return_value=True), patch(
            "frankenai.cli.commands.update.questionary.select"
        ) as select:
            select.return_value.ask.return_value = answer
            result = UpdateCommand().execute(_args(laravel_project), FrankenAIConfig())

        assert result == expected
        assert select.called
