"""Tests for frankenai.guidelines.document."""

from __future__ import annotations

from pathlib import Path

import pytest

from frankenai.core.models import DetectedStack, DetectionContext, StackCommands
from frankenai.detection.detector import StackReport
from frankenai.guidelines.document import (
    DOCUMENT_TITLE,
    SECTION_NAMES,
    end_marker,
    extract_sections,
    merge_document,
    render_commands_section,
    render_document,
    render_stack_section,
    replace_section,
    start_marker,
    wrap_section,
)
from frankenai.guidelines.manager import GuidelineManager
from frankenai.guidelines.store import GuidelineNotFoundError, GuidelineStore
from frankenai.modules.builtin import LaravelModule, PHPModule


def _report(tmp_path: Path) -> StackReport:
    modules = [LaravelModule(), PHPModule()]
    versions = {"laravel": "11", "php": "8.3"}
    return StackReport(
        project_root=tmp_path,
        context=DetectionContext(project_root=tmp_path),
        versions=versions,
        stack=DetectedStack(
            frameworks=["laravel"],
            languages=["php"],
            runtime="php",
            package_managers=["composer"],
        ),
        commands=StackCommands(dev=["php artisan serve"], install=["composer install"]),
        guidelines=GuidelineManager(GuidelineStore(tmp_path)).collect(modules, versions),
        modules=modules,
    )


def _store(tmp_path: Path) -> GuidelineStore:
    root = tmp_path / "guidelines"
    for key, body in (
        ("laravel/guidelines/framework.md", "## Laravel Guidelines\n"),
        ("php/guidelines/language.md", "## PHP Guidelines\n"),
    ):
        path = root / key
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(body, encoding="utf-8")
    return GuidelineStore(root)


class TestSectionMarkers:
    """Tests for marker-delimited sections."""

    def test_wrap_and_extract(self) -> None:
        """Test that wrapped sections are found again."""
        markdown = "\n\n".join([wrap_section("stack", "## Stack\n"), wrap_section("commands", "## Commands")])

        assert extract_sections(markdown) == {"stack": "## Stack", "commands": "## Commands"}
        assert markdown.startswith(start_marker("stack"))
        assert markdown.endswith(end_marker("commands"))

    def test_replace_section_keeps_user_text(self) -> None:
        """Test in-place replacement of one section."""
        markdown = "\n".join(
            [
                "# My notes",
                wrap_section("stack", "old stack"),
                "User paragraph",
                wrap_section("commands", "old commands"),
            ]
        )
        updated = replace_section(markdown, "stack", "new stack")

        assert extract_sections(updated) == {"stack": "new stack", "commands": "old commands"}
        assert updated.startswith("# My notes\n")
        assert "User paragraph" in updated

    def test_replace_section_handles_backslashes(self) -> None:
        """Test that replacement bodies are inserted literally."""
        updated = replace_section(wrap_section("stack", "x"), "stack", r"C:\path\1")
        assert extract_sections(updated)["stack"] == r"C:\path\1"

    def test_replace_missing_section_appends(self) -> None:
        """Test that an absent section is added at the end."""
        updated = replace_section("# Notes\n", "workflow", "## Workflow")
        assert updated == f"# Notes\n\n{wrap_section('workflow', '## Workflow')}\n"

    def test_merge_document(self) -> None:
        """Test refreshing every section of an existing document."""
        existing = "# Mine\n\n" + wrap_section("stack", "old") + "\n\nKeep me\n"
        generated = "\n\n".join([wrap_section("stack", "new"), wrap_section("commands", "cmds")])

        merged = merge_document(existing, generated)

        assert extract_sections(merged) == {"stack": "new", "commands": "cmds"}
        assert "Keep me" in merged


class TestRendering:
    """Tests for document rendering."""

    def test_render_stack_section(self, tmp_path: Path) -> None:
        """Test project information lines."""
        section = render_stack_section(_report(tmp_path))

        assert section.splitlines()[0] == "## Detected Stack: Laravel"
        assert "- **Runtime**: php" in section
        assert "- **Languages**: PHP" in section
        assert "- **Package Managers**: composer" in section
        assert "- **Laravel Version**: 11" in section
        assert "- **PHP Version**: 8.3" in section

    def test_render_empty_commands(self) -> None:
        """Test the placeholder for stacks without commands."""
        assert "No commands detected for this stack." in render_commands_section(StackCommands())

    def test_render_commands_headings(self) -> None:
        """Test category headings and order."""
        section = render_commands_section(
            StackCommands(dev=["npm run dev"], install=["npm install"], test=["npm test"])
        )
        assert section.index("### Development") < section.index("### Testing")
        assert section.index("### Testing") < section.index("### Package Management")
        assert "- `npm run dev`" in section
        assert "### Build" not in section

    def test_render_document(self, tmp_path: Path) -> None:
        """Test the full document layout."""
        rendered = render_document(_report(tmp_path), GuidelineManager(_store(tmp_path)))

        assert rendered.content.startswith(f"{DOCUMENT_TITLE}\n\n{start_marker('stack')}")
        sections = extract_sections(rendered.content)
        assert list(sections) == list(SECTION_NAMES)
        assert sections["guidelines"].startswith("## Laravel Guidelines")
        assert "## PHP Guidelines" in sections["guidelines"]
        assert "### Discovery Phase (Gemini CLI)" in sections["workflow"]
        assert rendered.missing == [
            "laravel/guidelines/11/features.md",
            "php/guidelines/8.3/features.md",
        ]

    def test_render_document_strict(self, tmp_path: Path) -> None:
        """Test that strict rendering fails on a missing body."""
        with pytest.raises(GuidelineNotFoundError):
            render_document(_report(tmp_path), GuidelineManager(_store(tmp_path)), strict=True)

    def test_rendering_is_deterministic(self, tmp_path: Path) -> None:
        """Test that the same report renders identically."""
        manager = GuidelineManager(_store(tmp_path))
        report = _report(tmp_path)
        assert render_document(report, manager).content == render_document(report, manager).content
