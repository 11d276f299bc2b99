"""Tests for frankenai.guidelines.manager."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import pytest

from frankenai.core.models import (
    DetectionContext,
    DetectionResult,
    GuidelinePath,
    ModuleType,
    PriorityType,
)
from frankenai.guidelines.manager import GuidelineManager
from frankenai.guidelines.store import GuidelineNotFoundError, GuidelineStore
from frankenai.modules.base import Module
from frankenai.modules.builtin import (
    JavaScriptModule,
    LaravelModule,
    PestModule,
    PHPModule,
    ReactModule,
    TailwindModule,
)


class SharedPathModule(Module):
    """Module returning a fixed guideline path list."""

    def __init__(self, module_id: str, paths: List[str], error: Optional[Exception] = None) -> None:
        self._id = module_id
        self._paths = paths
        self._error = error

    @property
    def id(self) -> str:
        return self._id

    @property
    def display_name(self) -> str:
        return self._id

    @property
    def module_type(self) -> ModuleType:
        return ModuleType.LIBRARY

    @property
    def priority_type(self) -> PriorityType:
        return PriorityType.LARAVEL_TOOL

    def detect(self, context: DetectionContext) -> DetectionResult:
        return DetectionResult.not_detected()

    def get_guideline_paths(self, version: Optional[str] = None) -> List[GuidelinePath]:
        if self._error is not None:
            raise self._error
        return [GuidelinePath(path=p, priority=self.priority_type, category="library") for p in self._paths]


def _store(root: Path, *keys: str) -> GuidelineStore:
    for key in keys:
        path = root / key
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"## {key}\n", encoding="utf-8")
    return GuidelineStore(root)


class TestGuidelineCollection:
    """Tests for GuidelineManager.collect."""

    def test_entries_are_ordered_by_priority_class(self, tmp_path: Path) -> None:
        """Test stable ordering by priority class."""
        modules = [
            LaravelModule(),
            ReactModule(),
            PestModule(),
            TailwindModule(),
            PHPModule(),
            JavaScriptModule(),
        ]
        versions = {"laravel": "11", "react": "18", "php": "8.3", "pest": None, "tailwind": "4"}

        entries = GuidelineManager(GuidelineStore(tmp_path)).collect(modules, versions)

        assert [e.path for e in entries] == [
            "laravel/guidelines/framework.md",
            "laravel/guidelines/11/features.md",
            "react/guidelines/framework.md",
            "react/guidelines/18/features.md",
            "javascript/guidelines/language.md",
            "php/guidelines/language.md",
            "php/guidelines/8.3/features.md",
            "pest/guidelines/laravel-tool.md",
            "tailwind/guidelines/css-framework.md",
            "tailwind/guidelines/4/features.md",
        ]

    def test_first_occurrence_of_a_path_wins(self, tmp_path: Path) -> None:
        """Test path deduplication across modules."""
        modules = [
            SharedPathModule("first", ["shared/guide.md", "first/own.md"]),
            SharedPathModule("second", ["shared/guide.md"]),
        ]
        entries = GuidelineManager(GuidelineStore(tmp_path)).collect(modules)

        assert [(e.module_id, e.path) for e in entries] == [
            ("first", "shared/guide.md"),
            ("first", "first/own.md"),
        ]

    def test_failing_module_contributes_nothing(self, tmp_path: Path) -> None:
        """Test that a raising get_guideline_paths is isolated."""
        modules = [
            SharedPathModule("broken", [], error=RuntimeError("boom")),
            SharedPathModule("ok", ["ok/guide.md"]),
        ]
        entries = GuidelineManager(GuidelineStore(tmp_path)).collect(modules)
        assert [e.path for e in entries] == ["ok/guide.md"]

    def test_collection_is_deterministic(self, tmp_path: Path) -> None:
        """Test that repeated collection yields identical lists."""
        manager = GuidelineManager(GuidelineStore(tmp_path))
        modules = [TailwindModule(), LaravelModule(), PHPModule()]
        versions = {"laravel": "12", "php": "8.2"}

        assert manager.collect(modules, versions) == manager.collect(modules, versions)

    def test_entry_to_dict(self, tmp_path: Path) -> None:
        """Test entry serialization."""
        entries = GuidelineManager(GuidelineStore(tmp_path)).collect([LaravelModule()], {"laravel": "11"})
        assert entries[1].to_dict() == {
            "module": "laravel",
            "path": "laravel/guidelines/11/features.md",
            "priority": "meta-framework",
            "category": "framework",
            "version": "11",
        }


class TestGuidelineResolution:
    """Tests for GuidelineManager.resolve."""

    def test_missing_bodies_are_reported(self, tmp_path: Path) -> None:
        """Test that missing documents are skipped and listed."""
        store = _store(tmp_path, "laravel/guidelines/framework.md")
        manager = GuidelineManager(store)
        entries = manager.collect([LaravelModule()], {"laravel": "99"})

        resolved = manager.resolve(entries)

        assert [e.path for e, _ in resolved.bodies] == ["laravel/guidelines/framework.md"]
        assert resolved.bodies[0][1] == "## laravel/guidelines/framework.md\n"
        assert resolved.missing == ["laravel/guidelines/99/features.md"]

    def test_strict_mode_raises(self, tmp_path: Path) -> None:
        """Test strict resolution."""
        manager = GuidelineManager(_store(tmp_path, "laravel/guidelines/framework.md"))
        entries = manager.collect([LaravelModule()], {"laravel": "99"})

        with pytest.raises(GuidelineNotFoundError) as exc_info:
            manager.resolve(entries, strict=True)

        assert exc_info.value.key == "laravel/guidelines/99/features.md"
