"""Tests for frankenai.modules.registry."""

from __future__ import annotations

from typing import Optional
from unittest.mock import MagicMock, patch

import pytest

from frankenai.modules.builtin import BUILTIN_MODULES, LaravelModule, TailwindModule
from frankenai.modules.registry import (
    ModuleRegistrationError,
    ModuleRegistry,
    create_default_registry,
    discover_entry_point_modules,
)


def _entry_point(name: str, loaded=None, error: Optional[Exception] = None) -> MagicMock:
    ep = MagicMock()
    ep.name = name
    if error is not None:
        ep.load.side_effect = error
    else:
        ep.load.return_value = loaded
    return ep


class TestModuleRegistry:
    """Tests for ModuleRegistry."""

    def test_register_and_get(self) -> None:
        """Test basic registration."""
        registry = ModuleRegistry()
        registration = registry.register("laravel", LaravelModule)

        assert registry.get("laravel") is registration
        assert "laravel" in registry
        assert len(registry) == 1
        assert registry.is_enabled("laravel")

    def test_duplicate_registration_raises(self) -> None:
        """Test that ids are unique."""
        registry = ModuleRegistry()
        registry.register("laravel", LaravelModule)

        with pytest.raises(ModuleRegistrationError, match="already registered"):
            registry.register("laravel", LaravelModule)

    def test_enabled_registrations_keep_order(self) -> None:
        """Test that disabling removes a module without reordering the rest."""
        registry = ModuleRegistry()
        for module_id in ("a", "b", "c"):
            registry.register(module_id, LaravelModule)
        registry.disable("b")

        assert [r.id for r in registry.get_enabled_registrations()] == ["a", "c"]
        assert [r.id for r in registry.get_all()] == ["a", "b", "c"]

        registry.enable("b")
        assert registry.is_enabled("b")

    def test_disable_unknown_module(self) -> None:
        """Test that unknown ids are reported, not raised."""
        registry = ModuleRegistry()
        assert registry.disable("missing") is False
        assert registry.unregister("missing") is False

    def test_load_from_config_and_to_config(self) -> None:
        """Test applying and exporting configuration."""
        registry = ModuleRegistry()
        registry.register("laravel", LaravelModule)
        registry.register("tailwind", LaravelModule)

        registry.load_from_config(["tailwind"], {"laravel": {"strict": True}, "unknown": {"x": 1}})

        assert not registry.is_enabled("tailwind")
        assert registry.get("laravel").config == {"strict": True}
        assert registry.to_config() == {
            "disabled": ["tailwind"],
            "options": {"laravel": {"strict": True}},
        }

    def test_discover_builtin_modules(self) -> None:
        """Test that built-ins register in manifest order."""
        registry = ModuleRegistry()
        registry.discover_modules(include_entry_points=False)

        assert [r.id for r in registry.get_all()] == [module_id for module_id, _ in BUILTIN_MODULES]
        assert [r.id for r in registry.get_all()][:2] == ["laravel-boost", "laravel"]
        assert [r.id for r in registry.get_all()][-1] == "javascript"


class TestEntryPointDiscovery:
    """Tests for third-party module discovery."""

    def test_entry_point_modules_are_appended(self) -> None:
        """Test that entry point modules come after the built-ins."""
        with patch(
            "frankenai.modules.registry.entry_points",
            return_value=[_entry_point("django", LaravelModule)],
        ):
            registry = create_default_registry()

        assert [r.id for r in registry.get_all()][-1] == "django"

    def test_entry_point_cannot_shadow_builtin(self) -> None:
        """Test that an entry point reusing a built-in id is skipped."""
        with patch(
            "frankenai.modules.registry.entry_points",
            return_value=[_entry_point("laravel", TailwindModule)],
        ):
            registry = create_default_registry()

        assert registry.get("laravel").factory is LaravelModule
        assert len(registry) == len(BUILTIN_MODULES)

    def test_broken_entry_points_are_skipped(self) -> None:
        """Test that load failures and non-module classes are skipped."""
        with patch(
            "frankenai.modules.registry.entry_points",
            return_value=[
                _entry_point("broken", error=ImportError("boom")),
                _entry_point("not-a-module", dict),
                _entry_point("good", LaravelModule),
            ],
        ):
            discovered = discover_entry_point_modules()

        assert list(discovered) == ["good"]

    def test_create_default_registry_disables_ids(self) -> None:
        """Test the disabled argument."""
        registry = create_default_registry(disabled=["bootstrap"], include_entry_points=False)
        assert not registry.is_enabled("bootstrap")
        assert registry.is_enabled("tailwind")
