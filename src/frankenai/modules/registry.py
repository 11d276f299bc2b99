"""Catalog of available modules and their enabled state.

The registry only knows how to build modules. It does not run detection
and holds no per-project state. Built-in modules come from a static
manifest; third-party modules register through the ``frankenai.modules``
entry point group:

    [project.entry-points."frankenai.modules"]
    django = "frankenai_django:DjangoModule"
"""

from __future__ import annotations

from dataclasses import dataclass, field
from importlib.metadata import entry_points
from typing import Any, Callable, Dict, Iterable, List, Optional

from frankenai.core.logging import get_logger
from frankenai.modules.base import Module

LOGGER = get_logger(__name__)

MODULE_ENTRY_POINT_GROUP = "frankenai.modules"

ModuleFactory = Callable[[], Module]


class ModuleRegistrationError(Exception):
    """Invalid module registration (duplicate id, bad factory)."""

    pass


@dataclass
class ModuleRegistration:
    """A module factory plus its enabled flag."""

    id: str
    factory: ModuleFactory
    enabled: bool = True
    config: Dict[str, Any] = field(default_factory=dict)


class ModuleRegistry:
    """Ordered catalog of module registrations."""

    def __init__(self) -> None:
        self._registrations: Dict[str, ModuleRegistration] = {}

    def register(
        self,
        module_id: str,
        factory: ModuleFactory,
        enabled: bool = True,
        config: Optional[Dict[str, Any]] = None,
    ) -> ModuleRegistration:
        """Add a registration.

        Raises:
            ModuleRegistrationError: If ``module_id`` is already registered.
        """
        if module_id in self._registrations:
            raise ModuleRegistrationError(f"Module '{module_id}' is already registered")
        registration = ModuleRegistration(
            id=module_id,
            factory=factory,
            enabled=enabled,
            config=dict(config or {}),
        )
        self._registrations[module_id] = registration
        LOGGER.debug(f"Registered module: {module_id} (enabled={enabled})")
        return registration

    def unregister(self, module_id: str) -> bool:
        return self._registrations.pop(module_id, None) is not None

    def get(self, module_id: str) -> Optional[ModuleRegistration]:
        return self._registrations.get(module_id)

    def get_all(self) -> List[ModuleRegistration]:
        """All registrations, in registration order."""
        return list(self._registrations.values())

    def get_enabled_registrations(self) -> List[ModuleRegistration]:
        """Enabled registrations, in registration order."""
        return [r for r in self._registrations.values() if r.enabled]

    def enable(self, module_id: str) -> bool:
        return self._set_enabled(module_id, True)

    def disable(self, module_id: str) -> bool:
        return self._set_enabled(module_id, False)

    def _set_enabled(self, module_id: str, enabled: bool) -> bool:
        registration = self._registrations.get(module_id)
        if registration is None:
            LOGGER.warning(f"Unknown module '{module_id}'")
            return False
        registration.enabled = enabled
        return True

    def is_registered(self, module_id: str) -> bool:
        return module_id in self._registrations

    def is_enabled(self, module_id: str) -> bool:
        registration = self._registrations.get(module_id)
        return registration is not None and registration.enabled

    def __len__(self) -> int:
        return len(self._registrations)

    def __contains__(self, module_id: object) -> bool:
        return module_id in self._registrations

    def clear(self) -> None:
        self._registrations.clear()

    def load_from_config(
        self,
        disabled: Iterable[str],
        options: Optional[Dict[str, Dict[str, Any]]] = None,
    ) -> None:
        """Apply enabled flags and per-module options from configuration.

        Args:
            disabled: Module ids to turn off.
            options: Per-module option mappings keyed by module id.
        """
        for module_id in disabled:
            self.disable(module_id)
        for module_id, module_options in (options or {}).items():
            registration = self._registrations.get(module_id)
            if registration is not None:
                registration.config.update(module_options)

    def to_config(self) -> Dict[str, Any]:
        """Serialize enabled state in the shape ``load_from_config`` accepts."""
        return {
            "disabled": [r.id for r in self._registrations.values() if not r.enabled],
            "options": {r.id: dict(r.config) for r in self._registrations.values() if r.config},
        }

    def discover_modules(self, include_entry_points: bool = True) -> None:
        """Populate the catalog with built-in and installed modules.

        Built-ins come first, in manifest order. Entry point modules whose
        id collides with an existing registration are skipped.
        """
        from frankenai.modules.builtin import BUILTIN_MODULES

        for module_id, factory in BUILTIN_MODULES:
            if module_id not in self._registrations:
                self.register(module_id, factory)

        if not include_entry_points:
            return

        for name, factory in discover_entry_point_modules().items():
            if name in self._registrations:
                LOGGER.warning(f"Module '{name}' from entry point shadows an existing module, skipping")
                continue
            self.register(name, factory)


def discover_entry_point_modules(group: str = MODULE_ENTRY_POINT_GROUP) -> Dict[str, ModuleFactory]:
    """Discover installed module classes for an entry point group.

    Args:
        group: Entry point group name.

    Returns:
        Dictionary mapping entry point names to module classes.
    """
    modules: Dict[str, ModuleFactory] = {}

    for ep in entry_points(group=group):
        try:
            module_class = ep.load()
            if isinstance(module_class, type) and not issubclass(module_class, Module):
                LOGGER.warning(f"Module '{ep.name}' does not inherit from Module, skipping")
                continue
            modules[ep.name] = module_class
            LOGGER.debug(f"Discovered module: {ep.name} (group: {group})")
        except Exception as e:
            LOGGER.warning(f"Failed to load module '{ep.name}': {e}")

    return modules


def create_default_registry(
    disabled: Iterable[str] = (),
    include_entry_points: bool = True,
) -> ModuleRegistry:
    """Build a registry with every known module, honouring disabled ids."""
    registry = ModuleRegistry()
    registry.discover_modules(include_entry_points=include_entry_points)
    registry.load_from_config(disabled)
    return registry
