"""Technology modules, their registry and the detection manager."""

from frankenai.modules.base import Module
from frankenai.modules.manager import ModuleManager, ResolutionOutcome, resolve_exclusions
from frankenai.modules.registry import (
    ModuleRegistrationError,
    ModuleRegistry,
    create_default_registry,
)

__all__ = [
    "Module",
    "ModuleManager",
    "ModuleRegistrationError",
    "ModuleRegistry",
    "ResolutionOutcome",
    "create_default_registry",
    "resolve_exclusions",
]
