"""Detection orchestration and exclusion resolution.

Pass 1 runs every module's ``detect`` in isolation (optionally on a
thread pool). Pass 2 is pure set arithmetic over the collected results:
a detected module's ``excludes`` removes the listed modules regardless
of their own confidence. Exclusions are collected from the Pass 1
results only and are never re-evaluated after removal, so an excluded
module's own ``excludes`` still apply.
"""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from frankenai.core.logging import get_logger
from frankenai.core.models import (
    DetectionContext,
    DetectionResult,
    ModuleContext,
    StackCommands,
)
from frankenai.modules.base import Module
from frankenai.modules.registry import ModuleRegistrationError, ModuleRegistry

LOGGER = get_logger(__name__)

# Default number of worker threads for Pass 1
DEFAULT_MAX_WORKERS = 4


@dataclass
class ResolutionOutcome:
    """Everything one detection run produced."""

    results: Dict[str, DetectionResult] = field(default_factory=dict)
    """Detected, non-excluded results in registration order."""

    all_results: Dict[str, DetectionResult] = field(default_factory=dict)
    """Raw Pass 1 results for every module, in registration order."""

    excluded: Dict[str, List[str]] = field(default_factory=dict)
    """Excluded module id → ids of the modules that excluded it."""

    failures: Dict[str, str] = field(default_factory=dict)
    """Module id → error message for modules whose ``detect`` raised."""

    @property
    def detected_ids(self) -> List[str]:
        return list(self.results)


def resolve_exclusions(
    results: Mapping[str, DetectionResult],
) -> Tuple[Dict[str, DetectionResult], Dict[str, List[str]]]:
    """Apply exclusions to a Pass 1 result map.

    The exclusion set is the union of ``excludes`` over every detected
    module, whether or not that module is itself excluded. Every detected
    module named in the set is removed. Undetected modules never exclude,
    and a module never excludes itself.

    Args:
        results: Module id → DetectionResult, in registration order.

    Returns:
        Tuple of (surviving detected results in order, excluded map).
    """
    detected = {mid: r for mid, r in results.items() if r.detected}

    excluded: Dict[str, List[str]] = {}
    for mid, result in detected.items():
        for target in result.excludes or ():
            if target == mid or target not in detected:
                continue
            excluders = excluded.setdefault(target, [])
            if mid not in excluders:
                excluders.append(mid)

    survivors = {mid: r for mid, r in detected.items() if mid not in excluded}
    return survivors, excluded


class ModuleManager:
    """Runs modules against one project and resolves their results."""

    def __init__(
        self,
        registry: Optional[ModuleRegistry] = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
        sequential: bool = False,
    ) -> None:
        """Initialize the manager.

        Args:
            registry: Registry to build modules from in ``initialize``.
            max_workers: Maximum number of concurrent detection threads.
            sequential: If True, run Pass 1 sequentially (for debugging).
        """
        self._registry = registry
        self._max_workers = max(1, max_workers)
        self._sequential = sequential
        self._modules: Dict[str, Module] = {}
        self._results_lock = threading.Lock()
        self.initialization_failures: Dict[str, str] = {}

    @property
    def modules(self) -> List[Module]:
        """Registered module instances, in registration order."""
        return list(self._modules.values())

    def get_module(self, module_id: str) -> Optional[Module]:
        return self._modules.get(module_id)

    def register(self, module: Module) -> None:
        """Register a module instance.

        Raises:
            ModuleRegistrationError: If a module with the same id exists.
        """
        if module.id in self._modules:
            raise ModuleRegistrationError(f"Module '{module.id}' is already registered")
        self._modules[module.id] = module

    def initialize(self, registry: Optional[ModuleRegistry] = None) -> List[Module]:
        """Instantiate every enabled registration.

        A factory that raises, returns something that is not a Module, or
        returns a module whose ``id`` differs from the registration id is
        logged and skipped.

        Returns:
            The registered modules, in registration order.
        """
        if registry is None:
            registry = self._registry
        if registry is None:
            registry = ModuleRegistry()
            registry.discover_modules()
        self._registry = registry

        for registration in registry.get_enabled_registrations():
            if registration.id in self._modules:
                continue
            try:
                module = registration.factory()
            except Exception as e:
                LOGGER.warning(f"Failed to create module '{registration.id}': {e}")
                self.initialization_failures[registration.id] = str(e)
                continue
            if not isinstance(module, Module):
                LOGGER.warning(
                    f"Factory for '{registration.id}' returned {type(module).__name__}, not a Module"
                )
                self.initialization_failures[registration.id] = "factory did not return a Module"
                continue
            if module.id != registration.id:
                LOGGER.warning(
                    f"Factory for '{registration.id}' returned module '{module.id}'; ids must match"
                )
                self.initialization_failures[registration.id] = (
                    f"module id '{module.id}' does not match registration id"
                )
                continue
            if registration.config:
                try:
                    module.configure(registration.config)
                except (TypeError, ValueError) as e:
                    LOGGER.warning(f"Invalid options for module '{registration.id}': {e}")
                    self.initialization_failures[registration.id] = str(e)
                    continue
            self._modules[registration.id] = module

        return self.modules

    def detect(self, context: DetectionContext) -> ResolutionOutcome:
        """Run Pass 1 and Pass 2 against a project snapshot."""
        all_results, failures = self.run_detection(context)
        survivors, excluded = resolve_exclusions(all_results)

        for target, excluders in excluded.items():
            LOGGER.info(
                f"Excluded '{target}' (confidence {all_results[target].confidence:.2f}) "
                f"in favour of {', '.join(excluders)}"
            )

        return ResolutionOutcome(
            results=survivors,
            all_results=all_results,
            excluded=excluded,
            failures=failures,
        )

    def run_detection(
        self, context: DetectionContext
    ) -> Tuple[Dict[str, DetectionResult], Dict[str, str]]:
        """Pass 1: independent detection for every module.

        Returns:
            Tuple of (results keyed by module id in registration order,
            failures keyed by module id).
        """
        if not self._modules:
            return {}, {}

        if self._sequential or len(self._modules) == 1:
            collected = {mid: self._run_detect(mid, m, context) for mid, m in self._modules.items()}
        else:
            collected = self._run_parallel(context)

        results: Dict[str, DetectionResult] = {}
        failures: Dict[str, str] = {}
        for mid in self._modules:
            result, error = collected[mid]
            results[mid] = result
            if error is not None:
                failures[mid] = error
        return results, failures

    def _run_parallel(
        self, context: DetectionContext
    ) -> Dict[str, Tuple[DetectionResult, Optional[str]]]:
        collected: Dict[str, Tuple[DetectionResult, Optional[str]]] = {}

        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            future_to_module = {
                executor.submit(self._run_detect, mid, module, context): mid
                for mid, module in self._modules.items()
            }
            for future in as_completed(future_to_module):
                mid = future_to_module[future]
                with self._results_lock:
                    collected[mid] = future.result()

        return collected

    def _run_detect(
        self, module_id: str, module: Module, context: DetectionContext
    ) -> Tuple[DetectionResult, Optional[str]]:
        """Run one module's ``detect`` and catch all exceptions."""
        try:
            result = module.detect(context)
            if not isinstance(result, DetectionResult):
                raise TypeError(f"detect() returned {type(result).__name__}")
            LOGGER.debug(
                f"{module_id}: detected={result.detected} confidence={result.confidence:.2f}"
            )
            return result, None
        except Exception as e:
            LOGGER.warning(f"Detection failed for module '{module_id}': {e}")
            return DetectionResult.not_detected(f"detection error: {e}"), str(e)

    def detect_versions(
        self, context: DetectionContext, module_ids: Iterable[str]
    ) -> Dict[str, Optional[str]]:
        """Resolve versions for the given modules, isolating failures."""
        versions: Dict[str, Optional[str]] = {}
        for mid in module_ids:
            module = self._modules.get(mid)
            if module is None:
                continue
            try:
                versions[mid] = module.detect_version(context)
            except Exception as e:
                LOGGER.warning(f"Version detection failed for module '{mid}': {e}")
                versions[mid] = None
        return versions

    def surviving_modules(self, outcome: ResolutionOutcome) -> List[Module]:
        """Module instances for the surviving results, in registration order."""
        return [self._modules[mid] for mid in outcome.results if mid in self._modules]

    def generate_commands(
        self, module_context: ModuleContext, module_ids: Iterable[str]
    ) -> StackCommands:
        """Merge every surviving module's commands in registration order.

        Identical commands from different modules are kept.
        """
        wanted = set(module_ids)
        commands = StackCommands()
        for mid, module in self._modules.items():
            if mid not in wanted:
                continue
            try:
                partial = module.generate_commands(module_context) or {}
            except Exception as e:
                LOGGER.warning(f"Command generation failed for module '{mid}': {e}")
                continue
            commands.extend(partial)
        return commands
