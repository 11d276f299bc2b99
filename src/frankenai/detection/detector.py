"""End-to-end stack detection for one project directory."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from frankenai.config.ignore import load_ignore_patterns
from frankenai.config.models import FrankenAIConfig
from frankenai.core.logging import get_logger
from frankenai.core.models import (
    DetectedStack,
    DetectionContext,
    DetectionResult,
    ModuleContext,
    ModuleType,
    StackCommands,
)
from frankenai.detection.scanner import ProjectScanner
from frankenai.detection.stack import detect_package_managers, detect_runtime
from frankenai.guidelines.manager import GuidelineEntry, GuidelineManager
from frankenai.modules.base import Module
from frankenai.modules.manager import ModuleManager
from frankenai.modules.registry import ModuleRegistry, create_default_registry

LOGGER = get_logger(__name__)


@dataclass
class StackReport:
    """Everything one detection run produced for a project."""

    project_root: Path
    context: DetectionContext
    results: Dict[str, DetectionResult] = field(default_factory=dict)
    """Surviving detected results, in registration order."""

    all_results: Dict[str, DetectionResult] = field(default_factory=dict)
    """Raw results for every enabled module."""

    excluded: Dict[str, List[str]] = field(default_factory=dict)
    """Excluded module id → ids of the modules that excluded it."""

    failures: Dict[str, str] = field(default_factory=dict)
    versions: Dict[str, Optional[str]] = field(default_factory=dict)
    stack: DetectedStack = field(default_factory=DetectedStack)
    commands: StackCommands = field(default_factory=StackCommands)
    guidelines: List[GuidelineEntry] = field(default_factory=list)
    modules: List[Module] = field(default_factory=list)
    """Surviving module instances, in registration order."""

    @property
    def detected_ids(self) -> List[str]:
        return list(self.results)

    @property
    def display_names(self) -> Dict[str, str]:
        return {module.id: module.display_name for module in self.modules}

    def to_dict(self, include_evidence: bool = False) -> Dict[str, Any]:
        """Serialize for ``detect --json``."""
        detected = []
        for module in self.modules:
            result = self.results[module.id]
            entry: Dict[str, Any] = {
                "id": module.id,
                "name": module.display_name,
                "type": module.module_type.value,
                "priority": module.priority_type.value,
                "confidence": round(result.confidence, 4),
                "version": self.versions.get(module.id),
            }
            if include_evidence:
                entry["evidence"] = list(result.evidence)
                entry["metadata"] = dict(result.metadata)
            detected.append(entry)

        data: Dict[str, Any] = {
            "project_root": str(self.project_root),
            "detected": detected,
            "excluded": {k: list(v) for k, v in self.excluded.items()},
            "failures": dict(self.failures),
            "stack": self.stack.to_dict(),
            "commands": self.commands.to_dict(),
            "guidelines": [entry.to_dict() for entry in self.guidelines],
        }
        if include_evidence:
            data["all_results"] = {mid: r.to_dict() for mid, r in self.all_results.items()}
        return data


class StackDetector:
    """Runs scan → detection → exclusion → versions → commands → guidelines."""

    def __init__(
        self,
        config: Optional[FrankenAIConfig] = None,
        registry: Optional[ModuleRegistry] = None,
        guideline_manager: Optional[GuidelineManager] = None,
    ) -> None:
        """Initialize the detector.

        Args:
            config: Loaded configuration; defaults apply when omitted.
            registry: Module catalog; built from the built-ins and
                installed entry points when omitted.
            guideline_manager: Guideline collector; the packaged store
                is used when omitted.
        """
        self._config = config or FrankenAIConfig()
        self._registry = registry
        self._guideline_manager = guideline_manager or GuidelineManager()

    def _build_registry(self) -> ModuleRegistry:
        if self._registry is not None:
            return self._registry
        registry = create_default_registry(disabled=self._config.modules.disabled)
        registry.load_from_config([], self._config.modules.options)
        return registry

    def detect(self, project_root: Path) -> StackReport:
        """Detect the stack of ``project_root``.

        Args:
            project_root: Project directory to inspect.

        Returns:
            StackReport for the project.
        """
        root = Path(project_root).resolve()
        manager = ModuleManager(
            registry=self._build_registry(),
            max_workers=self._config.detection.max_workers,
            sequential=self._config.detection.sequential,
        )
        manager.initialize()

        scanner = ProjectScanner(
            config_files=self._module_config_files(manager.modules),
            ignore=load_ignore_patterns(root, self._config.ignore),
        )
        context = scanner.scan(root)

        outcome = manager.detect(context)
        versions = manager.detect_versions(context, outcome.detected_ids)
        modules = manager.surviving_modules(outcome)

        stack = build_detected_stack(context, modules)
        commands = manager.generate_commands(
            ModuleContext(detected_stack=stack, project_root=root), outcome.detected_ids
        )
        guidelines = self._guideline_manager.collect(modules, versions)

        LOGGER.info(f"Detected {', '.join(outcome.detected_ids) or 'nothing'} in {root}")
        return StackReport(
            project_root=root,
            context=context,
            results=outcome.results,
            all_results=outcome.all_results,
            excluded=outcome.excluded,
            failures=outcome.failures,
            versions=versions,
            stack=stack,
            commands=commands,
            guidelines=guidelines,
            modules=modules,
        )

    @staticmethod
    def _module_config_files(modules: List[Module]) -> List[str]:
        names: List[str] = []
        for module in modules:
            try:
                names.extend(module.config_files())
            except Exception as e:
                LOGGER.warning(f"Could not read config file list of module '{module.id}': {e}")
        return names


def build_detected_stack(context: DetectionContext, modules: List[Module]) -> DetectedStack:
    """Merge the surviving modules into the stack passed to command generation."""
    frameworks = [m.id for m in modules if m.module_type == ModuleType.FRAMEWORK]
    languages = [m.id for m in modules if m.module_type == ModuleType.LANGUAGE]
    libraries = [m.id for m in modules if m.module_type in (ModuleType.LIBRARY, ModuleType.TOOL)]

    dependencies: List[str] = []
    for manifest, sections in (
        (context.package_json, ("dependencies", "devDependencies")),
        (context.composer_json, ("require", "require-dev")),
    ):
        for section in sections:
            packages = (manifest or {}).get(section) or {}
            if not isinstance(packages, dict):
                continue
            for name in packages:
                if name not in dependencies:
                    dependencies.append(name)

    return DetectedStack(
        frameworks=frameworks,
        languages=languages,
        runtime=detect_runtime(context.config_files),
        package_managers=detect_package_managers(context.project_root),
        config_files=list(context.config_files),
        dependencies=dependencies,
        libraries=libraries,
    )
