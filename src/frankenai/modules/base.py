from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional

from frankenai.core.models import (
    DetectionContext,
    DetectionResult,
    GuidelinePath,
    ModuleContext,
    ModuleType,
    PriorityType,
)
from frankenai.core.versions import major_version

# Core guideline document name per priority class
GUIDELINE_DOCUMENTS: Dict[str, str] = {
    PriorityType.META_FRAMEWORK.value: "framework.md",
    PriorityType.FRAMEWORK.value: "framework.md",
    PriorityType.BASE_LANG.value: "language.md",
    PriorityType.SPECIALIZED_LANG.value: "language.md",
    PriorityType.LARAVEL_TOOL.value: "laravel-tool.md",
    PriorityType.CSS_FRAMEWORK.value: "css-framework.md",
}

CommandBundle = Dict[str, List[str]]


class Module(ABC):
    """Base class for technology modules.

    A module detects one technology (language, framework, library or
    tool) from a DetectionContext and contributes guideline references
    and shell commands for it. Modules hold no per-run state: the
    detected version is passed back in explicitly.
    """

    threshold: float = 0.3
    """Confidence the module must exceed to report ``detected``."""

    @property
    @abstractmethod
    def id(self) -> str:
        """Unique module identifier (e.g., 'laravel', 'tailwind')."""

    @property
    @abstractmethod
    def display_name(self) -> str:
        """Human readable technology name."""

    @property
    @abstractmethod
    def module_type(self) -> ModuleType:
        """Kind of technology this module describes."""

    @property
    @abstractmethod
    def priority_type(self) -> PriorityType:
        """Ordering class for guideline output."""

    @abstractmethod
    def detect(self, context: DetectionContext) -> DetectionResult:
        """Inspect the project snapshot.

        Must not mutate ``context``. Missing manifests are treated as
        absent evidence, never as errors.

        Args:
            context: Read-only project snapshot.

        Returns:
            DetectionResult with confidence in [0, 1].
        """

    def detect_version(self, context: DetectionContext) -> Optional[str]:
        """Return the technology version string, or None without evidence."""
        return None

    def version_key(self, version: str) -> Optional[str]:
        """Map a version string to the directory holding version guidelines."""
        return major_version(version)

    @property
    def guideline_document(self) -> str:
        priority = getattr(self.priority_type, "value", self.priority_type)
        return GUIDELINE_DOCUMENTS.get(priority, "framework.md")

    @property
    def guideline_category(self) -> str:
        return getattr(self.module_type, "value", str(self.module_type))

    def get_guideline_paths(self, version: Optional[str] = None) -> List[GuidelinePath]:
        """Return the core guideline, then the version-specific one if any.

        Args:
            version: Version string from ``detect_version``.

        Returns:
            Ordered list; the core document always comes first.
        """
        paths = [
            GuidelinePath(
                path=f"{self.id}/guidelines/{self.guideline_document}",
                priority=self.priority_type,
                category=self.guideline_category,
            )
        ]
        key = self.version_key(version) if version else None
        if key:
            paths.append(
                GuidelinePath(
                    path=f"{self.id}/guidelines/{key}/features.md",
                    priority=self.priority_type,
                    category=self.guideline_category,
                    version=key,
                )
            )
        return paths

    def generate_commands(self, module_context: ModuleContext) -> CommandBundle:
        """Return shell commands per category ({dev, build, test, lint, install})."""
        return {}

    def config_files(self) -> List[str]:
        """Configuration file names the project scanner should look for."""
        return []

    def configure(self, options: Mapping[str, Any]) -> None:
        """Apply per-module options from the ``modules.options`` config key.

        ``threshold`` overrides the detection threshold. Unknown options
        are ignored.

        Raises:
            ValueError: If ``threshold`` is not a number in [0, 1].
        """
        if "threshold" not in options:
            return
        threshold = float(options["threshold"])
        if not 0.0 <= threshold <= 1.0:
            raise ValueError(f"threshold must be between 0 and 1, got {threshold}")
        self.threshold = threshold
