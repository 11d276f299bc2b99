"""Shared data contracts for detection, resolution and guideline output.

Every module consumes a DetectionContext and produces a DetectionResult;
the engine turns the surviving results into GuidelinePath lists and a
merged StackCommands bundle.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property
from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

COMMAND_CATEGORIES: Tuple[str, ...] = ("dev", "build", "test", "lint", "install")


class ModuleType(str, Enum):
    """Kind of technology a module describes."""

    LANGUAGE = "language"
    FRAMEWORK = "framework"
    LIBRARY = "library"
    TOOL = "tool"


class PriorityType(str, Enum):
    """Ordering class used to sequence guideline output.

    Declaration order is the output order; anything not listed here
    sorts after every known class.
    """

    META_FRAMEWORK = "meta-framework"
    FRAMEWORK = "framework"
    BASE_LANG = "base-lang"
    SPECIALIZED_LANG = "specialized-lang"
    LARAVEL_TOOL = "laravel-tool"
    CSS_FRAMEWORK = "css-framework"


PRIORITY_ORDER: Dict[str, int] = {p.value: index for index, p in enumerate(PriorityType)}


def priority_rank(priority_type: Any) -> int:
    """Return the sort rank of a priority class (unknown classes last)."""
    value = priority_type.value if isinstance(priority_type, Enum) else str(priority_type)
    return PRIORITY_ORDER.get(value, len(PRIORITY_ORDER))


@dataclass(frozen=True)
class DetectionContext:
    """Read-only snapshot of project metadata shared by every module.

    Paths in ``files``, ``directories`` and ``config_files`` are relative
    to ``project_root`` and always use forward slashes. ``directories``
    also lists directories the scanner did not descend into, such as
    ``vendor`` or ``node_modules``.
    """

    project_root: Path
    files: Tuple[str, ...] = ()
    config_files: Tuple[str, ...] = ()
    package_json: Optional[Mapping[str, Any]] = None
    composer_json: Optional[Mapping[str, Any]] = None
    directories: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "project_root", Path(self.project_root))
        object.__setattr__(self, "files", tuple(self.files))
        object.__setattr__(self, "config_files", tuple(self.config_files))
        object.__setattr__(self, "directories", tuple(self.directories))

    @cached_property
    def _file_set(self) -> FrozenSet[str]:
        return frozenset(self.files)

    def has_file(self, path: str) -> bool:
        """Check whether a relative file path is part of the snapshot."""
        return path in self._file_set

    def has_any_file(self, *paths: str) -> bool:
        return any(p in self._file_set for p in paths)

    def has_config_file(self, name: str) -> bool:
        return name in self.config_files

    def has_dir(self, prefix: str) -> bool:
        """Check whether ``prefix`` is a known directory or holds a recorded file."""
        name = prefix.rstrip("/")
        if name in self.directories:
            return True
        return any(f.startswith(name + "/") for f in self.files)

    def files_under(self, prefix: str, suffixes: Iterable[str] = ()) -> List[str]:
        prefix = prefix.rstrip("/") + "/"
        endings = tuple(suffixes)
        return [
            f for f in self.files
            if f.startswith(prefix) and (not endings or f.endswith(endings))
        ]

    def files_with_suffix(self, *suffixes: str) -> List[str]:
        return [f for f in self.files if f.endswith(suffixes)]

    def path_exists(self, relative: str) -> bool:
        """Check the filesystem directly, for paths the scanner skips."""
        return (self.project_root / relative).exists()

    def read_text(self, relative: str) -> Optional[str]:
        path = self.project_root / relative
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            return None

    def read_json(self, relative: str) -> Optional[Any]:
        content = self.read_text(relative)
        if content is None:
            return None
        try:
            return json.loads(content)
        except json.JSONDecodeError:
            return None

    # Manifest helpers. Missing manifests are simply "no evidence".

    def npm_dependency(self, name: str) -> Optional[str]:
        """Return the package.json constraint for ``name`` (deps, then devDeps)."""
        pkg = self.package_json or {}
        for section in ("dependencies", "devDependencies"):
            deps = pkg.get(section) or {}
            if isinstance(deps, Mapping) and name in deps:
                return str(deps[name])
        return None

    def has_npm_dependency(self, name: str) -> bool:
        return self.npm_dependency(name) is not None

    def npm_sections_with(self, name: str) -> List[str]:
        """List which package.json dependency sections declare ``name``."""
        pkg = self.package_json or {}
        found = []
        for section in ("dependencies", "devDependencies"):
            deps = pkg.get(section) or {}
            if isinstance(deps, Mapping) and name in deps:
                found.append(section)
        return found

    def npm_scripts(self) -> Dict[str, str]:
        scripts = (self.package_json or {}).get("scripts") or {}
        return {str(k): str(v) for k, v in scripts.items()} if isinstance(scripts, Mapping) else {}

    def composer_constraint(self, name: str, include_dev: bool = False) -> Optional[str]:
        """Return the composer.json constraint for ``name``."""
        composer = self.composer_json or {}
        sections = ("require", "require-dev") if include_dev else ("require",)
        for section in sections:
            packages = composer.get(section) or {}
            if isinstance(packages, Mapping) and name in packages:
                return str(packages[name])
        return None

    def has_composer_package(self, name: str, include_dev: bool = True) -> bool:
        return self.composer_constraint(name, include_dev=include_dev) is not None

    @property
    def has_laravel(self) -> bool:
        return self.has_composer_package("laravel/framework") or self.has_composer_package(
            "illuminate/support"
        )


@dataclass
class DetectionResult:
    """Outcome of one module's ``detect`` call."""

    detected: bool
    confidence: float
    evidence: List[str] = field(default_factory=list)
    excludes: Optional[List[str]] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.confidence = min(max(float(self.confidence), 0.0), 1.0)
        if self.detected and self.confidence <= 0.0:
            self.detected = False
        if not self.detected:
            self.excludes = None

    @classmethod
    def not_detected(cls, reason: Optional[str] = None) -> "DetectionResult":
        return cls(detected=False, confidence=0.0, evidence=[reason] if reason else [])

    def to_dict(self) -> Dict[str, Any]:
        return {
            "detected": self.detected,
            "confidence": round(self.confidence, 4),
            "evidence": list(self.evidence),
            "excludes": list(self.excludes) if self.excludes else [],
            "metadata": dict(self.metadata),
        }


@dataclass(frozen=True)
class GuidelinePath:
    """Reference to a guideline document in the guideline store."""

    path: str
    priority: Any
    category: str
    version: Optional[str] = None


@dataclass
class DetectedStack:
    """Merged view of every surviving technology, used for command generation."""

    frameworks: List[str] = field(default_factory=list)
    languages: List[str] = field(default_factory=list)
    runtime: str = "generic"
    package_managers: List[str] = field(default_factory=list)
    config_files: List[str] = field(default_factory=list)
    dependencies: List[str] = field(default_factory=list)
    libraries: List[str] = field(default_factory=list)

    @property
    def package_manager(self) -> str:
        """Preferred JavaScript package manager: bun > yarn > pnpm > npm."""
        for candidate in ("bun", "yarn", "pnpm"):
            if candidate in self.package_managers:
                return candidate
        return "npm"

    def has_config(self, *names: str) -> bool:
        return any(name in self.config_files for name in names)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "frameworks": list(self.frameworks),
            "languages": list(self.languages),
            "runtime": self.runtime,
            "package_managers": list(self.package_managers),
            "config_files": list(self.config_files),
            "dependencies": list(self.dependencies),
            "libraries": list(self.libraries),
        }


@dataclass
class ModuleContext:
    """Input to ``generate_commands``."""

    detected_stack: DetectedStack
    project_root: Optional[Path] = None


@dataclass
class StackCommands:
    """Merged shell commands per category."""

    dev: List[str] = field(default_factory=list)
    build: List[str] = field(default_factory=list)
    test: List[str] = field(default_factory=list)
    lint: List[str] = field(default_factory=list)
    install: List[str] = field(default_factory=list)

    def extend(self, partial: Mapping[str, Iterable[str]]) -> None:
        """Append a partial bundle, keeping duplicates and order."""
        for category in COMMAND_CATEGORIES:
            commands = partial.get(category)
            if commands:
                getattr(self, category).extend(commands)

    def is_empty(self) -> bool:
        return not any(getattr(self, category) for category in COMMAND_CATEGORIES)

    def to_dict(self) -> Dict[str, List[str]]:
        return {category: list(getattr(self, category)) for category in COMMAND_CATEGORIES}
