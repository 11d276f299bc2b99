"""Typed configuration for franken-ai."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

DEFAULT_OUTPUT_FILE = "CLAUDE.md"
DEFAULT_MAX_WORKERS = 4


@dataclass
class ModulesConfig:
    """Registry overrides."""

    disabled: List[str] = field(default_factory=list)
    """Module ids turned off in the registry."""

    options: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    """Per-module option mappings, keyed by module id."""


@dataclass
class DetectionConfig:
    """Pass 1 execution settings."""

    sequential: bool = False
    """Run module detection one at a time instead of on a thread pool."""

    max_workers: int = DEFAULT_MAX_WORKERS
    """Maximum number of concurrent detection threads."""


@dataclass
class OutputConfig:
    """Where the generated document is written."""

    file: str = DEFAULT_OUTPUT_FILE


@dataclass
class GuidelinesConfig:
    """Guideline rendering settings."""

    strict: bool = False
    """Raise when a guideline key has no backing document."""


@dataclass
class FrankenAIConfig:
    """Complete franken-ai configuration."""

    modules: ModulesConfig = field(default_factory=ModulesConfig)
    detection: DetectionConfig = field(default_factory=DetectionConfig)
    ignore: List[str] = field(default_factory=list)
    output: OutputConfig = field(default_factory=OutputConfig)
    guidelines: GuidelinesConfig = field(default_factory=GuidelinesConfig)

    _config_sources: List[str] = field(default_factory=list, repr=False)

    @property
    def sources(self) -> List[str]:
        """Where this configuration was loaded from, lowest precedence first."""
        return list(self._config_sources)
