"""Guideline aggregation.

Turns the surviving modules into one ordered, deduplicated list of
guideline references and resolves their bodies through a GuidelineStore.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from frankenai.core.logging import get_logger
from frankenai.core.models import GuidelinePath, priority_rank
from frankenai.guidelines.store import GuidelineNotFoundError, GuidelineStore
from frankenai.modules.base import Module

LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class GuidelineEntry:
    """A guideline reference tagged with the module that produced it."""

    module_id: str
    guideline: GuidelinePath

    @property
    def path(self) -> str:
        return self.guideline.path

    @property
    def priority(self) -> Any:
        return self.guideline.priority

    @property
    def version(self) -> Optional[str]:
        return self.guideline.version

    def to_dict(self) -> Dict[str, Any]:
        priority = getattr(self.priority, "value", self.priority)
        return {
            "module": self.module_id,
            "path": self.path,
            "priority": priority,
            "category": self.guideline.category,
            "version": self.version,
        }


@dataclass
class ResolvedGuidelines:
    """Guideline bodies in output order plus the keys that had none."""

    bodies: List[Tuple[GuidelineEntry, str]]
    missing: List[str]


class GuidelineManager:
    """Collects, orders and resolves guideline documents."""

    def __init__(self, store: Optional[GuidelineStore] = None) -> None:
        self._store = store or GuidelineStore()

    @property
    def store(self) -> GuidelineStore:
        return self._store

    def collect(
        self,
        modules: Iterable[Module],
        versions: Optional[Mapping[str, Optional[str]]] = None,
    ) -> List[GuidelineEntry]:
        """Build the ordered guideline list for the surviving modules.

        Paths are appended in module order, then per-module path order.
        The first occurrence of a path wins. The result is stably sorted
        by priority class, so equal classes keep their append order.

        Args:
            modules: Surviving modules, in registration order.
            versions: Module id → detected version (None when unknown).

        Returns:
            Deduplicated guideline entries in output order.
        """
        versions = versions or {}
        entries: List[GuidelineEntry] = []
        seen = set()

        for module in modules:
            try:
                paths = module.get_guideline_paths(versions.get(module.id))
            except Exception as e:
                LOGGER.warning(f"Guideline lookup failed for module '{module.id}': {e}")
                continue
            for guideline in paths:
                if guideline.path in seen:
                    LOGGER.debug(f"Skipping duplicate guideline {guideline.path} from '{module.id}'")
                    continue
                seen.add(guideline.path)
                entries.append(GuidelineEntry(module_id=module.id, guideline=guideline))

        return sorted(entries, key=lambda entry: priority_rank(entry.priority))

    def resolve(self, entries: Iterable[GuidelineEntry], strict: bool = False) -> ResolvedGuidelines:
        """Load the body of every entry.

        Args:
            entries: Ordered guideline entries from ``collect``.
            strict: Raise on the first missing body instead of reporting it.

        Raises:
            GuidelineNotFoundError: In strict mode, when a body is missing.
        """
        bodies: List[Tuple[GuidelineEntry, str]] = []
        missing: List[str] = []

        for entry in entries:
            try:
                bodies.append((entry, self._store.get(entry.path)))
            except GuidelineNotFoundError:
                if strict:
                    raise
                # Version documents only exist for versions with notable changes
                if entry.version is None:
                    LOGGER.warning(f"Guideline document not found: {entry.path}")
                else:
                    LOGGER.info(f"No version guideline for {entry.module_id} {entry.version}: {entry.path}")
                missing.append(entry.path)

        return ResolvedGuidelines(bodies=bodies, missing=missing)
