"""Guideline document store.

Guideline keys are logical, forward-slash paths such as
``laravel/guidelines/framework.md``. The default store resolves them
against the Markdown files shipped under ``frankenai/guidelines/data``.
"""

from __future__ import annotations

from importlib.resources import files
from pathlib import Path
from typing import Any, List, Optional, Union

from frankenai.core.logging import get_logger

LOGGER = get_logger(__name__)

DATA_PACKAGE = "frankenai.guidelines"
DATA_DIR = "data"


class GuidelineNotFoundError(LookupError):
    """A guideline key has no backing document."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"No guideline document for '{key}'")


class GuidelineStore:
    """Read-only lookup of guideline bodies by key."""

    def __init__(self, root: Optional[Union[Path, Any]] = None) -> None:
        """Initialize the store.

        Args:
            root: Directory (or importlib Traversable) holding the
                documents. Defaults to the packaged guideline data.
        """
        self._root = root if root is not None else files(DATA_PACKAGE).joinpath(DATA_DIR)

    def _resolve(self, key: str) -> Optional[Any]:
        parts = [p for p in key.replace("\\", "/").split("/") if p]
        if not parts or any(p in (".", "..") for p in parts) or key.startswith("/"):
            return None
        node = self._root
        for part in parts:
            node = node.joinpath(part)
        return node

    def exists(self, key: str) -> bool:
        node = self._resolve(key)
        return node is not None and node.is_file()

    def get(self, key: str) -> str:
        """Return the Markdown body for ``key``.

        Raises:
            GuidelineNotFoundError: If no document backs ``key``.
        """
        node = self._resolve(key)
        if node is None or not node.is_file():
            raise GuidelineNotFoundError(key)
        return node.read_text(encoding="utf-8")

    def keys(self) -> List[str]:
        """Every available key, sorted."""
        found: List[str] = []

        def _walk(node: Any, prefix: str) -> None:
            for child in node.iterdir():
                name = f"{prefix}{child.name}"
                if child.is_dir():
                    _walk(child, f"{name}/")
                elif child.name.endswith(".md"):
                    found.append(name)

        if self._root.is_dir():
            _walk(self._root, "")
        return sorted(found)
