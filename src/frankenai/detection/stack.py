"""Package manager and runtime detection for the merged stack."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

# Lock file → package manager, in reporting order
LOCK_FILES = [
    ("package-lock.json", "npm"),
    ("yarn.lock", "yarn"),
    ("pnpm-lock.yaml", "pnpm"),
    ("bun.lockb", "bun"),
    ("composer.lock", "composer"),
]


def detect_package_managers(project_root: Path) -> List[str]:
    """List package managers whose lock file is present."""
    return [manager for lock, manager in LOCK_FILES if (project_root / lock).is_file()]


def detect_runtime(config_files: Iterable[str]) -> str:
    """Pick the project runtime from the configuration files found.

    Returns:
        One of ``bun``, ``node``, ``php``, ``python``, ``rust``, ``go``
        or ``generic``.
    """
    found = set(config_files)
    if "bun.lockb" in found:
        return "bun"
    if "package.json" in found:
        return "node"
    if "composer.json" in found:
        return "php"
    if found & {"requirements.txt", "Pipfile", "pyproject.toml"}:
        return "python"
    if "Cargo.toml" in found:
        return "rust"
    if "go.mod" in found:
        return "go"
    return "generic"
