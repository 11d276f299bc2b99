"""Project scanning: turns a directory into a DetectionContext.

The scanner records file names only. It never parses source code; the
two manifests (package.json, composer.json) are the only files it reads.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

from frankenai.config.ignore import IgnorePatterns
from frankenai.core.logging import get_logger
from frankenai.core.models import DetectionContext

LOGGER = get_logger(__name__)

# Directories that are recorded but never descended into
SKIP_DIRS = {
    ".git",
    ".svn",
    ".hg",
    ".idea",
    ".vscode",
    "node_modules",
    "vendor",
    "__pycache__",
    ".venv",
    "venv",
    ".tox",
    ".pytest_cache",
    ".mypy_cache",
    "dist",
    "build",
    "target",
    ".next",
    ".nuxt",
    ".output",
    ".svelte-kit",
    "coverage",
    "storage",
    "bootstrap/cache",
}

# Configuration files looked for regardless of the registered modules
BASE_CONFIG_FILES = [
    "package.json",
    "composer.json",
    "composer.lock",
    "package-lock.json",
    "yarn.lock",
    "pnpm-lock.yaml",
    "bun.lockb",
    "requirements.txt",
    "Pipfile",
    "pyproject.toml",
    "Cargo.toml",
    "go.mod",
    "tsconfig.json",
    "vite.config.js",
    "vite.config.ts",
    "nuxt.config.js",
    "nuxt.config.ts",
    "next.config.js",
    "vue.config.js",
    "artisan",
    "manage.py",
    ".env",
    "docker-compose.yml",
    "Dockerfile",
]

DEFAULT_MAX_DEPTH = 10


class ProjectScanner:
    """Builds the read-only project snapshot handed to every module."""

    def __init__(
        self,
        config_files: Iterable[str] = (),
        ignore: Optional[IgnorePatterns] = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        """Initialize the scanner.

        Args:
            config_files: Extra configuration file names to look for, on
                top of BASE_CONFIG_FILES (usually every module's
                ``config_files``).
            ignore: Gitignore-style patterns excluded from the file list.
            max_depth: Maximum directory recursion depth.
        """
        self._config_candidates = _unique([*BASE_CONFIG_FILES, *config_files])
        self._ignore = ignore
        self._max_depth = max_depth

    def scan(self, project_root: Path) -> DetectionContext:
        """Snapshot ``project_root``.

        Args:
            project_root: Directory to scan.

        Returns:
            DetectionContext with sorted forward-slash paths.
        """
        root = Path(project_root).resolve()
        files, directories = self._walk(root)

        config_files = [name for name in self._config_candidates if (root / name).is_file()]
        LOGGER.debug(
            f"Scanned {root}: {len(files)} files, {len(directories)} directories, "
            f"config files: {config_files}"
        )

        return DetectionContext(
            project_root=root,
            files=tuple(files),
            config_files=tuple(config_files),
            package_json=read_manifest(root / "package.json"),
            composer_json=read_manifest(root / "composer.json"),
            directories=tuple(directories),
        )

    def _walk(self, root: Path) -> Tuple[List[str], List[str]]:
        files: List[str] = []
        directories: List[str] = []

        def _walk_dir(path: Path, depth: int) -> None:
            if depth > self._max_depth:
                return
            try:
                entries = sorted(path.iterdir(), key=lambda p: p.name)
            except (PermissionError, FileNotFoundError) as e:
                LOGGER.debug(f"Cannot read directory {path}: {e}")
                return

            for item in entries:
                relative = item.relative_to(root).as_posix()
                if item.is_dir():
                    if self._is_ignored(relative, is_dir=True):
                        continue
                    directories.append(relative)
                    if item.name not in SKIP_DIRS and relative not in SKIP_DIRS:
                        _walk_dir(item, depth + 1)
                elif item.is_file() and not self._is_ignored(relative):
                    files.append(relative)

        _walk_dir(root, 0)
        return sorted(files), sorted(directories)

    def _is_ignored(self, relative: str, is_dir: bool = False) -> bool:
        return bool(self._ignore) and self._ignore.matches(relative, is_dir=is_dir)


def read_manifest(path: Path) -> Optional[Dict[str, Any]]:
    """Read a JSON manifest; missing or invalid files yield None."""
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        LOGGER.warning(f"Ignoring unreadable manifest {path}: {e}")
        return None
    if not isinstance(data, dict):
        LOGGER.warning(f"Ignoring manifest {path}: expected a JSON object")
        return None
    return data


def _unique(items: Iterable[str]) -> List[str]:
    seen = set()
    ordered = []
    for item in items:
        if item not in seen:
            seen.add(item)
            ordered.append(item)
    return ordered
