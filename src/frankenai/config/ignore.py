"""Gitignore-style ignore patterns for project scanning.

Patterns come from a ``.frankenaiignore`` file in the project root and
the ``ignore`` list of the configuration. Matching uses pathspec for
full gitignore semantics (``**`` globbing, ``!`` negation, comments).
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional

import pathspec

from frankenai.core.logging import get_logger

LOGGER = get_logger(__name__)

FRANKENAIIGNORE_NAMES = [".frankenaiignore"]


class IgnorePatterns:
    """Compiled set of gitignore-style patterns."""

    def __init__(self, patterns: Iterable[str], source: str = "config") -> None:
        """Initialize with a list of gitignore-style patterns.

        Args:
            patterns: List of gitignore-style patterns.
            source: Source description for logging.
        """
        self._source = source
        self._raw_patterns = list(patterns)

        clean_patterns = [
            p for p in self._raw_patterns if p.strip() and not p.strip().startswith("#")
        ]

        self._spec = pathspec.PathSpec.from_lines(
            pathspec.patterns.GitWildMatchPattern,
            clean_patterns,
        )

        if clean_patterns:
            LOGGER.debug(f"Loaded {len(clean_patterns)} ignore patterns from {source}")

    @property
    def patterns(self) -> List[str]:
        """Patterns without blank lines and comments."""
        return [p.strip() for p in self._raw_patterns if p.strip() and not p.strip().startswith("#")]

    def __bool__(self) -> bool:
        return bool(self.patterns)

    def matches(self, relative_path: str, is_dir: bool = False) -> bool:
        """Check a forward-slash path, relative to the project root.

        Directories are matched with a trailing slash so that
        directory-only patterns (``build/``) apply to them.
        """
        path = relative_path.replace("\\", "/").strip("/")
        if is_dir:
            path += "/"
        return self._spec.match_file(path)

    @classmethod
    def from_file(cls, file_path: Path) -> Optional["IgnorePatterns"]:
        """Load patterns from a file.

        Returns:
            IgnorePatterns instance, or None if the file is missing or unreadable.
        """
        if not file_path.is_file():
            return None

        try:
            content = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            LOGGER.warning(f"Failed to load ignore file {file_path}: {e}")
            return None
        return cls(content.splitlines(), source=str(file_path))

    @classmethod
    def merge(cls, *pattern_sets: Optional["IgnorePatterns"]) -> "IgnorePatterns":
        """Merge multiple IgnorePatterns instances, keeping their order."""
        all_patterns: List[str] = []
        sources: List[str] = []

        for ps in pattern_sets:
            if ps is not None:
                all_patterns.extend(ps._raw_patterns)
                sources.append(ps._source)

        return cls(all_patterns, source="+".join(sources) if sources else "empty")


def find_frankenaiignore(project_root: Path) -> Optional[Path]:
    for name in FRANKENAIIGNORE_NAMES:
        ignore_path = project_root / name
        if ignore_path.is_file():
            return ignore_path
    return None


def load_ignore_patterns(project_root: Path, config_patterns: Iterable[str] = ()) -> IgnorePatterns:
    """Load and merge ignore patterns from all sources.

    File patterns come first, then the configuration's ``ignore`` list,
    so a negation in the config can re-include a path the file ignores.

    Args:
        project_root: Project root directory.
        config_patterns: Patterns from the ``ignore`` config key.

    Returns:
        Merged IgnorePatterns instance.
    """
    ignore_file = find_frankenaiignore(project_root)
    file_patterns = IgnorePatterns.from_file(ignore_file) if ignore_file else None

    config_patterns = list(config_patterns)
    config_ignore = IgnorePatterns(config_patterns, source="config.ignore") if config_patterns else None

    return IgnorePatterns.merge(file_patterns, config_ignore)
