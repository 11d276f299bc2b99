"""Version extraction from manifest constraints and lock files.

Installed versions (node_modules, package-lock.json, yarn.lock,
vendor/composer/installed.json, composer.lock) take precedence over the
constraint declared in the manifest when both are available.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Optional

from frankenai.core.logging import get_logger
from frankenai.core.models import DetectionContext

LOGGER = get_logger(__name__)

_MAJOR_PATTERN = re.compile(r"(\d+)")
_MAJOR_MINOR_PATTERN = re.compile(r"(\d+)(?:\.(\d+))?")

SOURCE_DEPENDENCY = "dependency"
SOURCE_INSTALLED = "installed"
SOURCE_BOTH = "both"


def major_version(spec: Optional[str]) -> Optional[str]:
    """Return the major version of a constraint or version string.

    ``^4.2.1`` → ``4``, ``v11.0.3`` → ``11``, ``>=3.0 <5`` → ``3``.
    Returns None when the string carries no digits.
    """
    if not spec:
        return None
    match = _MAJOR_PATTERN.search(str(spec))
    return str(int(match.group(1))) if match else None


def major_minor_version(spec: Optional[str]) -> Optional[str]:
    """Return ``major.minor`` (or just ``major``) from a constraint."""
    if not spec:
        return None
    match = _MAJOR_MINOR_PATTERN.search(str(spec))
    if not match:
        return None
    major, minor = match.group(1), match.group(2)
    return f"{int(major)}.{int(minor)}" if minor is not None else str(int(major))


@dataclass(frozen=True)
class VersionInfo:
    """Resolved version for a single package."""

    raw: str
    major: str
    installed: Optional[str] = None
    source: str = SOURCE_DEPENDENCY


def npm_installed_version(name: str, context: DetectionContext) -> Optional[str]:
    """Look up the installed version of an npm package."""
    pkg = context.read_json(f"node_modules/{name}/package.json")
    if isinstance(pkg, dict) and pkg.get("version"):
        return str(pkg["version"])

    lock = context.read_json("package-lock.json")
    if isinstance(lock, dict):
        entry = (lock.get("dependencies") or {}).get(name) or (lock.get("packages") or {}).get(
            f"node_modules/{name}"
        )
        return str(entry["version"]) if isinstance(entry, dict) and entry.get("version") else None

    yarn_lock = context.read_text("yarn.lock")
    if yarn_lock is not None:
        match = re.search(rf'{re.escape(name)}@.*:\s*version\s+"([^"]+)"', yarn_lock)
        return match.group(1) if match else None

    return None


def composer_installed_version(name: str, context: DetectionContext) -> Optional[str]:
    """Look up the installed version of a composer package."""
    installed = context.read_json("vendor/composer/installed.json")
    if installed is not None:
        packages = installed.get("packages", installed) if isinstance(installed, dict) else installed
        return _find_package_version(packages, name)

    lock = context.read_json("composer.lock")
    if isinstance(lock, dict):
        return _find_package_version(lock.get("packages"), name)

    return None


def _find_package_version(packages: Any, name: str) -> Optional[str]:
    if not isinstance(packages, list):
        return None
    for package in packages:
        if isinstance(package, dict) and package.get("name") == name and package.get("version"):
            return str(package["version"])
    return None


def _combine(raw: str, installed: Optional[str]) -> Optional[VersionInfo]:
    spec_major = major_version(raw)
    installed_major = major_version(installed)
    effective = installed_major or spec_major
    if effective is None:
        return None
    if installed_major and spec_major:
        source = SOURCE_BOTH
    elif installed_major:
        source = SOURCE_INSTALLED
    else:
        source = SOURCE_DEPENDENCY
    return VersionInfo(raw=raw, major=effective, installed=installed, source=source)


def detect_npm_version(name: str, context: DetectionContext) -> Optional[VersionInfo]:
    """Resolve version info for an npm dependency declared in package.json."""
    raw = context.npm_dependency(name)
    if raw is None:
        return None
    installed = npm_installed_version(name, context)
    LOGGER.debug(f"npm {name}: constraint={raw} installed={installed}")
    return _combine(raw, installed)


def detect_composer_version(name: str, context: DetectionContext) -> Optional[VersionInfo]:
    """Resolve version info for a composer package declared in ``require``."""
    raw = context.composer_constraint(name)
    if raw is None:
        return None
    installed = composer_installed_version(name, context)
    LOGGER.debug(f"composer {name}: constraint={raw} installed={installed}")
    return _combine(raw, installed)
