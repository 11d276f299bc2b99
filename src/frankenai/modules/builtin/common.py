"""Helpers shared by the built-in modules."""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from frankenai.core.models import DetectedStack, DetectionContext, GuidelinePath, PriorityType
from frankenai.core.versions import detect_npm_version, major_version

NODE_LOCK_FILES = ["package-lock.json", "yarn.lock", "pnpm-lock.yaml", "bun.lockb"]
NODE_MANIFEST_FILES = ["package.json", *NODE_LOCK_FILES]
VITE_CONFIGS = ("vite.config.js", "vite.config.ts")
VITEST_CONFIGS = ("vitest.config.js", "vitest.config.ts")
JEST_CONFIGS = ("jest.config.js", "jest.config.ts")
PLAYWRIGHT_CONFIGS = ("playwright.config.js", "playwright.config.ts")
JS_TEST_CONFIG_FILES = [*VITEST_CONFIGS, *JEST_CONFIGS]

# Paths or config names that only appear in Flux UI Pro installs
FLUX_PRO_INDICATORS = ["flux-pro", "flux/pro", "flux_pro_license", "flux.pro", "fluxui.pro"]


def npm_major(context: DetectionContext, package: str) -> Optional[str]:
    """Major version of an npm package, preferring the installed one."""
    info = detect_npm_version(package, context)
    return info.major if info else None


def locked_npm_major(context: DetectionContext, package: str) -> Optional[str]:
    """Major version from the manifest constraint, else package-lock.json."""
    constraint = context.npm_dependency(package)
    if constraint:
        return major_version(constraint)
    lock = context.read_json("package-lock.json")
    if isinstance(lock, dict):
        entry = (lock.get("dependencies") or {}).get(package) or (
            lock.get("packages") or {}
        ).get(f"node_modules/{package}")
        if isinstance(entry, dict):
            return major_version(entry.get("version"))
    return None


def strip_constraint(constraint: str) -> str:
    """``^10.5`` → ``10.5``."""
    return constraint.lstrip("~^>=<").strip()


def js_test_commands(stack: DetectedStack, pm: str) -> List[str]:
    commands = [f"{pm} run test"]
    if stack.has_config(*VITEST_CONFIGS):
        commands.append(f"{pm} run test:vitest")
    if stack.has_config(*JEST_CONFIGS):
        commands.append(f"{pm} run test:jest")
    return commands


def js_lint_commands(pm: str) -> List[str]:
    return [f"{pm} run lint", f"{pm} run lint:fix"]


def npx(pm: str) -> str:
    """Binary runner for a package manager (npm uses npx)."""
    return "npx" if pm == "npm" else pm


def is_laravel_stack(stack: DetectedStack) -> bool:
    return "laravel" in stack.frameworks or "laravel-boost" in stack.frameworks + stack.libraries


def topic_guidelines(
    module_id: str,
    priority: PriorityType,
    topics: Iterable[Tuple[str, str]],
) -> List[GuidelinePath]:
    """Fixed guideline documents for modules without version-specific content.

    Args:
        module_id: Directory under the guideline store.
        priority: Priority class shared by every document.
        topics: ``(document, category)`` pairs in output order.
    """
    return [
        GuidelinePath(path=f"{module_id}/guidelines/{document}", priority=priority, category=category)
        for document, category in topics
    ]


def has_flux_pro_indicators(context: DetectionContext) -> bool:
    """True when a file path or config name marks a Flux UI Pro install."""
    names = [*context.files, *context.config_files]
    return any(marker in name.lower() for name in names for marker in FLUX_PRO_INDICATORS)


def is_livewire_project(context: DetectionContext) -> bool:
    return context.has_composer_package("livewire/livewire")
