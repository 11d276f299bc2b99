from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from frankenai.core.evidence import EvidenceCollector
from frankenai.core.models import (
    DetectionContext,
    DetectionResult,
    ModuleContext,
    ModuleType,
    PriorityType,
)
from frankenai.core.versions import major_version
from frankenai.modules.base import CommandBundle, Module
from frankenai.modules.builtin.common import NODE_MANIFEST_FILES, VITE_CONFIGS, npm_major

# npm adapter → (label, frontend module it replaces)
INERTIA_ADAPTERS: Dict[str, Tuple[str, str]] = {
    "@inertiajs/react": ("React", "react"),
    "@inertiajs/vue3": ("Vue 3", "vue"),
    "@inertiajs/vue2": ("Vue 2", "vue"),
    "@inertiajs/svelte": ("Svelte", "svelte"),
}
INERTIA_PAGE_DIRS = ["resources/js/Pages/", "resources/js/pages/", "resources/ts/Pages/", "resources/ts/pages/"]
FRONTEND_SUFFIXES = (".js", ".ts", ".jsx", ".tsx", ".vue", ".svelte")


class InertiaModule(Module):
    """Inertia.js bridge between Laravel and a frontend framework."""

    threshold = 0.4

    @property
    def id(self) -> str:
        return "inertia"

    @property
    def display_name(self) -> str:
        return "Inertia.js"

    @property
    def module_type(self) -> ModuleType:
        return ModuleType.LIBRARY

    @property
    def priority_type(self) -> PriorityType:
        return PriorityType.LARAVEL_TOOL

    def detect(self, context: DetectionContext) -> DetectionResult:
        collector = EvidenceCollector()
        excludes: List[str] = []

        has_laravel = context.has_composer_package("laravel/framework")
        collector.add_if(
            has_laravel and context.has_composer_package("inertiajs/inertia-laravel"),
            0.7,
            "inertiajs/inertia-laravel in composer.json dependencies",
        )
        for package, (label, frontend) in INERTIA_ADAPTERS.items():
            if collector.add_if(context.has_npm_dependency(package), 0.6, f"Inertia {label} adapter detected"):
                if frontend not in excludes:
                    excludes.append(frontend)

        if collector.steps:
            pages = [f for f in context.files if any(d in f for d in INERTIA_PAGE_DIRS)]
            if pages:
                collector.add(min(len(pages) * 0.05, 0.3), f"Inertia Pages directory found: {len(pages)} files")
            collector.add_if(
                any("app/Http/Middleware" in f and "Inertia" in f for f in context.files),
                0.2,
                "Inertia middleware found",
            )
            collector.add_if(
                context.has_config_file("config/inertia.php") or context.has_file("config/inertia.php"),
                0.2,
                "Inertia config file found",
            )
            collector.add_if(
                any(
                    ("resources/js/app." in f or "resources/ts/app." in f)
                    and f.endswith((".js", ".ts", ".jsx", ".tsx"))
                    for f in context.files
                ),
                0.1,
                "Frontend app files found (likely Inertia setup)",
            )
            frontend_files = context.files_with_suffix(*FRONTEND_SUFFIXES)
            collector.add_if(frontend_files, 0.1, f"Frontend component files found: {len(frontend_files)}")

        result = collector.result(self.threshold, inclusive=True, excludes=excludes)
        if result.detected:
            for frontend in excludes:
                result.evidence.append(f"Inertia handles {frontend} integration - excluding standalone guidelines")
        return result

    def detect_version(self, context: DetectionContext) -> Optional[str]:
        constraint = context.composer_constraint("inertiajs/inertia-laravel", include_dev=True)
        if constraint:
            return major_version(constraint)
        for package in INERTIA_ADAPTERS:
            version = npm_major(context, package)
            if version:
                return version
        return None

    def generate_commands(self, module_context: ModuleContext) -> CommandBundle:
        stack = module_context.detected_stack
        run = f"{stack.package_manager} run"

        if stack.has_config(*VITE_CONFIGS):
            dev = [f"{run} dev", "php artisan serve"]
        else:
            dev = ["php artisan serve", f"{run} dev"]
        if stack.has_config("webpack.config.js", "webpack.mix.js"):
            dev.append(f"{run} watch")

        return {
            "dev": dev,
            "build": [f"{run} build", "php artisan optimize"],
            "test": ["php artisan test", f"{run} test"],
            "lint": ["./vendor/bin/pint", f"{run} lint"],
        }

    def config_files(self) -> List[str]:
        return ["config/inertia.php", *VITE_CONFIGS, "webpack.config.js", "webpack.mix.js", *NODE_MANIFEST_FILES]
