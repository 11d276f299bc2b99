from __future__ import annotations

from typing import List, Optional

from frankenai.core.evidence import EvidenceCollector
from frankenai.core.models import (
    DetectionContext,
    DetectionResult,
    ModuleContext,
    ModuleType,
    PriorityType,
)
from frankenai.modules.base import CommandBundle, Module

BOOST_CONFIG_FILES = [
    "boost.config.js",
    "boost.config.php",
    "config/boost.php",
    "laravel-boost.json",
    ".boost",
]
BOOST_DIRS = ["resources/boost", "app/Boost", "database/boost", "routes/boost"]
BOOST_DATA_FILES = [
    "fluxui-pro/core.blade.php",
    "fluxui-free/core.blade.php",
    "pennant/core.blade.php",
    "volt/core.blade.php",
]
BOOST_NPM_PACKAGES = ["laravel-boost", "@laravel-boost/cli", "boost-framework"]
BOOST_COMPOSER_PACKAGE = "laravel/boost"

# Technologies whose guidance the Boost methodology already covers
BOOST_EXCLUDES = [
    "laravel",
    "tailwind",
    "livewire",
    "pest",
    "pint",
    "volt",
    "folio",
    "pennant",
    "flux-free",
    "flux-pro",
]


class LaravelBoostModule(Module):
    """Laravel Boost methodology layered on top of a Laravel application."""

    threshold = 0.6

    @property
    def id(self) -> str:
        return "laravel-boost"

    @property
    def display_name(self) -> str:
        return "Laravel Boost"

    @property
    def module_type(self) -> ModuleType:
        return ModuleType.LIBRARY

    @property
    def priority_type(self) -> PriorityType:
        return PriorityType.META_FRAMEWORK

    def detect(self, context: DetectionContext) -> DetectionResult:
        collector = EvidenceCollector()
        components: List[str] = []

        collector.add_if(
            any(f in BOOST_CONFIG_FILES for f in context.config_files),
            0.8,
            "Laravel Boost configuration file detected",
        )
        collector.add_if(
            context.composer_constraint(BOOST_COMPOSER_PACKAGE, include_dev=True),
            0.8,
            f"{BOOST_COMPOSER_PACKAGE} in composer.json",
        )
        collector.add_if(
            any(context.has_dir(d) for d in BOOST_DIRS),
            0.6,
            "Laravel Boost directory structure detected",
        )
        if any(f.endswith(data) for f in context.files for data in BOOST_DATA_FILES):
            collector.add(0.7, "Laravel Boost methodology data files detected")
            components.append("boost-methodology")
        collector.add_if(
            any("boost" in f.rsplit("/", 1)[-1].lower() for f in context.files),
            0.4,
            "Laravel Boost patterns detected in file names",
        )
        collector.add_if(
            any(context.has_npm_dependency(p) for p in BOOST_NPM_PACKAGES),
            0.5,
            "Laravel Boost dependencies detected in package.json",
        )

        has_laravel = bool(
            context.composer_constraint("laravel/framework")
            or context.composer_constraint("illuminate/support")
        )
        if not has_laravel and collector.raw_score > 0:
            collector.scale(0.3, "Warning: Laravel Boost requires Laravel framework")
        elif has_laravel:
            collector.add(0.1, "Laravel framework detected (required for Boost)")

        return collector.result(
            self.threshold,
            inclusive=True,
            excludes=BOOST_EXCLUDES,
            metadata={"has_laravel_framework": has_laravel, "boost_components": components},
        )

    def detect_version(self, context: DetectionContext) -> Optional[str]:
        constraint = context.composer_constraint(BOOST_COMPOSER_PACKAGE, include_dev=True)
        if constraint:
            return constraint.lstrip("~^>=<v ").strip() or None
        if any(f in BOOST_CONFIG_FILES and f != ".boost" for f in context.config_files):
            return "1.0.0"
        return None

    def generate_commands(self, module_context: ModuleContext) -> CommandBundle:
        return {
            "dev": ["php artisan serve", "php artisan boost:dev"],
            "build": ["php artisan optimize", "php artisan boost:build"],
            "install": ["composer install", "php artisan boost:install"],
        }

    def config_files(self) -> List[str]:
        return list(BOOST_CONFIG_FILES)
