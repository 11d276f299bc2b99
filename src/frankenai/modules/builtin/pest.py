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
from frankenai.modules.builtin.common import is_laravel_stack, strip_constraint

PEST_CONFIG_FILES = ["pest.php", "tests/Pest.php"]


class PestModule(Module):
    """Pest testing framework, which supersedes PHPUnit."""

    threshold = 0.7

    @property
    def id(self) -> str:
        return "pest"

    @property
    def display_name(self) -> str:
        return "Pest"

    @property
    def module_type(self) -> ModuleType:
        return ModuleType.TOOL

    @property
    def priority_type(self) -> PriorityType:
        return PriorityType.LARAVEL_TOOL

    def detect(self, context: DetectionContext) -> DetectionResult:
        collector = EvidenceCollector()

        collector.add_if(
            context.has_composer_package("pestphp/pest"),
            0.8,
            "Pest found in composer.json dependencies",
        )
        collector.add_if(
            context.has_composer_package("pestphp/pest-plugin-laravel"),
            0.2,
            "Pest Laravel plugin found in composer.json",
        )

        found_configs = [f for f in context.config_files if f in PEST_CONFIG_FILES]
        collector.add_if(found_configs, 0.4, f"Pest config found: {', '.join(found_configs)}")

        collector.add_if(
            any((f.startswith("tests/") and f.endswith(".php")) or "Pest.php" in f for f in context.files),
            0.3,
            "Tests directory with Pest-style tests found",
        )
        collector.add_if(
            any(f == "tests/Pest.php" or f.endswith(".pest.php") for f in context.files),
            0.4,
            "Pest-specific test files found",
        )
        collector.add_if(context.path_exists("vendor/bin/pest"), 0.2, "Pest binary found in vendor/bin")

        return collector.result(
            self.threshold,
            inclusive=True,
            excludes=["phpunit"],
            metadata={
                "has_config_file": bool(found_configs),
                "has_laravel_plugin": context.has_composer_package("pestphp/pest-plugin-laravel"),
            },
        )

    def detect_version(self, context: DetectionContext) -> Optional[str]:
        constraint = context.composer_constraint("pestphp/pest", include_dev=True)
        return strip_constraint(constraint) if constraint else None

    def generate_commands(self, module_context: ModuleContext) -> CommandBundle:
        if is_laravel_stack(module_context.detected_stack):
            test = [
                "php artisan test",
                "php artisan test --parallel",
                "php artisan test --coverage",
                "php artisan test --profile",
            ]
        else:
            test = ["vendor/bin/pest", "composer test", "vendor/bin/pest --coverage", "vendor/bin/pest --profile"]
        return {"test": test, "install": ["composer install --dev"]}

    def config_files(self) -> List[str]:
        return list(PEST_CONFIG_FILES)
