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
from frankenai.core.versions import major_version
from frankenai.modules.base import CommandBundle, Module

LIVEWIRE_COMPONENT_DIRS = ["app/Http/Livewire/", "app/Livewire/", "resources/views/livewire/"]


class LivewireModule(Module):
    """Livewire full-stack components. Only meaningful inside Laravel."""

    @property
    def id(self) -> str:
        return "livewire"

    @property
    def display_name(self) -> str:
        return "Livewire"

    @property
    def module_type(self) -> ModuleType:
        return ModuleType.LIBRARY

    @property
    def priority_type(self) -> PriorityType:
        return PriorityType.LARAVEL_TOOL

    def detect(self, context: DetectionContext) -> DetectionResult:
        if context.composer_json is None:
            return DetectionResult.not_detected("No composer.json found - Laravel required")
        if not context.has_composer_package("laravel/framework"):
            return DetectionResult.not_detected("Laravel not found - required for Livewire")

        collector = EvidenceCollector()
        collector.add_if(
            context.has_composer_package("livewire/livewire"),
            0.8,
            "livewire/livewire in composer.json dependencies",
        )
        collector.add_if(
            context.has_composer_package("livewire/volt"),
            0.2,
            "livewire/volt detected (Livewire v3 companion)",
        )

        components = [f for f in context.files if any(d in f for d in LIVEWIRE_COMPONENT_DIRS)]
        if components:
            collector.add(min(len(components) * 0.1, 0.3), f"Livewire components found: {len(components)}")

        collector.add_if(
            context.has_config_file("config/livewire.php") or context.has_file("config/livewire.php"),
            0.2,
            "Livewire config file found",
        )
        livewire_tests = [f for f in context.files if "tests/" in f and "livewire" in f.lower()]
        collector.add_if(livewire_tests, 0.1, f"Livewire test files found: {len(livewire_tests)}")

        return collector.result(
            self.threshold,
            inclusive=True,
            metadata={"component_count": len(components)},
        )

    def detect_version(self, context: DetectionContext) -> Optional[str]:
        return major_version(context.composer_constraint("livewire/livewire", include_dev=True))

    def generate_commands(self, module_context: ModuleContext) -> CommandBundle:
        stack = module_context.detected_stack
        test = ["php artisan test"]
        if stack.has_config("phpunit.xml", "phpunit.xml.dist"):
            test.append("./vendor/bin/phpunit --filter=Livewire")
        if stack.has_config("tests/Pest.php"):
            test.append("./vendor/bin/pest --group=livewire")
        return {
            "dev": ["php artisan livewire:publish --force", "php artisan serve"],
            "build": ["php artisan optimize"],
            "test": test,
            "lint": ["./vendor/bin/pint"],
            "install": ["composer install"],
        }

    def config_files(self) -> List[str]:
        return ["config/livewire.php", "phpunit.xml", "phpunit.xml.dist", "tests/Pest.php"]
