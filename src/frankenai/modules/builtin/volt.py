from __future__ import annotations

from typing import List, Optional

from frankenai.core.evidence import EvidenceCollector
from frankenai.core.models import (
    DetectionContext,
    DetectionResult,
    GuidelinePath,
    ModuleContext,
    ModuleType,
    PriorityType,
)
from frankenai.modules.base import CommandBundle, Module
from frankenai.modules.builtin.common import is_livewire_project, strip_constraint, topic_guidelines

VOLT_CONFIG_FILES = ["config/volt.php", "config/livewire.php"]
VOLT_GUIDELINES = [
    ("functional-api.md", "framework"),
    ("livewire-integration.md", "framework"),
    ("testing.md", "testing"),
]


def _is_volt_component(path: str) -> bool:
    return path.endswith(".blade.php") and "volt" in path.lower()


class VoltModule(Module):
    """Livewire Volt single-file components."""

    threshold = 0.7

    @property
    def id(self) -> str:
        return "volt"

    @property
    def display_name(self) -> str:
        return "Livewire Volt"

    @property
    def module_type(self) -> ModuleType:
        return ModuleType.LIBRARY

    @property
    def priority_type(self) -> PriorityType:
        return PriorityType.LARAVEL_TOOL

    def detect(self, context: DetectionContext) -> DetectionResult:
        collector = EvidenceCollector()

        collector.add_if(
            context.has_composer_package("livewire/volt"),
            0.8,
            "Livewire Volt found in composer.json dependencies",
        )
        components = [f for f in context.files if _is_volt_component(f)]
        collector.add_if(components, 0.6, "Volt component patterns detected in Blade files")
        collector.add_if(
            any("/volt/" in f or f.startswith("volt/") for f in context.files),
            0.4,
            "Volt-specific directories found",
        )

        has_livewire = is_livewire_project(context)
        if collector.steps:
            if not has_livewire:
                collector.scale(0.5, "Warning: Volt requires Livewire")
            else:
                collector.add(0.3, "Livewire framework detected (required for Volt)")
            collector.add_if(context.has_laravel, 0.2, "Laravel framework detected (required for Volt)")
            found_configs = [f for f in VOLT_CONFIG_FILES if context.has_config_file(f)]
            collector.add_if(found_configs, 0.2, f"Volt/Livewire config found: {', '.join(found_configs)}")

        return collector.result(
            self.threshold,
            inclusive=True,
            metadata={
                "has_livewire": has_livewire,
                "has_laravel_framework": context.has_laravel,
                "volt_component_count": len(components),
            },
        )

    def detect_version(self, context: DetectionContext) -> Optional[str]:
        constraint = context.composer_constraint("livewire/volt", include_dev=True)
        return strip_constraint(constraint) if constraint else None

    def get_guideline_paths(self, version: Optional[str] = None) -> List[GuidelinePath]:
        return topic_guidelines(self.id, self.priority_type, VOLT_GUIDELINES)

    def generate_commands(self, module_context: ModuleContext) -> CommandBundle:
        return {
            "dev": ["php artisan make:volt", "php artisan volt:list", "php artisan serve"],
            "test": ["php artisan test --filter=Volt", "php artisan test tests/Feature/Volt/"],
            "install": ["composer install", "php artisan volt:install"],
        }

    def config_files(self) -> List[str]:
        return list(VOLT_CONFIG_FILES)
