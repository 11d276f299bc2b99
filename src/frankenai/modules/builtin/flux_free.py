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
from frankenai.modules.builtin.common import (
    has_flux_pro_indicators,
    is_livewire_project,
    strip_constraint,
    topic_guidelines,
)

FLUX_PACKAGE = "livewire/flux"
FLUX_CONFIG_FILES = ["config/flux.php", "config/livewire.php"]


def uses_flux_components(context: DetectionContext) -> bool:
    """Blade views in the directories Flux components are usually rendered from."""
    return any(
        f.endswith(".blade.php") and ("/livewire/" in f or "/components/" in f)
        for f in context.files
    )


class FluxFreeModule(Module):
    """Flux UI free component set for Livewire."""

    threshold = 0.6

    @property
    def id(self) -> str:
        return "flux-free"

    @property
    def display_name(self) -> str:
        return "Flux UI Free"

    @property
    def module_type(self) -> ModuleType:
        return ModuleType.LIBRARY

    @property
    def priority_type(self) -> PriorityType:
        return PriorityType.LARAVEL_TOOL

    def detect(self, context: DetectionContext) -> DetectionResult:
        if not context.has_composer_package(FLUX_PACKAGE):
            return DetectionResult.not_detected()
        if has_flux_pro_indicators(context):
            return DetectionResult.not_detected("Flux UI Pro version detected - Free version not applicable")

        collector = EvidenceCollector()
        collector.add(0.7, "Flux UI found in composer.json dependencies")

        has_livewire = is_livewire_project(context)
        if has_livewire:
            collector.add(0.2, "Livewire framework detected (required for Flux)")
        else:
            collector.scale(0.5, "Warning: Flux UI requires Livewire")
        collector.add_if(context.has_laravel, 0.1, "Laravel framework detected")
        has_components = uses_flux_components(context)
        collector.add_if(has_components, 0.3, "Flux UI component usage detected")

        return collector.result(
            self.threshold,
            inclusive=True,
            metadata={
                "has_livewire": has_livewire,
                "has_flux_components": has_components,
                "is_pro_version": False,
            },
        )

    def detect_version(self, context: DetectionContext) -> Optional[str]:
        constraint = context.composer_constraint(FLUX_PACKAGE, include_dev=True)
        return strip_constraint(constraint) if constraint else None

    def get_guideline_paths(self, version: Optional[str] = None) -> List[GuidelinePath]:
        return topic_guidelines(self.id, self.priority_type, [("components.md", "framework")])

    def generate_commands(self, module_context: ModuleContext) -> CommandBundle:
        return {
            "dev": ["php artisan serve", "php artisan livewire:publish --config"],
            "install": ["composer install", "php artisan flux:install"],
        }

    def config_files(self) -> List[str]:
        return list(FLUX_CONFIG_FILES)
