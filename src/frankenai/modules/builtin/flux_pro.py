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
from frankenai.modules.builtin.flux_free import FLUX_CONFIG_FILES, FLUX_PACKAGE

# Components only shipped with Flux UI Pro
FLUX_PRO_COMPONENTS = [
    "accordion",
    "autocomplete",
    "calendar",
    "chart",
    "command",
    "context",
    "date-picker",
    "editor",
    "pagination",
    "popover",
    "table",
    "tabs",
    "toast",
]
FLUX_LICENSE_MARKERS = ["FLUX_PRO_KEY", "FLUX_LICENSE", "flux-license", ".flux-pro"]
FLUX_PRO_GUIDELINES = [("components.md", "framework"), ("pro-features.md", "framework")]


def _is_pro_component(path: str) -> bool:
    if not path.endswith(".blade.php"):
        return False
    lowered = path.lower()
    return (
        "/pro/" in lowered
        or "flux-pro" in lowered
        or "/premium/" in lowered
        or any(component in lowered for component in FLUX_PRO_COMPONENTS)
    )


class FluxProModule(Module):
    """Flux UI Pro component set. Replaces Flux UI Free when present."""

    threshold = 0.8

    @property
    def id(self) -> str:
        return "flux-pro"

    @property
    def display_name(self) -> str:
        return "Flux UI Pro"

    @property
    def module_type(self) -> ModuleType:
        return ModuleType.LIBRARY

    @property
    def priority_type(self) -> PriorityType:
        return PriorityType.LARAVEL_TOOL

    def detect(self, context: DetectionContext) -> DetectionResult:
        if not context.has_composer_package(FLUX_PACKAGE):
            return DetectionResult.not_detected()
        if not has_flux_pro_indicators(context):
            return DetectionResult.not_detected("Flux UI detected but no Pro version indicators found")

        collector = EvidenceCollector()
        collector.add(0.7, "Flux UI found in composer.json dependencies")
        collector.add(0.3, "Flux UI Pro version indicators detected")

        has_livewire = is_livewire_project(context)
        if has_livewire:
            collector.add(0.1, "Livewire framework detected (required for Flux)")
        else:
            collector.scale(0.5, "Warning: Flux UI requires Livewire")
        collector.add_if(context.has_laravel, 0.1, "Laravel framework detected")

        has_components = any(_is_pro_component(f) for f in context.files)
        collector.add_if(has_components, 0.4, "Flux UI Pro components detected")
        has_license = any(
            marker in name
            for name in [*context.config_files, *context.files]
            for marker in FLUX_LICENSE_MARKERS
        )
        collector.add_if(has_license, 0.3, "Flux UI Pro license or configuration detected")

        return collector.result(
            self.threshold,
            inclusive=True,
            excludes=["flux-free"],
            metadata={
                "has_livewire": has_livewire,
                "has_pro_components": has_components,
                "has_pro_license": has_license,
                "is_pro_version": True,
            },
        )

    def detect_version(self, context: DetectionContext) -> Optional[str]:
        constraint = context.composer_constraint(FLUX_PACKAGE, include_dev=True)
        return strip_constraint(constraint) if constraint else None

    def get_guideline_paths(self, version: Optional[str] = None) -> List[GuidelinePath]:
        return topic_guidelines(self.id, self.priority_type, FLUX_PRO_GUIDELINES)

    def generate_commands(self, module_context: ModuleContext) -> CommandBundle:
        return {
            "dev": [
                "php artisan serve",
                "php artisan livewire:publish --config",
                "php artisan flux:publish --pro",
            ],
            "install": ["composer install", "php artisan flux:install --pro"],
        }

    def config_files(self) -> List[str]:
        return [*FLUX_CONFIG_FILES, ".env", ".env.local"]
