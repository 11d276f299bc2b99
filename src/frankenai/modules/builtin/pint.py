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

PINT_CONFIG_FILES = ["pint.json", ".pint.json", "pint.config.php", ".pint.config.php"]


class PintModule(Module):
    """Laravel Pint code style fixer."""

    threshold = 0.7

    @property
    def id(self) -> str:
        return "pint"

    @property
    def display_name(self) -> str:
        return "Laravel Pint"

    @property
    def module_type(self) -> ModuleType:
        return ModuleType.TOOL

    @property
    def priority_type(self) -> PriorityType:
        return PriorityType.LARAVEL_TOOL

    def detect(self, context: DetectionContext) -> DetectionResult:
        collector = EvidenceCollector()

        collector.add_if(
            context.has_composer_package("laravel/pint"),
            0.8,
            "Laravel Pint found in composer.json dependencies",
        )
        found_configs = [f for f in context.config_files if f in PINT_CONFIG_FILES]
        collector.add_if(found_configs, 0.4, f"Pint config found: {', '.join(found_configs)}")
        collector.add_if(context.path_exists("vendor/bin/pint"), 0.3, "Pint binary found in vendor/bin")

        has_laravel = context.has_laravel
        if collector.steps:
            collector.add_if(has_laravel, 0.2, "Laravel framework detected (Pint's primary target)")

        return collector.result(
            self.threshold,
            inclusive=True,
            metadata={
                "has_config_file": bool(found_configs),
                "has_laravel_framework": has_laravel,
            },
        )

    def detect_version(self, context: DetectionContext) -> Optional[str]:
        constraint = context.composer_constraint("laravel/pint", include_dev=True)
        return strip_constraint(constraint) if constraint else None

    def generate_commands(self, module_context: ModuleContext) -> CommandBundle:
        if is_laravel_stack(module_context.detected_stack):
            lint = ["./vendor/bin/pint", "./vendor/bin/pint --diff", "./vendor/bin/pint --dirty"]
        else:
            lint = ["vendor/bin/pint", "composer pint"]
        return {"lint": lint, "install": ["composer install --dev"]}

    def config_files(self) -> List[str]:
        return list(PINT_CONFIG_FILES)
