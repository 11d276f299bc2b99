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
from frankenai.modules.builtin.common import strip_constraint, topic_guidelines

# Path fragments where feature flag classes usually live
FEATURE_FLAG_DIRS = ["Features/", "FeatureFlags/", "flags/", "pennant/"]


class PennantModule(Module):
    """Laravel Pennant feature flags."""

    threshold = 0.7

    @property
    def id(self) -> str:
        return "pennant"

    @property
    def display_name(self) -> str:
        return "Laravel Pennant"

    @property
    def module_type(self) -> ModuleType:
        return ModuleType.LIBRARY

    @property
    def priority_type(self) -> PriorityType:
        return PriorityType.LARAVEL_TOOL

    def detect(self, context: DetectionContext) -> DetectionResult:
        collector = EvidenceCollector()

        collector.add_if(
            context.has_composer_package("laravel/pennant"),
            0.8,
            "Laravel Pennant found in composer.json dependencies",
        )
        if not context.has_laravel and collector.raw_score > 0:
            collector.scale(0.5, "Warning: Pennant requires Laravel framework")
        elif context.has_laravel:
            collector.add(0.2, "Laravel framework detected (required for Pennant)")

        has_config = context.has_config_file("config/pennant.php")
        collector.add_if(has_config, 0.4, "Pennant config found: config/pennant.php")
        has_flags = any(d in f for f in context.files for d in FEATURE_FLAG_DIRS)
        collector.add_if(has_flags, 0.3, "Feature flag usage patterns detected")

        return collector.result(
            self.threshold,
            inclusive=True,
            metadata={
                "has_laravel_framework": context.has_laravel,
                "has_config_file": has_config,
                "has_feature_flag_usage": has_flags,
            },
        )

    def detect_version(self, context: DetectionContext) -> Optional[str]:
        constraint = context.composer_constraint("laravel/pennant", include_dev=True)
        return strip_constraint(constraint) if constraint else None

    def get_guideline_paths(self, version: Optional[str] = None) -> List[GuidelinePath]:
        return topic_guidelines(self.id, self.priority_type, [("feature-flags.md", "feature")])

    def generate_commands(self, module_context: ModuleContext) -> CommandBundle:
        return {
            "dev": ["php artisan pennant:purge", "php artisan pennant:clear"],
            "install": ["composer install", "php artisan pennant:install"],
        }

    def config_files(self) -> List[str]:
        return ["config/pennant.php"]
