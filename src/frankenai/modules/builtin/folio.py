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

FOLIO_PAGES_DIR = "resources/views/pages/"
FOLIO_GUIDELINES = [("routing.md", "framework"), ("page-organization.md", "framework")]


class FolioModule(Module):
    """Laravel Folio page-based routing."""

    threshold = 0.7

    @property
    def id(self) -> str:
        return "folio"

    @property
    def display_name(self) -> str:
        return "Laravel Folio"

    @property
    def module_type(self) -> ModuleType:
        return ModuleType.LIBRARY

    @property
    def priority_type(self) -> PriorityType:
        return PriorityType.LARAVEL_TOOL

    def detect(self, context: DetectionContext) -> DetectionResult:
        collector = EvidenceCollector()

        collector.add_if(
            context.has_composer_package("laravel/folio"),
            0.8,
            "Laravel Folio found in composer.json dependencies",
        )
        if not context.has_laravel and collector.raw_score > 0:
            collector.scale(0.5, "Warning: Folio requires Laravel framework")
        elif context.has_laravel:
            collector.add(0.2, "Laravel framework detected (required for Folio)")

        pages = context.files_under(FOLIO_PAGES_DIR, (".blade.php",))
        collector.add_if(pages, 0.6, "Folio pages directory found (resources/views/pages/)")
        collector.add_if(
            context.has_config_file("config/folio.php"),
            0.3,
            "Folio config found: config/folio.php",
        )
        # Dynamic segments such as [id].blade.php
        collector.add_if(
            any(f.startswith(FOLIO_PAGES_DIR) and "[" in f for f in context.files),
            0.4,
            "Folio route parameter pages detected",
        )

        return collector.result(
            self.threshold,
            inclusive=True,
            metadata={"has_laravel_framework": context.has_laravel, "folio_page_count": len(pages)},
        )

    def detect_version(self, context: DetectionContext) -> Optional[str]:
        constraint = context.composer_constraint("laravel/folio", include_dev=True)
        return strip_constraint(constraint) if constraint else None

    def get_guideline_paths(self, version: Optional[str] = None) -> List[GuidelinePath]:
        return topic_guidelines(self.id, self.priority_type, FOLIO_GUIDELINES)

    def generate_commands(self, module_context: ModuleContext) -> CommandBundle:
        return {
            "dev": ["php artisan folio:list", "php artisan folio:page", "php artisan serve"],
            "install": ["composer install", "php artisan folio:install"],
        }

    def config_files(self) -> List[str]:
        return ["config/folio.php"]
