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

PHPUNIT_CONFIG_FILES = ["phpunit.xml", "phpunit.xml.dist", "phpunit.dist.xml", "tests/phpunit.xml"]


class PHPUnitModule(Module):
    """PHPUnit testing framework."""

    threshold = 0.6

    @property
    def id(self) -> str:
        return "phpunit"

    @property
    def display_name(self) -> str:
        return "PHPUnit"

    @property
    def module_type(self) -> ModuleType:
        return ModuleType.TOOL

    @property
    def priority_type(self) -> PriorityType:
        return PriorityType.LARAVEL_TOOL

    def detect(self, context: DetectionContext) -> DetectionResult:
        collector = EvidenceCollector()

        collector.add_if(
            context.has_composer_package("phpunit/phpunit"),
            0.7,
            "PHPUnit found in composer.json dependencies",
        )
        found_configs = [f for f in context.config_files if f in PHPUNIT_CONFIG_FILES]
        collector.add_if(found_configs, 0.6, f"PHPUnit config found: {', '.join(found_configs)}")

        has_tests_dir = any(f.startswith("tests/") and f.endswith(".php") for f in context.files)
        collector.add_if(has_tests_dir, 0.4, "Tests directory with PHP files found")
        collector.add_if(
            any(f.endswith(("Test.php", "TestCase.php")) for f in context.files),
            0.3,
            "PHPUnit test classes found",
        )
        collector.add_if(context.path_exists("vendor/bin/phpunit"), 0.2, "PHPUnit binary found in vendor/bin")

        return collector.result(
            self.threshold,
            inclusive=True,
            metadata={
                "has_config_file": bool(found_configs),
                "has_tests_directory": has_tests_dir,
                "config_files": found_configs,
            },
        )

    def detect_version(self, context: DetectionContext) -> Optional[str]:
        constraint = context.composer_constraint("phpunit/phpunit", include_dev=True)
        return strip_constraint(constraint) if constraint else None

    def generate_commands(self, module_context: ModuleContext) -> CommandBundle:
        if is_laravel_stack(module_context.detected_stack):
            test = ["php artisan test", "php artisan test --parallel", "php artisan test --coverage"]
        else:
            test = ["vendor/bin/phpunit", "composer test", "vendor/bin/phpunit --coverage-html coverage"]
        return {"test": test, "install": ["composer install --dev"]}

    def config_files(self) -> List[str]:
        return list(PHPUNIT_CONFIG_FILES)
