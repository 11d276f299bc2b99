from __future__ import annotations

import re
from typing import List, Optional

from frankenai.core.evidence import EvidenceCollector
from frankenai.core.models import DetectionContext, DetectionResult, ModuleType, PriorityType
from frankenai.core.versions import major_minor_version
from frankenai.modules.base import Module

PHP_CONFIG_FILES = ["php.ini", ".php-version", ".php-cs-fixer.php", "phpunit.xml", "phpstan.neon"]
PHP_DIRS = ["vendor", "app", "src", "public"]
PHP_ENTRY_POINTS = ["index.php", "public/index.php", "web/index.php"]

_PHP_VERSION = re.compile(r"(\d+\.\d+)")


class PHPModule(Module):
    """PHP language. Version guidelines are keyed by major.minor."""

    @property
    def id(self) -> str:
        return "php"

    @property
    def display_name(self) -> str:
        return "PHP"

    @property
    def module_type(self) -> ModuleType:
        return ModuleType.LANGUAGE

    @property
    def priority_type(self) -> PriorityType:
        return PriorityType.SPECIALIZED_LANG

    def detect(self, context: DetectionContext) -> DetectionResult:
        collector = EvidenceCollector()

        collector.add_if(context.composer_json is not None, 0.9, "composer.json found")

        php_files = context.files_with_suffix(".php")
        if php_files:
            collector.add(min(len(php_files) * 0.1, 0.7), f"PHP files found: {len(php_files)}")

        found_configs = [f for f in PHP_CONFIG_FILES if context.has_config_file(f)]
        for config in found_configs:
            collector.add(0.2, f"PHP config file: {config}")

        if collector.steps:
            for directory in PHP_DIRS:
                collector.add_if(context.has_dir(directory), 0.1, f"PHP directory structure: {directory}/")
            for entry in PHP_ENTRY_POINTS:
                collector.add_if(context.has_file(entry), 0.2, f"PHP entry point: {entry}")

        return collector.result(
            self.threshold,
            metadata={
                "has_composer_json": context.composer_json is not None,
                "php_files_count": len(php_files),
                "config_files_found": found_configs,
            },
        )

    def detect_version(self, context: DetectionContext) -> Optional[str]:
        candidates = [
            context.composer_constraint("php"),
            (context.read_text(".php-version") or "").strip(),
        ]
        lock = context.read_json("composer.lock")
        if isinstance(lock, dict) and isinstance(lock.get("platform"), dict):
            candidates.append(lock["platform"].get("php"))

        for candidate in candidates:
            if candidate:
                match = _PHP_VERSION.search(str(candidate))
                if match:
                    return match.group(1)
        return None

    def version_key(self, version: str) -> Optional[str]:
        return major_minor_version(version)

    def config_files(self) -> List[str]:
        return [
            "composer.json",
            "composer.lock",
            *PHP_CONFIG_FILES,
            "phpunit.xml.dist",
            "phpstan.neon.dist",
            "psalm.xml",
        ]
