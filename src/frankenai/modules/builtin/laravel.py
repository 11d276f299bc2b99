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
from frankenai.core.versions import composer_installed_version, major_version
from frankenai.modules.base import CommandBundle, Module

LARAVEL_DIRS = ["app/Http", "app/Models", "routes", "database/migrations", "resources/views"]
LARAVEL_FILES = ["routes/web.php", "routes/api.php", "config/app.php", "app/Http/Kernel.php"]


class LaravelModule(Module):
    """Laravel framework, detected from artisan, composer and app layout."""

    @property
    def id(self) -> str:
        return "laravel"

    @property
    def display_name(self) -> str:
        return "Laravel"

    @property
    def module_type(self) -> ModuleType:
        return ModuleType.FRAMEWORK

    @property
    def priority_type(self) -> PriorityType:
        return PriorityType.META_FRAMEWORK

    def detect(self, context: DetectionContext) -> DetectionResult:
        collector = EvidenceCollector()

        collector.add_if(context.has_config_file("artisan"), 0.9, "artisan command file found")
        collector.add_if(
            context.composer_constraint("laravel/framework"),
            0.8,
            "laravel/framework in composer.json dependencies",
        )

        found_dirs = [d for d in LARAVEL_DIRS if context.has_dir(d)]
        for directory in found_dirs:
            collector.add(0.1, f"Laravel directory structure: {directory}")

        for path in LARAVEL_FILES:
            collector.add_if(context.has_file(path), 0.15, f"Laravel file: {path}")

        config_php = context.files_under("config", suffixes=(".php",))
        collector.add_if(len(config_php) > 5, 0.2, f"Laravel config files found: {len(config_php)}")

        if context.has_config_file(".env"):
            env = context.read_text(".env") or ""
            collector.add_if(
                "APP_NAME=" in env or "APP_KEY=" in env, 0.1, ".env file with Laravel variables"
            )

        return collector.result(
            self.threshold,
            metadata={
                "has_artisan": context.has_config_file("artisan"),
                "has_composer_json": context.composer_json is not None,
                "laravel_dirs_found": found_dirs,
                "config_files_count": len(config_php),
            },
        )

    def detect_version(self, context: DetectionContext) -> Optional[str]:
        constraint = context.composer_constraint("laravel/framework")
        if constraint:
            return major_version(constraint)
        return major_version(composer_installed_version("laravel/framework", context))

    def generate_commands(self, module_context: ModuleContext) -> CommandBundle:
        stack = module_context.detected_stack
        pm = stack.package_manager
        has_vite = stack.has_config("vite.config.js", "vite.config.ts")
        has_mix = stack.has_config("webpack.mix.js")

        dev = ["php artisan serve", "php artisan tinker"]
        if has_vite or has_mix:
            dev.append(f"{pm} run dev")

        build: List[str] = []
        if has_vite:
            build.append(f"{pm} run build")
        elif has_mix:
            build.append(f"{pm} run production")

        test = ["php artisan test", "vendor/bin/phpunit"]
        if stack.has_config("pest.php", "tests/Pest.php"):
            test.append("vendor/bin/pest")

        lint = ["./vendor/bin/pint"]
        if stack.has_config(".php-cs-fixer.php", ".php_cs"):
            lint.append("vendor/bin/php-cs-fixer fix")
        if stack.has_config("phpstan.neon", "phpstan.neon.dist"):
            lint.append("vendor/bin/phpstan analyse")

        install = ["composer install"]
        if stack.has_config("package.json"):
            install.append(f"{pm} install")

        return {"dev": dev, "build": build, "test": test, "lint": lint, "install": install}

    def config_files(self) -> List[str]:
        return [
            "artisan",
            "composer.json",
            "composer.lock",
            ".env",
            ".env.example",
            "webpack.mix.js",
            "vite.config.js",
            "vite.config.ts",
            "pest.php",
            "tests/Pest.php",
            ".php-cs-fixer.php",
            ".php_cs",
            "phpstan.neon",
            "phpstan.neon.dist",
        ]
