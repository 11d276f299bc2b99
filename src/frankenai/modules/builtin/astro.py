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
from frankenai.modules.builtin.common import (
    NODE_MANIFEST_FILES,
    PLAYWRIGHT_CONFIGS,
    VITEST_CONFIGS,
    js_lint_commands,
    npm_major,
)

ASTRO_CONFIG_FILES = ["astro.config.js", "astro.config.ts", "astro.config.mjs"]
ASTRO_DIRS = ["src/pages", "src/components", "src/layouts"]
ASTRO_INTEGRATIONS = [
    "@astrojs/react",
    "@astrojs/vue",
    "@astrojs/svelte",
    "@astrojs/solid-js",
    "@astrojs/tailwind",
    "@astrojs/image",
    "@astrojs/sitemap",
]


class AstroModule(Module):
    """Astro static site builder with framework islands."""

    @property
    def id(self) -> str:
        return "astro"

    @property
    def display_name(self) -> str:
        return "Astro"

    @property
    def module_type(self) -> ModuleType:
        return ModuleType.FRAMEWORK

    @property
    def priority_type(self) -> PriorityType:
        return PriorityType.META_FRAMEWORK

    def detect(self, context: DetectionContext) -> DetectionResult:
        collector = EvidenceCollector()

        for section in context.npm_sections_with("astro"):
            collector.add(0.9, f"astro in package.json {section}")

        configs = [f for f in ASTRO_CONFIG_FILES if context.has_config_file(f)]
        for config in configs:
            collector.add(0.8, f"Astro config file: {config}")

        astro_files = context.files_with_suffix(".astro")
        if astro_files:
            collector.add(min(len(astro_files) * 0.1, 0.5), f"Astro component files found: {len(astro_files)}")

        integrations = [i for i in ASTRO_INTEGRATIONS if context.has_npm_dependency(i)]
        for integration in integrations:
            collector.add(0.2, f"Astro integration detected: {integration}")

        # Generic layout only counts once Astro itself is evident
        if collector.steps:
            for directory in ASTRO_DIRS:
                collector.add_if(context.has_dir(directory), 0.1, f"Astro directory structure: {directory}")
            collector.add_if(context.has_dir("public"), 0.1, "Public directory found (Astro convention)")

        scripts = context.npm_scripts()
        collector.add_if(
            any("astro" in scripts.get(name, "") for name in ("dev", "build", "preview")),
            0.3,
            "Astro scripts in package.json",
        )

        return collector.result(
            self.threshold,
            metadata={
                "has_astro_config": bool(configs),
                "astro_files_count": len(astro_files),
                "integrations": integrations,
            },
        )

    def detect_version(self, context: DetectionContext) -> Optional[str]:
        return npm_major(context, "astro")

    def generate_commands(self, module_context: ModuleContext) -> CommandBundle:
        stack = module_context.detected_stack
        pm = stack.package_manager

        test = [f"{pm} run test"]
        if stack.has_config(*VITEST_CONFIGS):
            test.append(f"{pm} run test:vitest")
        if stack.has_config(*PLAYWRIGHT_CONFIGS):
            test.append(f"{pm} run test:playwright")

        lint = js_lint_commands(pm)
        if stack.has_config("tsconfig.json"):
            lint.append(f"{pm} run check")

        return {
            "dev": [f"{pm} run dev"],
            "build": [f"{pm} run build", f"{pm} run preview"],
            "test": test,
            "lint": lint,
            "install": [f"{pm} install"],
        }

    def config_files(self) -> List[str]:
        return [
            *ASTRO_CONFIG_FILES,
            *NODE_MANIFEST_FILES,
            "tsconfig.json",
            *VITEST_CONFIGS,
            *PLAYWRIGHT_CONFIGS,
        ]
