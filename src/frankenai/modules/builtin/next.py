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
    JS_TEST_CONFIG_FILES,
    NODE_MANIFEST_FILES,
    js_lint_commands,
    js_test_commands,
    npm_major,
)

NEXT_CONFIG_FILES = ["next.config.js", "next.config.ts", "next.config.mjs"]
NEXT_DIRS = ["pages", "app", "public"]
NEXT_FILES = [
    "pages/_app.js",
    "pages/_app.tsx",
    "pages/_document.js",
    "pages/_document.tsx",
    "app/layout.js",
    "app/layout.tsx",
    "app/page.js",
    "app/page.tsx",
]


class NextModule(Module):
    """Next.js, which bundles React."""

    @property
    def id(self) -> str:
        return "next"

    @property
    def display_name(self) -> str:
        return "Next.js"

    @property
    def module_type(self) -> ModuleType:
        return ModuleType.FRAMEWORK

    @property
    def priority_type(self) -> PriorityType:
        return PriorityType.META_FRAMEWORK

    def detect(self, context: DetectionContext) -> DetectionResult:
        collector = EvidenceCollector()

        for section in context.npm_sections_with("next"):
            collector.add(0.9, f"next in package.json {section}")

        configs = [f for f in NEXT_CONFIG_FILES if context.has_config_file(f)]
        for config in configs:
            collector.add(0.8, f"Next.js config file: {config}")

        # Layout evidence only counts once Next.js itself is declared
        if collector.steps:
            for directory in NEXT_DIRS:
                collector.add_if(context.has_dir(directory), 0.3, f"Next.js directory structure: {directory}")
            for path in NEXT_FILES:
                collector.add_if(context.has_file(path), 0.2, f"Next.js file: {path}")
            collector.add_if(context.has_dir(".next"), 0.1, "Next.js build directory (.next) found")

        scripts = context.npm_scripts()
        collector.add_if(
            any("next" in scripts.get(name, "") for name in ("dev", "build", "start")),
            0.3,
            "Next.js scripts in package.json",
        )

        result = collector.result(
            self.threshold,
            excludes=["react"],
            metadata={
                "has_next_config": bool(configs),
                "has_pages_dir": context.has_dir("pages"),
                "has_app_dir": context.has_dir("app"),
            },
        )
        if result.detected:
            result.evidence.append("Next.js includes React - excluding standalone React guidelines")
        return result

    def detect_version(self, context: DetectionContext) -> Optional[str]:
        return npm_major(context, "next")

    def generate_commands(self, module_context: ModuleContext) -> CommandBundle:
        stack = module_context.detected_stack
        pm = stack.package_manager
        return {
            "dev": [f"{pm} run dev", f"{pm} run start"],
            "build": [f"{pm} run build", f"{pm} run export"],
            "test": js_test_commands(stack, pm),
            "lint": js_lint_commands(pm),
            "install": [f"{pm} install"],
        }

    def config_files(self) -> List[str]:
        return [*NEXT_CONFIG_FILES, *NODE_MANIFEST_FILES, "tsconfig.json", *JS_TEST_CONFIG_FILES]
