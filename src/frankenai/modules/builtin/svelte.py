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
    VITE_CONFIGS,
    js_lint_commands,
    js_test_commands,
    locked_npm_major,
)

SVELTE_DIRS = ["src/lib", "src/routes", "src/components"]


class SvelteModule(Module):
    """Svelte component framework."""

    @property
    def id(self) -> str:
        return "svelte"

    @property
    def display_name(self) -> str:
        return "Svelte"

    @property
    def module_type(self) -> ModuleType:
        return ModuleType.FRAMEWORK

    @property
    def priority_type(self) -> PriorityType:
        return PriorityType.FRAMEWORK

    def detect(self, context: DetectionContext) -> DetectionResult:
        collector = EvidenceCollector()

        for section in context.npm_sections_with("svelte"):
            collector.add(0.9, f"svelte in package.json {section}")
        collector.add_if(
            any(context.has_config_file(f) for f in VITE_CONFIGS)
            and context.has_npm_dependency("@sveltejs/vite-plugin-svelte"),
            0.8,
            "Vite with Svelte plugin detected",
        )
        collector.add_if(
            context.has_config_file("rollup.config.js")
            and context.has_npm_dependency("rollup-plugin-svelte"),
            0.7,
            "Rollup with Svelte plugin detected",
        )

        svelte_files = context.files_with_suffix(".svelte")
        if svelte_files:
            collector.add(min(len(svelte_files) * 0.1, 0.5), f"Svelte component files found: {len(svelte_files)}")

        if collector.steps:
            for directory in SVELTE_DIRS:
                collector.add_if(context.has_dir(directory), 0.1, f"Svelte directory structure: {directory}")

        collector.add_if(context.has_config_file("svelte.config.js"), 0.7, "svelte.config.js found")

        return collector.result(
            self.threshold,
            metadata={
                "has_svelte_config": context.has_config_file("svelte.config.js"),
                "svelte_files_count": len(svelte_files),
            },
        )

    def detect_version(self, context: DetectionContext) -> Optional[str]:
        return locked_npm_major(context, "svelte")

    def generate_commands(self, module_context: ModuleContext) -> CommandBundle:
        stack = module_context.detected_stack
        pm = stack.package_manager
        lint = js_lint_commands(pm)
        if stack.has_config("tsconfig.json"):
            lint.append(f"{pm} run check")
        return {
            "dev": [f"{pm} run dev"],
            "build": [f"{pm} run build"],
            "test": js_test_commands(stack, pm),
            "lint": lint,
            "install": [f"{pm} install"],
        }

    def config_files(self) -> List[str]:
        return [
            "svelte.config.js",
            "rollup.config.js",
            *VITE_CONFIGS,
            *NODE_MANIFEST_FILES,
            "tsconfig.json",
            *JS_TEST_CONFIG_FILES,
        ]
