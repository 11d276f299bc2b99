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
    npm_major,
)

SOLID_BUILD_TOOLS = ["vite-plugin-solid", "@solidjs/router", "solid-start", "babel-preset-solid"]
SOLID_START_CONFIGS = ["app.config.ts", "app.config.js"]
SOLID_DIRS = ["src/components", "src/routes", "src/pages"]


class SolidModule(Module):
    """Solid.js reactive UI library."""

    @property
    def id(self) -> str:
        return "solid"

    @property
    def display_name(self) -> str:
        return "Solid.js"

    @property
    def module_type(self) -> ModuleType:
        return ModuleType.FRAMEWORK

    @property
    def priority_type(self) -> PriorityType:
        return PriorityType.FRAMEWORK

    def detect(self, context: DetectionContext) -> DetectionResult:
        collector = EvidenceCollector()

        for section in context.npm_sections_with("solid-js"):
            collector.add(0.9, f"solid-js in package.json {section}")
        collector.add_if(
            any(context.has_config_file(f) for f in VITE_CONFIGS)
            and context.has_npm_dependency("vite-plugin-solid"),
            0.8,
            "Vite with Solid plugin detected",
        )
        build_tools = [tool for tool in SOLID_BUILD_TOOLS if context.has_npm_dependency(tool)]
        for tool in build_tools:
            collector.add(0.3, f"Solid build tool detected: {tool}")

        scripts = context.npm_scripts()
        collector.add_if(
            any("solid" in script for script in scripts.values()),
            0.2,
            "Solid-related scripts in package.json",
        )

        # JSX and layout are shared with React, so they only support other evidence
        jsx_files = context.files_with_suffix(".jsx", ".tsx")
        if collector.steps:
            if jsx_files:
                collector.add(min(len(jsx_files) * 0.05, 0.3), f"JSX/TSX files found: {len(jsx_files)}")
            for directory in SOLID_DIRS:
                collector.add_if(context.has_dir(directory), 0.1, f"Solid directory structure: {directory}")
            collector.add_if(
                any(context.has_config_file(f) for f in SOLID_START_CONFIGS),
                0.3,
                "Solid Start config detected",
            )

        return collector.result(
            self.threshold,
            metadata={
                "has_vite_plugin": context.has_npm_dependency("vite-plugin-solid"),
                "has_solid_start": context.has_npm_dependency("solid-start"),
                "jsx_files_count": len(jsx_files),
                "build_tools": build_tools,
            },
        )

    def detect_version(self, context: DetectionContext) -> Optional[str]:
        return npm_major(context, "solid-js")

    def generate_commands(self, module_context: ModuleContext) -> CommandBundle:
        stack = module_context.detected_stack
        pm = stack.package_manager
        lint = js_lint_commands(pm)
        if stack.has_config("tsconfig.json"):
            lint.append(f"{pm} run typecheck")
        return {
            "dev": [f"{pm} run dev"],
            "build": [f"{pm} run build"],
            "test": js_test_commands(stack, pm),
            "lint": lint,
            "install": [f"{pm} install"],
        }

    def config_files(self) -> List[str]:
        return [
            *VITE_CONFIGS,
            *SOLID_START_CONFIGS,
            *NODE_MANIFEST_FILES,
            "tsconfig.json",
            *JS_TEST_CONFIG_FILES,
        ]
