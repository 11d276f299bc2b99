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

NUXT_CONFIG_FILES = ["nuxt.config.js", "nuxt.config.ts"]
NUXT_DIRS = ["pages", "components", "layouts", "middleware", "plugins", "assets", "static"]


class NuxtModule(Module):
    """Nuxt, which bundles Vue."""

    @property
    def id(self) -> str:
        return "nuxt"

    @property
    def display_name(self) -> str:
        return "Nuxt.js"

    @property
    def module_type(self) -> ModuleType:
        return ModuleType.FRAMEWORK

    @property
    def priority_type(self) -> PriorityType:
        return PriorityType.META_FRAMEWORK

    def detect(self, context: DetectionContext) -> DetectionResult:
        collector = EvidenceCollector()

        for section in context.npm_sections_with("nuxt"):
            collector.add(0.9, f"nuxt in package.json {section}")
        collector.add_if(context.has_npm_dependency("nuxt-edge"), 0.8, "nuxt-edge in dependencies")

        configs = [f for f in NUXT_CONFIG_FILES if context.has_config_file(f)]
        for config in configs:
            collector.add(0.8, f"Nuxt config file: {config}")

        dir_count = 0
        if collector.steps:
            for directory in NUXT_DIRS:
                if collector.add_if(context.has_dir(directory), 0.1, f"Nuxt directory structure: {directory}"):
                    dir_count += 1
            collector.add_if(dir_count >= 3, 0.2, "Multiple Nuxt directories found")
            collector.add_if(context.has_dir(".nuxt"), 0.1, "Nuxt build directory (.nuxt) found")

        scripts = context.npm_scripts()
        collector.add_if(
            any("nuxt" in scripts.get(name, "") for name in ("dev", "build", "generate")),
            0.3,
            "Nuxt scripts in package.json",
        )
        if collector.steps:
            collector.add_if(context.has_npm_dependency("vue"), 0.1, "Vue.js detected (Nuxt dependency)")

        result = collector.result(
            self.threshold,
            excludes=["vue"],
            metadata={"has_nuxt_config": bool(configs), "nuxt_dir_count": dir_count},
        )
        if result.detected:
            result.evidence.append("Nuxt.js includes Vue.js - excluding standalone Vue guidelines")
        return result

    def detect_version(self, context: DetectionContext) -> Optional[str]:
        return npm_major(context, "nuxt")

    def generate_commands(self, module_context: ModuleContext) -> CommandBundle:
        stack = module_context.detected_stack
        pm = stack.package_manager
        return {
            "dev": [f"{pm} run dev", f"{pm} run start"],
            "build": [f"{pm} run build", f"{pm} run generate"],
            "test": js_test_commands(stack, pm),
            "lint": js_lint_commands(pm),
            "install": [f"{pm} install"],
        }

    def config_files(self) -> List[str]:
        return [*NUXT_CONFIG_FILES, *NODE_MANIFEST_FILES, "tsconfig.json", *JS_TEST_CONFIG_FILES]
