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

VUE_CONFIG_FILES = ["vue.config.js", "vue.config.ts"]
VUE_DIRS = ["src/components", "src/views", "src/pages"]


class VueModule(Module):
    """Vue.js UI framework."""

    @property
    def id(self) -> str:
        return "vue"

    @property
    def display_name(self) -> str:
        return "Vue.js"

    @property
    def module_type(self) -> ModuleType:
        return ModuleType.FRAMEWORK

    @property
    def priority_type(self) -> PriorityType:
        return PriorityType.FRAMEWORK

    def detect(self, context: DetectionContext) -> DetectionResult:
        collector = EvidenceCollector()

        for section in context.npm_sections_with("vue"):
            collector.add(0.9, f"vue in package.json {section}")
        for config in VUE_CONFIG_FILES:
            collector.add_if(context.has_config_file(config), 0.8, f"Vue config file: {config}")
        collector.add_if(
            any(context.has_config_file(f) for f in VITE_CONFIGS)
            and context.has_npm_dependency("@vitejs/plugin-vue"),
            0.7,
            "Vite with Vue plugin detected",
        )

        vue_files = context.files_with_suffix(".vue")
        if vue_files:
            collector.add(min(len(vue_files) * 0.1, 0.5), f"Vue single file components found: {len(vue_files)}")

        collector.add_if(context.has_npm_dependency("vue-router"), 0.2, "Vue Router detected")
        collector.add_if(
            context.has_npm_dependency("vuex") or context.has_npm_dependency("pinia"),
            0.2,
            "Vue state management detected",
        )
        if collector.steps:
            for directory in VUE_DIRS:
                collector.add_if(context.has_dir(directory), 0.1, f"Vue directory structure: {directory}")

        return collector.result(
            self.threshold,
            metadata={
                "vue_files_count": len(vue_files),
                "has_vue_router": context.has_npm_dependency("vue-router"),
                "has_pinia": context.has_npm_dependency("pinia"),
            },
        )

    def detect_version(self, context: DetectionContext) -> Optional[str]:
        return npm_major(context, "vue")

    def generate_commands(self, module_context: ModuleContext) -> CommandBundle:
        stack = module_context.detected_stack
        pm = stack.package_manager
        return {
            "dev": [f"{pm} run dev", f"{pm} run serve"],
            "build": [f"{pm} run build"],
            "test": js_test_commands(stack, pm),
            "lint": js_lint_commands(pm),
            "install": [f"{pm} install"],
        }

    def config_files(self) -> List[str]:
        return [*VUE_CONFIG_FILES, *VITE_CONFIGS, *NODE_MANIFEST_FILES, *JS_TEST_CONFIG_FILES]
