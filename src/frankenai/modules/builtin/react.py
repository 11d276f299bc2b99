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

REACT_VITE_PLUGINS = ["@vitejs/plugin-react", "@vitejs/plugin-react-swc"]
REACT_STATE_LIBRARIES = ["redux", "@reduxjs/toolkit", "zustand", "jotai", "recoil"]
REACT_DIRS = ["src/components", "src/pages", "src/hooks"]


def _is_component_file(path: str) -> bool:
    if path.endswith((".jsx", ".tsx")):
        return True
    return path.endswith((".js", ".ts")) and "src/" in path


class ReactModule(Module):
    """React UI library."""

    @property
    def id(self) -> str:
        return "react"

    @property
    def display_name(self) -> str:
        return "React"

    @property
    def module_type(self) -> ModuleType:
        return ModuleType.FRAMEWORK

    @property
    def priority_type(self) -> PriorityType:
        return PriorityType.FRAMEWORK

    def detect(self, context: DetectionContext) -> DetectionResult:
        collector = EvidenceCollector()
        pkg_deps = (context.package_json or {}).get("dependencies") or {}

        for section in context.npm_sections_with("react"):
            collector.add(0.9, f"react in package.json {section}")
        collector.add_if("react-dom" in pkg_deps, 0.8, "react-dom in dependencies")
        collector.add_if(context.has_npm_dependency("react-scripts"), 0.7, "Create React App detected")
        collector.add_if(
            any(context.has_config_file(f) for f in VITE_CONFIGS)
            and any(context.has_npm_dependency(p) for p in REACT_VITE_PLUGINS),
            0.7,
            "Vite with React plugin detected",
        )

        component_files = [f for f in context.files if _is_component_file(f)]
        if collector.steps:
            if component_files:
                collector.add(
                    min(len(component_files) * 0.05, 0.3),
                    f"React component files found: {len(component_files)}",
                )
            collector.add_if(context.has_npm_dependency("react-router-dom"), 0.2, "React Router detected")
            state = next((lib for lib in REACT_STATE_LIBRARIES if context.has_npm_dependency(lib)), None)
            collector.add_if(state, 0.1, f"React state management ({state}) detected")
            for directory in REACT_DIRS:
                collector.add_if(context.has_dir(directory), 0.1, f"React directory structure: {directory}")
            collector.add_if(
                context.has_file("public/index.html"), 0.1, "React app structure (public/index.html)"
            )

        return collector.result(
            self.threshold,
            metadata={
                "has_react_dom": "react-dom" in pkg_deps,
                "has_react_router": context.has_npm_dependency("react-router-dom"),
                "has_create_react_app": context.has_npm_dependency("react-scripts"),
                "react_files_count": len(component_files),
            },
        )

    def detect_version(self, context: DetectionContext) -> Optional[str]:
        return locked_npm_major(context, "react")

    def generate_commands(self, module_context: ModuleContext) -> CommandBundle:
        stack = module_context.detected_stack
        pm = stack.package_manager
        return {
            "dev": [f"{pm} run dev", f"{pm} run start"],
            "build": [f"{pm} run build"],
            "test": js_test_commands(stack, pm),
            "lint": js_lint_commands(pm),
            "install": [f"{pm} install"],
        }

    def config_files(self) -> List[str]:
        return [*VITE_CONFIGS, *NODE_MANIFEST_FILES, *JS_TEST_CONFIG_FILES]
