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
from frankenai.modules.builtin.common import NODE_MANIFEST_FILES, npm_major, npx

TS_PACKAGES = ["@types/node", "@types/react", "@types/express", "ts-node", "tsx", "ts-loader", "typescript-eslint"]
TS_CONFIG_FILES = [
    "tsconfig.json",
    "tsconfig.build.json",
    "tsconfig.dev.json",
    ".eslintrc.ts",
    "jest.config.ts",
    "vite.config.ts",
    "webpack.config.ts",
]


class TypeScriptModule(Module):
    """TypeScript language."""

    @property
    def id(self) -> str:
        return "typescript"

    @property
    def display_name(self) -> str:
        return "TypeScript"

    @property
    def module_type(self) -> ModuleType:
        return ModuleType.LANGUAGE

    @property
    def priority_type(self) -> PriorityType:
        return PriorityType.SPECIALIZED_LANG

    def detect(self, context: DetectionContext) -> DetectionResult:
        collector = EvidenceCollector()

        collector.add_if(context.has_config_file("tsconfig.json"), 0.9, "tsconfig.json found")
        collector.add_if(
            context.has_npm_dependency("typescript"), 0.8, "typescript in package.json dependencies"
        )

        ts_files = [
            f for f in context.files if (f.endswith(".ts") and not f.endswith(".d.ts")) or f.endswith(".tsx")
        ]
        if ts_files:
            collector.add(min(len(ts_files) * 0.1, 0.7), f"TypeScript files found: {len(ts_files)}")

        dts_files = context.files_with_suffix(".d.ts")
        if dts_files:
            collector.add(min(len(dts_files) * 0.05, 0.3), f"TypeScript declaration files found: {len(dts_files)}")

        found_packages = [p for p in TS_PACKAGES if context.has_npm_dependency(p)]
        for package in found_packages:
            collector.add(0.1, f"TypeScript package detected: {package}")

        for config in TS_CONFIG_FILES:
            collector.add_if(context.has_config_file(config), 0.2, f"TypeScript config file: {config}")

        return collector.result(
            self.threshold,
            metadata={
                "has_tsconfig": context.has_config_file("tsconfig.json"),
                "ts_files_count": len(ts_files),
                "dts_files_count": len(dts_files),
                "ts_packages_found": found_packages,
            },
        )

    def detect_version(self, context: DetectionContext) -> Optional[str]:
        return npm_major(context, "typescript")

    def generate_commands(self, module_context: ModuleContext) -> CommandBundle:
        stack = module_context.detected_stack
        if not stack.has_config("tsconfig.json"):
            return {}
        return {"lint": [f"{npx(stack.package_manager)} tsc --noEmit"]}

    def config_files(self) -> List[str]:
        return [*TS_CONFIG_FILES, *NODE_MANIFEST_FILES, "rollup.config.ts"]
