from __future__ import annotations

from typing import List, Optional

from frankenai.core.evidence import EvidenceCollector
from frankenai.core.models import DetectionContext, DetectionResult, ModuleType, PriorityType
from frankenai.core.versions import major_version
from frankenai.modules.base import Module
from frankenai.modules.builtin.common import NODE_MANIFEST_FILES

JS_SUFFIXES = (".js", ".mjs", ".cjs")
JS_CONFIG_FILES = [
    ".eslintrc.js",
    ".eslintrc.cjs",
    ".eslintrc.mjs",
    "babel.config.js",
    "webpack.config.js",
    "rollup.config.js",
    "vite.config.js",
    "jest.config.js",
    "vitest.config.js",
]
JS_DIRS = ["src", "lib", "public", "dist", "build", "node_modules"]


class JavaScriptModule(Module):
    """JavaScript / Node.js base language."""

    @property
    def id(self) -> str:
        return "javascript"

    @property
    def display_name(self) -> str:
        return "JavaScript"

    @property
    def module_type(self) -> ModuleType:
        return ModuleType.LANGUAGE

    @property
    def priority_type(self) -> PriorityType:
        return PriorityType.BASE_LANG

    def detect(self, context: DetectionContext) -> DetectionResult:
        collector = EvidenceCollector()

        collector.add_if(context.package_json is not None, 0.8, "package.json found")

        js_files = context.files_with_suffix(*JS_SUFFIXES)
        if js_files:
            collector.add(min(len(js_files) * 0.05, 0.5), f"JavaScript files found: {len(js_files)}")

        node_file = next((f for f in NODE_MANIFEST_FILES if context.has_config_file(f)), None)
        collector.add_if(node_file, 0.2, f"Node.js file: {node_file}")

        found_configs = [f for f in JS_CONFIG_FILES if context.has_config_file(f)]
        for config in found_configs:
            collector.add(0.1, f"JavaScript config file: {config}")

        if collector.steps:
            for directory in JS_DIRS:
                collector.add_if(context.has_dir(directory), 0.05, f"JavaScript directory: {directory}/")

        ts_files = [f for f in context.files if f.endswith(".ts") and not f.endswith(".d.ts")]
        if len(ts_files) > len(js_files):
            collector.scale(0.5, "More TypeScript files detected, reducing JavaScript confidence")

        return collector.result(
            self.threshold,
            metadata={
                "has_package_json": context.package_json is not None,
                "js_files_count": len(js_files),
                "ts_files_count": len(ts_files),
                "config_files_found": found_configs,
            },
        )

    def detect_version(self, context: DetectionContext) -> Optional[str]:
        """Node.js major version from ``engines.node`` or ``.nvmrc``."""
        engines = (context.package_json or {}).get("engines") or {}
        node = engines.get("node") if isinstance(engines, dict) else None
        if node:
            return major_version(str(node))
        nvmrc = context.read_text(".nvmrc")
        return major_version(nvmrc.strip()) if nvmrc else None

    def config_files(self) -> List[str]:
        return [*NODE_MANIFEST_FILES, *JS_CONFIG_FILES, ".nvmrc"]
