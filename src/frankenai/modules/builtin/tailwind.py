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
from frankenai.modules.builtin.common import npm_major, npx

TAILWIND_CONFIG_FILES = ["tailwind.config.js", "tailwind.config.ts", "tailwind.config.mjs", "tailwind.config.cjs"]
POSTCSS_CONFIG_FILES = ["postcss.config.js", "postcss.config.ts"]
TAILWIND_PLUGINS = {
    "@tailwindcss/typography": "Tailwind typography plugin detected",
    "@tailwindcss/forms": "Tailwind forms plugin detected",
}
HEADLESS_UI = ["@headlessui/react", "@headlessui/vue"]
ENTRY_STYLESHEETS = ["globals.css", "app.css", "main.css", "index.css", "style.css"]
COMPONENT_SUFFIXES = (".jsx", ".tsx", ".vue", ".svelte")


class TailwindModule(Module):
    """Tailwind CSS utility framework."""

    @property
    def id(self) -> str:
        return "tailwind"

    @property
    def display_name(self) -> str:
        return "Tailwind CSS"

    @property
    def module_type(self) -> ModuleType:
        return ModuleType.LIBRARY

    @property
    def priority_type(self) -> PriorityType:
        return PriorityType.CSS_FRAMEWORK

    def detect(self, context: DetectionContext) -> DetectionResult:
        collector = EvidenceCollector()

        collector.add_if(context.has_npm_dependency("tailwindcss"), 0.8, "tailwindcss in package.json dependencies")
        for package, label in TAILWIND_PLUGINS.items():
            collector.add_if(context.has_npm_dependency(package), 0.1, label)
        collector.add_if(
            any(context.has_npm_dependency(p) for p in HEADLESS_UI),
            0.1,
            "Headless UI (Tailwind companion) detected",
        )
        collector.add_if(
            any(context.has_config_file(f) for f in TAILWIND_CONFIG_FILES), 0.6, "Tailwind config file found"
        )

        if collector.steps:
            collector.add_if(
                any(context.has_config_file(f) for f in POSTCSS_CONFIG_FILES),
                0.1,
                "PostCSS config found (commonly used with Tailwind)",
            )
            collector.add_if(
                any(f.rsplit("/", 1)[-1] in ENTRY_STYLESHEETS for f in context.files),
                0.2,
                "CSS files that commonly contain Tailwind imports found",
            )
            components = context.files_with_suffix(*COMPONENT_SUFFIXES)
            collector.add_if(components, 0.1, f"Component files found: {len(components)}")

        return collector.result(self.threshold)

    def detect_version(self, context: DetectionContext) -> Optional[str]:
        return npm_major(context, "tailwindcss")

    def generate_commands(self, module_context: ModuleContext) -> CommandBundle:
        stack = module_context.detected_stack
        pm = stack.package_manager
        build = [f"{pm} run build"]
        if stack.has_config("tailwind.config.js", "tailwind.config.ts"):
            build.insert(0, f"{npx(pm)} tailwindcss build")
        if stack.has_config(*POSTCSS_CONFIG_FILES):
            build.append(f"{npx(pm)} postcss src/styles.css -o dist/styles.css")
        return {
            "dev": [f"{pm} run dev"],
            "build": build,
            "test": [f"{pm} run test"],
            "lint": [f"{pm} run lint"],
            "install": [f"{pm} install"],
        }

    def config_files(self) -> List[str]:
        return [*TAILWIND_CONFIG_FILES, *POSTCSS_CONFIG_FILES]
