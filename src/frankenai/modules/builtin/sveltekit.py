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
    locked_npm_major,
)

SVELTEKIT_ADAPTERS = [
    "@sveltejs/adapter-auto",
    "@sveltejs/adapter-static",
    "@sveltejs/adapter-node",
    "@sveltejs/adapter-vercel",
    "@sveltejs/adapter-netlify",
]
SVELTEKIT_DIRS = ["src/routes", "src/lib"]
SVELTEKIT_FILES = [
    "src/routes/+layout.svelte",
    "src/routes/+page.svelte",
    "src/routes/+layout.js",
    "src/routes/+page.js",
    "src/routes/+layout.ts",
    "src/routes/+page.ts",
]


class SvelteKitModule(Module):
    """SvelteKit application framework."""

    @property
    def id(self) -> str:
        return "sveltekit"

    @property
    def display_name(self) -> str:
        return "SvelteKit"

    @property
    def module_type(self) -> ModuleType:
        return ModuleType.FRAMEWORK

    @property
    def priority_type(self) -> PriorityType:
        return PriorityType.META_FRAMEWORK

    def detect(self, context: DetectionContext) -> DetectionResult:
        collector = EvidenceCollector()

        for section in context.npm_sections_with("@sveltejs/kit"):
            collector.add(0.9, f"@sveltejs/kit in package.json {section}")

        adapter = next((a for a in SVELTEKIT_ADAPTERS if context.has_npm_dependency(a)), None)
        collector.add_if(adapter, 0.3, f"SvelteKit adapter detected: {adapter}")

        if context.has_config_file("svelte.config.js"):
            content = context.read_text("svelte.config.js") or ""
            collector.add_if(
                "@sveltejs/kit" in content or "kit:" in content,
                0.8,
                "svelte.config.js with SvelteKit configuration",
            )

        if collector.steps:
            for directory in SVELTEKIT_DIRS:
                collector.add_if(context.has_dir(directory), 0.2, f"SvelteKit directory structure: {directory}")
            collector.add_if(context.has_file("src/app.html"), 0.3, "SvelteKit file: src/app.html")
            for path in SVELTEKIT_FILES:
                collector.add_if(context.has_file(path), 0.2, f"SvelteKit file: {path}")
            collector.add_if(context.has_dir(".svelte-kit"), 0.1, "SvelteKit build directory (.svelte-kit) found")

            scripts = context.npm_scripts()
            collector.add_if(
                any("vite" in scripts.get(name, "") for name in ("dev", "build", "preview")),
                0.2,
                "SvelteKit Vite scripts in package.json",
            )

        return collector.result(
            self.threshold,
            excludes=["svelte"],
            metadata={
                "has_svelte_config": context.has_config_file("svelte.config.js"),
                "has_routes_dir": context.has_dir("src/routes"),
                "adapter": adapter,
            },
        )

    def detect_version(self, context: DetectionContext) -> Optional[str]:
        return locked_npm_major(context, "@sveltejs/kit")

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
            "svelte.config.js",
            "vite.config.js",
            "vite.config.ts",
            *NODE_MANIFEST_FILES,
            "tsconfig.json",
            *VITEST_CONFIGS,
            *PLAYWRIGHT_CONFIGS,
        ]
