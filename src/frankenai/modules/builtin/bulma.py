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
from frankenai.core.versions import major_version
from frankenai.modules.base import CommandBundle, Module
from frankenai.modules.builtin.common import npm_major, npx

BULMA_COMPANIONS = [
    (("@bulma/extensions",), 0.1, "Bulma extensions detected"),
    (("bulma-extensions",), 0.1, "Bulma community extensions detected"),
    (("react-bulma-components",), 0.2, "React Bulma components detected"),
    (("vue-bulma-components", "buefy"), 0.2, "Vue Bulma components detected"),
    (("ngx-bulma",), 0.2, "Angular Bulma components detected"),
]
COMPONENT_SUFFIXES = (".jsx", ".tsx", ".vue", ".svelte", ".component.ts", ".component.html")


class BulmaModule(Module):
    """Bulma CSS framework. Guidelines are split into 0.9 and 1.x."""

    @property
    def id(self) -> str:
        return "bulma"

    @property
    def display_name(self) -> str:
        return "Bulma"

    @property
    def module_type(self) -> ModuleType:
        return ModuleType.LIBRARY

    @property
    def priority_type(self) -> PriorityType:
        return PriorityType.CSS_FRAMEWORK

    def detect(self, context: DetectionContext) -> DetectionResult:
        collector = EvidenceCollector()

        collector.add_if(context.has_npm_dependency("bulma"), 0.8, "bulma in package.json dependencies")
        for packages, weight, label in BULMA_COMPANIONS:
            collector.add_if(any(context.has_npm_dependency(p) for p in packages), weight, label)

        stylesheets = context.files_with_suffix(".css", ".scss", ".sass")
        collector.add_if(
            any("bulma" in f.rsplit("/", 1)[-1] for f in stylesheets),
            0.3,
            "Bulma stylesheet found",
        )

        if collector.steps:
            collector.add_if(
                any("vendor" in f for f in stylesheets),
                0.2,
                "CSS files that commonly contain Bulma imports found",
            )
            html = context.files_with_suffix(".html")
            collector.add_if(html, 0.1, f"HTML files found: {len(html)}")
            components = context.files_with_suffix(*COMPONENT_SUFFIXES)
            collector.add_if(components, 0.1, f"Component files found: {len(components)}")
            collector.add_if(
                context.files_with_suffix(".scss", ".sass"),
                0.1,
                "SCSS/Sass files found (commonly used with Bulma customization)",
            )

        return collector.result(self.threshold)

    def detect_version(self, context: DetectionContext) -> Optional[str]:
        major = npm_major(context, "bulma")
        return self.version_key(major) if major else None

    def version_key(self, version: str) -> Optional[str]:
        """Bulma 1.x has its own guidelines; everything older uses 0.9."""
        major = major_version(version)
        if major is None:
            return None
        return "1" if int(major) >= 1 else "0.9"

    def generate_commands(self, module_context: ModuleContext) -> CommandBundle:
        stack = module_context.detected_stack
        pm = stack.package_manager
        runner = npx(pm)

        dev = [f"{pm} run dev", f"{pm} run serve", f"{pm} run start"]
        build = [f"{pm} run build"]
        if stack.has_config("webpack.config.js", "webpack.config.ts"):
            build.insert(0, f"{runner} webpack --mode production")
        if stack.has_config("gulpfile.js", "gulpfile.ts"):
            build.append(f"{runner} gulp build")
            dev.insert(0, f"{runner} gulp watch")
        if stack.has_config("sass.config.js"):
            build.append(f"{runner} sass src/scss:dist/css")

        return {
            "dev": dev,
            "build": build,
            "test": [f"{pm} run test"],
            "lint": [f"{pm} run lint"],
            "install": [f"{pm} install"],
        }

    def config_files(self) -> List[str]:
        return [
            "webpack.config.js",
            "webpack.config.ts",
            "gulpfile.js",
            "gulpfile.ts",
            "sass.config.js",
            "bulma.config.js",
        ]
