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

BOOTSTRAP_COMPANIONS = [
    ("bootstrap-icons", 0.1, "Bootstrap Icons detected"),
    ("@popperjs/core", 0.1, "Popper.js (Bootstrap dependency) detected"),
    ("react-bootstrap", 0.2, "React Bootstrap detected"),
    ("bootstrap-vue", 0.2, "Vue Bootstrap detected"),
    ("@ng-bootstrap/ng-bootstrap", 0.2, "Angular Bootstrap (ng-bootstrap) detected"),
]


class BootstrapModule(Module):
    """Bootstrap CSS framework."""

    @property
    def id(self) -> str:
        return "bootstrap"

    @property
    def display_name(self) -> str:
        return "Bootstrap"

    @property
    def module_type(self) -> ModuleType:
        return ModuleType.LIBRARY

    @property
    def priority_type(self) -> PriorityType:
        return PriorityType.CSS_FRAMEWORK

    def detect(self, context: DetectionContext) -> DetectionResult:
        collector = EvidenceCollector()

        collector.add_if(context.has_npm_dependency("bootstrap"), 0.8, "bootstrap in package.json dependencies")
        for package, weight, label in BOOTSTRAP_COMPANIONS:
            collector.add_if(context.has_npm_dependency(package), weight, label)

        if collector.steps:
            stylesheets = context.files_with_suffix(".css", ".scss")
            collector.add_if(
                any("bootstrap" in f or "vendor" in f for f in stylesheets),
                0.2,
                "CSS files that commonly contain Bootstrap imports found",
            )
            html = context.files_with_suffix(".html")
            collector.add_if(html, 0.1, f"HTML files found: {len(html)}")
            scss = context.files_with_suffix(".scss")
            collector.add_if(scss, 0.1, "SCSS files found (commonly used with Bootstrap customization)")

        return collector.result(self.threshold)

    def detect_version(self, context: DetectionContext) -> Optional[str]:
        return npm_major(context, "bootstrap")

    def generate_commands(self, module_context: ModuleContext) -> CommandBundle:
        stack = module_context.detected_stack
        pm = stack.package_manager
        build = [f"{pm} run build"]
        if stack.has_config("gulpfile.js", "gulpfile.ts"):
            build.append(f"{npx(pm)} gulp build")
        if stack.has_config("webpack.config.js", "webpack.config.ts"):
            build.append(f"{npx(pm)} webpack --mode production")
        return {
            "dev": [f"{pm} run dev"],
            "build": build,
            "install": [f"{pm} install"],
        }

    def config_files(self) -> List[str]:
        return ["gulpfile.js", "gulpfile.ts", "webpack.config.js", "webpack.config.ts"]
