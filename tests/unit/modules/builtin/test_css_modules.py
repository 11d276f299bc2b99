"""Tests for the CSS framework modules."""

from __future__ import annotations

from pathlib import Path

import pytest

from frankenai.core.models import DetectedStack, DetectionContext, ModuleContext
from frankenai.modules.builtin import BootstrapModule, BulmaModule, TailwindModule


class TestTailwindModule:
    """Tests for TailwindModule."""

    def test_constraint_major_selects_two_paths(self, tmp_path: Path) -> None:
        """Test that ^4.2.1 resolves to version 4 and two guideline paths."""
        context = DetectionContext(
            project_root=tmp_path,
            package_json={"devDependencies": {"tailwindcss": "^4.2.1"}},
        )
        module = TailwindModule()

        assert module.detect(context).detected is True
        version = module.detect_version(context)
        assert version == "4"
        assert [p.path for p in module.get_guideline_paths(version)] == [
            "tailwind/guidelines/css-framework.md",
            "tailwind/guidelines/4/features.md",
        ]

    def test_stylesheets_need_tailwind_anchor(self, tmp_path: Path) -> None:
        """Test that app.css and components alone are not Tailwind."""
        context = DetectionContext(
            project_root=tmp_path,
            files=("resources/css/app.css", "src/App.tsx"),
            config_files=("postcss.config.js",),
        )
        assert TailwindModule().detect(context).detected is False

    def test_build_commands(self) -> None:
        """Test config-dependent build commands."""
        stack = DetectedStack(
            package_managers=["pnpm"],
            config_files=["tailwind.config.js", "postcss.config.js"],
        )
        commands = TailwindModule().generate_commands(ModuleContext(detected_stack=stack))

        assert commands["build"] == [
            "pnpm tailwindcss build",
            "pnpm run build",
            "pnpm postcss src/styles.css -o dist/styles.css",
        ]


class TestBootstrapModule:
    """Tests for BootstrapModule."""

    def test_detects_bootstrap(self, tmp_path: Path) -> None:
        """Test detection and version."""
        context = DetectionContext(
            project_root=tmp_path,
            files=("src/scss/custom.scss",),
            package_json={"dependencies": {"bootstrap": "^5.3.3", "@popperjs/core": "^2.11.8"}},
        )
        module = BootstrapModule()
        result = module.detect(context)

        assert result.detected is True
        assert "Popper.js (Bootstrap dependency) detected" in result.evidence
        assert module.detect_version(context) == "5"

    def test_html_alone_is_not_bootstrap(self, tmp_path: Path) -> None:
        """Test that markup without the package is no evidence."""
        context = DetectionContext(project_root=tmp_path, files=("index.html", "style.scss"))
        assert BootstrapModule().detect(context).detected is False


class TestBulmaModule:
    """Tests for BulmaModule."""

    def test_detects_bulma_with_companion(self, tmp_path: Path) -> None:
        """Test detection from the package and a component library."""
        context = DetectionContext(
            project_root=tmp_path,
            files=("src/App.vue", "src/styles/main.scss"),
            package_json={"dependencies": {"bulma": "^1.0.2", "buefy": "^0.9.29"}},
        )
        result = BulmaModule().detect(context)

        assert result.detected is True
        assert "Vue Bulma components detected" in result.evidence
        assert "SCSS/Sass files found (commonly used with Bulma customization)" in result.evidence

    @pytest.mark.parametrize(
        "constraint,expected",
        [("^1.0.2", "1"), ("^0.9.4", "0.9"), ("~0.8.0", "0.9")],
    )
    def test_version_buckets(self, tmp_path: Path, constraint: str, expected: str) -> None:
        """Test that versions map onto the two guideline sets."""
        context = DetectionContext(project_root=tmp_path, package_json={"dependencies": {"bulma": constraint}})
        module = BulmaModule()

        version = module.detect_version(context)

        assert version == expected
        assert module.get_guideline_paths(version)[1].path == f"bulma/guidelines/{expected}/features.md"

    def test_markup_alone_is_not_bulma(self, tmp_path: Path) -> None:
        """Test that generic front-end files need a Bulma anchor."""
        context = DetectionContext(
            project_root=tmp_path,
            files=("index.html", "src/App.tsx", "vendor/app.css", "theme.scss"),
        )
        assert BulmaModule().detect(context).detected is False

    def test_build_commands_follow_tooling(self, tmp_path: Path) -> None:
        """Test webpack and gulp command placement."""
        stack = DetectedStack(
            package_managers=["yarn"],
            config_files=["webpack.config.js", "gulpfile.js"],
        )
        commands = BulmaModule().generate_commands(ModuleContext(detected_stack=stack))

        assert commands["build"] == ["yarn webpack --mode production", "yarn run build", "yarn gulp build"]
        assert commands["dev"][0] == "yarn gulp watch"
