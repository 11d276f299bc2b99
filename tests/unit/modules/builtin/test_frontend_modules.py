"""Tests for the JavaScript framework modules."""

from __future__ import annotations

from pathlib import Path

from frankenai.core.models import DetectedStack, DetectionContext, ModuleContext
from frankenai.modules.builtin import (
    AstroModule,
    NextModule,
    NuxtModule,
    ReactModule,
    SolidModule,
    SvelteKitModule,
    SvelteModule,
    VueModule,
)
from frankenai.modules.manager import resolve_exclusions


class TestNextModule:
    """Tests for NextModule."""

    def test_next_excludes_react(self, tmp_path: Path) -> None:
        """Test that Next.js removes standalone React."""
        context = DetectionContext(
            project_root=tmp_path,
            files=("app/page.tsx", "app/layout.tsx"),
            package_json={
                "dependencies": {"next": "^14.2.0", "react": "^18.3.0", "react-dom": "^18.3.0"},
                "scripts": {"dev": "next dev"},
            },
        )
        next_result = NextModule().detect(context)
        react_result = ReactModule().detect(context)

        assert next_result.detected is True
        assert next_result.excludes == ["react"]
        assert next_result.evidence[-1].startswith("Next.js includes React")
        assert react_result.detected is True

        survivors, excluded = resolve_exclusions({"next": next_result, "react": react_result})
        assert list(survivors) == ["next"]
        assert excluded == {"react": ["next"]}

    def test_layout_alone_is_not_next(self, tmp_path: Path) -> None:
        """Test that pages/ and app/ directories need a Next.js anchor."""
        context = DetectionContext(
            project_root=tmp_path,
            files=("pages/index.php", "app/Models/User.php"),
        )
        result = NextModule().detect(context)
        assert result.detected is False
        assert result.evidence == []

    def test_version(self, tmp_path: Path) -> None:
        """Test the Next.js major version."""
        context = DetectionContext(
            project_root=tmp_path,
            package_json={"dependencies": {"next": "15.0.3"}},
        )
        assert NextModule().detect_version(context) == "15"


class TestReactModule:
    """Tests for ReactModule."""

    def test_component_files_need_react(self, tmp_path: Path) -> None:
        """Test that JSX files alone do not detect React."""
        context = DetectionContext(project_root=tmp_path, files=("src/App.jsx",))
        assert ReactModule().detect(context).detected is False

    def test_version_from_constraint(self, tmp_path: Path) -> None:
        """Test React version from package.json."""
        context = DetectionContext(
            project_root=tmp_path,
            package_json={"dependencies": {"react": "^18.2.0"}},
        )
        assert ReactModule().detect_version(context) == "18"

    def test_commands_use_package_manager(self) -> None:
        """Test that the preferred package manager is used."""
        stack = DetectedStack(package_managers=["yarn"], config_files=["vitest.config.ts"])
        commands = ReactModule().generate_commands(ModuleContext(detected_stack=stack))

        assert commands["dev"] == ["yarn run dev", "yarn run start"]
        assert commands["test"] == ["yarn run test", "yarn run test:vitest"]


class TestVueFamily:
    """Tests for Vue, Nuxt, Svelte and SvelteKit."""

    def test_nuxt_excludes_vue(self, tmp_path: Path) -> None:
        """Test that Nuxt removes standalone Vue."""
        context = DetectionContext(
            project_root=tmp_path,
            files=("pages/index.vue", "components/Header.vue"),
            config_files=("nuxt.config.ts",),
            package_json={"dependencies": {"nuxt": "^3.11.0", "vue": "^3.4.0"}},
        )
        nuxt = NuxtModule().detect(context)
        vue = VueModule().detect(context)

        assert nuxt.detected is True
        assert vue.detected is True
        survivors, _ = resolve_exclusions({"nuxt": nuxt, "vue": vue})
        assert list(survivors) == ["nuxt"]

    def test_sveltekit_excludes_svelte(self, tmp_path: Path) -> None:
        """Test that SvelteKit removes standalone Svelte."""
        context = DetectionContext(
            project_root=tmp_path,
            files=("src/app.html", "src/routes/+page.svelte"),
            package_json={"devDependencies": {"@sveltejs/kit": "^2.5.0", "svelte": "^5.0.0"}},
        )
        kit = SvelteKitModule().detect(context)
        svelte = SvelteModule().detect(context)

        assert kit.detected is True
        assert kit.excludes == ["svelte"]
        assert svelte.detected is True
        assert SvelteKitModule().detect_version(context) == "2"
        assert SvelteModule().detect_version(context) == "5"

    def test_vue_single_file_components(self, tmp_path: Path) -> None:
        """Test Vue detection from .vue files alone."""
        context = DetectionContext(
            project_root=tmp_path,
            files=tuple(f"src/components/C{i}.vue" for i in range(5)),
        )
        result = VueModule().detect(context)
        assert result.detected is True
        assert result.metadata["vue_files_count"] == 5


class TestAstroModule:
    """Tests for AstroModule."""

    def test_detects_astro_site(self, tmp_path: Path) -> None:
        """Test detection from the package, config and .astro components."""
        context = DetectionContext(
            project_root=tmp_path,
            files=("src/pages/index.astro", "src/layouts/Base.astro", "public/favicon.svg"),
            config_files=("astro.config.mjs",),
            package_json={
                "dependencies": {"astro": "^4.16.0", "@astrojs/react": "^3.0.0"},
                "scripts": {"dev": "astro dev", "build": "astro build"},
            },
        )
        module = AstroModule()
        result = module.detect(context)

        assert result.detected is True
        assert result.confidence == 1.0
        assert "Astro config file: astro.config.mjs" in result.evidence
        assert result.metadata["astro_files_count"] == 2
        assert result.metadata["integrations"] == ["@astrojs/react"]
        assert result.excludes is None

        version = module.detect_version(context)
        assert version == "4"
        assert [p.path for p in module.get_guideline_paths(version)] == [
            "astro/guidelines/framework.md",
            "astro/guidelines/4/features.md",
        ]

    def test_layout_alone_is_not_astro(self, tmp_path: Path) -> None:
        """Test that shared directory names are not evidence by themselves."""
        context = DetectionContext(
            project_root=tmp_path,
            files=("src/pages/index.tsx", "src/components/App.tsx", "src/layouts/Main.tsx", "public/a.png"),
        )
        result = AstroModule().detect(context)
        assert result.detected is False
        assert result.confidence == 0.0

    def test_commands(self, tmp_path: Path) -> None:
        """Test preview, Playwright and astro check commands."""
        stack = DetectedStack(
            frameworks=["astro"],
            package_managers=["pnpm"],
            config_files=["astro.config.mjs", "playwright.config.ts", "tsconfig.json"],
        )
        commands = AstroModule().generate_commands(ModuleContext(detected_stack=stack))

        assert commands["build"] == ["pnpm run build", "pnpm run preview"]
        assert commands["test"] == ["pnpm run test", "pnpm run test:playwright"]
        assert commands["lint"][-1] == "pnpm run check"


class TestSolidModule:
    """Tests for SolidModule."""

    def test_detects_solid_with_vite_plugin(self, tmp_path: Path) -> None:
        """Test detection from solid-js and the Vite plugin."""
        context = DetectionContext(
            project_root=tmp_path,
            files=("src/App.tsx", "src/components/Counter.tsx"),
            config_files=("vite.config.ts",),
            package_json={
                "dependencies": {"solid-js": "^1.8.0"},
                "devDependencies": {"vite-plugin-solid": "^2.8.0"},
            },
        )
        module = SolidModule()
        result = module.detect(context)

        assert result.detected is True
        assert "Vite with Solid plugin detected" in result.evidence
        assert result.metadata["build_tools"] == ["vite-plugin-solid"]
        assert module.detect_version(context) == "1"

    def test_react_project_is_not_solid(self, tmp_path: Path) -> None:
        """Test that JSX files and component directories need a Solid anchor."""
        context = DetectionContext(
            project_root=tmp_path,
            files=tuple(f"src/components/C{i}.tsx" for i in range(10)) + ("src/pages/Home.tsx",),
            package_json={"dependencies": {"react": "^18.3.0", "react-dom": "^18.3.0"}},
        )
        result = SolidModule().detect(context)
        assert result.detected is False
        assert result.confidence == 0.0

    def test_typecheck_command_with_tsconfig(self, tmp_path: Path) -> None:
        """Test that TypeScript projects get a typecheck command."""
        stack = DetectedStack(frameworks=["solid"], config_files=["tsconfig.json", "vitest.config.ts"])
        commands = SolidModule().generate_commands(ModuleContext(detected_stack=stack))

        assert commands["lint"] == ["npm run lint", "npm run lint:fix", "npm run typecheck"]
        assert commands["test"] == ["npm run test", "npm run test:vitest"]
