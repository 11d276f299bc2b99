"""Tests for the Laravel ecosystem modules."""

from __future__ import annotations

from pathlib import Path

import pytest

from frankenai.core.models import DetectedStack, DetectionContext, ModuleContext
from frankenai.modules.builtin import (
    InertiaModule,
    LaravelBoostModule,
    LaravelModule,
    LivewireModule,
    PestModule,
    PHPUnitModule,
    PintModule,
)
from frankenai.modules.manager import resolve_exclusions

LARAVEL_FILES = (
    "app/Http/Controllers/Controller.php",
    "app/Models/User.php",
    "routes/web.php",
)


def _laravel_context(tmp_path: Path, **composer_sections) -> DetectionContext:
    require = {"php": "^8.2", "laravel/framework": "^11.0"}
    require.update(composer_sections.pop("require", {}))
    return DetectionContext(
        project_root=tmp_path,
        files=LARAVEL_FILES + tuple(composer_sections.pop("files", ())),
        config_files=("artisan", "composer.json"),
        composer_json={"require": require, **composer_sections},
    )


class TestLaravelModule:
    """Tests for LaravelModule."""

    def test_detects_laravel_application(self, tmp_path: Path) -> None:
        """Test detection from artisan, composer and layout."""
        result = LaravelModule().detect(_laravel_context(tmp_path))

        assert result.detected is True
        assert result.confidence == 1.0
        assert "artisan command file found" in result.evidence
        assert result.metadata["laravel_dirs_found"] == ["app/Http", "app/Models", "routes"]

    def test_version_and_guideline_paths(self, tmp_path: Path) -> None:
        """Test that the major version selects the version guideline."""
        module = LaravelModule()
        version = module.detect_version(_laravel_context(tmp_path))
        paths = module.get_guideline_paths(version)

        assert version == "11"
        assert [p.path for p in paths] == [
            "laravel/guidelines/framework.md",
            "laravel/guidelines/11/features.md",
        ]
        assert paths[1].version == "11"

    def test_no_evidence_without_laravel(self, tmp_path: Path) -> None:
        """Test that an empty project is not Laravel."""
        result = LaravelModule().detect(DetectionContext(project_root=tmp_path))
        assert result.detected is False
        assert result.confidence == 0.0

    def test_commands_with_vite(self, tmp_path: Path) -> None:
        """Test command generation for a Vite-based Laravel app."""
        stack = DetectedStack(
            frameworks=["laravel"],
            package_managers=["npm", "composer"],
            config_files=["artisan", "vite.config.js", "package.json"],
        )
        commands = LaravelModule().generate_commands(ModuleContext(detected_stack=stack))

        assert commands["dev"] == ["php artisan serve", "php artisan tinker", "npm run dev"]
        assert commands["build"] == ["npm run build"]
        assert commands["install"] == ["composer install", "npm install"]
        assert commands["lint"] == ["./vendor/bin/pint"]


class TestLaravelBoostModule:
    """Tests for LaravelBoostModule."""

    def test_detects_boost_and_excludes_ecosystem(self, tmp_path: Path) -> None:
        """Test that Boost excludes the technologies it covers."""
        context = _laravel_context(tmp_path, **{"require-dev": {"laravel/boost": "^1.2"}})
        result = LaravelBoostModule().detect(context)

        assert result.detected is True
        assert result.confidence == pytest.approx(0.9)
        assert result.excludes is not None
        assert {"laravel", "tailwind", "livewire", "pest", "pint"} <= set(result.excludes)

    def test_boost_requires_laravel(self, tmp_path: Path) -> None:
        """Test the penalty applied without the Laravel framework."""
        context = DetectionContext(
            project_root=tmp_path,
            composer_json={"require-dev": {"laravel/boost": "^1.2"}},
        )
        result = LaravelBoostModule().detect(context)

        assert result.detected is False
        assert result.confidence == pytest.approx(0.24)
        assert "Warning: Laravel Boost requires Laravel framework" in result.evidence

    def test_boost_suppresses_laravel(self, tmp_path: Path) -> None:
        """Test that plain Laravel is removed when Boost is present."""
        context = _laravel_context(tmp_path, **{"require-dev": {"laravel/boost": "^1.2"}})
        survivors, excluded = resolve_exclusions(
            {
                "laravel-boost": LaravelBoostModule().detect(context),
                "laravel": LaravelModule().detect(context),
            }
        )

        assert list(survivors) == ["laravel-boost"]
        assert excluded == {"laravel": ["laravel-boost"]}

    def test_version_guideline_uses_major(self, tmp_path: Path) -> None:
        """Test the Boost version and its guideline key."""
        context = _laravel_context(tmp_path, **{"require-dev": {"laravel/boost": "^1.2"}})
        module = LaravelBoostModule()
        version = module.detect_version(context)

        assert version == "1.2"
        assert module.get_guideline_paths(version)[1].path == "laravel-boost/guidelines/1/features.md"


class TestLaravelTools:
    """Tests for Livewire, Inertia, Pest, PHPUnit and Pint."""

    def test_livewire_requires_laravel(self, tmp_path: Path) -> None:
        """Test that Livewire alone is not detected."""
        context = DetectionContext(
            project_root=tmp_path,
            composer_json={"require": {"livewire/livewire": "^3.4"}},
        )
        assert LivewireModule().detect(context).detected is False

    def test_livewire_detected_with_version(self, tmp_path: Path) -> None:
        """Test Livewire detection inside a Laravel app."""
        context = _laravel_context(tmp_path, require={"livewire/livewire": "^3.4"})
        module = LivewireModule()

        assert module.detect(context).detected is True
        assert module.detect_version(context) == "3"

    def test_inertia_excludes_its_frontend(self, tmp_path: Path) -> None:
        """Test that the Inertia adapter excludes the standalone framework."""
        context = DetectionContext(
            project_root=tmp_path,
            composer_json={
                "require": {"laravel/framework": "^11.0", "inertiajs/inertia-laravel": "^2.0"}
            },
            package_json={"dependencies": {"@inertiajs/vue3": "^2.0.0", "vue": "^3.4.0"}},
        )
        module = InertiaModule()
        result = module.detect(context)

        assert result.detected is True
        assert result.excludes == ["vue"]
        assert module.detect_version(context) == "2"

    def test_pest_excludes_phpunit(self, tmp_path: Path) -> None:
        """Test that Pest supersedes PHPUnit."""
        context = DetectionContext(
            project_root=tmp_path,
            config_files=("phpunit.xml",),
            composer_json={"require-dev": {"pestphp/pest": "^2.34", "phpunit/phpunit": "^10.5"}},
        )
        pest = PestModule().detect(context)
        phpunit = PHPUnitModule().detect(context)

        assert pest.detected is True
        assert phpunit.detected is True
        survivors, excluded = resolve_exclusions({"pest": pest, "phpunit": phpunit})
        assert list(survivors) == ["pest"]
        assert excluded == {"phpunit": ["pest"]}

    def test_pest_version_guideline(self, tmp_path: Path) -> None:
        """Test that the Pest version string maps to its major directory."""
        context = DetectionContext(
            project_root=tmp_path,
            composer_json={"require-dev": {"pestphp/pest": "^2.34"}},
        )
        module = PestModule()
        version = module.detect_version(context)

        assert version == "2.34"
        assert module.get_guideline_paths(version)[1].path == "pest/guidelines/2/features.md"

    def test_pest_commands_depend_on_laravel(self) -> None:
        """Test artisan test commands only for Laravel stacks."""
        module = PestModule()
        laravel = module.generate_commands(
            ModuleContext(detected_stack=DetectedStack(frameworks=["laravel"]))
        )
        plain = module.generate_commands(ModuleContext(detected_stack=DetectedStack()))

        assert laravel["test"][0] == "php artisan test"
        assert plain["test"][0] == "vendor/bin/pest"

    def test_pint_detection(self, tmp_path: Path) -> None:
        """Test Pint detection with and without evidence."""
        context = _laravel_context(tmp_path, **{"require-dev": {"laravel/pint": "^1.13"}})
        assert PintModule().detect(context).detected is True
        assert PintModule().detect(DetectionContext(project_root=tmp_path)).detected is False
