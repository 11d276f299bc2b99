"""Shared fixtures for CLI tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Dict

import pytest


@pytest.fixture(autouse=True)
def isolated_home(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep the user's global configuration out of CLI runs."""
    home = tmp_path_factory.mktemp("frankenai-home")
    monkeypatch.setenv("FRANKENAI_HOME", str(home))
    return home


@pytest.fixture
def make_laravel_project() -> Callable[..., Path]:
    """Factory writing a minimal Laravel application into a directory."""

    def _make(root: Path, laravel_constraint: str = "^11.0", boost: bool = False) -> Path:
        composer: Dict[str, Any] = {
            "require": {"php": "^8.2", "laravel/framework": laravel_constraint}
        }
        if boost:
            composer["require-dev"] = {"laravel/boost": "^1.2"}
        (root / "composer.json").write_text(json.dumps(composer))
        (root / "artisan").write_text("#!/usr/bin/env php\n")
        for relative in ("app/Models/User.php", "routes/web.php"):
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("<?php\n")
        return root

    return _make


@pytest.fixture
def laravel_project(tmp_path: Path, make_laravel_project: Callable[..., Path]) -> Path:
    return make_laravel_project(tmp_path)
