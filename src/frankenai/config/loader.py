"""Configuration file loading and merging.

Handles loading configuration from YAML files with:
- Project-level config (.frankenai.yml)
- Global config ($FRANKENAI_HOME/config.yml, default ~/.frankenai)
- Environment variable expansion (${VAR})
- Config merging with proper precedence
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from frankenai.config.models import (
    DEFAULT_MAX_WORKERS,
    DEFAULT_OUTPUT_FILE,
    DetectionConfig,
    FrankenAIConfig,
    GuidelinesConfig,
    ModulesConfig,
    OutputConfig,
)
from frankenai.config.validation import ConfigError, validate_config
from frankenai.core.logging import get_logger

LOGGER = get_logger(__name__)

PROJECT_CONFIG_NAMES = [".frankenai.yml", ".frankenai.yaml", "frankenai.yml", "frankenai.yaml"]
GLOBAL_CONFIG_NAME = "config.yml"

DEFAULT_HOME_DIR_NAME = ".frankenai"
FRANKENAI_HOME_ENV = "FRANKENAI_HOME"

# Environment variable pattern: ${VAR} or ${VAR:-default}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}:]+)(?::-([^}]*))?\}")

__all__ = [
    "ConfigError",
    "dict_to_config",
    "find_global_config",
    "find_project_config",
    "get_default_config",
    "get_frankenai_home",
    "load_config",
    "load_yaml_file",
    "merge_configs",
]


def get_frankenai_home() -> Path:
    """Get the franken-ai home directory.

    Resolution order:
    1. FRANKENAI_HOME environment variable (if set)
    2. ~/.frankenai (default)
    """
    env_home = os.environ.get(FRANKENAI_HOME_ENV)
    if env_home:
        return Path(env_home)
    return Path.home() / DEFAULT_HOME_DIR_NAME


def load_config(
    project_root: Path,
    cli_config_path: Optional[Path] = None,
    cli_overrides: Optional[Dict[str, Any]] = None,
) -> FrankenAIConfig:
    """Load configuration with proper precedence.

    Precedence (highest to lowest):
    1. CLI flags (cli_overrides)
    2. Custom config file (cli_config_path) OR project config (.frankenai.yml)
    3. Global config ($FRANKENAI_HOME/config.yml)
    4. Built-in defaults

    Args:
        project_root: Project root directory for finding .frankenai.yml.
        cli_config_path: Optional path to custom config file (--config flag).
        cli_overrides: Dict of CLI flag overrides.

    Returns:
        Merged FrankenAIConfig instance.

    Raises:
        ConfigError: If the specified config file doesn't exist, has parse
            errors or holds values of the wrong type.
    """
    sources: List[str] = []
    merged: Dict[str, Any] = {}

    # Layer 1: Global config
    global_path = find_global_config()
    if global_path:
        try:
            global_dict = load_yaml_file(global_path)
            validate_config(global_dict, source=str(global_path))
            merged = merge_configs(merged, global_dict)
            sources.append(f"global:{global_path}")
            LOGGER.debug(f"Loaded global config from {global_path}")
        except (ConfigError, yaml.YAMLError, OSError) as e:
            LOGGER.warning(f"Failed to load global config: {e}")

    # Layer 2: Project or custom config
    if cli_config_path:
        if not cli_config_path.exists():
            raise ConfigError(f"Config file not found: {cli_config_path}")
        merged = _merge_file(merged, cli_config_path, "custom", sources)
    else:
        project_path = find_project_config(project_root)
        if project_path:
            merged = _merge_file(merged, project_path, "project", sources)

    # Layer 3: CLI overrides
    if cli_overrides:
        merged = merge_configs(merged, cli_overrides)
        sources.append("cli")
        LOGGER.debug("Applied CLI overrides")

    config = dict_to_config(merged)
    config._config_sources = sources

    LOGGER.debug(f"Config loaded from sources: {sources}")
    return config


def _merge_file(
    merged: Dict[str, Any], path: Path, kind: str, sources: List[str]
) -> Dict[str, Any]:
    try:
        data = load_yaml_file(path)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    validate_config(data, source=str(path))
    sources.append(f"{kind}:{path}")
    LOGGER.debug(f"Loaded {kind} config from {path}")
    return merge_configs(merged, data)


def find_project_config(project_root: Path) -> Optional[Path]:
    """Find a config file in the project root.

    Args:
        project_root: Directory to search in.

    Returns:
        Path to the first matching config file, or None.
    """
    for name in PROJECT_CONFIG_NAMES:
        config_path = project_root / name
        if config_path.is_file():
            return config_path
    return None


def find_global_config() -> Optional[Path]:
    """Return the global config path if it exists."""
    config_path = get_frankenai_home() / GLOBAL_CONFIG_NAME
    if config_path.is_file():
        return config_path
    return None


def load_yaml_file(path: Path) -> Dict[str, Any]:
    """Load and parse a YAML config file.

    Performs environment variable expansion on string values.

    Args:
        path: Path to YAML file.

    Returns:
        Parsed dictionary.

    Raises:
        yaml.YAMLError: If YAML parsing fails.
        ConfigError: If the document is not a mapping.
    """
    with open(path, "r", encoding="utf-8") as f:
        content = f.read()

    data = yaml.safe_load(content)

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ConfigError(f"Config file must be a YAML mapping, got {type(data).__name__}")

    return expand_env_vars(data)


def expand_env_vars(data: Any) -> Any:
    """Recursively expand ${VAR} and ${VAR:-default} in config values."""
    if isinstance(data, dict):
        return {k: expand_env_vars(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [expand_env_vars(item) for item in data]
    elif isinstance(data, str):
        return ENV_VAR_PATTERN.sub(_env_var_replacer, data)
    else:
        return data


def _env_var_replacer(match: re.Match[str]) -> str:
    var_name = match.group(1)
    default_value = match.group(2)

    value = os.environ.get(var_name)
    if value is not None:
        return value
    if default_value is not None:
        return default_value

    LOGGER.warning(f"Environment variable ${var_name} is not set and has no default")
    return ""


def merge_configs(base: Dict[str, Any], overlay: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge two config dicts, with overlay taking precedence.

    Rules:
    - Scalar values: overlay replaces base
    - Lists: overlay replaces base (no merging)
    - Dicts: recursive merge

    Args:
        base: Base configuration dictionary.
        overlay: Overlay configuration to merge on top.

    Returns:
        Merged configuration dictionary.
    """
    result = base.copy()

    for key, overlay_value in overlay.items():
        if key in result and isinstance(result[key], dict) and isinstance(overlay_value, dict):
            result[key] = merge_configs(result[key], overlay_value)
        else:
            result[key] = overlay_value

    return result


def dict_to_config(data: Dict[str, Any]) -> FrankenAIConfig:
    """Convert a validated dict to a typed FrankenAIConfig."""
    modules_data = data.get("modules") or {}
    modules = ModulesConfig(
        disabled=list(modules_data.get("disabled") or []),
        options={
            str(k): dict(v)
            for k, v in (modules_data.get("options") or {}).items()
            if isinstance(v, dict)
        },
    )

    detection_data = data.get("detection") or {}
    detection = DetectionConfig(
        sequential=detection_data.get("sequential", False),
        max_workers=detection_data.get("max_workers", DEFAULT_MAX_WORKERS),
    )

    output_data = data.get("output") or {}
    output = OutputConfig(file=output_data.get("file", DEFAULT_OUTPUT_FILE))

    guidelines_data = data.get("guidelines") or {}
    guidelines = GuidelinesConfig(strict=guidelines_data.get("strict", False))

    return FrankenAIConfig(
        modules=modules,
        detection=detection,
        ignore=list(data.get("ignore") or []),
        output=output,
        guidelines=guidelines,
    )


def get_default_config() -> FrankenAIConfig:
    """Configuration used when no file or override is present."""
    return FrankenAIConfig()
