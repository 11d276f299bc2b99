"""Configuration validation for franken-ai.

Unknown keys are warned about (with a suggestion for likely typos).
Values of the wrong type raise ConfigError, since they cannot be used.
"""

from __future__ import annotations

from dataclasses import dataclass
from difflib import get_close_matches
from typing import Any, Dict, List, Optional, Set

from frankenai.core.logging import get_logger

LOGGER = get_logger(__name__)

VALID_TOP_LEVEL_KEYS: Set[str] = {"modules", "detection", "ignore", "output", "guidelines"}
VALID_SECTION_KEYS: Dict[str, Set[str]] = {
    "modules": {"disabled", "options"},
    "detection": {"sequential", "max_workers"},
    "output": {"file"},
    "guidelines": {"strict"},
}

# Expected types for typed leaf values, keyed by dotted path
EXPECTED_TYPES: Dict[str, type] = {
    "modules.disabled": list,
    "modules.options": dict,
    "detection.sequential": bool,
    "detection.max_workers": int,
    "ignore": list,
    "output.file": str,
    "guidelines.strict": bool,
}


class ConfigError(Exception):
    """Configuration loading or parsing error."""

    pass


@dataclass
class ConfigValidationWarning:
    """A validation warning for configuration."""

    message: str
    source: str
    key: Optional[str] = None
    suggestion: Optional[str] = None


def validate_config(data: Dict[str, Any], source: str) -> List[ConfigValidationWarning]:
    """Validate a configuration dictionary.

    Args:
        data: Config dictionary to validate.
        source: Source file path for messages.

    Returns:
        List of validation warnings for unknown keys.

    Raises:
        ConfigError: If a known key holds a value of the wrong type.
    """
    warnings: List[ConfigValidationWarning] = []

    for key, value in data.items():
        if key not in VALID_TOP_LEVEL_KEYS:
            warnings.append(_unknown_key(key, VALID_TOP_LEVEL_KEYS, source))
            continue
        if key in VALID_SECTION_KEYS:
            if not isinstance(value, dict):
                raise ConfigError(
                    f"'{key}' must be a mapping, got {type(value).__name__} in {source}"
                )
            for sub_key in value:
                if sub_key not in VALID_SECTION_KEYS[key]:
                    warnings.append(
                        _unknown_key(sub_key, VALID_SECTION_KEYS[key], source, prefix=f"{key}.")
                    )

    for dotted, expected in EXPECTED_TYPES.items():
        value = _lookup(data, dotted)
        if value is None:
            continue
        # bool is a subclass of int
        if (expected is int and isinstance(value, bool)) or not isinstance(value, expected):
            raise ConfigError(
                f"'{dotted}' must be of type {expected.__name__}, "
                f"got {type(value).__name__} in {source}"
            )

    for dotted in ("modules.disabled", "ignore"):
        items = _lookup(data, dotted) or []
        if any(not isinstance(item, str) for item in items):
            raise ConfigError(f"'{dotted}' must be a list of strings in {source}")

    max_workers = _lookup(data, "detection.max_workers")
    if max_workers is not None and max_workers < 1:
        raise ConfigError(f"'detection.max_workers' must be at least 1 in {source}")

    return warnings


def _lookup(data: Dict[str, Any], dotted: str) -> Any:
    current: Any = data
    for part in dotted.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(part)
    return current


def _unknown_key(
    key: str, valid_keys: Set[str], source: str, prefix: str = ""
) -> ConfigValidationWarning:
    label = "top-level key" if not prefix else "key"
    warning = ConfigValidationWarning(
        message=f"Unknown {label} '{prefix}{key}'",
        source=source,
        key=f"{prefix}{key}",
        suggestion=_suggest_key(str(key), valid_keys),
    )
    _log_warning(warning)
    return warning


def _suggest_key(invalid_key: str, valid_keys: Set[str]) -> Optional[str]:
    """Suggest a valid key for a potential typo.

    Args:
        invalid_key: The invalid key entered.
        valid_keys: Set of valid keys.

    Returns:
        Closest matching valid key, or None if no good match.
    """
    matches = get_close_matches(invalid_key, sorted(valid_keys), n=1, cutoff=0.6)
    return matches[0] if matches else None


def _log_warning(warning: ConfigValidationWarning) -> None:
    msg = f"{warning.message} in {warning.source}"
    if warning.suggestion:
        msg += f" (did you mean '{warning.suggestion}'?)"
    LOGGER.warning(msg)
