# lo_importer/config/loader.py
"""
Layered configuration loading for the import engine.

Merge order (later wins):
    1. Package defaults (lo_importer/config/defaults.yaml) - always loaded
    2. User config file - explicit path, $LO_IMPORTER_CONFIG, or
       .lo_importer/config.yaml in the working directory
    3. Keyword overrides passed by the caller

Usage:
    from lo_importer.config.loader import load_import_options

    options = load_import_options()
    options = load_import_options(Path("site.yaml"), abstract_max_paragraphs=2)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from lo_importer.config.schema import ImportOptions
from lo_importer.core.exceptions import ConfigError
from lo_importer.logging.logger import get_logger
from lo_importer.logging.tags import CONFIG

logger = get_logger(__name__)

CONFIG_KEY = "lo_importer"
ENV_VAR = "LO_IMPORTER_CONFIG"
DEFAULTS_PATH = Path(__file__).parent / "defaults.yaml"
USER_CONFIG_PATH = Path(".lo_importer") / "config.yaml"


# =============================================================================
# Deep Merge
# =============================================================================


def deep_merge(base: dict, override: dict) -> dict:
    """
    Deep merge two dictionaries.

    Values from `override` take precedence over `base`.
    Nested dicts are merged recursively; lists are replaced entirely.

    Examples:
        >>> deep_merge({"a": 1, "b": {"c": 2, "d": 3}}, {"b": {"c": 10}})
        {'a': 1, 'b': {'c': 10, 'd': 3}}
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


# =============================================================================
# Loading Functions
# =============================================================================


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to read config file: {e}", source=str(path), cause=e) from e

    if not isinstance(raw, dict):
        raise ConfigError("Config file must contain a mapping", source=str(path))

    # Files may nest options under the package key or keep them flat
    if CONFIG_KEY in raw:
        raw = raw[CONFIG_KEY] or {}
        if not isinstance(raw, dict):
            raise ConfigError(f"'{CONFIG_KEY}' must be a mapping", source=str(path))
    return raw


def load_defaults() -> dict[str, Any]:
    """Load the package defaults."""
    defaults = _read_yaml(DEFAULTS_PATH)
    logger.debug(f"{CONFIG} Loaded defaults from {DEFAULTS_PATH}")
    return defaults


def resolve_user_config_path(path: Path | None = None) -> Path | None:
    """
    Find the user config file, if any.

    An explicit path must exist; the environment variable and the working
    directory file are optional.
    """
    if path is not None:
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}", source=str(path))
        return path

    env_path = os.environ.get(ENV_VAR)
    if env_path:
        candidate = Path(env_path)
        if not candidate.exists():
            raise ConfigError(f"{ENV_VAR} points to a missing file: {candidate}", source=env_path)
        return candidate

    if USER_CONFIG_PATH.exists():
        return USER_CONFIG_PATH
    return None


def load_import_options(path: Path | None = None, **overrides: Any) -> ImportOptions:
    """
    Load and validate the effective import options.

    Args:
        path: Optional user config file.
        **overrides: Values that win over every file.

    Returns:
        Validated, immutable ImportOptions.

    Raises:
        ConfigError: If a file is unreadable or the merged values are invalid.
    """
    merged = load_defaults()

    user_path = resolve_user_config_path(path)
    if user_path is not None:
        merged = deep_merge(merged, _read_yaml(user_path))
        logger.debug(f"{CONFIG} Merged user config from {user_path}")

    if overrides:
        merged = deep_merge(merged, overrides)

    try:
        return ImportOptions(**merged)
    except ValidationError as e:
        raise ConfigError(
            f"Invalid import options: {e}",
            source=str(user_path) if user_path else "defaults",
            cause=e,
        ) from e


__all__ = [
    "deep_merge",
    "load_defaults",
    "resolve_user_config_path",
    "load_import_options",
]
