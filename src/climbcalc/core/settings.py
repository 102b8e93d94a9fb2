"""
Settings for climbcalc.

Settings come from an optional ``climbcalc.toml`` in the working directory:

    [climbcalc]
    max_depth = 128

Environment variables override the file:

    CLIMBCALC_MAX_DEPTH=64
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from climbcalc.core.errors import ConfigError

logger = logging.getLogger(__name__)

SETTINGS_FILE = "climbcalc.toml"
MAX_DEPTH_ENV_VAR = "CLIMBCALC_MAX_DEPTH"

DEFAULT_MAX_DEPTH = 128
# Each nesting level costs a few Python stack frames across parsing,
# evaluation and printing; stay well inside the interpreter's limit.
MAX_DEPTH_CEILING = 250


@dataclass
class Settings:
    """Runtime settings for parsing and evaluation."""

    max_depth: int = DEFAULT_MAX_DEPTH  # Maximum expression nesting depth


def load_settings(path: Path | None = None) -> Settings:
    """
    Load settings from a TOML file and the environment.

    Args:
        path: Settings file; defaults to ./climbcalc.toml when it exists

    Returns:
        Settings with file values applied, then environment overrides

    Raises:
        ConfigError: If the file is unreadable or a value is invalid
    """
    if path is None:
        candidate = Path.cwd() / SETTINGS_FILE
        path = candidate if candidate.exists() else None

    data: dict[str, object] = {}
    if path is not None:
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f).get("climbcalc", {})
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigError(f"Cannot read settings from {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"[climbcalc] in {path} must be a table")
        logger.debug("Loaded settings from %s", path)

    max_depth = data.get("max_depth", DEFAULT_MAX_DEPTH)

    env_value = os.environ.get(MAX_DEPTH_ENV_VAR, "").strip()
    if env_value:
        try:
            max_depth = int(env_value)
        except ValueError as e:
            raise ConfigError(f"{MAX_DEPTH_ENV_VAR} must be an integer, got {env_value!r}") from e

    return Settings(max_depth=_check_max_depth(max_depth))


def _check_max_depth(value: object) -> int:
    """Validate max_depth, clamping values above the ceiling."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise ConfigError(f"max_depth must be an integer, got {value!r}")
    if value < 1:
        raise ConfigError(f"max_depth must be at least 1, got {value}")
    if value > MAX_DEPTH_CEILING:
        logger.warning(
            "max_depth %d exceeds the supported ceiling; using %d instead.",
            value,
            MAX_DEPTH_CEILING,
        )
        return MAX_DEPTH_CEILING
    return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Settings for the current process, loaded once."""
    return load_settings()
