"""Configuration loading from pyproject.toml.

Settings live under ``[tool.auto-release]``. A project without that table,
or without a pyproject.toml at all, runs with the defaults.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from auto_release.config.models import AutoReleaseConfig
from auto_release.exceptions import ConfigNotFoundError, ConfigValidationError

logger = logging.getLogger(__name__)

CONFIG_TABLE = "auto-release"


def find_pyproject_toml(start: Path | None = None) -> Path:
    """Find pyproject.toml in ``start`` or one of its parents.

    Raises:
        ConfigNotFoundError: If no pyproject.toml is found
    """
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    raise ConfigNotFoundError(f"No pyproject.toml found in {current} or its parents")


def load_pyproject_toml(path: Path) -> dict[str, Any]:
    """Load and parse a pyproject.toml file.

    Raises:
        ConfigNotFoundError: If the file does not exist
        ConfigValidationError: If the file is not valid TOML
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"Configuration file not found: {path}")
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigValidationError(f"Invalid TOML in {path}: {e}") from e


def extract_config(pyproject: dict[str, Any]) -> dict[str, Any]:
    """Return the ``[tool.auto-release]`` table, or an empty dict."""
    return pyproject.get("tool", {}).get(CONFIG_TABLE, {})


def load_config(path: Path | None = None) -> AutoReleaseConfig:
    """Load configuration for a project.

    Args:
        path: A pyproject.toml file or a directory to search from.
            Defaults to the current working directory.

    Returns:
        Validated configuration

    Raises:
        ConfigNotFoundError: If ``path`` names a file that does not exist
        ConfigValidationError: If the configuration is invalid
        InvalidBumpConfigurationError: If ``default_bump`` is not a known bump type
    """
    if path is not None and path.suffix == ".toml":
        pyproject_path = path
    else:
        try:
            pyproject_path = find_pyproject_toml(path)
        except ConfigNotFoundError:
            logger.debug("No pyproject.toml found, using default configuration")
            return AutoReleaseConfig()

    data = extract_config(load_pyproject_toml(pyproject_path))
    try:
        return AutoReleaseConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid [tool.{CONFIG_TABLE}] configuration: {e}") from e
