"""Configuration loading from pyproject.toml."""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from semver_notes.config.models import SemverNotesConfig
from semver_notes.exceptions import ConfigNotFoundError, ConfigValidationError

logger = logging.getLogger(__name__)

TOOL_SECTION = "semver-notes"


def find_pyproject_toml(start: Path | None = None) -> Path:
    """Find pyproject.toml in ``start`` or any of its parents.

    Args:
        start: Directory to start searching from (defaults to cwd)

    Returns:
        Path to the nearest pyproject.toml

    Raises:
        ConfigNotFoundError: If no pyproject.toml exists up to the root
    """
    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate

    raise ConfigNotFoundError(f"No pyproject.toml found in {current} or its parents")


def load_pyproject_toml(path: Path) -> dict[str, Any]:
    """Read and parse a TOML file.

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


def extract_semver_notes_config(pyproject: dict[str, Any]) -> dict[str, Any]:
    """Return the ``[tool.semver-notes]`` table, or an empty dict."""
    return pyproject.get("tool", {}).get(TOOL_SECTION, {})


def load_config(path: Path | None = None) -> SemverNotesConfig:
    """Load configuration for the project at ``path``.

    ``path`` may be a directory (searched upwards for pyproject.toml) or
    a TOML file. Without any pyproject.toml the defaults are used.

    Raises:
        ConfigNotFoundError: If ``path`` is given but does not exist
        ConfigValidationError: If the configuration is invalid
    """
    if path is not None and not path.exists():
        raise ConfigNotFoundError(f"Configuration path not found: {path}")

    if path is not None and path.is_file():
        pyproject_path = path
    else:
        try:
            pyproject_path = find_pyproject_toml(path)
        except ConfigNotFoundError:
            logger.debug("No pyproject.toml found, using default configuration")
            return SemverNotesConfig()

    data = extract_semver_notes_config(load_pyproject_toml(pyproject_path))
    logger.debug("Loaded configuration from %s", pyproject_path)

    try:
        config = SemverNotesConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(
            f"Invalid [tool.{TOOL_SECTION}] in {pyproject_path}:\n{e}"
        ) from e

    # Relative template directories are relative to the config file.
    template_dir = config.changelog.template_dir
    if template_dir is not None and not template_dir.is_absolute():
        changelog = config.changelog.model_copy(
            update={"template_dir": pyproject_path.parent / template_dir}
        )
        config = config.model_copy(update={"changelog": changelog})
    return config
