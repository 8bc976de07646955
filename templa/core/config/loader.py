"""
Configuration loader: reads templa.yml into a Settings model.

The file is optional: when none is found walking up from the working
directory, defaults apply. An explicitly given path must exist.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "templa.yml"


class ConfigError(Exception):
    """Raised when templa configuration is invalid or missing."""


class Settings(BaseModel):
    """Generator settings loaded from templa.yml.

    Attributes:
        annotations: Annotation names that request generation.
        file_suffix: Suffix for default output names
                     (``@makeFor`` → ``makefor_impl_gen.go``).
        formatter:   Post-processor for ``go`` / ``partial*.go`` output.
        output_dir:  Where files are written; empty means the package dir.
    """

    version: int = 1
    annotations: list[str] = Field(default_factory=lambda: ["makeFor"])
    file_suffix: str = "_impl_gen.go"
    formatter: Literal["normalize", "gofmt", "none"] = "normalize"
    output_dir: str = ""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for templa.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to templa.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_settings(path: Path | None = None) -> Settings:
    """Load and validate templa settings.

    Args:
        path: Explicit path to templa.yml. If None, searches upward.

    Returns:
        Validated Settings model (defaults when no file exists).

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None:
        path = find_config_file()
        if path is None:
            logger.debug("No %s found, using defaults", CONFIG_FILE)
            return Settings()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading settings from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return Settings()

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        settings = Settings.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid templa configuration: {e}") from e

    logger.info("Loaded settings from %s (formatter=%s)", path, settings.formatter)
    return settings
