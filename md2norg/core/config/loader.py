"""
Configuration loader — reads md2norg.yml into a ConverterConfig.

The file is optional. When it is missing, defaults apply; when it is
present but broken, ConfigError says why.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from md2norg.core.models.config import ConverterConfig

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "md2norg.yml"


class ConfigError(Exception):
    """Raised when md2norg configuration is invalid or unreadable."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for md2norg.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to md2norg.yml, or None if not found.
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


def load_config(path: Path | None = None) -> ConverterConfig:
    """Load and validate converter configuration.

    Args:
        path: Explicit path to md2norg.yml. If None, searches upward and
            falls back to defaults when nothing is found.

    Returns:
        Validated ConverterConfig.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None:
        path = find_config_file()
        if path is None:
            logger.debug("No %s found, using defaults", CONFIG_FILE)
            return ConverterConfig()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading converter config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # Settings may sit under a "convert" key or at the top level
    if isinstance(data.get("convert"), dict):
        data = data["convert"]

    try:
        config = ConverterConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    # Relative paths in the file are relative to the file, not the cwd
    base = path.parent
    for key in ("input", "output"):
        value = getattr(config, key)
        if value and not Path(value).is_absolute():
            setattr(config, key, str(base / value))

    logger.info(
        "Loaded config from %s (.%s → .%s)",
        path,
        config.source_extension,
        config.target_extension,
    )
    return config
