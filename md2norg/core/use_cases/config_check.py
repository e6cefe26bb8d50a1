"""
Config check use case — validate md2norg.yml and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from md2norg.core.config.loader import ConfigError, find_config_file, load_config
from md2norg.core.models.config import ConverterConfig


@dataclass
class ConfigCheckResult:
    """Result of configuration validation."""

    valid: bool = False
    config: ConverterConfig | None = None
    config_path: Path | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "config_path": str(self.config_path) if self.config_path else None,
            "errors": self.errors,
            "warnings": self.warnings,
            "settings": self.config.model_dump() if self.config else None,
        }


def check_config(config_path: Path | None = None) -> ConfigCheckResult:
    """Validate converter configuration and report issues.

    Args:
        config_path: Optional explicit path to md2norg.yml.

    Returns:
        ConfigCheckResult with validation status and any issues.
    """
    result = ConfigCheckResult()

    if config_path is None:
        config_path = find_config_file()

    if config_path is None:
        result.warnings.append("No md2norg.yml found; defaults will be used.")
        result.config = ConverterConfig()
        result.valid = True
        return result

    result.config_path = config_path

    try:
        config = load_config(config_path)
        result.config = config
    except ConfigError as e:
        result.errors.append(str(e))
        return result

    # Unknown keys are ignored by the model; surface them as likely typos
    raw = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    if isinstance(raw.get("convert"), dict):
        raw = raw["convert"]
    known = set(ConverterConfig.model_fields)
    unknown = sorted(str(k) for k in raw if k not in known)
    if unknown:
        result.warnings.append(f"Unknown settings ignored: {', '.join(unknown)}")

    # Semantic checks
    if config.source_extension == config.target_extension and not config.output:
        result.errors.append(
            f"source_extension and target_extension are both '{config.source_extension}' "
            "without an output directory; files would overwrite themselves."
        )

    if config.input and not Path(config.input).is_dir():
        result.warnings.append(f"Input directory does not exist: {config.input}")

    if config.replace:
        result.warnings.append(
            "replace is enabled: original files are deleted after conversion."
        )

    result.valid = len(result.errors) == 0
    return result
