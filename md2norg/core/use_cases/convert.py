"""
Convert use case — merge config with CLI overrides and run a conversion.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from md2norg.core.config.loader import ConfigError, load_config
from md2norg.core.models.config import ConverterConfig
from md2norg.core.models.conversion import ConversionReport
from md2norg.core.services.convert_ops import ConvertError, convert_tree


@dataclass
class ConvertResult:
    """Outcome of a conversion run, or the reason it never started."""

    config: ConverterConfig | None = None
    report: ConversionReport | None = None
    error: str | None = None
    cancelled: bool = False         # replace declined at the prompt

    @property
    def ok(self) -> bool:
        return self.error is None and self.report is not None and self.report.failed == 0

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        if self.error:
            return {"error": self.error}
        if self.cancelled:
            return {"cancelled": True}
        return self.report.to_dict() if self.report else {}


def resolve_settings(
    config_path: Path | None = None,
    **overrides: object,
) -> ConverterConfig:
    """Load the config file and apply CLI overrides that were actually given.

    ``None`` means "not given on the command line"; boolean flags only
    override when True, so a flag left off never disables a config value.

    Raises:
        ConfigError: If the config file is invalid.
    """
    config = load_config(config_path)
    updates = {
        key: value
        for key, value in overrides.items()
        if value is not None and value is not False
    }
    if not updates:
        return config
    return ConverterConfig.model_validate({**config.model_dump(), **updates})


def run_convert(
    config_path: Path | None = None,
    input_dir: str | None = None,
    output_dir: str | None = None,
    recursive: bool = False,
    replace: bool = False,
    keep_going: bool = False,
    confirm_replace: Callable[[], bool] | None = None,
) -> ConvertResult:
    """Run a conversion over the configured input directory.

    Args:
        config_path: Optional explicit path to md2norg.yml.
        input_dir: Input directory (overrides config ``input``).
        output_dir: Output directory (overrides config ``output``).
        recursive: Process subdirectories.
        replace: Delete originals after conversion.
        keep_going: Skip failing files instead of aborting.
        confirm_replace: Asked once, before any file is touched, when the
            run would delete originals. Returning False cancels the run.
            None skips the question (--force).

    Returns:
        ConvertResult with the report, or an error string.
    """
    result = ConvertResult()

    try:
        config = resolve_settings(
            config_path,
            input=input_dir,
            output=output_dir,
            recursive=recursive,
            replace=replace,
            keep_going=keep_going,
        )
    except (ConfigError, ValueError) as e:
        result.error = str(e)
        return result

    result.config = config

    if not config.input:
        result.error = "No input directory given. Use --input or set 'input' in md2norg.yml."
        return result

    if config.replace and confirm_replace is not None and not confirm_replace():
        result.cancelled = True
        return result

    try:
        result.report = convert_tree(
            Path(config.input),
            output_dir=Path(config.output) if config.output else None,
            recursive=config.recursive,
            replace=config.replace,
            keep_going=config.keep_going,
            source_extension=config.source_extension,
            target_extension=config.target_extension,
        )
    except ConvertError as e:
        result.error = str(e)

    return result
