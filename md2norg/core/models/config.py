"""
Converter configuration — the settings a conversion run starts from.

Loaded from md2norg.yml when present; CLI flags are layered on top by
the convert use case. Every field has a default, so an empty file (or
no file at all) is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, field_validator


class ConverterConfig(BaseModel):
    """Settings for a Markdown → Neorg conversion run."""

    input: str | None = None         # directory to convert
    output: str | None = None        # mirror tree root (None = write beside sources)
    recursive: bool = False
    replace: bool = False            # delete each source after converting it
    keep_going: bool = False         # skip failing files instead of aborting

    source_extension: str = "md"
    target_extension: str = "norg"

    @field_validator("source_extension", "target_extension")
    @classmethod
    def _normalize_extension(cls, value: str) -> str:
        ext = value.strip().lstrip(".")
        if not ext:
            raise ValueError("extension must not be empty")
        return ext
