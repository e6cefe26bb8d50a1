"""
Domain models — Pydantic types for md2norg.

    from md2norg.core.models import ConverterConfig, ConversionRecord, ConversionReport
"""

from md2norg.core.models.config import ConverterConfig
from md2norg.core.models.conversion import ConversionRecord, ConversionReport

__all__ = [
    # conversion.py
    "ConversionRecord",
    "ConversionReport",
    # config.py
    "ConverterConfig",
]
