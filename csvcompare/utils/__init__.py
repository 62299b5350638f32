"""Utility functions and helpers."""

from .logger import get_logger, configure_logging, StructuredLogger
from .normalizers import (
    NumericValue,
    TextValue,
    normalize,
    normalize_value,
    strip_number_formatting
)
from .converters import (
    to_decimal,
    round_half_away,
    canonical_decimal
)

__all__ = [
    "get_logger",
    "configure_logging",
    "StructuredLogger",
    "NumericValue",
    "TextValue",
    "normalize",
    "normalize_value",
    "strip_number_formatting",
    "to_decimal",
    "round_half_away",
    "canonical_decimal",
]
