"""
Cell value comparison.
Single responsibility: decide whether two raw cells are equal under settings.
"""

from ..config.settings import ComparisonSettings
from ..utils.normalizers import NormalizedValue, normalize_value


def normalize_cell(raw: str, settings: ComparisonSettings) -> NormalizedValue:
    """Normalize a cell with the run settings."""
    return normalize_value(
        raw,
        settings.numeric_precision,
        settings.ignore_case,
        settings.trim_whitespace,
    )


def normalized_equal(left: NormalizedValue, right: NormalizedValue,
                     settings: ComparisonSettings) -> bool:
    """
    Compare two already-normalized values.

    Numbers are equal when strictly closer than one unit in the last
    rounded place, so a gap of exactly 10^-precision is a difference.
    Everything else compares on the normalized text.
    """
    if left.is_numeric and right.is_numeric:
        return abs(left.number - right.number) < settings.tolerance
    return left.text == right.text


def values_equal(a: str, b: str, settings: ComparisonSettings) -> bool:
    """
    Decide equality of two raw cell values.

    Args:
        a: Source cell text
        b: Compare cell text
        settings: Run settings

    Returns:
        True if the values are equal after normalization and tolerance

    Examples:
        >>> s = ComparisonSettings(numeric_precision=2)
        >>> values_equal("1.000", "1.004", s)
        True
        >>> values_equal("1.000", "1.005", s)
        False
    """
    return normalized_equal(normalize_cell(a, settings), normalize_cell(b, settings), settings)
