"""
Cell value normalization.
Single responsibility: canonicalize raw cell text for keys and comparison.
"""

import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Union

from .converters import to_decimal, round_half_away, canonical_decimal


CURRENCY_SYMBOLS = "$€£¥₹"

_CURRENCY_RE = re.compile(f"[{re.escape(CURRENCY_SYMBOLS)}]")
_WHITESPACE_RE = re.compile(r"\s")


@dataclass(frozen=True)
class NumericValue:
    """A cell that parsed as a number, rounded to the run precision."""

    number: Decimal
    text: str

    is_numeric = True


@dataclass(frozen=True)
class TextValue:
    """A cell compared as text (after optional trimming and case folding)."""

    text: str

    is_numeric = False


NormalizedValue = Union[NumericValue, TextValue]

EMPTY = TextValue("")


def strip_number_formatting(val: str) -> str:
    """
    Remove currency symbols, thousands separators and internal whitespace.

    Args:
        val: Input string

    Returns:
        String ready for numeric parsing

    Examples:
        >>> strip_number_formatting("$1,234 .50")
        '1234.50'
    """
    val = _CURRENCY_RE.sub("", val)
    val = val.replace(",", "")
    return _WHITESPACE_RE.sub("", val)


def normalize_value(raw: Optional[str], precision: int, ignore_case: bool,
                    trim_whitespace: bool) -> NormalizedValue:
    """
    Classify and canonicalize one raw cell.

    Steps, in order: blank short-circuit, optional trim, drop a trailing
    ".0", strip currency/commas/whitespace, parse as a decimal. Numbers are
    rounded half away from zero to ``precision`` places. Anything that does
    not parse falls back to the trimmed text, lowercased if ``ignore_case``.

    Args:
        raw: Raw cell text (None is treated as empty)
        precision: Decimal places for numeric rounding
        ignore_case: Lowercase non-numeric values
        trim_whitespace: Strip leading/trailing whitespace first

    Returns:
        NumericValue or TextValue
    """
    if raw is None or not raw.strip():
        return EMPTY

    trimmed = raw.strip() if trim_whitespace else raw

    candidate = trimmed[:-2] if trimmed.endswith(".0") else trimmed
    number = to_decimal(strip_number_formatting(candidate))

    if number is not None:
        rounded = round_half_away(number, precision)
        return NumericValue(rounded, canonical_decimal(rounded))

    return TextValue(trimmed.lower() if ignore_case else trimmed)


def normalize(raw: Optional[str], precision: int, ignore_case: bool,
              trim_whitespace: bool) -> str:
    """
    Canonical string form of a raw cell.

    Two representations of the same rounded number always produce the same
    string, e.g. "$1,234.00" and "1234" both give "1234".
    """
    return normalize_value(raw, precision, ignore_case, trim_whitespace).text
