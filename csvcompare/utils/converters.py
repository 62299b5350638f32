"""
Numeric conversion utilities.
Single responsibility: turn cleaned cell text into decimals and back.
"""

import math
import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext
from typing import Optional


# Plain decimal syntax only: optional sign, digits with an optional point,
# optional exponent. Rejects "nan", "inf", "1_000" and "1.2.3".
NUMBER_PATTERN = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def to_decimal(val: str) -> Optional[Decimal]:
    """
    Parse a cleaned string as a finite decimal number.

    Args:
        val: String with currency symbols, commas and spaces already removed

    Returns:
        Decimal value, or None if the text is not a plain finite number

    Examples:
        >>> to_decimal("1234.50")
        Decimal('1234.50')
        >>> to_decimal("12abc") is None
        True
    """
    if not isinstance(val, str) or not NUMBER_PATTERN.fullmatch(val):
        return None

    try:
        number = Decimal(val)
    except InvalidOperation:
        return None

    # Values beyond double range count as non-numeric
    if not math.isfinite(float(number)):
        return None

    return number


def round_half_away(number: Decimal, precision: int) -> Decimal:
    """
    Round to a number of decimal places, halves away from zero.

    Args:
        number: Finite decimal
        precision: Decimal places (>= 0)

    Returns:
        Rounded decimal with exactly ``precision`` places
    """
    quantum = Decimal(1).scaleb(-precision)
    with localcontext() as ctx:
        ctx.prec = max(28, number.adjusted() + precision + 2)
        return number.quantize(quantum, rounding=ROUND_HALF_UP)


def canonical_decimal(number: Decimal) -> str:
    """
    Render a decimal without exponent, trailing zeros or negative zero.

    Equal values always produce identical text ("10.00" and "1E+1" -> "10").
    """
    if number.is_zero():
        return "0"
    with localcontext() as ctx:
        ctx.prec = max(28, len(number.as_tuple().digits))
        text = format(number.normalize(), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
