"""
Unit tests for numeric conversion helpers.
"""

from decimal import Decimal

import pytest

from csvcompare.utils.converters import to_decimal, round_half_away, canonical_decimal


class TestToDecimal:
    """Strict number parsing."""

    @pytest.mark.parametrize("text,expected", [
        ("1234", Decimal("1234")),
        ("-12.50", Decimal("-12.50")),
        ("+3", Decimal("3")),
        (".5", Decimal("0.5")),
        ("5.", Decimal("5")),
        ("1e3", Decimal("1000")),
        ("2.5E-2", Decimal("0.025")),
    ])
    def test_plain_numbers_parse(self, text, expected):
        assert to_decimal(text) == expected

    @pytest.mark.parametrize("text", [
        "", "-", ".", "abc", "12abc", "1.2.3", "1e", "1e+",
        "nan", "NaN", "inf", "-Infinity", "1_000", "0x1F", "１２",
    ])
    def test_non_numbers_rejected(self, text):
        assert to_decimal(text) is None

    def test_values_beyond_double_range_are_not_numbers(self):
        assert to_decimal("1e400") is None
        assert to_decimal("1e300") == Decimal("1e300")

    def test_non_string_rejected(self):
        assert to_decimal(None) is None


class TestRoundHalfAway:
    """Rounding to a number of decimal places."""

    @pytest.mark.parametrize("value,precision,expected", [
        ("1.004", 2, "1.00"),
        ("1.005", 2, "1.01"),
        ("-1.005", 2, "-1.01"),
        ("2.5", 0, "3"),
        ("-2.5", 0, "-3"),
        ("0.125", 2, "0.13"),
        ("10", 3, "10.000"),
    ])
    def test_half_rounds_away_from_zero(self, value, precision, expected):
        assert round_half_away(Decimal(value), precision) == Decimal(expected)

    def test_large_values_do_not_overflow_context(self):
        rounded = round_half_away(Decimal("1e30"), 2)
        assert rounded == Decimal("1e30")


class TestCanonicalDecimal:
    """Stable text for equal values."""

    @pytest.mark.parametrize("value,expected", [
        ("10.00", "10"),
        ("1E+1", "10"),
        ("1.50", "1.5"),
        ("-0.00", "0"),
        ("0", "0"),
        ("-3.10", "-3.1"),
        ("0.05", "0.05"),
        ("1E+30", "1000000000000000000000000000000"),
    ])
    def test_canonical_text(self, value, expected):
        assert canonical_decimal(Decimal(value)) == expected

    def test_equal_values_render_identically(self):
        assert canonical_decimal(Decimal("1234.00")) == canonical_decimal(Decimal("1234"))
