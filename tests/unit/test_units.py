"""Unit tests for feet-inch parsing and formatting."""

import math

import pytest

from deckdraw.utils.units import FeetRange, decimal_to_fraction, format_feet_inches, parse_feet_inches


class TestParseFeetInches:
    """Tests for parse_feet_inches."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("3'6\"", 3.5),
            ("3' 6\"", 3.5),
            ("3'6''", 3.5),
            ("3'", 3.0),
            ("6\"", 0.5),
            ("12", 12.0),
            ("0'9\"", 0.75),
        ],
    )
    def test_single_values(self, text: str, expected: float) -> None:
        """Test single lengths in the accepted notations."""
        assert parse_feet_inches(text) == pytest.approx(expected)

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("3' - 4'", FeetRange(3.0, 4.0)),
            ("4' - 3'", FeetRange(3.0, 4.0)),
            ("3'6\"–5'", FeetRange(3.5, 5.0)),
        ],
    )
    def test_ranges(self, text: str, expected: FeetRange) -> None:
        """Test ranges with hyphens and en dashes, in either order."""
        assert parse_feet_inches(text) == expected

    @pytest.mark.parametrize("text", [None, "", "   ", "abc", "3.5'", "5 - x"])
    def test_unparseable(self, text: str | None) -> None:
        """Test that unparseable text gives None."""
        assert parse_feet_inches(text) is None


class TestFormatFeetInches:
    """Tests for format_feet_inches."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (3.5, "3' 6\""),
            (0, "0' 0\""),
            (12, "12' 0\""),
            (2.99, "3' 0\""),
            (10.25, "10' 3\""),
        ],
    )
    def test_format(self, value: float, expected: str) -> None:
        """Test rounding to the nearest inch with carry into feet."""
        assert format_feet_inches(value) == expected

    def test_negative_and_nan(self) -> None:
        """Test that meaningless input formats as zero."""
        assert format_feet_inches(-1) == "0' 0\""
        assert format_feet_inches(math.nan) == "0' 0\""


class TestDecimalToFraction:
    """Tests for decimal_to_fraction."""

    @pytest.mark.parametrize(
        ("value", "denominator", "expected"),
        [
            (7.3125, 16, "7 5/16"),
            (0.5, 16, "1/2"),
            (3.0, 16, "3"),
            (2.99, 16, "3"),
            (0.25, 8, "1/4"),
            (0, 16, "0"),
        ],
    )
    def test_fractions(self, value: float, denominator: int, expected: str) -> None:
        """Test reduced fractions."""
        assert decimal_to_fraction(value, denominator) == expected

    def test_invalid_input(self) -> None:
        """Test NaN and a zero denominator."""
        assert decimal_to_fraction(math.nan) == "0"
        assert decimal_to_fraction(1.5, 0) == "0"
