"""Feet and inch parsing and formatting for user-facing dimensions."""

import math
import re
from dataclasses import dataclass

_SINGLE_RE = re.compile(r"""^(?:(\d+)')?\s*(?:(\d+)(?:''|"|\\")?)?$""")
_RANGE_RE = re.compile(r"(.+?)\s*[–-]\s*(.+)")
_FRACTION_EPSILON = 0.0001


@dataclass(frozen=True)
class FeetRange:
    """An inclusive range of lengths in decimal feet, ``start <= end``."""

    start: float
    end: float


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _parse_single(text: str) -> float | None:
    text = text.strip()
    if not text:
        return None

    if text.isdigit():
        return float(int(text))

    match = _SINGLE_RE.match(text)
    if match is None or not (match.group(1) or match.group(2)):
        return None

    feet = int(match.group(1) or 0)
    inches = int(match.group(2) or 0)
    return feet + inches / 12


def parse_feet_inches(text: str | None) -> float | FeetRange | None:
    """Parse a feet-inches string into decimal feet.

    Accepts ``3'6"``, ``3'``, ``6"`` and bare whole feet such as ``12``.
    Two values joined by a hyphen or en dash give a FeetRange.

    Examples:
        >>> parse_feet_inches("3'6\\"")
        3.5
        >>> parse_feet_inches("4' - 3'")
        FeetRange(start=3.0, end=4.0)

    Returns:
        Decimal feet, a FeetRange, or None if the text cannot be parsed
    """
    if not text or not isinstance(text, str):
        return None

    range_match = _RANGE_RE.match(text)
    if range_match:
        start = _parse_single(range_match.group(1))
        end = _parse_single(range_match.group(2))
        if start is None or end is None:
            return None
        return FeetRange(start=min(start, end), end=max(start, end))

    return _parse_single(text)


def format_feet_inches(decimal_feet: float) -> str:
    """Format decimal feet as ``X' Y"`` rounded to the nearest inch.

    Negative or NaN input gives ``0' 0"``.
    """
    if math.isnan(decimal_feet) or decimal_feet < 0:
        return "0' 0\""

    total_inches = decimal_feet * 12
    feet = math.floor(total_inches / 12)
    inches = _round_half_up(total_inches % 12)
    if inches == 12:
        feet += 1
        inches = 0
    return f"{feet}' {inches}\""


def decimal_to_fraction(decimal_inches: float, denominator: int = 16) -> str:
    """Format inches as whole inches plus a reduced fraction, e.g. ``7 5/16``.

    Args:
        decimal_inches: Length in inches
        denominator: Finest fraction to round to

    Returns:
        Formatted string; ``"0"`` for zero, NaN or a non-positive denominator
    """
    if math.isnan(decimal_inches) or denominator <= 0:
        return "0"
    if abs(decimal_inches) < _FRACTION_EPSILON:
        return "0"

    whole = math.floor(decimal_inches)
    fraction = decimal_inches - whole
    if abs(fraction) < _FRACTION_EPSILON:
        return str(whole)

    numerator = _round_half_up(fraction * denominator)
    if numerator == 0:
        return str(whole)
    if numerator == denominator:
        return str(whole + 1)

    divisor = math.gcd(numerator, denominator)
    reduced = f"{numerator // divisor}/{denominator // divisor}"
    if whole != 0:
        return f"{whole} {reduced}"
    return reduced
