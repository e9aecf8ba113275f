"""Utility functions for deckdraw.

This module provides utility functions including:

- Logging setup and configuration
- Session statistics
- Feet and inch parsing and formatting
"""

from deckdraw.utils.logging import (
    SessionLogger,
    SessionStats,
    configure_logging,
)
from deckdraw.utils.units import (
    FeetRange,
    decimal_to_fraction,
    format_feet_inches,
    parse_feet_inches,
)

__all__ = [
    "FeetRange",
    "SessionLogger",
    "SessionStats",
    "configure_logging",
    "decimal_to_fraction",
    "format_feet_inches",
    "parse_feet_inches",
]
