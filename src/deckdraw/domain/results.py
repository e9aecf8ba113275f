"""Result records for operations whose failures are expected.

Closing a shape or validating one fails on ordinary user input, so these
outcomes are returned as values rather than raised.
"""

from dataclasses import dataclass
from typing import Any

from deckdraw.domain.point import Point, points_to_dicts


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of shape validation.

    Attributes:
        is_valid: Shape passed every check
        error: Human-readable reason when invalid
    """

    is_valid: bool
    error: str | None = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(is_valid=True, error=None)

    @classmethod
    def fail(cls, error: str) -> "ValidationResult":
        return cls(is_valid=False, error=error)


@dataclass(frozen=True)
class SnapResult:
    """A snapped drawing position.

    Attributes:
        x: Snapped X coordinate
        y: Snapped Y coordinate
        is_closing_click: The click lands on the first point and closes the shape
    """

    x: float
    y: float
    is_closing_click: bool = False

    def to_point(self) -> Point:
        return Point(self.x, self.y)


@dataclass(frozen=True)
class CloseResult:
    """Outcome of an attempt to close an outline.

    Attributes:
        success: The ring closed and validated
        closed_points: Closed ring (first point repeated at the end)
        simplified_points: Closed ring with collinear vertices removed
        corner_added: A right-angle corner was inserted before closing
        error: Reason for failure
    """

    success: bool
    closed_points: tuple[Point, ...] | None = None
    simplified_points: tuple[Point, ...] | None = None
    corner_added: bool = False
    error: str | None = None

    @classmethod
    def failed(cls, error: str) -> "CloseResult":
        return cls(success=False, error=error)

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "closed_points": points_to_dicts(self.closed_points) if self.closed_points else None,
            "simplified_points": (
                points_to_dicts(self.simplified_points) if self.simplified_points else None
            ),
            "corner_added": self.corner_added,
            "error": self.error,
        }
