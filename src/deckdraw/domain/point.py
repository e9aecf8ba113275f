"""Point value type for traced outlines.

This module defines the fundamental geometric type used throughout deckdraw:
- Point: an immutable 2D point in model pixels with optional provenance
  fields that only the rendering layer interprets

Coordinates use a top-left origin with Y increasing downward.
"""

from dataclasses import dataclass, replace
from typing import Any


@dataclass(frozen=True, slots=True)
class Point:
    """A point in model space.

    Immutable and hashable, so point lists can be copied structurally and
    never mutated in place.

    Attributes:
        x: X coordinate in model pixels
        y: Y coordinate in model pixels (downward)
        is_manual_dimension: Point was placed by typing a dimension
        display_dimension: Dimension label the user typed, if any
        exact_pixels: Exact segment length the user typed, in model pixels
    """

    x: float
    y: float
    is_manual_dimension: bool = False
    display_dimension: str | None = None
    exact_pixels: float | None = None

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) coordinates
        """
        return (self.x, self.y)

    def moved(self, x: float | None = None, y: float | None = None) -> "Point":
        """Return a copy with new coordinates and the same provenance fields."""
        return replace(
            self,
            x=self.x if x is None else x,
            y=self.y if y is None else y,
        )

    def same_position(self, other: "Point", tolerance: float = 0.0) -> bool:
        """Check whether two points share coordinates within ``tolerance``.

        Provenance fields are ignored. With the default tolerance the
        comparison is exact.
        """
        if tolerance <= 0.0:
            return self.x == other.x and self.y == other.y
        return abs(self.x - other.x) < tolerance and abs(self.y - other.y) < tolerance

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Provenance fields are only written when set.

        Returns:
            Dictionary with x, y and any provenance fields
        """
        data: dict[str, Any] = {"x": self.x, "y": self.y}
        if self.is_manual_dimension:
            data["is_manual_dimension"] = True
        if self.display_dimension is not None:
            data["display_dimension"] = self.display_dimension
        if self.exact_pixels is not None:
            data["exact_pixels"] = self.exact_pixels
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x and y fields and optional provenance

        Returns:
            Point instance
        """
        return cls(
            x=float(data["x"]),
            y=float(data["y"]),
            is_manual_dimension=bool(data.get("is_manual_dimension", False)),
            display_dimension=data.get("display_dimension"),
            exact_pixels=data.get("exact_pixels"),
        )


def points_to_dicts(points: "list[Point] | tuple[Point, ...]") -> list[dict[str, Any]]:
    """Serialize a point sequence."""
    return [p.to_dict() for p in points]


def points_from_dicts(data: list[dict[str, Any]]) -> list[Point]:
    """Deserialize a point sequence."""
    return [Point.from_dict(p) for p in data]
