"""Rectangle types produced by shape decomposition.

A decomposition owns its rectangles; they are rebuilt from scratch whenever
the outline or the ledger selection changes.
"""

from dataclasses import dataclass, field
from typing import Any

from deckdraw.domain.point import Point


@dataclass(frozen=True)
class Segment:
    """A straight segment between two points."""

    p1: Point
    p2: Point

    @property
    def length(self) -> float:
        return ((self.p2.x - self.p1.x) ** 2 + (self.p2.y - self.p1.y) ** 2) ** 0.5

    def to_dict(self) -> dict[str, Any]:
        return {"p1": self.p1.to_dict(), "p2": self.p2.to_dict()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Segment":
        return cls(p1=Point.from_dict(data["p1"]), p2=Point.from_dict(data["p2"]))


@dataclass(frozen=True)
class SharedEdge:
    """Edge a rectangle shares with a neighbour.

    Attributes:
        rectangle_id: Id of the neighbouring rectangle
        edge: Overlapping part of the two boundaries
    """

    rectangle_id: str
    edge: Segment

    def to_dict(self) -> dict[str, Any]:
        return {"rectangle_id": self.rectangle_id, "edge": self.edge.to_dict()}


@dataclass(frozen=True)
class SectionDimensions:
    """Size and bounds of a rectangle, in feet and model pixels."""

    width_feet: float
    height_feet: float
    min_x: float
    max_x: float
    min_y: float
    max_y: float


@dataclass
class Rectangle:
    """An axis-aligned rectangle of a decomposed outline.

    Attributes:
        x: Left edge in model pixels
        y: Top edge in model pixels
        width: Width in model pixels
        height: Height in model pixels
        id: Identifier unique within one decomposition (``rect_<n>``)
        is_ledger_rectangle: Rectangle runs along a ledger wall
        ledger_walls: Parts of ledger walls lying on this rectangle's boundary
        adjacent_rectangles: Ids of rectangles sharing an edge with this one
        shared_edges: The shared edges, one per neighbour
    """

    x: float
    y: float
    width: float
    height: float
    id: str = ""
    is_ledger_rectangle: bool = False
    ledger_walls: list[Segment] = field(default_factory=list)
    adjacent_rectangles: list[str] = field(default_factory=list)
    shared_edges: list[SharedEdge] = field(default_factory=list)

    @property
    def corners(self) -> tuple[Point, Point, Point, Point]:
        """Corners in clockwise screen order, starting top-left.

        Y grows downward, so top-left → top-right → bottom-right →
        bottom-left is clockwise on screen.
        """
        right = self.x + self.width
        bottom = self.y + self.height
        return (
            Point(self.x, self.y),
            Point(right, self.y),
            Point(right, bottom),
            Point(self.x, bottom),
        )

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def ledger_wall(self) -> Segment | None:
        """First ledger segment on this rectangle, if any."""
        return self.ledger_walls[0] if self.ledger_walls else None

    def edges(self) -> list[Segment]:
        """Boundary segments following the corner order."""
        c = self.corners
        return [Segment(c[i], c[(i + 1) % 4]) for i in range(4)]

    def overlaps(self, other: "Rectangle", tolerance: float = 1e-9) -> bool:
        """Check whether the interiors of two rectangles intersect.

        Rectangles that only share an edge or a corner do not overlap.
        """
        return (
            self.x < other.x + other.width - tolerance
            and other.x < self.x + self.width - tolerance
            and self.y < other.y + other.height - tolerance
            and other.y < self.y + self.height - tolerance
        )

    def dimensions(self, pixels_per_foot: float) -> SectionDimensions:
        """Get the rectangle's size in feet along with its pixel bounds.

        Args:
            pixels_per_foot: Model pixels per foot

        Returns:
            SectionDimensions for this rectangle
        """
        return SectionDimensions(
            width_feet=self.width / pixels_per_foot,
            height_feet=self.height / pixels_per_foot,
            min_x=self.x,
            max_x=self.x + self.width,
            min_y=self.y,
            max_y=self.y + self.height,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary.

        Returns:
            Dictionary representation of the rectangle
        """
        return {
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "corners": [c.to_dict() for c in self.corners],
            "is_ledger_rectangle": self.is_ledger_rectangle,
            "ledger_walls": [s.to_dict() for s in self.ledger_walls],
            "adjacent_rectangles": list(self.adjacent_rectangles),
            "shared_edges": [e.to_dict() for e in self.shared_edges],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Rectangle":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a rectangle

        Returns:
            Rectangle instance
        """
        return cls(
            x=data["x"],
            y=data["y"],
            width=data["width"],
            height=data["height"],
            id=data.get("id", ""),
            is_ledger_rectangle=data.get("is_ledger_rectangle", False),
            ledger_walls=[Segment.from_dict(s) for s in data.get("ledger_walls", [])],
            adjacent_rectangles=list(data.get("adjacent_rectangles", [])),
            shared_edges=[
                SharedEdge(rectangle_id=e["rectangle_id"], edge=Segment.from_dict(e["edge"]))
                for e in data.get("shared_edges", [])
            ],
        )
