"""Tests for domain models to verify they work correctly."""

import pytest

from deckdraw.domain import (
    ActionType,
    AddPoint,
    CloseResult,
    ClosedShapeDelegate,
    NoAction,
    OutOfBounds,
    Point,
    Rectangle,
    Segment,
    ValidationResult,
    points_from_dicts,
    points_to_dicts,
)


class TestPoint:
    """Tests for Point class."""

    def test_point_creation(self) -> None:
        """Test basic point creation."""
        p = Point(100.0, 200.0)
        assert p.x == 100.0
        assert p.y == 200.0
        assert p.is_manual_dimension is False
        assert p.display_dimension is None
        assert p.exact_pixels is None

    def test_point_to_tuple(self) -> None:
        """Test point to tuple conversion."""
        p = Point(100.0, 200.0)
        assert p.to_tuple() == (100.0, 200.0)

    def test_point_serialization(self) -> None:
        """Test point serialization and deserialization."""
        p1 = Point(24.0, 48.0, is_manual_dimension=True, display_dimension="2' 0\"", exact_pixels=48.0)
        data = p1.to_dict()
        p2 = Point.from_dict(data)

        assert p2 == p1
        assert data["display_dimension"] == "2' 0\""

    def test_plain_point_serializes_coordinates_only(self) -> None:
        """Test that unset provenance fields are not written."""
        assert Point(1, 2).to_dict() == {"x": 1, "y": 2}

    def test_point_immutable(self) -> None:
        """Test that point is immutable."""
        p = Point(100.0, 200.0)
        with pytest.raises(AttributeError):
            p.x = 300.0  # type: ignore

    def test_moved_keeps_provenance(self) -> None:
        """Test that moving a point keeps its manual dimension flag."""
        p = Point(10, 20, is_manual_dimension=True)
        moved = p.moved(x=0)
        assert moved.to_tuple() == (0, 20)
        assert moved.is_manual_dimension is True
        assert p.x == 10

    def test_same_position(self) -> None:
        """Test coordinate comparison with and without tolerance."""
        assert Point(1, 1).same_position(Point(1, 1, is_manual_dimension=True))
        assert not Point(1, 1).same_position(Point(1.005, 1))
        assert Point(1, 1).same_position(Point(1.005, 1), tolerance=0.01)

    def test_points_round_trip_helpers(self) -> None:
        """Test the sequence serialization helpers."""
        points = [Point(0, 0), Point(24, 0)]
        assert points_from_dicts(points_to_dicts(points)) == points


class TestRectangle:
    """Tests for Rectangle class."""

    def test_corners_clockwise_from_top_left(self) -> None:
        """Test that corners run top-left, top-right, bottom-right, bottom-left."""
        rect = Rectangle(x=10, y=20, width=30, height=40)
        assert [c.to_tuple() for c in rect.corners] == [(10, 20), (40, 20), (40, 60), (10, 60)]

    def test_area(self) -> None:
        """Test area calculation."""
        assert Rectangle(0, 0, 48, 24).area == 1152

    def test_edges_follow_corners(self) -> None:
        """Test that edges close back to the first corner."""
        edges = Rectangle(0, 0, 10, 10).edges()
        assert len(edges) == 4
        assert edges[-1].p2 == Point(0, 0)

    def test_overlaps(self) -> None:
        """Test interior overlap detection."""
        a = Rectangle(0, 0, 10, 10)
        assert a.overlaps(Rectangle(5, 5, 10, 10))
        assert not a.overlaps(Rectangle(10, 0, 10, 10))  # shares an edge
        assert not a.overlaps(Rectangle(10, 10, 5, 5))  # shares a corner

    def test_dimensions(self) -> None:
        """Test conversion of size to feet."""
        dims = Rectangle(24, 48, 96, 48).dimensions(24)
        assert dims.width_feet == 4.0
        assert dims.height_feet == 2.0
        assert (dims.min_x, dims.max_x, dims.min_y, dims.max_y) == (24, 120, 48, 96)

    def test_ledger_wall(self) -> None:
        """Test the first ledger segment accessor."""
        rect = Rectangle(0, 0, 10, 10)
        assert rect.ledger_wall is None

        wall = Segment(Point(0, 0), Point(10, 0))
        rect.ledger_walls.append(wall)
        assert rect.ledger_wall == wall

    def test_rectangle_serialization(self) -> None:
        """Test rectangle serialization and deserialization."""
        rect = Rectangle(
            0, 0, 48, 24, id="rect_0", is_ledger_rectangle=True,
            ledger_walls=[Segment(Point(0, 0), Point(48, 0))],
            adjacent_rectangles=["rect_1"],
        )
        data = rect.to_dict()
        assert len(data["corners"]) == 4

        restored = Rectangle.from_dict(data)
        assert restored == rect

    def test_segment_length(self) -> None:
        """Test segment length."""
        assert Segment(Point(0, 0), Point(3, 4)).length == 5.0


class TestActions:
    """Tests for action values."""

    def test_action_type_tags(self) -> None:
        """Test that every action carries its type tag."""
        assert NoAction().type == ActionType.NONE
        assert AddPoint(Point(1, 2)).type == ActionType.ADD_POINT
        assert OutOfBounds("outside").type == ActionType.OUT_OF_BOUNDS

    def test_action_to_dict(self) -> None:
        """Test action serialization."""
        data = NoAction(delegate=ClosedShapeDelegate.STAIR_SELECT, position=Point(5, 6)).to_dict()
        assert data == {"type": "NONE", "delegate": "stair_select", "position": {"x": 5, "y": 6}}

    def test_actions_are_immutable(self) -> None:
        """Test that actions cannot be modified after creation."""
        action = AddPoint(Point(1, 2))
        with pytest.raises(AttributeError):
            action.point = Point(3, 4)  # type: ignore


class TestResults:
    """Tests for result records."""

    def test_validation_result_factories(self) -> None:
        """Test the ok and fail constructors."""
        assert ValidationResult.ok() == ValidationResult(is_valid=True)
        failed = ValidationResult.fail("bad")
        assert failed.is_valid is False
        assert failed.error == "bad"

    def test_failed_close_result(self) -> None:
        """Test that a failed close carries only the error."""
        result = CloseResult.failed("Need at least 3 points")
        assert result.success is False
        assert result.closed_points is None
        assert result.to_dict()["error"] == "Need at least 3 points"
