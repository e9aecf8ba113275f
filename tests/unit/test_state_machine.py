"""Unit tests for the click state machine."""

import pytest

from deckdraw.config import DeckDrawSettings, DrawingConfig, GeometryConfig
from deckdraw.core.state_machine import (
    DrawingContext,
    get_current_state,
    handle_click,
    handle_closed_shape_click,
    handle_drawing_click,
    handle_editing_click,
    handle_idle_click,
    handle_wall_select_click,
    is_within_bounds,
)
from deckdraw.domain import (
    ActionType,
    AddPoint,
    AddVertex,
    CloseShape,
    CloseShapeFailed,
    ClosedShapeDelegate,
    DeselectWall,
    DrawingState,
    NoAction,
    OutOfBounds,
    Point,
    RemoveVertex,
    SelectWall,
)

RECTANGLE = (Point(0, 0), Point(240, 0), Point(240, 240), Point(0, 240))
CLOSED_RECTANGLE = (*RECTANGLE, Point(0, 0))


class TestGetCurrentState:
    """Tests for deriving the drawing mode."""

    def test_idle(self) -> None:
        """Test the empty context."""
        assert get_current_state(DrawingContext()) == DrawingState.IDLE

    def test_drawing(self) -> None:
        """Test that points or the drawing flag mean drawing."""
        assert get_current_state(DrawingContext(points=(Point(0, 0),))) == DrawingState.DRAWING
        assert get_current_state(DrawingContext(is_drawing=True)) == DrawingState.DRAWING

    @pytest.mark.parametrize(
        ("flags", "expected"),
        [
            ({"measure_mode": True, "breaker_placement_mode": True}, DrawingState.MEASURING),
            ({"breaker_placement_mode": True, "stair_placement_mode": True}, DrawingState.BREAKER_PLACE),
            ({"stair_placement_mode": True, "shape_edit_mode": True}, DrawingState.STAIR_PLACE),
            ({"shape_edit_mode": True, "wall_selection_mode": True}, DrawingState.EDITING),
            ({"wall_selection_mode": True, "has_structural_components": True}, DrawingState.WALL_SELECT),
            ({"has_structural_components": True}, DrawingState.CALCULATED),
            ({"has_structural_components": True, "has_structural_error": True}, DrawingState.SHAPE_CLOSED),
            ({}, DrawingState.SHAPE_CLOSED),
        ],
    )
    def test_priority_on_closed_shape(self, flags: dict, expected: DrawingState) -> None:
        """Test that higher-priority modes win."""
        context = DrawingContext(points=CLOSED_RECTANGLE, is_shape_closed=True, **flags)
        assert get_current_state(context) == expected

    def test_edit_and_wall_select_need_closed_shape(self) -> None:
        """Test that edit and wall-select flags are ignored while drawing."""
        context = DrawingContext(points=(Point(0, 0),), shape_edit_mode=True, wall_selection_mode=True)
        assert get_current_state(context) == DrawingState.DRAWING

    def test_tool_modes_apply_without_shape(self) -> None:
        """Test that the measuring tool works before anything is drawn."""
        assert get_current_state(DrawingContext(measure_mode=True)) == DrawingState.MEASURING


class TestIdleClick:
    """Tests for the first click."""

    def test_snaps_to_whole_feet(self) -> None:
        """Test that the first point lands on a foot."""
        action = handle_idle_click(Point(25, 37), DrawingContext(), DrawingConfig())
        assert isinstance(action, AddPoint)
        assert action.point == Point(24, 48)

    def test_out_of_bounds(self) -> None:
        """Test a click left of the model area."""
        action = handle_idle_click(Point(-30, 10), DrawingContext(), DrawingConfig())
        assert isinstance(action, OutOfBounds)
        assert action.message == "Cannot draw outside the designated area."

    def test_edge_is_in_bounds(self) -> None:
        """Test that the model edges are drawable."""
        config = DrawingConfig()
        assert is_within_bounds(Point(0, 0), config)
        assert is_within_bounds(Point(config.model_width_pixels, config.model_height_pixels), config)
        assert not is_within_bounds(Point(config.model_width_pixels + 1, 0), config)


class TestDrawingClick:
    """Tests for clicks while drawing."""

    def test_adds_snapped_point(self) -> None:
        """Test a nearly horizontal click."""
        context = DrawingContext(points=(Point(0, 0),), is_drawing=True)
        action = handle_click(Point(240, 3), context)
        assert action.type == ActionType.ADD_POINT
        assert isinstance(action, AddPoint)
        assert action.point == Point(240, 0)

    def test_closing_click(self) -> None:
        """Test that a click near the first point closes the outline."""
        context = DrawingContext(points=RECTANGLE, is_drawing=True)
        action = handle_click(Point(2, 2), context)

        assert isinstance(action, CloseShape)
        assert action.type == ActionType.CLOSE_SHAPE
        assert len(action.closed_points) == 5
        assert action.simplified_points[0] == action.simplified_points[-1]
        assert action.has_manual_dimensions is False

    def test_failed_close(self) -> None:
        """Test that an invalid outline reports why it cannot close."""
        points = (Point(0, 0), Point(100, 0), Point(50, 87))
        action = handle_drawing_click(Point(1, 1), DrawingContext(points=points), DrawingConfig())

        assert isinstance(action, CloseShapeFailed)
        assert action.error.startswith("Invalid angle")

    def test_close_uses_settings_geometry(self) -> None:
        """Test that closing validates with the geometry tolerances in the settings."""
        chamfer = (Point(0, 0), Point(96, 0), Point(96, 48), Point(48, 96), Point(0, 96))
        context = DrawingContext(points=chamfer, is_drawing=True)
        right_angles = DeckDrawSettings(geometry=GeometryConfig(angle_step_degrees=90))

        assert isinstance(handle_click(Point(1, 1), context, DeckDrawSettings()), CloseShape)

        action = handle_click(Point(1, 1), context, right_angles)
        assert isinstance(action, CloseShapeFailed)
        assert action.error.startswith("Invalid angle at point 3")

    def test_duplicate_click(self) -> None:
        """Test that clicking the last point again does nothing."""
        context = DrawingContext(points=(Point(0, 0), Point(240, 0)), is_drawing=True)
        action = handle_click(Point(240.4, 0.4), context)
        assert action == NoAction()

    def test_out_of_bounds_reports_area(self) -> None:
        """Test the bounds message while drawing."""
        config = DrawingConfig(model_width_feet=20, model_height_feet=20)
        context = DrawingContext(points=(Point(0, 0),), is_drawing=True)
        action = handle_drawing_click(Point(600, 0), context, config)

        assert isinstance(action, OutOfBounds)
        assert action.message == "Cannot draw outside the designated area (20ft x 20ft)."

    def test_manual_dimensions_flagged(self) -> None:
        """Test that typed points are reported on the close action."""
        points = (Point(0, 0), Point(240, 0, is_manual_dimension=True), Point(240, 240), Point(0, 240))
        action = handle_click(Point(1, 1), DrawingContext(points=points))
        assert isinstance(action, CloseShape)
        assert action.has_manual_dimensions is True

    def test_context_not_modified(self) -> None:
        """Test that handlers leave the context alone."""
        context = DrawingContext(points=RECTANGLE, is_drawing=True)
        handle_click(Point(2, 2), context, DeckDrawSettings())
        assert context.points == RECTANGLE
        assert context.is_shape_closed is False


class TestWallSelectClick:
    """Tests for ledger wall selection."""

    def test_select(self) -> None:
        """Test selecting an unselected wall."""
        assert handle_wall_select_click(2, DrawingContext()) == SelectWall(wall_index=2)

    def test_deselect(self) -> None:
        """Test deselecting a selected wall."""
        context = DrawingContext(selected_wall_indices=(0, 2))
        assert handle_wall_select_click(2, context) == DeselectWall(wall_index=2)

    def test_miss(self) -> None:
        """Test a click that hit no wall."""
        assert handle_wall_select_click(-1, DrawingContext()) == NoAction()

    def test_dispatch_uses_clicked_wall(self) -> None:
        """Test that the dispatcher uses the hit-tested wall."""
        context = DrawingContext(
            points=CLOSED_RECTANGLE, is_shape_closed=True, wall_selection_mode=True, clicked_wall_index=1
        )
        assert handle_click(Point(240, 120), context) == SelectWall(wall_index=1)


class TestEditingClick:
    """Tests for vertex editing."""

    def test_remove_vertex(self) -> None:
        """Test clicking a delete icon."""
        context = DrawingContext(hovered_icon_type="delete", hovered_vertex_index=2)
        assert handle_editing_click(Point(0, 0), context, DrawingConfig()) == RemoveVertex(vertex_index=2)

    def test_add_vertex(self) -> None:
        """Test clicking an add icon."""
        context = DrawingContext(hovered_icon_type="add", hovered_edge_index=1)
        action = handle_editing_click(Point(240, 100), context, DrawingConfig())
        assert action == AddVertex(edge_index=1, position=Point(240, 100))

    def test_no_icon(self) -> None:
        """Test clicking away from any icon."""
        context = DrawingContext(hovered_icon_type="delete", hovered_vertex_index=-1)
        assert handle_editing_click(Point(0, 0), context, DrawingConfig()) == NoAction()


class TestDelegation:
    """Tests for clicks handed to other collaborators."""

    @pytest.mark.parametrize(
        ("flag", "expected"),
        [
            ("measure_mode", ActionType.DELEGATE_MEASURE),
            ("breaker_placement_mode", ActionType.DELEGATE_BREAKER),
            ("stair_placement_mode", ActionType.DELEGATE_STAIR),
        ],
    )
    def test_tool_modes(self, flag: str, expected: ActionType) -> None:
        """Test that tool modes delegate the click."""
        action = handle_click(Point(5, 5), DrawingContext(**{flag: True}))
        assert action.type == expected

    def test_closed_shape_with_stairs(self) -> None:
        """Test that clicks on a finished shape go to stair selection."""
        context = DrawingContext(points=CLOSED_RECTANGLE, is_shape_closed=True, has_stairs=True)
        action = handle_closed_shape_click(Point(5, 5), context, DrawingConfig())
        assert action == NoAction(delegate=ClosedShapeDelegate.STAIR_SELECT, position=Point(5, 5))

    def test_closed_shape_without_stairs(self) -> None:
        """Test that clicks on a finished shape re-enter wall selection."""
        context = DrawingContext(points=CLOSED_RECTANGLE, is_shape_closed=True)
        action = handle_click(Point(5, 5), context)
        assert isinstance(action, NoAction)
        assert action.delegate == ClosedShapeDelegate.WALL_REENTER
