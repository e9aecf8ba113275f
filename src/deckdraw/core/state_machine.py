"""Deterministic click handling for the drawing canvas.

The drawing mode is derived from independent flags on a DrawingContext.
Each handler is a pure function from (position, context, config) to an
Action; none of them mutate the context. The caller applies the action.
"""

from dataclasses import dataclass

from deckdraw.config import DeckDrawSettings, DrawingConfig, resolve_drawing_config
from deckdraw.core.closer import try_close_shape
from deckdraw.core.geometry import distance
from deckdraw.core.snapping import get_snapped_position, snap_to_grid
from deckdraw.domain import (
    Action,
    AddPoint,
    AddVertex,
    CloseShape,
    CloseShapeFailed,
    ClosedShapeDelegate,
    DelegateBreaker,
    DelegateMeasure,
    DelegateStair,
    DeselectWall,
    DrawingState,
    NoAction,
    OutOfBounds,
    Point,
    RemoveVertex,
    SelectWall,
)

IDLE_OUT_OF_BOUNDS_MESSAGE = "Cannot draw outside the designated area."


@dataclass(frozen=True)
class DrawingContext:
    """Read-only view of the caller's drawing state.

    Attributes:
        points: Current outline (open while drawing, closed afterwards)
        is_drawing: A drawing gesture is in progress
        is_shape_closed: The outline has been closed
        wall_selection_mode: Walls can be picked as ledgers
        shape_edit_mode: Vertices can be added or removed
        measure_mode: Measuring tool is active
        stair_placement_mode: Stair placement tool is active
        breaker_placement_mode: Decking breaker placement tool is active
        has_structural_components: A structural layout has been computed
        has_structural_error: The structural computation reported an error
        has_stairs: At least one stair is placed
        viewport_scale: Screen pixels per model pixel
        selected_wall_indices: Walls currently chosen as ledgers
        clicked_wall_index: Wall under the click, resolved by hit testing (-1 if none)
        hovered_icon_type: Edit icon under the pointer ("delete" or "add")
        hovered_vertex_index: Vertex under a delete icon (-1 if none)
        hovered_edge_index: Edge under an add icon (-1 if none)
    """

    points: tuple[Point, ...] = ()
    is_drawing: bool = False
    is_shape_closed: bool = False
    wall_selection_mode: bool = False
    shape_edit_mode: bool = False
    measure_mode: bool = False
    stair_placement_mode: bool = False
    breaker_placement_mode: bool = False
    has_structural_components: bool = False
    has_structural_error: bool = False
    has_stairs: bool = False
    viewport_scale: float = 1.0
    selected_wall_indices: tuple[int, ...] = ()
    clicked_wall_index: int = -1
    hovered_icon_type: str | None = None
    hovered_vertex_index: int = -1
    hovered_edge_index: int = -1


def get_current_state(context: DrawingContext) -> DrawingState:
    """Derive the drawing mode from the context flags.

    Priority, highest first: MEASURING, BREAKER_PLACE, STAIR_PLACE, EDITING,
    WALL_SELECT, CALCULATED, SHAPE_CLOSED, DRAWING, IDLE.
    """
    if context.measure_mode:
        return DrawingState.MEASURING
    if context.breaker_placement_mode:
        return DrawingState.BREAKER_PLACE
    if context.stair_placement_mode:
        return DrawingState.STAIR_PLACE
    if context.is_shape_closed and context.shape_edit_mode:
        return DrawingState.EDITING
    if context.is_shape_closed and context.wall_selection_mode:
        return DrawingState.WALL_SELECT
    if context.is_shape_closed and context.has_structural_components and not context.has_structural_error:
        return DrawingState.CALCULATED
    if context.is_shape_closed:
        return DrawingState.SHAPE_CLOSED
    if context.is_drawing or context.points:
        return DrawingState.DRAWING
    return DrawingState.IDLE


def is_within_bounds(pos: Point, config: DrawingConfig) -> bool:
    """Check a point against the drawable model area (edges included)."""
    return 0 <= pos.x <= config.model_width_pixels and 0 <= pos.y <= config.model_height_pixels


def handle_idle_click(pos: Point, context: DrawingContext, config: DrawingConfig) -> Action:
    """Start an outline at the nearest whole-foot grid point."""
    snapped = snap_to_grid(pos.x, pos.y, config.pixels_per_foot)
    if not is_within_bounds(snapped, config):
        return OutOfBounds(message=IDLE_OUT_OF_BOUNDS_MESSAGE)
    return AddPoint(point=snapped)


def handle_drawing_click(
    pos: Point,
    context: DrawingContext,
    config: DrawingConfig | DeckDrawSettings | None = None,
) -> Action:
    """Add a point to the open outline, or close it.

    A closing click runs the shape closer. Otherwise the snapped point is
    rejected if it leaves the model area and ignored if it repeats the last
    point. Full settings carry their geometry tolerances into the closer.
    """
    points = context.points
    snapped = get_snapped_position(pos, points, config, context.viewport_scale)

    if snapped.is_closing_click:
        result = try_close_shape(points, config)
        if not result.success:
            return CloseShapeFailed(error=result.error or "Shape could not be closed")
        return CloseShape(
            closed_points=result.closed_points or (),
            simplified_points=result.simplified_points or (),
            corner_added=result.corner_added,
            has_manual_dimensions=any(p.is_manual_dimension for p in points),
        )

    point = snapped.to_point()
    cfg = resolve_drawing_config(config)
    if not is_within_bounds(point, cfg):
        return OutOfBounds(
            message=(
                "Cannot draw outside the designated area "
                f"({cfg.model_width_feet:g}ft x {cfg.model_height_feet:g}ft)."
            )
        )

    if points and distance(point, points[-1]) <= cfg.epsilon:
        return NoAction()

    return AddPoint(point=point)


def handle_wall_select_click(clicked_wall_index: int, context: DrawingContext) -> Action:
    """Toggle the ledger selection of the wall under the click."""
    if clicked_wall_index == -1:
        return NoAction()
    if clicked_wall_index in context.selected_wall_indices:
        return DeselectWall(wall_index=clicked_wall_index)
    return SelectWall(wall_index=clicked_wall_index)


def handle_editing_click(pos: Point, context: DrawingContext, config: DrawingConfig) -> Action:
    if context.hovered_icon_type == "delete" and context.hovered_vertex_index >= 0:
        return RemoveVertex(vertex_index=context.hovered_vertex_index)
    if context.hovered_icon_type == "add" and context.hovered_edge_index >= 0:
        return AddVertex(edge_index=context.hovered_edge_index, position=pos)
    return NoAction()


def handle_closed_shape_click(pos: Point, context: DrawingContext, config: DrawingConfig) -> Action:
    """Hand a click on a finished shape to stair selection or wall re-entry."""
    if context.has_stairs:
        return NoAction(delegate=ClosedShapeDelegate.STAIR_SELECT, position=pos)
    return NoAction(delegate=ClosedShapeDelegate.WALL_REENTER, position=pos)


def handle_click(
    pos: Point,
    context: DrawingContext,
    config: DrawingConfig | DeckDrawSettings | None = None,
) -> Action:
    """Translate a click into an Action according to the current mode.

    Args:
        pos: Click position in model pixels
        context: Caller state; not modified
        config: Drawing configuration, or full settings so that closing
            validates with their geometry tolerances (defaults when None)

    Returns:
        The action the caller should apply
    """
    cfg = resolve_drawing_config(config)
    state = get_current_state(context)

    if state == DrawingState.MEASURING:
        return DelegateMeasure(position=pos)
    if state == DrawingState.BREAKER_PLACE:
        return DelegateBreaker(position=pos)
    if state == DrawingState.STAIR_PLACE:
        return DelegateStair(position=pos)
    if state == DrawingState.EDITING:
        return handle_editing_click(pos, context, cfg)
    if state == DrawingState.WALL_SELECT:
        return handle_wall_select_click(context.clicked_wall_index, context)
    if state in (DrawingState.SHAPE_CLOSED, DrawingState.CALCULATED):
        return handle_closed_shape_click(pos, context, cfg)
    if state == DrawingState.DRAWING:
        return handle_drawing_click(pos, context, config)
    return handle_idle_click(pos, context, cfg)
