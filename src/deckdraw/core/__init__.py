"""Core drawing and decomposition algorithms for deckdraw.

This module contains the core algorithms for:

- Geometry operations (area, point-in-polygon, intersections, edge classes)
- Snapping raw clicks onto the grid and onto allowed angles
- Closing, simplifying and validating outlines
- The click state machine and the session that applies its actions
- Decomposing closed outlines into rectangles

Everything except DrawingSession is pure: inputs are never mutated and
outputs are freshly allocated.

Key functions:
- get_snapped_position: Full snapping pipeline for a drawing click
- try_close_shape: Close an open outline into a validated ring
- simplify_points: Remove collinear vertices
- validate_shape: Check a closed ring
- handle_click: Translate a click into an Action
- decompose_shape: Split a closed outline into rectangles

Key classes:
- DrawingContext: Read-only view of the caller's state
- DrawingSession: Applies actions, keeps undo history
"""

from deckdraw.core.closer import choose_closing_corner, try_close_shape
from deckdraw.core.decomposer import decompose_shape, find_shared_edge, total_area
from deckdraw.core.geometry import (
    EdgeType,
    bounding_box,
    classify_edge,
    distance,
    get_diagonal_edges,
    has_diagonal_edges,
    line_intersection,
    line_polygon_intersections,
    nearest_point_on_segment,
    point_in_polygon,
    polygon_area,
    polygon_perimeter,
    segment_overlap,
    signed_area,
)
from deckdraw.core.hit_test import find_clicked_wall_index, find_vertex_index
from deckdraw.core.session import DrawingSession, replay_clicks
from deckdraw.core.simplify import simplify_points
from deckdraw.core.snapping import detect_close_click, get_snapped_position, snap_to_angle, snap_to_grid
from deckdraw.core.state_machine import (
    DrawingContext,
    get_current_state,
    handle_click,
    handle_closed_shape_click,
    handle_drawing_click,
    handle_editing_click,
    handle_idle_click,
    handle_wall_select_click,
)
from deckdraw.core.validator import (
    are_walls_parallel,
    can_decompose_shape,
    get_validation_requirements,
    is_simple_polygon,
    validate_selected_walls,
    validate_shape,
)

__all__ = [
    # Geometry
    "EdgeType",
    "bounding_box",
    "classify_edge",
    "distance",
    "get_diagonal_edges",
    "has_diagonal_edges",
    "line_intersection",
    "line_polygon_intersections",
    "nearest_point_on_segment",
    "point_in_polygon",
    "polygon_area",
    "polygon_perimeter",
    "segment_overlap",
    "signed_area",
    # Snapping
    "detect_close_click",
    "get_snapped_position",
    "snap_to_angle",
    "snap_to_grid",
    # Simplification, closing, validation
    "are_walls_parallel",
    "can_decompose_shape",
    "choose_closing_corner",
    "get_validation_requirements",
    "is_simple_polygon",
    "simplify_points",
    "try_close_shape",
    "validate_selected_walls",
    "validate_shape",
    # State machine
    "DrawingContext",
    "get_current_state",
    "handle_click",
    "handle_closed_shape_click",
    "handle_drawing_click",
    "handle_editing_click",
    "handle_idle_click",
    "handle_wall_select_click",
    # Hit testing
    "find_clicked_wall_index",
    "find_vertex_index",
    # Decomposition
    "decompose_shape",
    "find_shared_edge",
    "total_area",
    # Session
    "DrawingSession",
    "replay_clicks",
]
