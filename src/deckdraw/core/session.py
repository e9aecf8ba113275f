"""Drawing session: the single place where actions mutate state.

The state machine only describes what a click should do. DrawingSession
holds the outline and mode flags, feeds them to the state machine as a
read-only DrawingContext, and applies the returned Action in one switch.
Every mutating action pushes a snapshot so it can be undone.
"""

import time
from collections.abc import Sequence
from dataclasses import dataclass

import structlog

from deckdraw.config import DeckDrawSettings, get_default_settings
from deckdraw.core.decomposer import decompose_shape
from deckdraw.core.geometry import strip_closing_point
from deckdraw.core.hit_test import find_clicked_wall_index
from deckdraw.core.simplify import simplify_points
from deckdraw.core.snapping import snap_to_grid
from deckdraw.core.state_machine import DrawingContext, get_current_state, handle_click
from deckdraw.core.validator import validate_selected_walls, validate_shape
from deckdraw.domain import (
    Action,
    AddPoint,
    AddVertex,
    CloseShape,
    CloseShapeFailed,
    DeselectWall,
    DrawingState,
    NoAction,
    OutOfBounds,
    Point,
    Rectangle,
    RemoveVertex,
    SelectWall,
)
from deckdraw.exceptions import DecompositionError, InvalidActionError
from deckdraw.utils.logging import SessionLogger, SessionStats

MAX_HISTORY = 100


@dataclass(frozen=True)
class _Snapshot:
    points: tuple[Point, ...]
    is_drawing: bool
    is_shape_closed: bool
    wall_selection_mode: bool
    selected_wall_indices: tuple[int, ...]


class DrawingSession:
    """Mutable drawing state driven by clicks.

    Attributes:
        points: Current outline; closed (first point repeated) once closed
        is_drawing: A drawing gesture is in progress
        is_shape_closed: The outline has been closed
        wall_selection_mode: Clicks pick ledger walls
        shape_edit_mode: Clicks add or remove vertices of a closed outline
        measure_mode / stair_placement_mode / breaker_placement_mode: Tool
            modes whose clicks are handed to other collaborators
        selected_wall_indices: Ledger walls, first one is the primary ledger
        viewport_scale: Screen pixels per model pixel
        last_error: Message of the last rejected click or edit
        delegated: Actions handed to collaborators outside this session
        rectangles: Result of the last decomposition
    """

    def __init__(
        self,
        settings: DeckDrawSettings | None = None,
        viewport_scale: float = 1.0,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self.settings = settings or get_default_settings()
        self.viewport_scale = viewport_scale
        self._log = SessionLogger(logger)
        self._history: list[_Snapshot] = []
        self.measure_mode = False
        self.stair_placement_mode = False
        self.breaker_placement_mode = False
        self.shape_edit_mode = False
        self.has_stairs = False
        self.delegated: list[Action] = []
        self._clear()

    def _clear(self) -> None:
        self.points: list[Point] = []
        self.is_drawing = False
        self.is_shape_closed = False
        self.wall_selection_mode = False
        self.selected_wall_indices: list[int] = []
        self.rectangles: list[Rectangle] = []
        self.last_error: str | None = None

    @property
    def state(self) -> DrawingState:
        """Current derived drawing mode."""
        return get_current_state(self.context())

    @property
    def stats(self) -> SessionStats:
        return self._log.stats

    @property
    def vertices(self) -> list[Point]:
        """Outline vertices without the closing duplicate."""
        return strip_closing_point(self.points, self.settings.drawing.epsilon)

    def context(
        self,
        clicked_wall_index: int = -1,
        hovered_icon_type: str | None = None,
        hovered_vertex_index: int = -1,
        hovered_edge_index: int = -1,
    ) -> DrawingContext:
        """Build a read-only view of the session for the state machine."""
        return DrawingContext(
            points=tuple(self.points),
            is_drawing=self.is_drawing,
            is_shape_closed=self.is_shape_closed,
            wall_selection_mode=self.wall_selection_mode,
            shape_edit_mode=self.shape_edit_mode,
            measure_mode=self.measure_mode,
            stair_placement_mode=self.stair_placement_mode,
            breaker_placement_mode=self.breaker_placement_mode,
            has_structural_components=bool(self.rectangles),
            has_stairs=self.has_stairs,
            viewport_scale=self.viewport_scale,
            selected_wall_indices=tuple(self.selected_wall_indices),
            clicked_wall_index=clicked_wall_index,
            hovered_icon_type=hovered_icon_type,
            hovered_vertex_index=hovered_vertex_index,
            hovered_edge_index=hovered_edge_index,
        )

    def click(
        self,
        pos: Point,
        hovered_icon_type: str | None = None,
        hovered_vertex_index: int = -1,
        hovered_edge_index: int = -1,
    ) -> Action:
        """Handle a click in model pixels and apply the resulting action.

        In wall selection mode the wall under the click is resolved by hit
        testing before the state machine runs.

        Returns:
            The action that was applied
        """
        clicked_wall = -1
        if self.state == DrawingState.WALL_SELECT:
            clicked_wall = find_clicked_wall_index(
                pos, self.points, self.viewport_scale, self.settings.drawing
            )

        context = self.context(
            clicked_wall_index=clicked_wall,
            hovered_icon_type=hovered_icon_type,
            hovered_vertex_index=hovered_vertex_index,
            hovered_edge_index=hovered_edge_index,
        )
        action = handle_click(pos, context, self.settings)
        self._log.log_click(pos.x, pos.y, get_current_state(context).value, action.type.value)
        self.apply(action)
        return action

    def apply(self, action: Action) -> None:
        """Apply an action to the session.

        Raises:
            InvalidActionError: If the action does not fit the current state
        """
        if isinstance(action, AddPoint):
            if self.is_shape_closed:
                raise InvalidActionError(action.type.value, "shape is already closed")
            self._push_history()
            self.points.append(action.point)
            self.is_drawing = True
            self.last_error = None
            self._log.log_point_added(action.point.x, action.point.y, len(self.points))

        elif isinstance(action, CloseShape):
            if self.is_shape_closed:
                raise InvalidActionError(action.type.value, "shape is already closed")
            self._push_history()
            self.points = list(action.simplified_points)
            self.is_drawing = False
            self.is_shape_closed = True
            self.wall_selection_mode = True
            self.selected_wall_indices = []
            self.rectangles = []
            self.last_error = None
            self._log.log_shape_closed(len(self.vertices), action.corner_added)

        elif isinstance(action, CloseShapeFailed):
            self.last_error = action.error
            self._log.log_close_failed(action.error)

        elif isinstance(action, OutOfBounds):
            self.last_error = action.message
            self._log.log_out_of_bounds(action.message)

        elif isinstance(action, SelectWall):
            self._select_wall(action, action.wall_index)

        elif isinstance(action, DeselectWall):
            if action.wall_index not in self.selected_wall_indices:
                raise InvalidActionError(action.type.value, f"wall {action.wall_index} is not selected")
            self._push_history()
            self.selected_wall_indices.remove(action.wall_index)
            self.rectangles = []

        elif isinstance(action, RemoveVertex):
            self._remove_vertex(action, action.vertex_index)

        elif isinstance(action, AddVertex):
            self._add_vertex(action, action.edge_index, action.position)

        elif isinstance(action, NoAction) and action.delegate is None:
            return

        else:
            # Delegated to measuring, stair, breaker or closed-shape collaborators
            self.delegated.append(action)

    def _select_wall(self, action: Action, index: int) -> None:
        if not self.is_shape_closed:
            raise InvalidActionError(action.type.value, "shape is not closed")
        if not 0 <= index < len(self.vertices):
            raise InvalidActionError(action.type.value, f"wall {index} does not exist")

        candidate = [*self.selected_wall_indices, index]
        check = validate_selected_walls(candidate, self.points, self.settings.drawing.epsilon)
        if not check.is_valid:
            self.last_error = check.error
            return

        self._push_history()
        self.selected_wall_indices = candidate
        self.rectangles = []
        self.last_error = None

    def _replace_ring(self, action: Action, vertices: list[Point], operation: str, index: int) -> None:
        ring = [*vertices, vertices[0]]
        validation = validate_shape(ring, self.settings)
        if not validation.is_valid:
            self.last_error = validation.error
            self._log.log_edit_rejected(operation, validation.error or "invalid shape")
            return

        self._push_history()
        self.points = ring
        self.selected_wall_indices = []
        self.rectangles = []
        self.last_error = None
        self._log.log_vertex_edit(operation, index, len(vertices))

    def _remove_vertex(self, action: Action, index: int) -> None:
        if not self.is_shape_closed:
            raise InvalidActionError(action.type.value, "shape is not closed")
        vertices = self.vertices
        if not 0 <= index < len(vertices):
            raise InvalidActionError(action.type.value, f"vertex {index} does not exist")
        if len(vertices) <= 3:
            self.last_error = "A shape needs at least 3 corners"
            self._log.log_edit_rejected("remove", self.last_error)
            return

        remaining = vertices[:index] + vertices[index + 1 :]
        self._replace_ring(action, remaining, "remove", index)

    def _add_vertex(self, action: Action, edge_index: int, position: Point) -> None:
        if not self.is_shape_closed:
            raise InvalidActionError(action.type.value, "shape is not closed")
        vertices = self.vertices
        if not 0 <= edge_index < len(vertices):
            raise InvalidActionError(action.type.value, f"edge {edge_index} does not exist")

        cfg = self.settings.drawing
        snapped = snap_to_grid(position.x, position.y, cfg.grid_spacing_pixels)
        updated = vertices[: edge_index + 1] + [snapped] + vertices[edge_index + 1 :]
        self._replace_ring(action, updated, "add", edge_index)

    def _push_history(self) -> None:
        self._history.append(
            _Snapshot(
                points=tuple(self.points),
                is_drawing=self.is_drawing,
                is_shape_closed=self.is_shape_closed,
                wall_selection_mode=self.wall_selection_mode,
                selected_wall_indices=tuple(self.selected_wall_indices),
            )
        )
        if len(self._history) > MAX_HISTORY:
            self._history.pop(0)

    def can_undo(self) -> bool:
        return bool(self._history)

    def undo(self) -> bool:
        """Restore the state before the last mutating action.

        Returns:
            True if something was undone
        """
        if not self._history:
            return False

        snapshot = self._history.pop()
        self.points = list(snapshot.points)
        self.is_drawing = snapshot.is_drawing
        self.is_shape_closed = snapshot.is_shape_closed
        self.wall_selection_mode = snapshot.wall_selection_mode
        self.selected_wall_indices = list(snapshot.selected_wall_indices)
        self.rectangles = []
        self.last_error = None
        self._log.log_undo(len(self._history))
        return True

    def reset(self) -> None:
        """Discard the outline and history."""
        self._history.clear()
        self.delegated.clear()
        self._clear()

    def simplified(self) -> list[Point]:
        """Simplified copy of the current outline."""
        return simplify_points(self.points, self.settings.geometry.collinear_tolerance)

    def decompose(self, ledger_wall_indices: Sequence[int] | None = None) -> list[Rectangle]:
        """Decompose the closed outline using the selected ledger walls.

        Args:
            ledger_wall_indices: Overrides the selected walls when given

        Returns:
            Rectangles of the decomposition, also stored on the session

        Raises:
            DecompositionError: If the shape is not closed or no ledger is chosen
        """
        if not self.is_shape_closed:
            raise DecompositionError("shape is not closed")

        ledgers = list(ledger_wall_indices) if ledger_wall_indices is not None else self.selected_wall_indices
        if not ledgers:
            raise DecompositionError("no ledger wall selected")

        started = time.perf_counter()
        self.rectangles = decompose_shape(self.points, ledgers, self.settings.drawing)
        self._log.log_decomposition(ledgers, len(self.rectangles), (time.perf_counter() - started) * 1000)
        return self.rectangles

    def finish(self) -> SessionStats:
        """Close the session's statistics window."""
        return self._log.finish()

    def snapshot(self) -> dict:
        """Serializable summary of the session state."""
        return {
            "state": self.state.value,
            "points": [p.to_dict() for p in self.points],
            "is_shape_closed": self.is_shape_closed,
            "selected_wall_indices": list(self.selected_wall_indices),
            "last_error": self.last_error,
            "rectangles": [r.to_dict() for r in self.rectangles],
        }


def replay_clicks(
    clicks: Sequence[Point],
    settings: DeckDrawSettings | None = None,
    viewport_scale: float = 1.0,
) -> tuple[DrawingSession, list[Action]]:
    """Run a sequence of clicks through a fresh session.

    Returns:
        The session after the last click and the action of every click
    """
    session = DrawingSession(settings, viewport_scale=viewport_scale)
    actions = [session.click(click) for click in clicks]
    return session, actions

