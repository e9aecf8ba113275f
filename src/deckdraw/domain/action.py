"""Drawing modes and the actions the state machine emits.

The drawing mode is never stored; it is derived from independent flags on the
caller's state. A click is translated into exactly one Action value which the
caller applies. Actions are immutable and serializable, they never carry
callbacks or perform mutation themselves.
"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, ClassVar

from deckdraw.domain.point import Point


class DrawingState(str, Enum):
    """Derived drawing mode, in no particular order.

    Priority between simultaneously active flags is decided by
    ``deckdraw.core.state_machine.get_current_state``.
    """

    IDLE = "IDLE"
    DRAWING = "DRAWING"
    SHAPE_CLOSED = "SHAPE_CLOSED"
    WALL_SELECT = "WALL_SELECT"
    CALCULATED = "CALCULATED"
    EDITING = "EDITING"
    STAIR_PLACE = "STAIR_PLACE"
    MEASURING = "MEASURING"
    BREAKER_PLACE = "BREAKER_PLACE"


class ActionType(str, Enum):
    """Tag of an Action."""

    NONE = "NONE"
    ADD_POINT = "ADD_POINT"
    CLOSE_SHAPE = "CLOSE_SHAPE"
    CLOSE_SHAPE_FAILED = "CLOSE_SHAPE_FAILED"
    OUT_OF_BOUNDS = "OUT_OF_BOUNDS"
    SELECT_WALL = "SELECT_WALL"
    DESELECT_WALL = "DESELECT_WALL"
    REMOVE_VERTEX = "REMOVE_VERTEX"
    ADD_VERTEX = "ADD_VERTEX"
    DELEGATE_MEASURE = "DELEGATE_MEASURE"
    DELEGATE_STAIR = "DELEGATE_STAIR"
    DELEGATE_BREAKER = "DELEGATE_BREAKER"


class ClosedShapeDelegate(str, Enum):
    """Collaborator a click on a finished shape is handed to."""

    STAIR_SELECT = "stair_select"
    WALL_REENTER = "wall_reenter"


def _serialize(value: Any) -> Any:
    if isinstance(value, Point):
        return value.to_dict()
    if isinstance(value, tuple):
        return [_serialize(v) for v in value]
    if isinstance(value, Enum):
        return value.value
    return value


@dataclass(frozen=True)
class Action:
    """Base class of every action.

    Subclasses set ``type`` and add their payload fields.
    """

    type: ClassVar[ActionType]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a plain dictionary tagged with ``type``."""
        data: dict[str, Any] = {"type": self.type.value}
        for f in fields(self):
            data[f.name] = _serialize(getattr(self, f.name))
        return data


@dataclass(frozen=True)
class NoAction(Action):
    """Nothing to do, optionally handing the click to a closed-shape collaborator.

    Attributes:
        delegate: Collaborator that should receive the click, if any
        position: Click position when a delegate is named
    """

    type: ClassVar[ActionType] = ActionType.NONE

    delegate: ClosedShapeDelegate | None = None
    position: Point | None = None


@dataclass(frozen=True)
class AddPoint(Action):
    type: ClassVar[ActionType] = ActionType.ADD_POINT

    point: Point


@dataclass(frozen=True)
class CloseShape(Action):
    """Close the outline.

    Attributes:
        closed_points: Closed ring before simplification
        simplified_points: Ring the caller should store
        corner_added: A right-angle corner was synthesised
        has_manual_dimensions: Any input point was typed by the user
    """

    type: ClassVar[ActionType] = ActionType.CLOSE_SHAPE

    closed_points: tuple[Point, ...]
    simplified_points: tuple[Point, ...]
    corner_added: bool = False
    has_manual_dimensions: bool = False


@dataclass(frozen=True)
class CloseShapeFailed(Action):
    type: ClassVar[ActionType] = ActionType.CLOSE_SHAPE_FAILED

    error: str


@dataclass(frozen=True)
class OutOfBounds(Action):
    type: ClassVar[ActionType] = ActionType.OUT_OF_BOUNDS

    message: str


@dataclass(frozen=True)
class SelectWall(Action):
    type: ClassVar[ActionType] = ActionType.SELECT_WALL

    wall_index: int


@dataclass(frozen=True)
class DeselectWall(Action):
    type: ClassVar[ActionType] = ActionType.DESELECT_WALL

    wall_index: int


@dataclass(frozen=True)
class RemoveVertex(Action):
    type: ClassVar[ActionType] = ActionType.REMOVE_VERTEX

    vertex_index: int


@dataclass(frozen=True)
class AddVertex(Action):
    type: ClassVar[ActionType] = ActionType.ADD_VERTEX

    edge_index: int
    position: Point


@dataclass(frozen=True)
class DelegateMeasure(Action):
    type: ClassVar[ActionType] = ActionType.DELEGATE_MEASURE

    position: Point


@dataclass(frozen=True)
class DelegateStair(Action):
    type: ClassVar[ActionType] = ActionType.DELEGATE_STAIR

    position: Point


@dataclass(frozen=True)
class DelegateBreaker(Action):
    type: ClassVar[ActionType] = ActionType.DELEGATE_BREAKER

    position: Point
