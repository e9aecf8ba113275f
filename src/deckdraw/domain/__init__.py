"""Domain models for deckdraw.

This module contains the value types shared by the drawing pipeline. All
models are designed to be:

- Immutable where possible (using frozen dataclasses)
- Serializable to plain dictionaries for shape files and the CLI
- Free of rendering or UI concerns

Key classes:
- Point: A 2D point in model pixels with provenance fields
- DrawingState / ActionType: Derived mode and action tags
- Action and its subclasses: Requested state changes
- Rectangle: A decomposition rectangle
- CloseResult / ValidationResult / SnapResult: Operation outcomes
"""

from deckdraw.domain.action import (
    Action,
    ActionType,
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
    RemoveVertex,
    SelectWall,
)
from deckdraw.domain.point import Point, points_from_dicts, points_to_dicts
from deckdraw.domain.rectangle import Rectangle, SectionDimensions, Segment, SharedEdge
from deckdraw.domain.results import CloseResult, SnapResult, ValidationResult

__all__: list[str] = [
    # Enums
    "ActionType",
    "ClosedShapeDelegate",
    "DrawingState",
    # Core types
    "Point",
    "Rectangle",
    "SectionDimensions",
    "Segment",
    "SharedEdge",
    # Actions
    "Action",
    "AddPoint",
    "AddVertex",
    "CloseShape",
    "CloseShapeFailed",
    "DelegateBreaker",
    "DelegateMeasure",
    "DelegateStair",
    "DeselectWall",
    "NoAction",
    "OutOfBounds",
    "RemoveVertex",
    "SelectWall",
    # Results
    "CloseResult",
    "SnapResult",
    "ValidationResult",
    # Helpers
    "points_from_dicts",
    "points_to_dicts",
]
