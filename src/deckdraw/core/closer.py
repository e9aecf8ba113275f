"""Closing an open outline into a validated ring.

The closer tolerates small mouse misses, synthesises a single right-angle
corner when the closing segment would otherwise be diagonal, validates the
ring, and simplifies it unless the user typed exact dimensions.
"""

from collections.abc import Sequence

import structlog

from deckdraw.config import (
    DeckDrawSettings,
    DrawingConfig,
    resolve_drawing_config,
    resolve_geometry_config,
)
from deckdraw.core.simplify import simplify_points
from deckdraw.core.validator import validate_shape
from deckdraw.domain import CloseResult, Point

logger = structlog.get_logger(__name__)

MIN_CLOSE_POINTS = 3


def _auto_correct_last(points: list[Point], cfg: DrawingConfig) -> None:
    first = points[0]
    last = points[-1]
    eps = cfg.epsilon
    gap = cfg.closing_gap_pixels

    dx = abs(last.x - first.x)
    if eps < dx < gap:
        last = last.moved(x=first.x)

    dy = abs(last.y - first.y)
    if eps < dy < gap:
        last = last.moved(y=first.y)

    points[-1] = last


def _contains(points: Sequence[Point], candidate: Point, eps: float) -> bool:
    return any(p.same_position(candidate, eps) for p in points)


def choose_closing_corner(points: Sequence[Point], epsilon: float = 0.01) -> Point | None:
    """Pick the corner that turns the closing segment into two axis-aligned legs.

    The candidates are ``(first.x, last.y)`` and ``(last.x, first.y)``. A
    candidate that is already a vertex is avoided. When both or neither are
    present, ``(first.x, last.y)`` is chosen if ``|dx| < |dy|``, otherwise
    ``(last.x, first.y)``.

    Returns:
        The corner to insert, or None if the closing segment is already
        horizontal or vertical
    """
    first = points[0]
    last = points[-1]
    dx = abs(last.x - first.x)
    dy = abs(last.y - first.y)

    if dx <= epsilon or dy <= epsilon:
        return None

    option_1 = Point(first.x, last.y)
    option_2 = Point(last.x, first.y)
    has_1 = _contains(points, option_1, epsilon)
    has_2 = _contains(points, option_2, epsilon)

    if has_1 and not has_2:
        return option_2
    if has_2 and not has_1:
        return option_1
    return option_1 if dx < dy else option_2


def try_close_shape(
    points: Sequence[Point],
    config: DrawingConfig | DeckDrawSettings | None = None,
) -> CloseResult:
    """Attempt to close an open outline.

    Steps, in order: auto-correct the last point onto the first point's X
    and Y when it misses by less than the closing gap, insert a corner if
    the closing segment would still be diagonal, append the closing point,
    validate, then simplify. Simplification is skipped if any point carries
    ``is_manual_dimension``.

    Args:
        points: Open outline; never modified
        config: Drawing configuration or full settings

    Returns:
        CloseResult; on failure only ``error`` is set
    """
    if not points or len(points) < MIN_CLOSE_POINTS:
        return CloseResult.failed("Need at least 3 points")

    cfg = resolve_drawing_config(config)
    geometry = resolve_geometry_config(config if isinstance(config, DeckDrawSettings) else None)
    working = list(points)

    _auto_correct_last(working, cfg)

    corner = choose_closing_corner(working, cfg.epsilon)
    if corner is not None:
        working.append(corner)

    working.append(working[0])

    validation = validate_shape(working, geometry, drawing=cfg)
    if not validation.is_valid:
        logger.debug("Close rejected", error=validation.error, vertices=len(working) - 1)
        return CloseResult.failed(validation.error or "Shape is invalid")

    if any(p.is_manual_dimension for p in working):
        simplified = list(working)
    else:
        simplified = simplify_points(working, geometry.collinear_tolerance)

    logger.debug(
        "Shape closed",
        corner_added=corner is not None,
        vertices=len(working) - 1,
        simplified_vertices=len(simplified) - 1,
    )

    return CloseResult(
        success=True,
        closed_points=tuple(working),
        simplified_points=tuple(simplified),
        corner_added=corner is not None,
    )
