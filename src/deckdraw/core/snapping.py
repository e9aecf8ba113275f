"""Snapping pipeline for drawing clicks.

Raw pointer positions are disciplined onto the drawing grid and onto the
allowed segment angles relative to the previous point. Close detection runs
before angle snapping so a click near the first point is never pushed away
from it.
"""

import math
from collections.abc import Sequence

from deckdraw.config import DEFAULT_ALLOWED_ANGLES, DeckDrawSettings, DrawingConfig, resolve_drawing_config
from deckdraw.core.geometry import distance
from deckdraw.domain import Point, SnapResult

DEFAULT_MIN_ANGLE_SNAP_DISTANCE = 5.0


def _round_to_grid(value: float, grid_size: float) -> float:
    # Halves round toward positive infinity
    return math.floor(value / grid_size + 0.5) * grid_size


def snap_to_grid(x: float, y: float, grid_size: float) -> Point:
    """Round each coordinate to the nearest multiple of ``grid_size``.

    Examples:
        >>> snap_to_grid(25.0, 25.0, 24.0).to_tuple()
        (24.0, 24.0)
    """
    return Point(_round_to_grid(x, grid_size), _round_to_grid(y, grid_size))


def nearest_allowed_angle(angle_degrees: float, allowed_angles: Sequence[float]) -> float:
    """Pick the allowed angle closest to ``angle_degrees``.

    Differences wrap around the circle. On a tie the angle listed first wins.
    """
    nearest = 0.0
    min_diff = math.inf
    for candidate in allowed_angles:
        diff = abs(angle_degrees - candidate)
        if diff > 180:
            diff = 360 - diff
        if diff < min_diff:
            min_diff = diff
            nearest = candidate
    return nearest


def snap_to_angle(
    pos: Point,
    prev_point: Point,
    allowed_angles: Sequence[float] = DEFAULT_ALLOWED_ANGLES,
    grid_size: float | None = None,
    min_distance: float = DEFAULT_MIN_ANGLE_SNAP_DISTANCE,
) -> Point:
    """Snap a position onto the nearest allowed angle from the previous point.

    The point is first rotated about ``prev_point`` onto the nearest allowed
    angle at the same distance, then re-snapped to the grid:

    - horizontal results keep ``prev_point.y`` and grid-snap X
    - vertical results keep ``prev_point.x`` and grid-snap Y
    - any other angle grid-snaps X and derives Y so that ``|dx| == |dy|``

    Args:
        pos: Candidate position (usually already grid-snapped)
        prev_point: Last point of the outline
        allowed_angles: Allowed segment angles in degrees
        grid_size: Grid spacing in model pixels; the default drawing grid
            when None
        min_distance: At or below this distance ``pos`` is returned unchanged

    Returns:
        Snapped point
    """
    if grid_size is None:
        grid_size = DrawingConfig().grid_spacing_pixels

    dx = pos.x - prev_point.x
    dy = pos.y - prev_point.y
    dist = math.hypot(dx, dy)

    if dist <= min_distance:
        return pos

    angle = nearest_allowed_angle(math.degrees(math.atan2(dy, dx)), allowed_angles)
    radians = math.radians(angle)
    snapped_x = prev_point.x + dist * math.cos(radians)
    snapped_y = prev_point.y + dist * math.sin(radians)

    abs_angle = abs(angle)
    if abs_angle == 0 or abs_angle == 180:
        return Point(_round_to_grid(snapped_x, grid_size), prev_point.y)
    if abs_angle == 90:
        return Point(prev_point.x, _round_to_grid(snapped_y, grid_size))

    snapped_x = _round_to_grid(snapped_x, grid_size)
    grid_dx = abs(snapped_x - prev_point.x)
    direction = snapped_y - prev_point.y
    sign = (direction > 0) - (direction < 0)
    return Point(snapped_x, prev_point.y + grid_dx * sign)


def detect_close_click(pos: Point, first_point: Point, tolerance: float) -> bool:
    """Check whether a click is strictly within ``tolerance`` of the first point."""
    return distance(pos, first_point) < tolerance


def get_snapped_position(
    raw_pos: Point,
    points: Sequence[Point],
    config: DrawingConfig | DeckDrawSettings | None = None,
    viewport_scale: float | None = 1.0,
) -> SnapResult:
    """Run the full snapping pipeline for a drawing click.

    With no points yet, the click snaps to whole feet. With three or more
    points, a click within the close tolerance of the first point returns the
    first point's exact coordinates as a closing click. Otherwise the click is
    grid-snapped to the drawing grid and then angle-snapped relative to the
    last point.

    Args:
        raw_pos: Click position in model pixels
        points: Current open outline
        config: Drawing configuration (defaults when None)
        viewport_scale: Screen pixels per model pixel

    Returns:
        SnapResult with the snapped coordinates and the closing flag
    """
    cfg = resolve_drawing_config(config)

    if not points:
        snapped = snap_to_grid(raw_pos.x, raw_pos.y, cfg.pixels_per_foot)
        return SnapResult(snapped.x, snapped.y, is_closing_click=False)

    first = points[0]
    if len(points) >= 3 and detect_close_click(raw_pos, first, cfg.get_close_tolerance(viewport_scale)):
        return SnapResult(first.x, first.y, is_closing_click=True)

    grid = cfg.grid_spacing_pixels
    grid_snapped = snap_to_grid(raw_pos.x, raw_pos.y, grid)
    angle_snapped = snap_to_angle(
        grid_snapped,
        points[-1],
        cfg.allowed_angles,
        grid,
        min_distance=cfg.angle_snap_min_distance,
    )
    return SnapResult(angle_snapped.x, angle_snapped.y, is_closing_click=False)
