"""Collinear vertex removal for traced outlines."""

from collections.abc import Sequence

from deckdraw.domain import Point

DEFAULT_COLLINEAR_TOLERANCE = 0.1


def _turn(a: Point, b: Point, c: Point) -> float:
    return (b.y - a.y) * (c.x - b.x) - (b.x - a.x) * (c.y - b.y)


def simplify_points(
    points: Sequence[Point], tolerance: float = DEFAULT_COLLINEAR_TOLERANCE
) -> list[Point]:
    """Remove vertices that are collinear with their neighbours.

    The forward pass compares each point against the last *kept* point and
    the next original point, so the result depends on scan order. Afterwards
    the trailing point is dropped if collinear with its predecessor and the
    first point, then the leading point is dropped if collinear with the new
    last point and the second point. A closed input always yields a closed
    output.

    Args:
        points: Outline, open or closed
        tolerance: Cross-product magnitude at or below which points are collinear

    Returns:
        New list of points; the input is not modified
    """
    if len(points) < 3:
        return list(points)

    simplified: list[Point] = [points[0]]

    for i in range(1, len(points) - 1):
        prev = simplified[-1]
        current = points[i]
        nxt = points[i + 1]

        if abs(_turn(prev, current, nxt)) > tolerance and not current.same_position(prev):
            simplified.append(current)

    last = points[-1]
    if not last.same_position(simplified[-1]):
        simplified.append(last)

    if len(simplified) >= 3:
        if abs(_turn(simplified[-2], simplified[-1], simplified[0])) <= tolerance:
            simplified.pop()

        if len(simplified) >= 3:
            if abs(_turn(simplified[-1], simplified[0], simplified[1])) <= tolerance:
                simplified.pop(0)

    was_closed = points[0].same_position(points[-1], tolerance)
    if was_closed and len(simplified) > 1 and not simplified[0].same_position(simplified[-1], tolerance):
        simplified.append(simplified[0])

    return simplified
