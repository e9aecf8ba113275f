"""Geometric operations for traced outlines and decomposition.

This module provides core mathematical utilities for:
- Distance, area (shoelace formula), perimeter and bounding box
- Point-in-polygon testing (ray casting algorithm)
- Line segment intersection and collinear overlap
- Nearest point on a segment
- Edge classification (horizontal / vertical / 45° diagonal)

Polygons may be passed open or closed (first point repeated at the end).
All functions are pure and stateless.
"""

import math
from collections.abc import Sequence
from enum import Enum

from deckdraw.domain import Point, Segment

DEFAULT_EPSILON = 0.01


class EdgeType(str, Enum):
    """Direction class of a polygon edge."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    DIAGONAL = "diagonal"
    OTHER = "other"


def distance(p1: Point | None, p2: Point | None) -> float:
    """Euclidean distance between two points.

    Malformed input (a missing point or non-numeric coordinates) yields 0.0
    rather than an error, so this must not be used for validation.

    Examples:
        >>> distance(Point(0.0, 0.0), Point(3.0, 4.0))
        5.0
    """
    try:
        x1, y1 = float(p1.x), float(p1.y)  # type: ignore[union-attr]
        x2, y2 = float(p2.x), float(p2.y)  # type: ignore[union-attr]
    except (AttributeError, TypeError, ValueError):
        return 0.0
    return math.hypot(x2 - x1, y2 - y1)


def is_closed(points: Sequence[Point], tolerance: float = DEFAULT_EPSILON) -> bool:
    """Check whether the last point repeats the first within ``tolerance``."""
    if len(points) < 2:
        return False
    return points[0].same_position(points[-1], tolerance)


def strip_closing_point(points: Sequence[Point], tolerance: float = DEFAULT_EPSILON) -> list[Point]:
    """Return the vertices of a ring without its closing duplicate.

    Open input is returned as a copy unchanged.
    """
    if is_closed(points, tolerance):
        return list(points[:-1])
    return list(points)


def signed_area(points: Sequence[Point]) -> float:
    """Calculate signed area of a polygon using the shoelace formula.

    With Y pointing down, a positive area means the vertices run clockwise
    on screen. A closing duplicate contributes nothing.

    Args:
        points: List of points forming the polygon boundary

    Returns:
        Signed area in square model pixels. Returns 0.0 for degenerate polygons.
    """
    n = len(points)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += points[i].x * points[j].y
        area -= points[j].x * points[i].y

    return area / 2.0


def polygon_area(points: Sequence[Point]) -> float:
    """Unsigned polygon area in square model pixels."""
    return abs(signed_area(points))


def polygon_perimeter(points: Sequence[Point]) -> float:
    """Sum of edge lengths, including the edge that wraps back to the start."""
    n = len(points)
    if n < 2:
        return 0.0
    return sum(distance(points[i], points[(i + 1) % n]) for i in range(n))


def bounding_box(points: Sequence[Point]) -> tuple[float, float, float, float]:
    """Calculate the bounding box of a point sequence.

    Returns:
        Tuple of (min_x, min_y, max_x, max_y); all zero for empty input
    """
    if not points:
        return (0.0, 0.0, 0.0, 0.0)

    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return (min(xs), min(ys), max(xs), max(ys))


def point_in_polygon(point: Point, polygon: Sequence[Point]) -> bool:
    """Determine if a point is inside a polygon using ray casting algorithm.

    Casts a horizontal ray from the point to the right and counts crossings
    with polygon edges. Odd number of crossings = inside, even = outside.
    A closing duplicate point is ignored; open input wraps implicitly.
    Points exactly on the boundary may land on either side.

    Examples:
        >>> square = [Point(0.0, 0.0), Point(2.0, 0.0), Point(2.0, 2.0), Point(0.0, 2.0)]
        >>> point_in_polygon(Point(1.0, 1.0), square)
        True
        >>> point_in_polygon(Point(3.0, 3.0), square)
        False
    """
    vertices = polygon
    if len(vertices) > 1 and vertices[0].same_position(vertices[-1]):
        vertices = vertices[:-1]

    n = len(vertices)
    if n < 3:
        return False

    inside = False
    x, y = point.x, point.y
    j = n - 1

    for i in range(n):
        xi, yi = vertices[i].x, vertices[i].y
        xj, yj = vertices[j].x, vertices[j].y

        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside

        j = i

    return inside


def line_intersection(
    p1: Point, p2: Point, p3: Point, p4: Point, parallel_epsilon: float = 1e-10
) -> Point | None:
    """Find intersection point of two line segments.

    Uses parametric line equations; both parameters must lie in [0, 1].

    Args:
        p1: First endpoint of segment 1
        p2: Second endpoint of segment 1
        p3: First endpoint of segment 2
        p4: Second endpoint of segment 2
        parallel_epsilon: Determinant magnitude treated as parallel

    Returns:
        Point at intersection if segments intersect, None otherwise
    """
    x1, y1 = p1.x, p1.y
    x2, y2 = p2.x, p2.y
    x3, y3 = p3.x, p3.y
    x4, y4 = p4.x, p4.y

    denom = (x1 - x2) * (y3 - y4) - (y1 - y2) * (x3 - x4)

    # Parallel or coincident
    if abs(denom) < parallel_epsilon:
        return None

    t = ((x1 - x3) * (y3 - y4) - (y1 - y3) * (x3 - x4)) / denom
    u = -((x1 - x2) * (y1 - y3) - (y1 - y2) * (x1 - x3)) / denom

    if 0 <= t <= 1 and 0 <= u <= 1:
        return Point(x1 + t * (x2 - x1), y1 + t * (y2 - y1))

    return None


def line_polygon_intersections(
    line_start: Point,
    line_end: Point,
    polygon: Sequence[Point],
    epsilon: float = DEFAULT_EPSILON,
) -> list[Point]:
    """Find where a segment crosses the edges of a polygon.

    Intersections closer than ``epsilon`` to one already found are dropped,
    so a crossing through a vertex is reported once.
    """
    vertices = strip_closing_point(polygon, epsilon)
    n = len(vertices)
    found: list[Point] = []

    for i in range(n):
        hit = line_intersection(line_start, line_end, vertices[i], vertices[(i + 1) % n])
        if hit is None:
            continue
        if any(hit.same_position(existing, epsilon) for existing in found):
            continue
        found.append(hit)

    return found


def cross_product(o: Point, a: Point, b: Point) -> float:
    """Z component of (a - o) x (b - o)."""
    return (a.x - o.x) * (b.y - o.y) - (a.y - o.y) * (b.x - o.x)


def nearest_point_on_segment(point: Point, seg_start: Point, seg_end: Point) -> tuple[Point, float]:
    """Find the closest point on a line segment to a given point.

    Projects the point onto the infinite line, then clamps to the segment endpoints.

    Returns:
        Tuple of (nearest_point, distance)
    """
    dx = seg_end.x - seg_start.x
    dy = seg_end.y - seg_start.y

    segment_length_sq = dx * dx + dy * dy
    if segment_length_sq < 1e-10:
        return seg_start, math.hypot(point.x - seg_start.x, point.y - seg_start.y)

    t = ((point.x - seg_start.x) * dx + (point.y - seg_start.y) * dy) / segment_length_sq
    t = max(0.0, min(1.0, t))

    nearest = Point(seg_start.x + t * dx, seg_start.y + t * dy)
    return nearest, math.hypot(point.x - nearest.x, point.y - nearest.y)


def segment_overlap(
    a1: Point, a2: Point, b1: Point, b2: Point, epsilon: float = DEFAULT_EPSILON
) -> Segment | None:
    """Return the shared part of two collinear segments.

    Segments that are not collinear, or that do not meet, give None. Segments
    touching at a single point give a zero-length segment.
    """
    if abs(cross_product(a1, a2, b1)) > epsilon or abs(cross_product(a1, a2, b2)) > epsilon:
        return None

    if abs(a1.y - a2.y) < epsilon:
        start = max(min(a1.x, a2.x), min(b1.x, b2.x))
        end = min(max(a1.x, a2.x), max(b1.x, b2.x))
        if start > end:
            return None
        return Segment(Point(start, a1.y), Point(end, a1.y))

    if abs(a1.x - a2.x) < epsilon:
        start = max(min(a1.y, a2.y), min(b1.y, b2.y))
        end = min(max(a1.y, a2.y), max(b1.y, b2.y))
        if start > end:
            return None
        return Segment(Point(a1.x, start), Point(a1.x, end))

    # Diagonal: project onto the segment direction
    length = distance(a1, a2)
    if length < epsilon:
        return None
    ux, uy = (a2.x - a1.x) / length, (a2.y - a1.y) / length

    def project(p: Point) -> float:
        return (p.x - a1.x) * ux + (p.y - a1.y) * uy

    start = max(0.0, min(project(b1), project(b2)))
    end = min(length, max(project(b1), project(b2)))
    if start > end:
        return None
    return Segment(
        Point(a1.x + ux * start, a1.y + uy * start),
        Point(a1.x + ux * end, a1.y + uy * end),
    )


def classify_edge(
    p1: Point,
    p2: Point,
    tolerance_degrees: float = 2.0,
    epsilon: float = DEFAULT_EPSILON,
) -> EdgeType:
    """Classify an edge by direction.

    Args:
        p1: Start point
        p2: End point
        tolerance_degrees: Allowed deviation from 0°, 45° or 90°
        epsilon: Zero-length threshold

    Returns:
        EdgeType; zero-length edges are OTHER
    """
    dx = p2.x - p1.x
    dy = p2.y - p1.y

    if abs(dx) < epsilon and abs(dy) < epsilon:
        return EdgeType.OTHER

    angle = math.degrees(math.atan2(abs(dy), abs(dx)))

    if angle < tolerance_degrees:
        return EdgeType.HORIZONTAL
    if abs(angle - 90) < tolerance_degrees:
        return EdgeType.VERTICAL
    if abs(angle - 45) < tolerance_degrees:
        return EdgeType.DIAGONAL
    return EdgeType.OTHER


def iter_edges(points: Sequence[Point], epsilon: float = DEFAULT_EPSILON) -> list[tuple[int, Point, Point]]:
    """List the edges of a ring as (index, start, end), wrapping at the end."""
    vertices = strip_closing_point(points, epsilon)
    n = len(vertices)
    if n < 2:
        return []
    return [(i, vertices[i], vertices[(i + 1) % n]) for i in range(n)]


def has_diagonal_edges(points: Sequence[Point], epsilon: float = DEFAULT_EPSILON) -> bool:
    """Check if any edge of the ring is a 45° diagonal."""
    return any(
        classify_edge(p1, p2, epsilon=epsilon) == EdgeType.DIAGONAL
        for _, p1, p2 in iter_edges(points, epsilon)
    )


def get_diagonal_edges(points: Sequence[Point], epsilon: float = DEFAULT_EPSILON) -> list[dict]:
    """Collect the 45° diagonal edges of a ring.

    Returns:
        List of dicts with ``p1``, ``p2``, ``index`` and ``angle`` (radians)
    """
    return [
        {
            "p1": p1,
            "p2": p2,
            "index": index,
            "angle": math.atan2(p2.y - p1.y, p2.x - p1.x),
        }
        for index, p1, p2 in iter_edges(points, epsilon)
        if classify_edge(p1, p2, epsilon=epsilon) == EdgeType.DIAGONAL
    ]
