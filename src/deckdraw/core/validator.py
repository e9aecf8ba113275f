"""Shape validation for closed outlines.

A closed ring is accepted when it:
- has at least three unique vertices and repeats its first point at the end
- has no crossings between non-adjacent edges
- turns only by multiples of the configured angle step (45° by default)
- has only horizontal, vertical or 45° diagonal edges

Failures are reported as ValidationResult values with a message suitable for
showing to the user.
"""

import math
from collections.abc import Sequence

from deckdraw.config import (
    DeckDrawSettings,
    DrawingConfig,
    GeometryConfig,
    resolve_drawing_config,
    resolve_geometry_config,
)
from deckdraw.core.geometry import EdgeType, classify_edge, distance, strip_closing_point
from deckdraw.domain import Point, ValidationResult


def validate_shape(
    points: Sequence[Point] | None,
    config: DeckDrawSettings | GeometryConfig | None = None,
    drawing: DrawingConfig | None = None,
) -> ValidationResult:
    """Validate a closed outline.

    Args:
        points: Closed ring (first point repeated at the end)
        config: Geometry tolerances, or full settings
        drawing: Drawing configuration for the coordinate epsilon. Taken from
            ``config`` when it is full settings.

    Returns:
        ValidationResult describing the first failed check, if any
    """
    geometry = resolve_geometry_config(config)
    if drawing is None:
        drawing = resolve_drawing_config(config if isinstance(config, DeckDrawSettings) else None)
    epsilon = drawing.epsilon

    if points is None or isinstance(points, (str, bytes)) or not isinstance(points, Sequence):
        return ValidationResult.fail("Invalid points array provided")

    if len(points) < 4:
        return ValidationResult.fail("Shape must have at least 4 points to form a closed polygon")

    if distance(points[0], points[-1]) > epsilon:
        return ValidationResult.fail("Shape is not properly closed")

    vertices = list(points[:-1])
    if len(vertices) < 3:
        return ValidationResult.fail("Shape must have at least 3 unique points")

    result = check_self_intersections(vertices, geometry)
    if not result.is_valid:
        return result

    result = check_turn_angles(vertices, geometry, epsilon)
    if not result.is_valid:
        return result

    return check_edge_directions(vertices, geometry, epsilon)


def _segments_cross(p1: Point, p2: Point, p3: Point, p4: Point, geometry: GeometryConfig) -> bool:
    denom = (p4.y - p3.y) * (p2.x - p1.x) - (p4.x - p3.x) * (p2.y - p1.y)
    if abs(denom) < geometry.parallel_epsilon:
        return False

    ua = ((p4.x - p3.x) * (p1.y - p3.y) - (p4.y - p3.y) * (p1.x - p3.x)) / denom
    ub = ((p2.x - p1.x) * (p1.y - p3.y) - (p2.y - p1.y) * (p1.x - p3.x)) / denom

    # Endpoint touches do not count
    margin = geometry.intersection_tolerance
    return margin < ua < 1 - margin and margin < ub < 1 - margin


def check_self_intersections(
    vertices: Sequence[Point], geometry: GeometryConfig | None = None
) -> ValidationResult:
    """Check a ring (without closing duplicate) for crossing edges.

    Adjacent edges, including the last and first, are never compared.
    Edge numbers in the message are 1-based.
    """
    geometry = geometry or GeometryConfig()
    n = len(vertices)
    edges = [(vertices[i], vertices[(i + 1) % n]) for i in range(n)]

    for i in range(n):
        for j in range(i + 2, n):
            if i == 0 and j == n - 1:
                continue
            if _segments_cross(*edges[i], *edges[j], geometry):
                return ValidationResult.fail(
                    f"Shape has self-intersecting lines. Edge {i + 1} intersects with edge {j + 1}."
                )

    return ValidationResult.ok()


def check_turn_angles(
    vertices: Sequence[Point],
    geometry: GeometryConfig | None = None,
    epsilon: float = 0.01,
) -> ValidationResult:
    """Check that the angle at every vertex is a multiple of the angle step.

    Vertices with a zero-length neighbouring edge are skipped.
    """
    geometry = geometry or GeometryConfig()
    n = len(vertices)
    if n < 3:
        return ValidationResult.fail("Need at least 3 points to check angles")

    step = geometry.angle_step_degrees
    for i in range(n):
        prev = vertices[i - 1]
        current = vertices[i]
        nxt = vertices[(i + 1) % n]

        v1x, v1y = prev.x - current.x, prev.y - current.y
        v2x, v2y = nxt.x - current.x, nxt.y - current.y
        mag1 = math.hypot(v1x, v1y)
        mag2 = math.hypot(v2x, v2y)
        if mag1 < epsilon or mag2 < epsilon:
            continue

        cos_angle = max(-1.0, min(1.0, (v1x * v2x + v1y * v2y) / (mag1 * mag2)))
        angle = math.degrees(math.acos(cos_angle))
        off_step = abs(angle - round(angle / step) * step)

        if off_step > geometry.angle_tolerance_degrees:
            return ValidationResult.fail(
                f"Invalid angle at point {i + 1}: {angle:.1f}°. "
                f"Only corners in multiples of {step:g} degrees are supported."
            )

    return ValidationResult.ok()


def check_edge_directions(
    vertices: Sequence[Point],
    geometry: GeometryConfig | None = None,
    epsilon: float = 0.01,
) -> ValidationResult:
    """Check that every edge is horizontal, vertical or a 45° diagonal.

    Zero-length edges are ignored.
    """
    geometry = geometry or GeometryConfig()
    n = len(vertices)

    for i in range(n):
        p1 = vertices[i]
        p2 = vertices[(i + 1) % n]
        if abs(p1.x - p2.x) < epsilon and abs(p1.y - p2.y) < epsilon:
            continue
        edge_type = classify_edge(p1, p2, geometry.angle_tolerance_degrees, epsilon)
        if edge_type == EdgeType.OTHER:
            return ValidationResult.fail(
                f"Edge {i + 1} is neither horizontal, vertical nor a 45° diagonal."
            )

    return ValidationResult.ok()


def is_simple_polygon(
    points: Sequence[Point] | None,
    config: DeckDrawSettings | GeometryConfig | None = None,
    epsilon: float = 0.01,
) -> ValidationResult:
    """Check that a closed ring has no repeated consecutive points or crossings."""
    if not points or len(points) < 4:
        return ValidationResult.fail("Need at least 4 points for a closed polygon")

    for i in range(len(points) - 1):
        if distance(points[i], points[i + 1]) < epsilon:
            return ValidationResult.fail(f"Duplicate consecutive points found at position {i + 1}")

    return check_self_intersections(list(points[:-1]), resolve_geometry_config(config))


def can_decompose_shape(points: Sequence[Point] | None, epsilon: float = 0.01) -> bool:
    """Quick check that a ring has enough points and only supported edge directions."""
    if not points or len(points) < 4:
        return False

    return all(
        classify_edge(points[i], points[i + 1], epsilon=epsilon) != EdgeType.OTHER
        for i in range(len(points) - 1)
    )


def get_validation_requirements() -> str:
    """Describe what a valid deck outline looks like."""
    return (
        "Deck shapes must meet the following requirements:\n"
        "• At least 3 unique corner points\n"
        "• Corners must be multiples of 45 degrees\n"
        "• Edges must be horizontal, vertical or 45° diagonal\n"
        "• No self-intersecting lines\n"
        "• Shape must be a simple closed polygon\n"
        "• Must be decomposable into rectangular sections"
    )


def are_walls_parallel(
    first_index: int, second_index: int, points: Sequence[Point], epsilon: float = 0.01
) -> bool:
    """Check whether two walls of a ring run in parallel (either direction)."""
    if first_index == second_index:
        return True

    vertices = strip_closing_point(points, epsilon)
    n = len(vertices)
    a1, a2 = vertices[first_index % n], vertices[(first_index + 1) % n]
    b1, b2 = vertices[second_index % n], vertices[(second_index + 1) % n]

    len_a = distance(a1, a2)
    len_b = distance(b1, b2)
    if len_a < epsilon or len_b < epsilon:
        return False

    dot = ((a2.x - a1.x) * (b2.x - b1.x) + (a2.y - a1.y) * (b2.y - b1.y)) / (len_a * len_b)
    return abs(abs(dot) - 1) < epsilon


def validate_selected_walls(
    wall_indices: Sequence[int], points: Sequence[Point], epsilon: float = 0.01
) -> ValidationResult:
    """Check a ledger selection: at least one wall, all parallel to the first."""
    if not wall_indices:
        return ValidationResult.fail("No walls selected")

    first = wall_indices[0]
    for index in wall_indices[1:]:
        if not are_walls_parallel(first, index, points, epsilon):
            return ValidationResult.fail("All selected walls must be parallel to each other")

    return ValidationResult.ok()
