"""Rectangle decomposition of closed rectilinear outlines.

The outline's vertex coordinates define a grid. Grid cells whose centres lie
inside the outline are merged greedily in two phases:

1. Contiguous cells along the primary axis become strips.
2. Neighbouring strips with identical spans along that axis are joined.

The primary axis follows the ledger wall. A horizontal ledger merges
columns first (strips run away from the ledger), a vertical ledger merges
rows first. The same two phases handle every outline, whatever its number
of cells, so there is no special casing by shape.
"""

from collections.abc import Sequence
from dataclasses import dataclass

import structlog

from deckdraw.config import DeckDrawSettings, DrawingConfig, resolve_drawing_config
from deckdraw.core.geometry import point_in_polygon, segment_overlap, strip_closing_point
from deckdraw.domain import Point, Rectangle, Segment, SharedEdge

logger = structlog.get_logger(__name__)


@dataclass
class _Strip:
    """A run of grid cells with its grid extent."""

    x: float
    y: float
    width: float
    height: float
    col_start: int
    col_end: int
    row_start: int
    row_end: int


def grid_coordinates(vertices: Sequence[Point]) -> tuple[list[float], list[float]]:
    """Sorted unique X and Y coordinates of the outline's vertices."""
    return sorted({p.x for p in vertices}), sorted({p.y for p in vertices})


def classify_cells(
    vertices: Sequence[Point], x_coords: Sequence[float], y_coords: Sequence[float]
) -> set[tuple[int, int]]:
    """Find the grid cells whose centres lie inside the outline.

    Returns:
        Set of (column, row) indices
    """
    inside: set[tuple[int, int]] = set()
    for col in range(len(x_coords) - 1):
        center_x = (x_coords[col] + x_coords[col + 1]) / 2
        for row in range(len(y_coords) - 1):
            center_y = (y_coords[row] + y_coords[row + 1]) / 2
            if point_in_polygon(Point(center_x, center_y), vertices):
                inside.add((col, row))
    return inside


def _column_strips(
    inside: set[tuple[int, int]], x_coords: Sequence[float], y_coords: Sequence[float]
) -> list[_Strip]:
    strips: list[_Strip] = []
    max_col, max_row = len(x_coords) - 1, len(y_coords) - 1
    for col in range(max_col):
        run_start: int | None = None
        for row in range(max_row + 1):
            if row < max_row and (col, row) in inside:
                if run_start is None:
                    run_start = row
            elif run_start is not None:
                strips.append(
                    _Strip(
                        x=x_coords[col],
                        y=y_coords[run_start],
                        width=x_coords[col + 1] - x_coords[col],
                        height=y_coords[row] - y_coords[run_start],
                        col_start=col,
                        col_end=col,
                        row_start=run_start,
                        row_end=row - 1,
                    )
                )
                run_start = None
    return strips


def _row_strips(
    inside: set[tuple[int, int]], x_coords: Sequence[float], y_coords: Sequence[float]
) -> list[_Strip]:
    strips: list[_Strip] = []
    max_col, max_row = len(x_coords) - 1, len(y_coords) - 1
    for row in range(max_row):
        run_start: int | None = None
        for col in range(max_col + 1):
            if col < max_col and (col, row) in inside:
                if run_start is None:
                    run_start = col
            elif run_start is not None:
                strips.append(
                    _Strip(
                        x=x_coords[run_start],
                        y=y_coords[row],
                        width=x_coords[col] - x_coords[run_start],
                        height=y_coords[row + 1] - y_coords[row],
                        col_start=run_start,
                        col_end=col - 1,
                        row_start=row,
                        row_end=row,
                    )
                )
                run_start = None
    return strips


def merge_strips(strips: list[_Strip], horizontal: bool, epsilon: float = 0.01) -> list[_Strip]:
    """Join neighbouring strips that cover the same span.

    Strips are sorted and each one is compared with the most recently merged
    strip only.

    Args:
        strips: Strips from the first phase
        horizontal: Join left-right neighbours with equal row spans; otherwise
            join top-bottom neighbours with equal column spans
        epsilon: Adjacency tolerance

    Returns:
        Merged strips
    """
    if len(strips) <= 1:
        return list(strips)

    if horizontal:
        ordered = sorted(strips, key=lambda s: (s.row_start, s.col_start))
    else:
        ordered = sorted(strips, key=lambda s: (s.col_start, s.row_start))

    merged = [ordered[0]]
    for current in ordered[1:]:
        prev = merged[-1]
        if horizontal:
            if (
                current.row_start == prev.row_start
                and current.row_end == prev.row_end
                and abs(current.x - (prev.x + prev.width)) < epsilon
            ):
                prev.width = current.x + current.width - prev.x
                prev.col_end = current.col_end
                continue
        elif (
            current.col_start == prev.col_start
            and current.col_end == prev.col_end
            and abs(current.y - (prev.y + prev.height)) < epsilon
        ):
            prev.height = current.y + current.height - prev.y
            prev.row_end = current.row_end
            continue
        merged.append(current)

    return merged


def greedy_merge(
    inside: set[tuple[int, int]],
    x_coords: Sequence[float],
    y_coords: Sequence[float],
    merge_vertical_first: bool,
    epsilon: float = 0.01,
) -> list[Rectangle]:
    """Merge inside cells into maximal rectangles.

    Args:
        inside: (column, row) indices of inside cells
        x_coords: Grid X coordinates
        y_coords: Grid Y coordinates
        merge_vertical_first: Build column strips first, then join them sideways
        epsilon: Adjacency tolerance

    Returns:
        Rectangles without ids or ledger information
    """
    if not inside:
        return []

    if merge_vertical_first:
        strips = merge_strips(_column_strips(inside, x_coords, y_coords), horizontal=True, epsilon=epsilon)
    else:
        strips = merge_strips(_row_strips(inside, x_coords, y_coords), horizontal=False, epsilon=epsilon)

    return [Rectangle(x=s.x, y=s.y, width=s.width, height=s.height) for s in strips]


def _normalize_ledger_indices(ledger_wall_index: int | Sequence[int] | None, count: int) -> list[int]:
    if ledger_wall_index is None:
        indices = [0]
    elif isinstance(ledger_wall_index, int):
        indices = [ledger_wall_index]
    else:
        indices = list(ledger_wall_index) or [0]
    return [index % count for index in indices]


def _tag_ledger_walls(
    rectangles: Sequence[Rectangle], ledger_walls: Sequence[Segment], epsilon: float
) -> None:
    for rect in rectangles:
        for wall in ledger_walls:
            for edge in rect.edges():
                overlap = segment_overlap(wall.p1, wall.p2, edge.p1, edge.p2, epsilon)
                if overlap is not None and overlap.length > epsilon:
                    rect.is_ledger_rectangle = True
                    rect.ledger_walls.append(overlap)
                    break


def find_shared_edge(first: Rectangle, second: Rectangle, epsilon: float = 0.01) -> Segment | None:
    """Return the positive-length boundary part two rectangles share, if any."""
    for edge_a in first.edges():
        for edge_b in second.edges():
            overlap = segment_overlap(edge_a.p1, edge_a.p2, edge_b.p1, edge_b.p2, epsilon)
            if overlap is not None and overlap.length > epsilon:
                return overlap
    return None


def _link_adjacent(rectangles: Sequence[Rectangle], epsilon: float) -> None:
    for i, first in enumerate(rectangles):
        for second in rectangles[i + 1 :]:
            shared = find_shared_edge(first, second, epsilon)
            if shared is None:
                continue
            first.adjacent_rectangles.append(second.id)
            second.adjacent_rectangles.append(first.id)
            first.shared_edges.append(SharedEdge(rectangle_id=second.id, edge=shared))
            second.shared_edges.append(SharedEdge(rectangle_id=first.id, edge=shared))


def decompose_shape(
    points: Sequence[Point],
    ledger_wall_index: int | Sequence[int] | None = 0,
    config: DrawingConfig | DeckDrawSettings | None = None,
) -> list[Rectangle]:
    """Decompose a closed outline into non-overlapping rectangles.

    Args:
        points: Outline, with or without its closing duplicate
        ledger_wall_index: Index of the ledger wall, or several indices. The
            first one sets the merge direction; all of them are used to tag
            ledger rectangles. Indices wrap around the vertex count.
        config: Drawing configuration (defaults when None)

    Returns:
        Rectangles with ids ``rect_<n>``, ledger tags and adjacency. Empty if
        the outline has fewer than three vertices or no area.
    """
    cfg = resolve_drawing_config(config)
    epsilon = cfg.epsilon
    vertices = strip_closing_point(points, epsilon)
    n = len(vertices)

    if n < 3:
        logger.debug("Nothing to decompose", vertices=n)
        return []

    ledger_indices = _normalize_ledger_indices(ledger_wall_index, n)
    ledger_walls = [Segment(vertices[i], vertices[(i + 1) % n]) for i in ledger_indices]

    x_coords, y_coords = grid_coordinates(vertices)
    inside = classify_cells(vertices, x_coords, y_coords)
    if not inside:
        logger.debug("Nothing to decompose", vertices=n, cells=0)
        return []

    primary = ledger_walls[0]
    merge_vertical_first = abs(primary.p1.y - primary.p2.y) < epsilon

    rectangles = greedy_merge(inside, x_coords, y_coords, merge_vertical_first, epsilon)
    for i, rect in enumerate(rectangles):
        rect.id = f"rect_{i}"

    _tag_ledger_walls(rectangles, ledger_walls, epsilon)
    _link_adjacent(rectangles, epsilon)

    logger.info(
        "Decomposition complete",
        rectangles=len(rectangles),
        cells=len(inside),
        ledgers=ledger_indices,
        merge="vertical-first" if merge_vertical_first else "horizontal-first",
    )
    return rectangles


def total_area(rectangles: Sequence[Rectangle]) -> float:
    """Sum of rectangle areas in square model pixels."""
    return sum(r.area for r in rectangles)
