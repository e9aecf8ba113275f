"""Unit tests for rectangle decomposition."""

import itertools

import pytest

from deckdraw.core.decomposer import (
    classify_cells,
    decompose_shape,
    find_shared_edge,
    greedy_merge,
    grid_coordinates,
    total_area,
)
from deckdraw.core.geometry import polygon_area
from deckdraw.domain import Point, Rectangle


def feet(*coords: tuple[float, float]) -> list[Point]:
    """Build an outline from coordinates in feet (24 model pixels per foot)."""
    return [Point(x * 24, y * 24) for x, y in coords]


RECTANGLE = feet((0, 0), (12, 0), (12, 10), (0, 10))
L_SHAPE = feet((0, 0), (12, 0), (12, 5), (6, 5), (6, 10), (0, 10))
U_SHAPE = feet((0, 0), (12, 0), (12, 10), (8, 10), (8, 4), (4, 4), (4, 10), (0, 10))
T_SHAPE = feet((0, 0), (12, 0), (12, 4), (8, 4), (8, 10), (4, 10), (4, 4), (0, 4))


def boxes(rectangles: list[Rectangle]) -> list[tuple[float, float, float, float]]:
    return [(r.x, r.y, r.width, r.height) for r in rectangles]


class TestDecomposeShape:
    """Tests for decompose_shape."""

    def test_rectangle(self) -> None:
        """Test that a rectangle is its own decomposition."""
        rectangles = decompose_shape(RECTANGLE, 0)

        assert boxes(rectangles) == [(0, 0, 288, 240)]
        assert rectangles[0].id == "rect_0"
        assert rectangles[0].is_ledger_rectangle
        assert rectangles[0].adjacent_rectangles == []

    def test_l_shape_horizontal_ledger(self) -> None:
        """Test that a horizontal ledger builds column strips first."""
        rectangles = decompose_shape(L_SHAPE, 0)

        assert boxes(rectangles) == [(0, 0, 144, 240), (144, 0, 144, 120)]
        assert all(r.is_ledger_rectangle for r in rectangles)

    def test_l_shape_vertical_ledger(self) -> None:
        """Test that a vertical ledger builds row strips first."""
        rectangles = decompose_shape(L_SHAPE, 1)

        assert boxes(rectangles) == [(0, 0, 288, 120), (0, 120, 144, 120)]
        assert [r.is_ledger_rectangle for r in rectangles] == [True, False]

    def test_u_shape(self) -> None:
        """Test that the U-shape splits into three sections."""
        rectangles = decompose_shape(U_SHAPE, 0)

        assert len(rectangles) == 3
        assert [r.id for r in rectangles] == ["rect_0", "rect_1", "rect_2"]
        middle = rectangles[1]
        assert sorted(middle.adjacent_rectangles) == ["rect_0", "rect_2"]

    @pytest.mark.parametrize(("ledger", "expected"), [(0, 3), (1, 2)])
    def test_t_shape(self, ledger: int, expected: int) -> None:
        """Test that the T-shape result depends on the ledger direction."""
        assert len(decompose_shape(T_SHAPE, ledger)) == expected

    @pytest.mark.parametrize("shape", [RECTANGLE, L_SHAPE, U_SHAPE, T_SHAPE], ids=["rect", "l", "u", "t"])
    @pytest.mark.parametrize("ledger", [0, 1])
    def test_rectangles_tile_the_outline(self, shape: list[Point], ledger: int) -> None:
        """Test that rectangles cover the outline exactly without overlap."""
        rectangles = decompose_shape(shape, ledger)

        assert total_area(rectangles) == pytest.approx(polygon_area(shape))
        for first, second in itertools.combinations(rectangles, 2):
            assert not first.overlaps(second)

    @pytest.mark.parametrize("shape", [L_SHAPE, U_SHAPE, T_SHAPE], ids=["l", "u", "t"])
    def test_adjacency_is_symmetric(self, shape: list[Point]) -> None:
        """Test that neighbours list each other."""
        rectangles = decompose_shape(shape, 0)
        by_id = {r.id: r for r in rectangles}
        for rect in rectangles:
            for neighbour in rect.adjacent_rectangles:
                assert rect.id in by_id[neighbour].adjacent_rectangles
            assert len(rect.shared_edges) == len(rect.adjacent_rectangles)

    def test_closed_and_open_input_agree(self) -> None:
        """Test that a closing duplicate does not change the result."""
        assert boxes(decompose_shape([*L_SHAPE, L_SHAPE[0]], 0)) == boxes(decompose_shape(L_SHAPE, 0))

    def test_ledger_index_wraps(self) -> None:
        """Test that ledger indices wrap around the vertex count."""
        assert boxes(decompose_shape(L_SHAPE, 6)) == boxes(decompose_shape(L_SHAPE, 0))

    def test_several_ledgers(self) -> None:
        """Test that every selected wall is recorded on the rectangles it touches."""
        rectangles = decompose_shape(L_SHAPE, [0, 2])

        short_side = rectangles[1]
        assert len(short_side.ledger_walls) == 2
        assert len(rectangles[0].ledger_walls) == 1

    def test_ledger_segment_is_the_overlap(self) -> None:
        """Test that the recorded ledger is the part lying on the rectangle."""
        rectangles = decompose_shape(L_SHAPE, 0)
        wall = rectangles[0].ledger_wall
        assert wall is not None
        assert wall.length == 144

    def test_input_not_modified(self) -> None:
        """Test that the outline is not changed."""
        shape = list(U_SHAPE)
        decompose_shape(shape, 0)
        assert shape == U_SHAPE

    def test_too_few_vertices(self) -> None:
        """Test that degenerate outlines give no rectangles."""
        assert decompose_shape([Point(0, 0), Point(10, 0)], 0) == []
        assert decompose_shape([], 0) == []

    def test_zero_area(self) -> None:
        """Test that a collinear outline gives no rectangles."""
        assert decompose_shape([Point(0, 0), Point(10, 0), Point(20, 0)], 0) == []


class TestGrid:
    """Tests for the grid helpers."""

    def test_grid_coordinates(self) -> None:
        """Test sorted unique coordinates."""
        xs, ys = grid_coordinates(U_SHAPE)
        assert xs == [0, 96, 192, 288]
        assert ys == [0, 96, 240]

    def test_classify_cells(self) -> None:
        """Test that the notch of the U is outside."""
        xs, ys = grid_coordinates(U_SHAPE)
        assert classify_cells(U_SHAPE, xs, ys) == {(0, 0), (1, 0), (2, 0), (0, 1), (2, 1)}

    def test_greedy_merge_empty(self) -> None:
        """Test that no cells give no rectangles."""
        assert greedy_merge(set(), [0, 1], [0, 1], merge_vertical_first=True) == []

    def test_greedy_merge_full_grid(self) -> None:
        """Test that a full grid merges into one rectangle either way."""
        inside = {(0, 0), (0, 1), (1, 0), (1, 1)}
        for vertical_first in (True, False):
            rectangles = greedy_merge(inside, [0, 10, 20], [0, 5, 10], vertical_first)
            assert boxes(rectangles) == [(0, 0, 20, 10)]


class TestSharedEdge:
    """Tests for find_shared_edge."""

    def test_shared_edge(self) -> None:
        """Test two rectangles side by side."""
        edge = find_shared_edge(Rectangle(0, 0, 10, 10), Rectangle(10, 5, 10, 10))
        assert edge is not None
        assert edge.length == 5

    def test_corner_contact_is_not_shared(self) -> None:
        """Test rectangles touching at a single corner."""
        assert find_shared_edge(Rectangle(0, 0, 10, 10), Rectangle(10, 10, 10, 10)) is None
