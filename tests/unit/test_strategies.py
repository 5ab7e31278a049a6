"""Unit tests for the run-length and greedy rectangle strategies.

Tests cover:
- Exact cover of the ink set
- Disjointness and maximality of runs
- Non-overlap of greedy rectangles
- The 10x10 block scenario
- Empty grids
"""

from glyphmesh.core.greedy import greedy_mesh
from glyphmesh.core.runs import extract_runs
from glyphmesh.domain import InkGrid, Run


def _covered_cells(runs: list[Run]) -> list[tuple[int, int]]:
    cells: list[tuple[int, int]] = []
    for run in runs:
        cells.extend(run.cells())
    return cells


class TestRunExtractor:
    """Tests for scanline runs."""

    def test_square_block(self, square_grid):
        runs = extract_runs(square_grid)

        assert len(runs) == 10
        assert runs == [Run(x=10, y=y, width=10, height=1) for y in range(10, 20)]

    def test_row_with_gap_and_edge(self):
        grid = InkGrid.from_strings(["##..###"])
        assert extract_runs(grid) == [
            Run(x=0, y=0, width=2, height=1),
            Run(x=4, y=0, width=3, height=1),
        ]

    def test_empty_grid(self):
        assert extract_runs(InkGrid(12, 7)) == []

    def test_cover_is_exact(self, pattern_grid):
        cells = _covered_cells(extract_runs(pattern_grid))
        assert sorted(cells) == sorted(pattern_grid.iter_ink())
        assert len(cells) == len(set(cells))

    def test_runs_are_maximal(self, pattern_grid):
        for run in extract_runs(pattern_grid):
            assert run.height == 1
            assert not pattern_grid.get(run.x - 1, run.y)
            assert not pattern_grid.get(run.x + run.width, run.y)

    def test_no_adjacent_runs_in_a_row(self, pattern_grid):
        runs = extract_runs(pattern_grid)
        for a, b in zip(runs, runs[1:]):
            if a.y == b.y:
                assert a.x + a.width < b.x


class TestGreedyMesher:
    """Tests for greedy rectangle covering."""

    def test_square_block_is_one_rectangle(self, square_grid):
        assert greedy_mesh(square_grid) == [Run(x=10, y=10, width=10, height=10)]

    def test_width_grows_before_height(self):
        grid = InkGrid.from_strings(
            [
                "##.",
                "##.",
                "###",
            ]
        )
        assert greedy_mesh(grid) == [
            Run(x=0, y=0, width=2, height=3),
            Run(x=2, y=2, width=1, height=1),
        ]

    def test_wide_row_blocks_downward_growth(self):
        grid = InkGrid.from_strings(
            [
                "###",
                "##.",
            ]
        )
        assert greedy_mesh(grid) == [
            Run(x=0, y=0, width=3, height=1),
            Run(x=0, y=1, width=2, height=1),
        ]

    def test_empty_grid(self):
        assert greedy_mesh(InkGrid(5, 5)) == []

    def test_cover_is_exact_without_overlap(self, pattern_grid):
        cells = _covered_cells(greedy_mesh(pattern_grid))
        assert len(cells) == len(set(cells))
        assert sorted(cells) == sorted(pattern_grid.iter_ink())

    def test_input_grid_is_untouched(self, pattern_grid):
        before = pattern_grid.copy()
        greedy_mesh(pattern_grid)
        assert pattern_grid == before

    def test_deterministic(self, pattern_grid):
        assert greedy_mesh(pattern_grid) == greedy_mesh(pattern_grid)

