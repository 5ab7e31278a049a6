"""Shared fixtures for glyphmesh tests."""

import pytest

from glyphmesh.domain import InkGrid

from helpers import SquareRenderer, block_grid


@pytest.fixture
def square_grid() -> InkGrid:
    """30x30 grid with a 10x10 ink block from (10, 10) to (19, 19)."""
    return block_grid(30, [(10, 10, 10, 10)])


@pytest.fixture
def two_blob_grid() -> InkGrid:
    """40x40 grid with two disjoint 8x8 blocks."""
    return block_grid(40, [(2, 2, 8, 8), (25, 5, 8, 8)])


@pytest.fixture
def pattern_grid() -> InkGrid:
    """Irregular deterministic pattern for cover properties."""
    return InkGrid.from_rows(
        [[(x * 7 + y * 3) % 5 < 2 or (x + y) % 6 == 0 for x in range(17)] for y in range(13)]
    )


@pytest.fixture
def square_renderer() -> SquareRenderer:
    return SquareRenderer()
