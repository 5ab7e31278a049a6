"""Scanline run-length extraction."""

from glyphmesh.domain import InkGrid, Run


def extract_runs(grid: InkGrid) -> list[Run]:
    """Split every row of the grid into maximal horizontal ink runs.

    Each run has height 1. Runs within a row are disjoint and cannot be
    extended without covering a background cell.

    Args:
        grid: Binarized glyph

    Returns:
        Runs in raster order; empty for an all-background grid
    """
    runs: list[Run] = []

    for y in range(grid.height):
        start: int | None = None
        for x in range(grid.width):
            if grid.get(x, y):
                if start is None:
                    start = x
            elif start is not None:
                runs.append(Run(x=start, y=y, width=x - start, height=1))
                start = None

        if start is not None:
            runs.append(Run(x=start, y=y, width=grid.width - start, height=1))

    return runs
