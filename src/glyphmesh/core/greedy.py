"""Greedy rectangular meshing of ink grids."""

from glyphmesh.domain import InkGrid, Run


def greedy_mesh(grid: InkGrid) -> list[Run]:
    """Cover the ink cells with axis-aligned rectangles, widest first.

    Scans rows top to bottom and columns left to right. At each ink cell
    not yet covered, the rectangle first grows rightward as far as the row
    stays ink, then downward while the whole strip of that width stays ink.
    Covered cells are cleared on a private copy of the grid, so the caller's
    grid is never modified.

    The union of the rectangles equals the ink set and no two rectangles
    overlap. The cover is deterministic but not minimal in rectangle count.

    Args:
        grid: Binarized glyph

    Returns:
        Rectangles in the order they were found
    """
    work = grid.copy()
    rects: list[Run] = []

    for y in range(work.height):
        for x in range(work.width):
            if not work.get(x, y):
                continue

            width = 1
            while work.get(x + width, y):
                width += 1

            height = 1
            while y + height < work.height and all(
                work.get(x + dx, y + height) for dx in range(width)
            ):
                height += 1

            rects.append(Run(x=x, y=y, width=width, height=height))

            for cy in range(y, y + height):
                for cx in range(x, x + width):
                    work.set(cx, cy, False)

    return rects
