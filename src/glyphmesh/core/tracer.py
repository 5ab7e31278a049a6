"""Moore-neighbour contour tracing.

Traces the outer boundary of every 8-connected ink region in raster order.
Only ink cells seed a trace, so background enclosed by ink (the counter of
an "O") never produces a ring of its own.
"""

from collections import deque

from glyphmesh.domain import InkGrid, Point, Ring

# Clockwise neighbour order (y grows downward), starting straight up.
DX = (0, 1, 1, 1, 0, -1, -1, -1)
DY = (-1, -1, 0, 1, 1, 1, 0, -1)

DEFAULT_MIN_POINTS = 6


def trace_boundary(
    grid: InkGrid,
    start_x: int,
    start_y: int,
    visited: bytearray,
) -> Ring:
    """Walk the boundary of the region containing (start_x, start_y).

    The walk starts heading up. At each cell the eight neighbours are
    searched clockwise, beginning two steps counter-clockwise of the
    direction of arrival, and the walk moves to the first ink neighbour.
    It ends when it steps back onto the start cell, when the start cell
    has no ink neighbour at all, or when a (cell, direction) state repeats.

    Args:
        grid: Binarized glyph
        start_x: Column of the seed cell (must be ink)
        start_y: Row of the seed cell
        visited: Row-major bitmap; every walked cell is marked

    Returns:
        Ring of walked cells, the start cell first and not repeated at the end
    """
    width = grid.width
    points: list[Point] = []
    seen_states: set[tuple[int, int, int]] = set()

    x, y = start_x, start_y
    direction = 0

    while True:
        points.append(Point(x, y))
        visited[y * width + x] = 1

        search_from = (direction + 6) % 8
        for i in range(8):
            d = (search_from + i) % 8
            nx, ny = x + DX[d], y + DY[d]
            if grid.get(nx, ny):
                x, y, direction = nx, ny, d
                break
        else:
            # Isolated pixel
            break

        if x == start_x and y == start_y:
            break

        state = (x, y, direction)
        if state in seen_states:
            break
        seen_states.add(state)

    return Ring(points=points)


def _mark_component(grid: InkGrid, seed_x: int, seed_y: int, visited: bytearray) -> None:
    """Mark every ink cell 8-connected to the seed as visited."""
    width = grid.width
    queue = deque([(seed_x, seed_y)])
    visited[seed_y * width + seed_x] = 1
    # Walked boundary cells are already marked; still expand from them.
    expanded = bytearray(len(visited))
    expanded[seed_y * width + seed_x] = 1

    while queue:
        x, y = queue.popleft()
        for d in range(8):
            nx, ny = x + DX[d], y + DY[d]
            if not grid.get(nx, ny):
                continue
            idx = ny * width + nx
            if expanded[idx]:
                continue
            expanded[idx] = 1
            visited[idx] = 1
            queue.append((nx, ny))


def trace_contours(grid: InkGrid, min_points: int = DEFAULT_MIN_POINTS) -> list[Ring]:
    """Trace one outer boundary ring per connected ink region.

    Regions are visited in raster order of their top-left-most cell. Once a
    region has been traced all of its cells are marked, so interior cells
    never seed a second trace. Rings shorter than min_points are noise and
    are dropped.

    Args:
        grid: Binarized glyph
        min_points: Smallest ring length kept

    Returns:
        Raw rings in discovery order
    """
    visited = bytearray(grid.width * grid.height)
    rings: list[Ring] = []

    for x, y in grid.iter_ink():
        if visited[y * grid.width + x]:
            continue
        ring = trace_boundary(grid, x, y, visited)
        _mark_component(grid, x, y, visited)
        if len(ring) >= min_points:
            rings.append(ring)

    return rings
