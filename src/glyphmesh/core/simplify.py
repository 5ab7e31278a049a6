"""Ramer-Douglas-Peucker polyline simplification.

The recursive textbook formulation is replaced by an explicit stack so that
rings with thousands of points (large canvases) cannot exhaust the
interpreter's recursion limit.
"""

from glyphmesh.core.geometry import perpendicular_distance
from glyphmesh.domain import Point, Ring

DEFAULT_EPSILON = 1.5


def simplify_points(points: list[Point], epsilon: float = DEFAULT_EPSILON) -> list[Point]:
    """Reduce a polyline to the points needed to stay within epsilon of it.

    The first and last points are always kept. For each pending range the
    intermediate point furthest from the chord is found; if its distance
    exceeds epsilon it is kept and both halves are processed, otherwise
    every intermediate point of the range is dropped.

    Args:
        points: Polyline in order
        epsilon: Maximum allowed deviation in pixels

    Returns:
        Subset of points in their original order

    Examples:
        >>> line = [Point(0, 0), Point(1, 0), Point(2, 0), Point(3, 1)]
        >>> simplify_points(line, 0.5)
        [Point(x=0, y=0), Point(x=2, y=0), Point(x=3, y=1)]
    """
    n = len(points)
    if n <= 2:
        return list(points)

    keep = bytearray(n)
    keep[0] = 1
    keep[n - 1] = 1

    stack: list[tuple[int, int]] = [(0, n - 1)]
    while stack:
        start, end = stack.pop()

        max_dist = 0.0
        index = start
        a, b = points[start], points[end]
        for i in range(start + 1, end):
            d = perpendicular_distance(points[i], a, b)
            if d > max_dist:
                index = i
                max_dist = d

        if max_dist > epsilon:
            keep[index] = 1
            stack.append((start, index))
            stack.append((index, end))

    return [p for p, flag in zip(points, keep) if flag]


def simplify_ring(ring: Ring, epsilon: float = DEFAULT_EPSILON) -> Ring:
    """Simplify a traced ring, returning a new Ring."""
    return Ring(points=simplify_points(ring.points, epsilon))
