"""Geometric operations on lattice rings.

This module provides the small set of planar formulas the pipeline needs:
- Signed area calculation (shoelace formula)
- Point-in-polygon testing (ray casting algorithm)
- Point-to-chord distance (line equation form)

All functions are pure, stateless, and safe to call from worker threads.
"""

import math

from glyphmesh.domain import Point

# Chords shorter than this are treated as a single point.
DEGENERATE_CHORD_EPSILON = 1e-6


def signed_area(points: list[Point]) -> float:
    """Calculate signed area of a polygon using the shoelace formula.

    In image coordinates (y grows downward) a positive sign means the ring
    runs clockwise on screen.

    Args:
        points: List of points forming the polygon boundary

    Returns:
        Signed area in square pixels. Returns 0.0 for degenerate polygons.

    Examples:
        >>> square = [Point(0, 0), Point(1, 0), Point(1, 1), Point(0, 1)]
        >>> signed_area(square)
        1.0
        >>> signed_area(list(reversed(square)))
        -1.0
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


def point_in_polygon(point: Point, polygon: list[Point]) -> bool:
    """Determine if a point is inside a polygon using ray casting algorithm.

    Casts a horizontal ray from the point to the right and counts intersections
    with polygon edges. Odd number of intersections = inside, even = outside.
    Points exactly on a vertex or edge may land on either side.

    Args:
        point: The point to test
        polygon: List of points forming the polygon boundary

    Returns:
        True if point is inside polygon, False otherwise

    Examples:
        >>> square = [Point(0, 0), Point(2, 0), Point(2, 2), Point(0, 2)]
        >>> point_in_polygon(Point(1, 1), square)
        True
        >>> point_in_polygon(Point(3, 3), square)
        False
    """
    n = len(polygon)
    if n < 3:
        return False

    inside = False
    x, y = point.x, point.y
    j = n - 1

    for i in range(n):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y

        # Check if ray from point intersects edge (j, i)
        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside

        j = i

    return inside


def distance(a: Point, b: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(a.x - b.x, a.y - b.y)


def perpendicular_distance(point: Point, start: Point, end: Point) -> float:
    """Distance from point to the infinite line through start and end.

    Uses the line equation ``A*x + B*y + C = 0`` with
    ``A = end.y - start.y``, ``B = start.x - end.x`` and
    ``C = end.x*start.y - end.y*start.x``. When start and end (nearly)
    coincide the chord has no direction and the Euclidean distance to
    start is returned instead.

    Args:
        point: The point to measure
        start: First chord endpoint
        end: Second chord endpoint

    Returns:
        Non-negative distance in pixels

    Examples:
        >>> perpendicular_distance(Point(1, 1), Point(0, 0), Point(2, 0))
        1.0
    """
    a = end.y - start.y
    b = start.x - end.x
    c = end.x * start.y - end.y * start.x
    norm = math.sqrt(a * a + b * b)
    if norm <= DEGENERATE_CHORD_EPSILON:
        return distance(point, start)
    return abs(a * point.x + b * point.y + c) / norm
