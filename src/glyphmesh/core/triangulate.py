"""Polygon-with-holes triangulation backed by mapbox_earcut."""

import mapbox_earcut as earcut
import numpy as np

from glyphmesh.exceptions import TriangulationError


def build_polygon_input(
    outer: list[tuple[float, float]],
    holes: list[list[tuple[float, float]]],
) -> tuple[list[float], list[int]]:
    """Flatten an outer ring and its holes into earcut-style input.

    Args:
        outer: Outer ring vertices
        holes: Hole rings, each a list of vertices

    Returns:
        Tuple of (flat_vertices, hole_start_indices) where flat_vertices is
        [x0, y0, x1, y1, ...] and each hole start is a vertex index
    """
    flat: list[float] = []
    hole_starts: list[int] = []

    for x, y in outer:
        flat.extend((x, y))
    count = len(outer)

    for hole in holes:
        hole_starts.append(count)
        for x, y in hole:
            flat.extend((x, y))
        count += len(hole)

    return flat, hole_starts


def triangulate(flat_vertices: list[float], hole_starts: list[int]) -> list[tuple[int, int, int]]:
    """Triangulate a polygon with holes.

    Hole start indices are converted to the ring end indices expected by
    mapbox_earcut. Triangle winding is left as the library produces it.
    Exceptions raised by the library propagate unchanged.

    Args:
        flat_vertices: [x0, y0, x1, y1, ...]
        hole_starts: Vertex index where each hole ring begins

    Returns:
        Triangles as index triples into the vertex list

    Raises:
        TriangulationError: If the backend returns a partial triangle
    """
    vertex_count = len(flat_vertices) // 2
    if vertex_count < 3:
        return []

    coords = np.asarray(flat_vertices, dtype=np.float64).reshape(-1, 2)
    ring_ends = np.asarray([*hole_starts, vertex_count], dtype=np.uint32)

    result = earcut.triangulate_float64(coords, ring_ends)
    indices = np.asarray(result, dtype=np.int64)

    if indices.size % 3 != 0:
        raise TriangulationError(
            f"Triangulator returned {indices.size} indices, not a multiple of 3"
        )

    return [tuple(int(i) for i in tri) for tri in indices.reshape(-1, 3)]
