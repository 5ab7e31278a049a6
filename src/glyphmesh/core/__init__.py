"""Core reconstruction algorithms for glyphmesh.

This module contains the pixel-to-geometry pipeline:

- Binarization (RGBA buffer to ink grid)
- Run-length bars and greedy rectangle covering
- Contour tracing, simplification and solid/hole classification
- Triangulation and mesh/outline assembly

All services are designed to be:
- Stateless (safe for use in worker threads and processes)
- Pure (the input grid is never modified)

Key functions:
- binarize: Threshold an RGBA buffer into an InkGrid
- extract_runs: Scanline run-length bars
- greedy_mesh: Maximal rectangle covering
- trace_contours: Moore-neighbour boundary rings
- simplify_points / simplify_ring: Ramer-Douglas-Peucker reduction
- classify_rings: Solid/hole containment forest
- triangulate: Polygon-with-holes triangulation
- assemble: Meshes and outline rings per island

Key classes:
- RingClassifier: Builds the containment forest
- MeshAssembler: Triangulates islands and collects outlines
- GlyphPipeline: Strategy dispatch for one request
- BatchProcessor: Parallel reconstruction of many characters
"""

from glyphmesh.core.assembler import AssembledGeometry, MeshAssembler, assemble
from glyphmesh.core.batch import BatchProcessor, process_character
from glyphmesh.core.binarize import binarize, ink_count
from glyphmesh.core.geometry import perpendicular_distance, point_in_polygon, signed_area
from glyphmesh.core.greedy import greedy_mesh
from glyphmesh.core.hierarchy import RingClassifier, RingHierarchy, classify_rings
from glyphmesh.core.pipeline import GlyphPipeline, resolve_strategy
from glyphmesh.core.runs import extract_runs
from glyphmesh.core.simplify import simplify_points, simplify_ring
from glyphmesh.core.tracer import trace_boundary, trace_contours
from glyphmesh.core.triangulate import build_polygon_input, triangulate

__all__ = [
    # Assembly
    "AssembledGeometry",
    "MeshAssembler",
    "assemble",
    # Batch processing
    "BatchProcessor",
    "process_character",
    # Raster
    "binarize",
    "ink_count",
    # Geometry functions
    "perpendicular_distance",
    "point_in_polygon",
    "signed_area",
    # Strategies
    "extract_runs",
    "greedy_mesh",
    "trace_boundary",
    "trace_contours",
    "simplify_points",
    "simplify_ring",
    # Hierarchy
    "RingClassifier",
    "RingHierarchy",
    "classify_rings",
    # Triangulation
    "build_polygon_input",
    "triangulate",
    # Pipeline
    "GlyphPipeline",
    "resolve_strategy",
]
