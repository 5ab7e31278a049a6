"""Domain models for glyphmesh.

This module contains the value types flowing through the reconstruction
pipeline. All models are:

- Request-scoped (nothing is cached between requests)
- Serializable for inter-process communication and JSON responses
- Independent of the rasterizer and triangulator implementations

Key classes:
- PixelBuffer: RGBA samples of a rendered glyph
- InkGrid: Binarized foreground mask
- Point, Ring, RingNode: Traced outlines and their containment forest
- Run, MeshRecord, OutlineRing: Reconstruction output
- ReconstructionResult: Everything one request produced
"""

from glyphmesh.domain.contour import Point, Ring, RingNode
from glyphmesh.domain.primitives import (
    MeshRecord,
    OutlineRing,
    PipelineStats,
    ReconstructionResult,
    Run,
)
from glyphmesh.domain.raster import InkGrid, PixelBuffer

__all__: list[str] = [
    # Raster types
    "PixelBuffer",
    "InkGrid",
    # Geometry
    "Point",
    "Ring",
    "RingNode",
    # Output
    "Run",
    "MeshRecord",
    "OutlineRing",
    "PipelineStats",
    "ReconstructionResult",
]
