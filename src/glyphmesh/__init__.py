"""Glyphmesh - Turn a rendered character into 3D-buildable geometry.

Glyphmesh renders a single character, binarizes the resulting raster and
reconstructs it as extrusion-ready primitives using one of three strategies:

- runs: per-scanline run-length bars
- greedy: maximal axis-aligned rectangles
- contour: traced, simplified and triangulated outlines with hole rings

Example:
    $ glyphmesh render A --strategy contour

The same pipeline is served over HTTP by ``glyphmesh serve``.
"""

__version__ = "0.1.0"
__author__ = "Glyphmesh Contributors"

__all__ = ["__author__", "__version__"]
