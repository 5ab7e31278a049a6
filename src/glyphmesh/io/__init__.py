"""Rendering layer for glyphmesh.

This module turns characters into pixel buffers. It keeps fontTools and
Pillow out of the reconstruction core.

Key responsibilities:
- Check which configured font covers a character (fontTools cmap)
- Render the character centred on a square canvas (Pillow)

Key classes:
- FontReader: Load a font and query its coverage
- FontCatalog: Ordered font lookup by character
- discover_system_fonts: Platform font directories, bold faces first
- GlyphRasterizer: Character to RGBA PixelBuffer
"""

from glyphmesh.io.rasterizer import FontCatalog, GlyphRasterizer, discover_system_fonts
from glyphmesh.io.reader import FontReader

__all__ = [
    "FontCatalog",
    "FontReader",
    "GlyphRasterizer",
    "discover_system_fonts",
]
