"""Binarization of rendered glyphs into ink grids."""

from glyphmesh.domain import InkGrid, PixelBuffer


def binarize(buffer: PixelBuffer, threshold: int) -> InkGrid:
    """Classify every pixel of an RGBA buffer as ink or background.

    A pixel is ink when the mean of its R, G and B channels is strictly
    below the threshold, i.e. dark ink on a light background. Alpha is
    ignored; the rasterizer always paints an opaque background.

    Args:
        buffer: Rendered RGBA pixels
        threshold: Luminance cut-off in 0..255 (already clamped by the caller)

    Returns:
        Grid with the same dimensions as the buffer

    Raises:
        ValueError: If threshold is outside 0..255
    """
    if not 0 <= threshold <= 255:
        raise ValueError(f"Threshold must be within 0..255, got {threshold}")

    pixel_count = buffer.width * buffer.height
    data = buffer.data
    cells = bytearray(pixel_count)
    # (r + g + b) / 3 < t  <=>  r + g + b < 3t, which avoids float division
    limit = threshold * 3
    for i in range(pixel_count):
        offset = i * 4
        if data[offset] + data[offset + 1] + data[offset + 2] < limit:
            cells[i] = 1

    return InkGrid(buffer.width, buffer.height, cells)


def ink_count(grid: InkGrid) -> int:
    """Number of ink cells in a grid."""
    return grid.count()
