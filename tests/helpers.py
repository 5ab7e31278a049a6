"""Test helpers shared by unit and integration tests."""

from glyphmesh.domain import InkGrid, PixelBuffer

WHITE = (255, 255, 255, 255)
BLACK = (0, 0, 0, 255)


def buffer_from_grid(grid: InkGrid, ink=BLACK, background=WHITE) -> PixelBuffer:
    """Paint an ink grid into an RGBA buffer."""
    data = bytearray()
    for y in range(grid.height):
        for x in range(grid.width):
            data.extend(ink if grid.get(x, y) else background)
    return PixelBuffer(width=grid.width, height=grid.height, data=bytes(data))


def block_grid(size: int, blocks: list[tuple[int, int, int, int]]) -> InkGrid:
    """Square grid with filled rectangles given as (x, y, width, height)."""
    grid = InkGrid(size, size)
    for bx, by, bw, bh in blocks:
        for y in range(by, by + bh):
            for x in range(bx, bx + bw):
                grid.set(x, y, True)
    return grid


def mesh_area(mesh) -> float:
    """Sum of absolute triangle areas of a MeshRecord."""
    total = 0.0
    for a, b, c in mesh.indices:
        (ax, ay), (bx, by), (cx, cy) = mesh.vertices[a], mesh.vertices[b], mesh.vertices[c]
        total += abs((bx - ax) * (cy - ay) - (cx - ax) * (by - ay)) / 2.0
    return total


class SquareRenderer:
    """Test renderer drawing a black square in the middle of the canvas."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, int]] = []

    def render(self, character: str, canvas_size: int, font_size_fraction=None) -> PixelBuffer:
        self.calls.append((character, canvas_size))
        quarter = canvas_size // 4
        grid = block_grid(canvas_size, [(quarter, quarter, 2 * quarter, 2 * quarter)])
        return buffer_from_grid(grid)


def build_test_font(path, characters: str, family: str = "Glyphmesh Test") -> None:
    """Write a TrueType font whose glyphs for the given characters are solid boxes."""
    from fontTools.fontBuilder import FontBuilder
    from fontTools.pens.ttGlyphPen import TTGlyphPen

    names = {ord(c): f"uni{ord(c):04X}" for c in characters}
    glyph_order = [".notdef", *names.values()]

    glyphs = {}
    metrics = {}
    for name in glyph_order:
        pen = TTGlyphPen(None)
        if name != ".notdef":
            pen.moveTo((100, 0))
            pen.lineTo((100, 700))
            pen.lineTo((600, 700))
            pen.lineTo((600, 0))
            pen.closePath()
            metrics[name] = (700, 100)
        else:
            metrics[name] = (700, 0)
        glyphs[name] = pen.glyph()

    builder = FontBuilder(1000, isTTF=True)
    builder.setupGlyphOrder(glyph_order)
    builder.setupCharacterMap(names)
    builder.setupGlyf(glyphs)
    builder.setupHorizontalMetrics(metrics)
    builder.setupHorizontalHeader(ascent=800, descent=-200)
    builder.setupNameTable({"familyName": family, "styleName": "Regular"})
    builder.setupOS2(sTypoAscender=800, sTypoDescender=-200, usWinAscent=800, usWinDescent=200)
    builder.setupPost()
    builder.save(str(path))
