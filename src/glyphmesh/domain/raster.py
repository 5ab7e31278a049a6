"""Raster types shared by every reconstruction strategy.

This module defines the two raster representations the pipeline works on:
- PixelBuffer: RGBA samples produced by the rasterizer
- InkGrid: The binarized foreground mask derived from a PixelBuffer
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class PixelBuffer:
    """An immutable RGBA image.

    Attributes:
        width: Width in pixels
        height: Height in pixels
        data: Row-major RGBA bytes, 4 per pixel
    """

    width: int
    height: int
    data: bytes

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Invalid buffer size {self.width}x{self.height}")
        expected = self.width * self.height * 4
        if len(self.data) != expected:
            raise ValueError(
                f"RGBA buffer of {self.width}x{self.height} needs {expected} bytes, "
                f"got {len(self.data)}"
            )

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        """Return the (r, g, b, a) sample at (x, y)."""
        offset = (y * self.width + x) * 4
        r, g, b, a = self.data[offset : offset + 4]
        return (r, g, b, a)

    @classmethod
    def filled(
        cls, width: int, height: int, rgba: tuple[int, int, int, int] = (255, 255, 255, 255)
    ) -> "PixelBuffer":
        """Create a buffer with every pixel set to one colour."""
        return cls(width=width, height=height, data=bytes(rgba) * (width * height))


class InkGrid:
    """A width x height boolean field, True where the glyph has ink.

    Cells are stored in a flat bytearray (row-major, 1 = ink). The grid is
    mutable so that algorithms can clear cells on a private copy; callers
    hand out copies rather than sharing one instance.
    """

    __slots__ = ("_cells", "height", "width")

    def __init__(self, width: int, height: int, cells: bytearray | None = None) -> None:
        if width < 0 or height < 0:
            raise ValueError(f"Invalid grid size {width}x{height}")
        if cells is None:
            cells = bytearray(width * height)
        elif len(cells) != width * height:
            raise ValueError(f"Grid of {width}x{height} needs {width * height} cells")
        self.width = width
        self.height = height
        self._cells = cells

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[bool | int]]) -> "InkGrid":
        """Build a grid from nested rows of truthy values.

        Example:
            >>> grid = InkGrid.from_rows([[0, 1], [1, 1]])
            >>> grid.count()
            3
        """
        materialized = [[1 if v else 0 for v in row] for row in rows]
        height = len(materialized)
        width = len(materialized[0]) if height else 0
        cells = bytearray()
        for row in materialized:
            if len(row) != width:
                raise ValueError("All rows must have the same length")
            cells.extend(row)
        return cls(width, height, cells)

    @classmethod
    def from_strings(cls, rows: Iterable[str], ink: str = "#") -> "InkGrid":
        """Build a grid from strings where the ink character marks foreground."""
        return cls.from_rows([[ch == ink for ch in row] for row in rows])

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> bool:
        """Return True if (x, y) is ink. Out-of-bounds cells are background."""
        if not self.in_bounds(x, y):
            return False
        return self._cells[y * self.width + x] == 1

    def set(self, x: int, y: int, value: bool) -> None:
        self._cells[y * self.width + x] = 1 if value else 0

    def count(self) -> int:
        """Number of ink cells."""
        return self._cells.count(1)

    def copy(self) -> "InkGrid":
        """Return an independent grid with the same cells."""
        return InkGrid(self.width, self.height, bytearray(self._cells))

    def iter_ink(self) -> Iterator[tuple[int, int]]:
        """Yield (x, y) for every ink cell in raster order."""
        width = self.width
        for idx, cell in enumerate(self._cells):
            if cell:
                yield (idx % width, idx // width)

    def to_strings(self, ink: str = "#", background: str = ".") -> list[str]:
        """Render the grid as one string per row (handy in logs and tests)."""
        return [
            "".join(ink if self.get(x, y) else background for x in range(self.width))
            for y in range(self.height)
        ]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InkGrid):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and self._cells == other._cells
        )

    def __repr__(self) -> str:
        return f"InkGrid(width={self.width}, height={self.height}, ink={self.count()})"
