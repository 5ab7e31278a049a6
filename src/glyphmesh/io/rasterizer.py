"""Pillow-based rasterization of single characters.

The rasterizer is the external collaborator of the reconstruction core: it
turns a character and a canvas size into an RGBA PixelBuffer. Fonts are
chosen per character by cmap coverage: configured fonts first, then fonts
found in the platform font directories (bold faces before regular ones).
A character no font covers is an error rather than a .notdef box.
"""

import sys
import threading
from functools import lru_cache
from pathlib import Path

import structlog
from PIL import Image, ImageDraw, ImageFont

from glyphmesh.config import RasterConfig
from glyphmesh.domain import PixelBuffer
from glyphmesh.exceptions import FontLoadError, RasterizationError
from glyphmesh.io.reader import FontReader

logger = structlog.get_logger(__name__)

BACKGROUND = (255, 255, 255, 255)
INK = (0, 0, 0, 255)

FONT_SUFFIXES = frozenset({".ttf", ".otf", ".ttc"})

# Pillow's bundled scalable font only covers Basic Latin reliably
DEFAULT_FONT_RANGE = (0x20, 0x7E)


def system_font_dirs() -> list[Path]:
    """Return the usual font directories for the running platform."""
    home = Path.home()
    if sys.platform == "darwin":
        return [Path("/System/Library/Fonts"), Path("/Library/Fonts"), home / "Library/Fonts"]
    if sys.platform == "win32":
        return [Path("C:/Windows/Fonts")]
    return [
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
        home / ".local/share/fonts",
        home / ".fonts",
    ]


def _font_rank(path: Path, prefer_bold: bool) -> tuple[int, int, str]:
    name = path.stem.lower()
    bold = 0 if prefer_bold and "bold" in name else 1
    sans = 0 if "sans" in name else 1
    return (bold, sans, str(path))


def discover_system_fonts(
    directories: list[Path] | None = None,
    prefer_bold: bool = True,
) -> list[Path]:
    """Find font files below the given directories.

    Args:
        directories: Directories to search recursively (platform defaults if None)
        prefer_bold: Order bold faces before other weights

    Returns:
        Font paths, bold then sans-serif faces first, otherwise by path
    """
    found: set[Path] = set()
    for directory in directories if directories is not None else system_font_dirs():
        if not directory.is_dir():
            continue
        for path in directory.rglob("*"):
            if path.suffix.lower() in FONT_SUFFIXES and path.is_file():
                found.add(path)

    return sorted(found, key=lambda p: _font_rank(p, prefer_bold))


class FontCatalog:
    """Ordered list of font files with per-character lookup.

    Fonts are opened lazily, one at a time, until one covers the requested
    character. Coverage tables and lookups are kept for the lifetime of the
    catalog. Unreadable files are logged and ignored. Lookups are safe to
    run from several threads.
    """

    def __init__(self, font_paths: list[Path]) -> None:
        self._font_paths = list(font_paths)
        self._readers: dict[Path, FontReader | None] = {}
        self._lookups: dict[str, Path | None] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._font_paths)

    def _reader(self, path: Path) -> FontReader | None:
        if path in self._readers:
            return self._readers[path]

        reader: FontReader | None = FontReader(path)
        try:
            reader.load()
            logger.debug("Font registered", path=str(path), family=reader.family_name)
        except (FileNotFoundError, FontLoadError) as e:
            logger.warning("Font skipped", path=str(path), error=str(e))
            reader = None

        self._readers[path] = reader
        return reader

    def find_font(self, character: str) -> Path | None:
        """Return the first font file covering the character, if any."""
        with self._lock:
            if character in self._lookups:
                return self._lookups[character]

            match = None
            for path in self._font_paths:
                reader = self._reader(path)
                if reader is not None and reader.supports(character):
                    match = path
                    break

            self._lookups[character] = match
            return match

    def close(self) -> None:
        with self._lock:
            for reader in self._readers.values():
                if reader is not None:
                    reader.close()
            self._readers.clear()
            self._lookups.clear()


@lru_cache(maxsize=64)
def _truetype(path: str, size: int) -> ImageFont.FreeTypeFont:
    return ImageFont.truetype(path, size=size)


class GlyphRasterizer:
    """Renders one character, centred, black on white.

    Example:
        rasterizer = GlyphRasterizer(RasterConfig(font_paths=[Path("Roboto-Bold.ttf")]))
        buffer = rasterizer.render("A", 128)
    """

    def __init__(self, config: RasterConfig | None = None) -> None:
        self.config = config or RasterConfig()

        font_paths = list(self.config.font_paths)
        if self.config.use_system_fonts:
            discovered = discover_system_fonts(
                self.config.system_font_dirs, self.config.prefer_bold
            )
            font_paths.extend(p for p in discovered if p not in font_paths)
        self.catalog = FontCatalog(font_paths)

    def _font_for(
        self, character: str, font_size: int
    ) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
        path = self.catalog.find_font(character)
        if path is not None:
            return _truetype(str(path), font_size)

        low, high = DEFAULT_FONT_RANGE
        if low <= ord(character) <= high:
            logger.debug("No font file covers character, using default", char=character)
            return ImageFont.load_default(size=font_size)

        raise RasterizationError(
            character,
            f"no configured or system font covers U+{ord(character):04X} "
            f"({len(self.catalog)} fonts searched)",
        )

    def render(
        self,
        character: str,
        canvas_size: int,
        font_size_fraction: float | None = None,
    ) -> PixelBuffer:
        """Render a character onto a square canvas.

        Args:
            character: Character to draw (only the first code point is used)
            canvas_size: Width and height of the canvas in pixels
            font_size_fraction: Font size relative to the canvas (config default if None)

        Returns:
            canvas_size x canvas_size RGBA buffer

        Raises:
            RasterizationError: If the character is empty, no font covers it,
                or drawing fails
        """
        if not character:
            raise RasterizationError(character, "empty character")
        if canvas_size <= 0:
            raise RasterizationError(character, f"invalid canvas size {canvas_size}")

        character = character[0]
        fraction = font_size_fraction or self.config.font_size_fraction
        font_size = max(1, int(canvas_size * fraction))

        try:
            font = self._font_for(character, font_size)
            image = Image.new("RGBA", (canvas_size, canvas_size), BACKGROUND)
            draw = ImageDraw.Draw(image)
            draw.text(
                (canvas_size / 2, canvas_size / 2),
                character,
                fill=INK,
                font=font,
                anchor="mm",
            )
        except OSError as e:
            raise RasterizationError(character, str(e)) from e

        return PixelBuffer(width=canvas_size, height=canvas_size, data=image.tobytes())
