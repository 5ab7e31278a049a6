"""Font reader for checking glyph coverage of TTF/OTF/TTC fonts.

This module provides the FontReader class, which loads a font file with
fontTools and answers whether it can draw a given character.
"""

from pathlib import Path

from fontTools.ttLib import TTFont

from glyphmesh.exceptions import FontLoadError


class FontReader:
    """Loads a font and exposes its character coverage.

    Example:
        reader = FontReader(Path("NotoSansCJK-Bold.ttc"))
        reader.load()
        if reader.supports("あ"):
            print(reader.family_name)
    """

    def __init__(self, font_path: Path, font_number: int = 0) -> None:
        """Initialize the font reader.

        Args:
            font_path: Path to the font file
            font_number: Face index inside a TrueType collection
        """
        self._font_path = font_path
        self._font_number = font_number
        self._font: TTFont | None = None
        self._codepoints: frozenset[int] | None = None

    @property
    def path(self) -> Path:
        return self._font_path

    def load(self) -> None:
        """Load the font file.

        Raises:
            FileNotFoundError: If font file does not exist
            FontLoadError: If the file cannot be parsed as a font
        """
        if not self._font_path.exists():
            raise FileNotFoundError(f"Font file not found: {self._font_path}")

        try:
            self._font = TTFont(str(self._font_path), fontNumber=self._font_number, lazy=True)
            cmap = self._font.getBestCmap() or {}
        except Exception as e:
            raise FontLoadError(str(self._font_path), str(e)) from e

        self._codepoints = frozenset(cmap)

    def _require_loaded(self) -> TTFont:
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")
        return self._font

    @property
    def family_name(self) -> str:
        """Return the font family name, or the file stem if it has none.

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        font = self._require_loaded()
        name_table = font["name"] if "name" in font else None
        if name_table is not None:
            family = name_table.getDebugName(1)
            if family:
                return family
        return self._font_path.stem

    def supports(self, character: str) -> bool:
        """Check whether the font's cmap maps the character to a glyph.

        Args:
            character: A single character

        Returns:
            True if the font can draw the character

        Raises:
            RuntimeError: If font has not been loaded yet
        """
        self._require_loaded()
        return ord(character) in (self._codepoints or frozenset())

    def close(self) -> None:
        """Close the font file and release resources."""
        if self._font is not None:
            self._font.close()
            self._font = None
            self._codepoints = None
