"""Unit tests for the font and rasterization layer.

Tests for FontReader, FontCatalog and GlyphRasterizer.
"""

from pathlib import Path
from unittest.mock import MagicMock, Mock, patch

import pytest

from glyphmesh.config import RasterConfig
from glyphmesh.core.binarize import binarize
from glyphmesh.core.pipeline import GlyphPipeline
from glyphmesh.exceptions import FontLoadError, RasterizationError
from glyphmesh.io import FontCatalog, FontReader, GlyphRasterizer, discover_system_fonts

from helpers import build_test_font


@pytest.fixture
def font_a(tmp_path) -> Path:
    path = tmp_path / "covers-a.ttf"
    build_test_font(path, "A", family="Cover A")
    return path


@pytest.fixture
def font_b(tmp_path) -> Path:
    path = tmp_path / "covers-b.ttf"
    build_test_font(path, "Bあ", family="Cover B")
    return path


@pytest.fixture
def broken_font(tmp_path) -> Path:
    path = tmp_path / "broken.ttf"
    path.write_bytes(b"this is not a font")
    return path


class TestFontReader:
    """Tests for FontReader class."""

    def test_init(self):
        """Test FontReader initialization."""
        path = Path("test.ttf")
        reader = FontReader(path)
        assert reader.path == path
        assert reader._font is None

    def test_load_nonexistent_file(self):
        """Test loading a nonexistent file raises FileNotFoundError."""
        reader = FontReader(Path("nonexistent.ttf"))
        with pytest.raises(FileNotFoundError):
            reader.load()

    def test_load_invalid_file(self, broken_font):
        """Test loading garbage raises FontLoadError naming the file."""
        reader = FontReader(broken_font)
        with pytest.raises(FontLoadError, match="broken.ttf"):
            reader.load()

    def test_supports_before_load(self):
        """Test coverage lookup before loading raises RuntimeError."""
        reader = FontReader(Path("test.ttf"))
        with pytest.raises(RuntimeError, match="Font not loaded"):
            reader.supports("A")

    def test_family_name_before_load(self):
        """Test accessing family_name before loading raises RuntimeError."""
        reader = FontReader(Path("test.ttf"))
        with pytest.raises(RuntimeError, match="Font not loaded"):
            _ = reader.family_name

    def test_real_font(self, font_b):
        """Test coverage and metadata of a generated font."""
        reader = FontReader(font_b)
        reader.load()

        assert reader.family_name == "Cover B"
        assert reader.supports("B")
        assert reader.supports("あ")
        assert not reader.supports("A")

    def test_close(self, font_a):
        """Test closing releases the font."""
        reader = FontReader(font_a)
        reader.load()
        reader.close()

        with pytest.raises(RuntimeError, match="Font not loaded"):
            reader.supports("A")

    @patch("glyphmesh.io.reader.TTFont")
    @patch.object(Path, "exists", return_value=True)
    def test_family_name_falls_back_to_stem(self, _mock_exists, mock_ttfont):  # noqa: ARG002
        """Test a font without a name table is named after its file."""
        mock_font = MagicMock()
        mock_font.__contains__ = Mock(return_value=False)
        mock_font.getBestCmap.return_value = {0x41: "A"}
        mock_ttfont.return_value = mock_font

        reader = FontReader(Path("fonts/Nameless.ttf"))
        reader.load()

        assert reader.family_name == "Nameless"
        assert reader.supports("A")
        mock_ttfont.assert_called_once_with("fonts/Nameless.ttf", fontNumber=0, lazy=True)

    @patch("glyphmesh.io.reader.TTFont")
    @patch.object(Path, "exists", return_value=True)
    def test_missing_cmap(self, _mock_exists, mock_ttfont):  # noqa: ARG002
        """Test a font without a usable cmap supports nothing."""
        mock_font = MagicMock()
        mock_font.getBestCmap.return_value = None
        mock_ttfont.return_value = mock_font

        reader = FontReader(Path("test.ttf"))
        reader.load()

        assert not reader.supports("A")


class TestFontCatalog:
    """Tests for per-character font lookup."""

    def test_first_covering_font_wins(self, font_a, font_b):
        catalog = FontCatalog([font_a, font_b])

        assert catalog.find_font("A") == font_a
        assert catalog.find_font("B") == font_b
        assert catalog.find_font("あ") == font_b
        assert catalog.find_font("Z") is None

    def test_unreadable_fonts_are_skipped(self, tmp_path, broken_font, font_b):
        catalog = FontCatalog([tmp_path / "missing.ttf", broken_font, font_b])
        assert catalog.find_font("B") == font_b

    def test_empty_catalog(self):
        assert FontCatalog([]).find_font("A") is None

    def test_close_allows_reload(self, font_a):
        catalog = FontCatalog([font_a])
        assert catalog.find_font("A") == font_a
        catalog.close()
        assert catalog.find_font("A") == font_a


class TestGlyphRasterizer:
    """Tests for GlyphRasterizer.render."""

    def test_configured_font_is_drawn_centered(self, font_a):
        rasterizer = GlyphRasterizer(RasterConfig(font_paths=[font_a], use_system_fonts=False))

        buffer = rasterizer.render("A", 64)

        assert buffer.width == 64
        assert buffer.height == 64
        assert len(buffer.data) == 64 * 64 * 4
        assert buffer.pixel(32, 32)[:3] == (0, 0, 0)
        assert buffer.pixel(0, 0) == (255, 255, 255, 255)

    def test_box_glyph_binarizes_to_one_block(self, font_a):
        rasterizer = GlyphRasterizer(RasterConfig(font_paths=[font_a], use_system_fonts=False))
        buffer = rasterizer.render("A", 100)
        grid = binarize(buffer, 120)

        xs = [x for x, _ in grid.iter_ink()]
        ys = [y for _, y in grid.iter_ink()]
        width = max(xs) - min(xs) + 1
        height = max(ys) - min(ys) + 1
        # 500x700 font units at 80 px per em
        assert 38 <= width <= 42
        assert 54 <= height <= 58

    def test_only_first_character_drawn(self, font_a):
        rasterizer = GlyphRasterizer(RasterConfig(font_paths=[font_a], use_system_fonts=False))
        assert rasterizer.render("AAAA", 64) == rasterizer.render("A", 64)

    def test_falls_back_to_default_font(self):
        buffer = GlyphRasterizer(RasterConfig(use_system_fonts=False)).render("I", 64)

        assert buffer.width == 64
        assert binarize(buffer, 120).count() > 0

    def test_empty_character(self):
        with pytest.raises(RasterizationError, match="empty character"):
            GlyphRasterizer().render("", 64)

    def test_invalid_canvas_size(self):
        with pytest.raises(RasterizationError, match="invalid canvas size"):
            GlyphRasterizer().render("A", 0)

    def test_uncovered_character_is_an_error(self):
        rasterizer = GlyphRasterizer(RasterConfig(use_system_fonts=False))

        with pytest.raises(RasterizationError, match="U\\+3042"):
            rasterizer.render("あ", 64)

    def test_uncovered_characters_never_share_a_placeholder(self, font_a):
        """Two different uncovered characters must not both come back as a .notdef box."""
        pipeline = GlyphPipeline(
            renderer=GlyphRasterizer(RasterConfig(font_paths=[font_a], use_system_fonts=False))
        )

        for character in ("あ", "い"):
            with pytest.raises(RasterizationError, match="no configured or system font"):
                pipeline.reconstruct(character, 128, 120, "runs")

    def test_default_character_uses_covering_font(self, font_a, font_b):
        config = RasterConfig(font_paths=[font_a, font_b], use_system_fonts=False)
        rasterizer = GlyphRasterizer(config)

        buffer = rasterizer.render(config.default_character, 64)

        assert buffer.pixel(32, 32)[:3] == (0, 0, 0)

    def test_system_fonts_searched_after_configured(self, tmp_path, font_a, font_b):
        system_dir = tmp_path / "system"
        system_dir.mkdir()
        system_font = system_dir / "CoverB-Bold.ttf"
        system_font.write_bytes(font_b.read_bytes())

        rasterizer = GlyphRasterizer(
            RasterConfig(font_paths=[font_a], system_font_dirs=[system_dir])
        )

        assert rasterizer.catalog.find_font("A") == font_a
        assert rasterizer.catalog.find_font("あ") == system_font
        assert rasterizer.render("あ", 64).pixel(32, 32)[:3] == (0, 0, 0)


class TestDiscoverSystemFonts:
    """Tests for platform font discovery."""

    @pytest.fixture
    def font_dir(self, tmp_path) -> Path:
        (tmp_path / "sub").mkdir()
        for name in ("Mono-Bold.ttf", "NotoSans-Bold.otf", "Sans-Regular.TTC", "notes.txt"):
            (tmp_path / name).write_bytes(b"")
        (tmp_path / "sub" / "Serif-Regular.ttf").write_bytes(b"")
        return tmp_path

    def test_bold_then_sans_first(self, font_dir):
        names = [p.name for p in discover_system_fonts([font_dir])]
        assert names == [
            "NotoSans-Bold.otf",
            "Mono-Bold.ttf",
            "Sans-Regular.TTC",
            "Serif-Regular.ttf",
        ]

    def test_without_bold_preference(self, font_dir):
        names = [p.name for p in discover_system_fonts([font_dir], prefer_bold=False)]
        assert names == [
            "NotoSans-Bold.otf",
            "Sans-Regular.TTC",
            "Mono-Bold.ttf",
            "Serif-Regular.ttf",
        ]

    def test_missing_directories_are_ignored(self, tmp_path):
        assert discover_system_fonts([tmp_path / "nope"]) == []
