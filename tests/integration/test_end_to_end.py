"""End-to-end tests: real font rendering through every strategy."""

import pytest

from glyphmesh.config import RasterConfig, ReconstructionConfig, Strategy
from glyphmesh.core import GlyphPipeline
from glyphmesh.io import GlyphRasterizer

from helpers import build_test_font, mesh_area

BUNDLED_FONT_ONLY = RasterConfig(use_system_fonts=False)


@pytest.fixture(scope="module")
def box_font(tmp_path_factory):
    path = tmp_path_factory.mktemp("fonts") / "box.ttf"
    build_test_font(path, "AB")
    return path


@pytest.fixture
def pipeline(box_font) -> GlyphPipeline:
    rasterizer = GlyphRasterizer(RasterConfig(font_paths=[box_font], use_system_fonts=False))
    return GlyphPipeline(ReconstructionConfig(), rasterizer)


class TestDefaultFont:
    """Pipeline over Pillow's bundled font."""

    def test_letter_i_greedy(self):
        pipeline = GlyphPipeline(ReconstructionConfig(), GlyphRasterizer(BUNDLED_FONT_ONLY))

        result = pipeline.reconstruct("I", resolution=64, strategy="greedy")

        assert result.canvas_size == 64
        assert len(result.runs) > 0
        covered = sum(r.area for r in result.runs)
        assert covered == result.stats.ink_pixels

    def test_letter_o_is_one_solid_island(self):
        pipeline = GlyphPipeline(ReconstructionConfig(), GlyphRasterizer(BUNDLED_FONT_ONLY))

        result = pipeline.reconstruct("O", resolution=128, strategy="contour")

        # Only outer boundaries are traced, so the counter is filled
        assert len(result.meshes) == 1
        assert result.stats.holes == 0
        assert len(result.meshes[0].indices) > 0

    def test_zero_threshold_is_empty_everywhere(self):
        pipeline = GlyphPipeline(ReconstructionConfig(), GlyphRasterizer(BUNDLED_FONT_ONLY))

        for strategy in Strategy:
            result = pipeline.reconstruct("I", resolution=64, threshold=0, strategy=strategy)
            assert result.is_empty()


class TestBoxFont:
    """Pipeline over a generated font with solid box glyphs."""

    def test_greedy_box_is_one_rectangle(self, pipeline):
        result = pipeline.reconstruct("A", resolution=100, strategy="greedy")

        assert len(result.runs) == 1
        box = result.runs[0]
        assert 38 <= box.width <= 42
        assert 54 <= box.height <= 58

    def test_runs_and_greedy_cover_same_pixels(self, pipeline):
        runs = pipeline.reconstruct("A", resolution=100, strategy="runs").runs
        rects = pipeline.reconstruct("A", resolution=100, strategy="greedy").runs

        assert sum(r.area for r in runs) == sum(r.area for r in rects)

    def test_contour_box_mesh(self, pipeline):
        result = pipeline.reconstruct("B", resolution=100, strategy="contour")

        assert len(result.meshes) == 1
        assert [o.is_hole for o in result.outlines] == [False]
        # Pixel-centre ring of a w x h block encloses (w - 1) x (h - 1)
        assert 37 * 53 <= mesh_area(result.meshes[0]) <= 41 * 57
        assert result.to_dict()["meshes"][0]["indices"]

    def test_larger_canvas_scales_geometry(self, pipeline):
        small = pipeline.reconstruct("A", resolution=64, strategy="greedy")
        large = pipeline.reconstruct("A", resolution=256, strategy="greedy")

        assert large.stats.ink_pixels > 10 * small.stats.ink_pixels
