"""Reconstruction pipeline: strategy dispatch from pixels to geometry.

    PixelBuffer -> InkGrid -> runs
                           -> greedy rectangles
                           -> rings -> simplified rings -> hierarchy -> meshes + outlines

Each call builds its own grid and working state, so one GlyphPipeline can
serve concurrent requests from several threads.
"""

import time
from typing import Any, Protocol

import structlog

from glyphmesh.config import ReconstructionConfig, Strategy
from glyphmesh.core.assembler import MeshAssembler
from glyphmesh.core.binarize import binarize
from glyphmesh.core.greedy import greedy_mesh
from glyphmesh.core.hierarchy import RingClassifier
from glyphmesh.core.runs import extract_runs
from glyphmesh.core.simplify import simplify_ring
from glyphmesh.core.tracer import trace_contours
from glyphmesh.domain import InkGrid, PixelBuffer, ReconstructionResult
from glyphmesh.exceptions import UnknownStrategyError

logger = structlog.get_logger(__name__)


class Renderer(Protocol):
    """Anything that can turn a character into a square RGBA buffer."""

    def render(
        self, character: str, canvas_size: int, font_size_fraction: float | None = None
    ) -> PixelBuffer: ...


def resolve_strategy(value: Strategy | str | None, default: Strategy = Strategy.CONTOUR) -> Strategy:
    """Map a strategy name to a Strategy.

    Args:
        value: Strategy, its name, or None for the default
        default: Strategy used when value is None or empty

    Returns:
        The matching Strategy

    Raises:
        UnknownStrategyError: If the name is not a known strategy
    """
    if value is None or value == "":
        return default
    if isinstance(value, Strategy):
        return value
    try:
        return Strategy(str(value).strip().lower())
    except ValueError:
        raise UnknownStrategyError(str(value)) from None


class GlyphPipeline:
    """Runs one reconstruction strategy over a rendered glyph.

    Example:
        pipeline = GlyphPipeline(ReconstructionConfig(), GlyphRasterizer())
        result = pipeline.reconstruct("A", resolution=128, threshold=120)
        print(len(result.meshes))
    """

    def __init__(
        self,
        config: ReconstructionConfig | None = None,
        renderer: Renderer | None = None,
    ) -> None:
        self.config = config or ReconstructionConfig()
        self.renderer = renderer
        self.classifier = RingClassifier()
        self.assembler = MeshAssembler()

    def reconstruct(
        self,
        character: str,
        resolution: Any = None,
        threshold: Any = None,
        strategy: Strategy | str | None = None,
    ) -> ReconstructionResult:
        """Render a character and reconstruct it.

        Resolution and threshold are clamped into the configured bounds;
        unparsable values fall back to the configured defaults.

        Args:
            character: Character to render (first code point is used)
            resolution: Requested canvas size
            threshold: Requested luminance threshold
            strategy: Strategy or strategy name

        Returns:
            ReconstructionResult for the chosen strategy

        Raises:
            RuntimeError: If the pipeline has no renderer
            UnknownStrategyError: If the strategy name is unknown
            RasterizationError: If rendering fails
        """
        if self.renderer is None:
            raise RuntimeError("Pipeline has no renderer. Pass one to GlyphPipeline().")

        chosen = resolve_strategy(strategy, self.config.default_strategy)
        size = self.config.clamp_resolution(resolution)
        cutoff = self.config.clamp_threshold(threshold)

        buffer = self.renderer.render(character, size)
        return self.reconstruct_buffer(buffer, cutoff, chosen, character=character[:1])

    def reconstruct_buffer(
        self,
        buffer: PixelBuffer,
        threshold: int,
        strategy: Strategy | str | None = None,
        character: str = "",
    ) -> ReconstructionResult:
        """Binarize a pixel buffer and reconstruct it."""
        start = time.perf_counter()
        grid = binarize(buffer, threshold)
        result = self.reconstruct_grid(grid, strategy, character=character)
        result.stats.duration_ms = (time.perf_counter() - start) * 1000
        return result

    def reconstruct_grid(
        self,
        grid: InkGrid,
        strategy: Strategy | str | None = None,
        character: str = "",
    ) -> ReconstructionResult:
        """Reconstruct an ink grid with the chosen strategy.

        Args:
            grid: Binarized glyph; never modified
            strategy: Strategy or strategy name (config default if None)
            character: Character label copied into the result

        Returns:
            ReconstructionResult for the chosen strategy
        """
        start = time.perf_counter()
        chosen = resolve_strategy(strategy, self.config.default_strategy)
        result = ReconstructionResult(
            strategy=chosen.value,
            canvas_size=grid.width,
            character=character,
        )
        result.stats.ink_pixels = grid.count()

        if chosen is Strategy.RUNS:
            result.runs = extract_runs(grid)
        elif chosen is Strategy.GREEDY:
            result.runs = greedy_mesh(grid)
        else:
            self._reconstruct_contours(grid, result)

        result.stats.duration_ms = (time.perf_counter() - start) * 1000
        return result

    def _reconstruct_contours(self, grid: InkGrid, result: ReconstructionResult) -> None:
        raw_rings = trace_contours(grid, min_points=self.config.min_ring_points)
        simplified = [simplify_ring(ring, self.config.simplify_epsilon) for ring in raw_rings]
        hierarchy = self.classifier.classify(simplified)
        geometry = self.assembler.assemble(hierarchy.roots)

        result.meshes = geometry.meshes
        result.outlines = geometry.outlines

        stats = result.stats
        stats.raw_rings = len(raw_rings)
        stats.raw_points = sum(len(r) for r in raw_rings)
        stats.simplified_points = sum(len(r) for r in simplified)
        stats.islands = len(hierarchy.roots)
        stats.holes = hierarchy.hole_count
        stats.skipped_rings = geometry.skipped_rings

        logger.debug(
            "Contours reconstructed",
            char=result.character,
            raw_rings=stats.raw_rings,
            raw_points=stats.raw_points,
            simplified_points=stats.simplified_points,
            islands=stats.islands,
            holes=stats.holes,
        )
