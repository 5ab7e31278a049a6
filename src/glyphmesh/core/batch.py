"""Parallel reconstruction of many characters.

This module fans characters out over a ProcessPoolExecutor, one task per
character, and collects the results as they finish.

Key components:
- process_character: Top-level picklable function for parallel execution
- BatchProcessor: Orchestrates a batch and records statistics
"""

import time
import traceback
from collections.abc import Callable
from concurrent.futures import ProcessPoolExecutor, as_completed
from typing import Any

from glyphmesh.config import GlyphMeshSettings, RasterConfig, ReconstructionConfig
from glyphmesh.core.pipeline import GlyphPipeline
from glyphmesh.utils import ProcessingStats, RequestLogger, configure_logging


def process_character(
    character: str,
    raster_dict: dict[str, Any],
    reconstruction_dict: dict[str, Any],
    resolution: int | None = None,
    threshold: int | None = None,
    strategy: str | None = None,
) -> dict[str, Any]:
    """Reconstruct one character.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.
    Configuration arrives as plain dictionaries and the pipeline is rebuilt in
    the worker.

    Args:
        character: Character to reconstruct
        raster_dict: Serialized RasterConfig
        reconstruction_dict: Serialized ReconstructionConfig
        resolution: Requested canvas size (clamped)
        threshold: Requested luminance threshold (clamped)
        strategy: Strategy name (config default if None)

    Returns:
        Dictionary containing either:
        - Success: {"char": str, "result": dict, "meshes": int, "runs": int, "duration_ms": float}
        - Error: {"char": str, "error": str, "traceback": str, "duration_ms": float}
    """
    # Imported here so worker processes pay for Pillow only when they run
    from glyphmesh.io import GlyphRasterizer

    start_time = time.time()

    try:
        rasterizer = GlyphRasterizer(RasterConfig(**raster_dict))
        pipeline = GlyphPipeline(ReconstructionConfig(**reconstruction_dict), rasterizer)
        result = pipeline.reconstruct(character, resolution, threshold, strategy)

        duration_ms = (time.time() - start_time) * 1000
        return {
            "char": character,
            "result": result.to_dict(),
            "meshes": len(result.meshes),
            "runs": len(result.runs),
            "duration_ms": duration_ms,
        }

    except Exception as e:
        # Capture full traceback for debugging
        duration_ms = (time.time() - start_time) * 1000
        return {
            "char": character,
            "error": str(e),
            "traceback": traceback.format_exc(),
            "duration_ms": duration_ms,
        }


class BatchProcessor:
    """Orchestrates parallel reconstruction of a list of characters.

    Example:
        processor = BatchProcessor(GlyphMeshSettings())
        results, stats = processor.process("ABC", strategy="greedy", max_workers=2)
    """

    def __init__(self, settings: GlyphMeshSettings) -> None:
        """Initialize batch processor with configuration.

        Args:
            settings: Application settings
        """
        self.settings = settings
        self.logger = configure_logging(
            log_file=settings.logging.log_file,
            console_level=settings.logging.log_level,
            file_level=settings.logging.file_log_level,
            json_output=settings.logging.json_output,
        )
        self.request_logger = RequestLogger(self.logger)

    def process(
        self,
        characters: str,
        resolution: int | None = None,
        threshold: int | None = None,
        strategy: str | None = None,
        max_workers: int | None = None,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> tuple[dict[str, dict[str, Any]], ProcessingStats]:
        """Reconstruct every distinct character in parallel.

        Failures are recorded and do not stop the rest of the batch.

        Args:
            characters: Characters to process; duplicates are processed once
            resolution: Requested canvas size
            threshold: Requested luminance threshold
            strategy: Strategy name
            max_workers: Maximum worker processes (config default if None)
            progress_callback: Optional callback(completed, total, char, success)

        Returns:
            Tuple of (results keyed by character, statistics)

        Raises:
            KeyboardInterrupt: If processing is cancelled by user
        """
        stats = self.request_logger.stats
        stats.start_time = time.time()

        if max_workers is None:
            max_workers = self.settings.processing.max_workers

        unique = list(dict.fromkeys(characters))
        raster_dict = self.settings.raster.model_dump()
        reconstruction_dict = self.settings.reconstruction.model_dump()

        self.logger.info(
            "Starting batch",
            characters=len(unique),
            max_workers=max_workers,
            strategy=strategy,
        )

        results: dict[str, dict[str, Any]] = {}
        total = len(unique)
        completed = 0
        pending_futures: dict = {}

        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            for char in unique:
                future = executor.submit(
                    process_character,
                    char,
                    raster_dict,
                    reconstruction_dict,
                    resolution,
                    threshold,
                    strategy,
                )
                pending_futures[future] = char

            try:
                for future in as_completed(pending_futures):
                    char = pending_futures.pop(future)
                    success = False

                    try:
                        outcome = future.result()
                        if "error" in outcome:
                            self.request_logger.log_request_error(
                                char, outcome["error"], traceback=outcome.get("traceback")
                            )
                        else:
                            success = True
                            results[char] = outcome["result"]
                            self.request_logger.log_request_complete(
                                character=char,
                                strategy=outcome["result"]["strategy"],
                                meshes=outcome["meshes"],
                                runs=outcome["runs"],
                                duration_ms=outcome["duration_ms"],
                            )
                    except Exception as e:
                        # Executor-level error (e.g. a worker died)
                        self.request_logger.log_request_error(
                            char, e, traceback=traceback.format_exc()
                        )

                    completed += 1
                    if progress_callback is not None:
                        progress_callback(completed, total, char, success)

            except KeyboardInterrupt:
                self.logger.info("Cancellation requested by user")
                executor.shutdown(wait=True, cancel_futures=True)
                raise

        stats.end_time = time.time()
        self.logger.info(
            "Batch complete",
            processed=stats.processed_count,
            errors=stats.error_count,
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return results, stats
