"""Logging utilities for Glyphmesh."""

import logging
import threading
from collections import deque
from collections.abc import MutableSequence
from dataclasses import dataclass, field, replace
from pathlib import Path

import structlog


@dataclass
class ProcessingStats:
    """Statistics across reconstruction requests.

    Counters cover every request; errors and timings may be bounded to the
    most recent entries.
    """

    processed_count: int = 0
    empty_count: int = 0
    error_count: int = 0
    meshes_built: int = 0
    runs_built: int = 0
    errors: MutableSequence[tuple[str, str]] = field(default_factory=list)
    timings_ms: MutableSequence[float] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_time_ms(self) -> float | None:
        if not self.timings_ms:
            return None
        return sum(self.timings_ms) / len(self.timings_ms)

    @property
    def max_time_ms(self) -> float | None:
        return max(self.timings_ms) if self.timings_ms else None


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
    json_output: bool = True,
) -> structlog.stdlib.BoundLogger:
    """Configure structured logging on top of the standard library.

    Safe to call more than once; handlers installed by a previous call are
    replaced rather than duplicated.

    Args:
        log_file: Optional path of a more verbose log file
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors
        json_output: Render JSON lines instead of key=value text

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in list(root_logger.handlers):
        if getattr(handler, "_glyphmesh", False):
            root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel("ERROR" if quiet else console_level.upper())
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    console_handler._glyphmesh = True  # type: ignore[attr-defined]
    root_logger.addHandler(console_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(file_level.upper())
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        file_handler._glyphmesh = True  # type: ignore[attr-defined]
        root_logger.addHandler(file_handler)

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("glyphmesh")
    logger.debug(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=console_level,
    )

    return logger


class RequestLogger:
    """Logger for tracking reconstruction requests and statistics.

    Statistics updates are serialized with a lock, so one instance can be
    shared by the worker threads of a server.

    Args:
        logger: Bound logger to emit events on
        history: Keep only this many recent errors and timings (unbounded if None)
    """

    def __init__(self, logger: structlog.stdlib.BoundLogger, history: int | None = None) -> None:
        self._logger = logger
        self._lock = threading.Lock()
        self._stats = ProcessingStats(
            errors=deque(maxlen=history), timings_ms=deque(maxlen=history)
        )

    def log_request_start(self, character: str, canvas_size: int, strategy: str) -> None:
        """Log start of a reconstruction."""
        self._logger.info(
            "Generating geometry",
            char=character,
            size=canvas_size,
            strategy=strategy,
        )

    def log_request_complete(
        self,
        character: str,
        strategy: str,
        meshes: int,
        runs: int,
        duration_ms: float,
    ) -> None:
        """Log successful reconstruction."""
        self._logger.info(
            "Geometry generated",
            char=character,
            strategy=strategy,
            meshes=meshes,
            runs=runs,
            duration_ms=round(duration_ms, 2),
        )
        with self._lock:
            self._stats.processed_count += 1
            self._stats.meshes_built += meshes
            self._stats.runs_built += runs
            self._stats.timings_ms.append(duration_ms)
            if meshes == 0 and runs == 0:
                self._stats.empty_count += 1

    def log_request_error(
        self,
        character: str,
        error: Exception | str,
        traceback: str | None = None,
    ) -> None:
        """Log reconstruction failure."""
        error_type = type(error).__name__ if isinstance(error, Exception) else "Error"
        self._logger.error(
            "Geometry generation failed",
            char=character,
            error=str(error),
            error_type=error_type,
            traceback=traceback,
        )
        with self._lock:
            self._stats.error_count += 1
            self._stats.errors.append((character, str(error)))

    def log_ring_analysis(
        self,
        character: str,
        raw_rings: int,
        islands: int,
        holes: int,
    ) -> None:
        """Log contour analysis results."""
        self._logger.debug(
            "Ring analysis",
            char=character,
            raw=raw_rings,
            islands=islands,
            holes=holes,
        )

    @property
    def stats(self) -> ProcessingStats:
        """Get current processing statistics."""
        return self._stats

    def snapshot(self) -> ProcessingStats:
        """Copy of the statistics that later requests will not change."""
        with self._lock:
            return replace(
                self._stats,
                errors=list(self._stats.errors),
                timings_ms=list(self._stats.timings_ms),
            )
