"""Configuration settings for Glyphmesh."""

from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from glyphmesh.exceptions import ConfigurationError


class Strategy(str, Enum):
    """Reconstruction strategy."""

    RUNS = "runs"
    GREEDY = "greedy"
    CONTOUR = "contour"


def _parse_int(value: Any, default: int) -> int:
    """Leniently parse an integer, falling back to a default.

    Accepts ints, floats and numeric strings ("128", " 64 ", "12.7").
    Anything else (None, "", "abc", booleans) yields the default.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    try:
        return int(float(str(value).strip()))
    except (TypeError, ValueError):
        return default


class RasterConfig(BaseModel):
    """Configuration for character rasterization."""

    font_paths: list[Path] = Field(
        default_factory=list,
        description="Font files searched in order for a glyph covering the character",
    )
    use_system_fonts: bool = Field(
        default=True,
        description="Search the platform font directories after the configured fonts",
    )
    system_font_dirs: list[Path] | None = Field(
        default=None,
        description="Directories searched for system fonts (platform defaults if None)",
    )
    prefer_bold: bool = Field(
        default=True,
        description="Try bold system faces before other weights",
    )
    font_size_fraction: float = Field(
        default=0.8,
        gt=0.1,
        le=1.0,
        description="Font size as a fraction of the canvas size",
    )
    default_character: str = Field(
        default="あ",
        min_length=1,
        description="Character rendered when a request does not name one",
    )


class ReconstructionConfig(BaseModel):
    """Configuration for the pixel-to-geometry pipeline.

    Request parameters are never rejected for being out of range; they are
    clamped into the bounds configured here.
    """

    default_resolution: int = Field(
        default=128,
        description="Canvas size used when the request omits or garbles it",
    )
    min_resolution: int = Field(
        default=32,
        ge=1,
        description="Smallest canvas size a request may ask for",
    )
    max_resolution: int = Field(
        default=1024,
        ge=1,
        le=4096,
        description="Largest canvas size a request may ask for",
    )
    default_threshold: int = Field(
        default=120,
        ge=0,
        le=255,
        description="Luminance threshold used when the request omits or garbles it",
    )
    simplify_epsilon: float = Field(
        default=1.5,
        ge=0.0,
        le=50.0,
        description="Ramer-Douglas-Peucker tolerance in pixels",
    )
    min_ring_points: int = Field(
        default=6,
        ge=1,
        description="Traced rings with fewer points are discarded as noise",
    )
    default_strategy: Strategy = Field(
        default=Strategy.CONTOUR,
        description="Strategy used when the request does not name one",
    )

    @model_validator(mode="after")
    def _check_bounds(self) -> "ReconstructionConfig":
        if self.min_resolution > self.max_resolution:
            raise ValueError("min_resolution must not exceed max_resolution")
        return self

    def clamp_resolution(self, value: Any) -> int:
        """Parse and clamp a requested canvas size.

        Args:
            value: Raw request value (int, numeric string or None)

        Returns:
            Canvas size within [min_resolution, max_resolution]
        """
        size = _parse_int(value, self.default_resolution)
        return min(max(size, self.min_resolution), self.max_resolution)

    def clamp_threshold(self, value: Any) -> int:
        """Parse and clamp a requested luminance threshold to 0-255."""
        threshold = _parse_int(value, self.default_threshold)
        return min(max(threshold, 0), 255)


class ServerConfig(BaseModel):
    """HTTP server configuration."""

    host: str = Field(default="0.0.0.0", description="Interface to bind")
    port: int = Field(default=3000, ge=1, le=65535, description="Port to listen on")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed by the CORS middleware",
    )
    stats_history: int = Field(
        default=1000,
        ge=1,
        description="Recent request errors and timings kept in memory",
    )


class ProcessingConfig(BaseModel):
    """Configuration for batch processing."""

    max_workers: int | None = Field(
        default=None,
        description="Max worker processes (None = auto)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="INFO",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )
    json_output: bool = Field(
        default=True,
        description="Render log lines as JSON instead of key=value text",
    )


class GlyphMeshSettings(BaseSettings):
    """Main application settings.

    Every field can be overridden from the environment, e.g.
    ``GLYPHMESH_SERVER__PORT=8080`` or
    ``GLYPHMESH_RECONSTRUCTION__MAX_RESOLUTION=512``.
    """

    model_config = SettingsConfigDict(
        env_prefix="GLYPHMESH_",
        env_nested_delimiter="__",
        env_file=".env",
        extra="ignore",
    )

    raster: RasterConfig = Field(default_factory=RasterConfig)
    reconstruction: ReconstructionConfig = Field(default_factory=ReconstructionConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> GlyphMeshSettings:
    """Get application settings (defaults merged with the environment).

    Raises:
        ConfigurationError: If an environment override is invalid
    """
    try:
        return GlyphMeshSettings()
    except ValidationError as e:
        raise ConfigurationError(str(e)) from e
