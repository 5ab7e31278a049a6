"""Configuration management for glyphmesh.

This module provides configuration management using Pydantic models.
Configuration can be provided via environment variables, CLI arguments
or defaults.

Key classes:
- RasterConfig: Font and rendering settings
- ReconstructionConfig: Pipeline tolerances and request clamping bounds
- ServerConfig: HTTP server settings
- ProcessingConfig: Batch processing settings
- LoggingConfig: Logging settings
- GlyphMeshSettings: Main application settings
"""

from glyphmesh.config.settings import (
    GlyphMeshSettings,
    LoggingConfig,
    ProcessingConfig,
    RasterConfig,
    ReconstructionConfig,
    ServerConfig,
    Strategy,
    get_default_settings,
)

__all__ = [
    "GlyphMeshSettings",
    "LoggingConfig",
    "ProcessingConfig",
    "RasterConfig",
    "ReconstructionConfig",
    "ServerConfig",
    "Strategy",
    "get_default_settings",
]
