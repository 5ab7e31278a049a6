"""Utility functions for glyphmesh.

This module provides utility functions including:

- Logging setup and configuration
- Request statistics tracking
"""

from glyphmesh.utils.logging import (
    ProcessingStats,
    RequestLogger,
    configure_logging,
)

__all__ = [
    "ProcessingStats",
    "RequestLogger",
    "configure_logging",
]
