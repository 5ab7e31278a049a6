"""Request and response models for the HTTP API."""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field


class GenerateRequest(BaseModel):
    """Body of POST /generate.

    Numeric fields are accepted loosely (numbers or numeric strings) and are
    clamped by the pipeline rather than rejected.
    """

    char: str | None = Field(default=None, description="Character to reconstruct")
    resolution: int | float | str | None = Field(
        default=None, description="Canvas size in pixels"
    )
    threshold: int | float | str | None = Field(
        default=None, description="Luminance threshold 0-255"
    )
    strategy: str | None = Field(
        default=None, description="Reconstruction strategy: contour, runs or greedy"
    )


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str


class ErrorResponse(BaseModel):
    """Structured failure payload."""

    success: bool = False
    error: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def to_content(self) -> dict[str, Any]:
        return self.model_dump(mode="json")
