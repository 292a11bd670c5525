"""Metrics models for imagestudio."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class GenerationMetrics(BaseModel):
    """Tracking data for a generation operation."""

    duration_ms: int = Field(..., ge=0, description="Total generation time in milliseconds")
    model_used: Optional[str] = Field(None, description="Upstream model identifier")
    image_count: int = Field(0, ge=0, description="Number of images returned")
    attempt_count: int = Field(1, ge=1, description="Number of provider calls made")
    timestamp: Optional[datetime] = Field(None, description="When the generation completed (UTC)")
    input: Optional[str] = Field(None, description="Input parameters as JSON string (for observability)")
