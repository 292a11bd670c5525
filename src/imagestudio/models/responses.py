"""Response models for imagestudio."""

from typing import Optional

from pydantic import BaseModel, Field

from imagestudio.models.errors import ErrorCode, ImageGenerationError


class GenerationError(BaseModel):
    """Error details for failed generation operations."""

    code: ErrorCode = Field(..., description="Error category code")
    message: str = Field(..., description="User-facing error message")
    status_code: Optional[int] = Field(None, description="Upstream HTTP status, when one was received")
    details: Optional[dict] = Field(None, description="Optional additional context for debugging")

    @classmethod
    def from_exception(cls, exc: ImageGenerationError) -> "GenerationError":
        """Build the error record for a raised ImageGenerationError."""
        details = None
        if exc.original_exception is not None:
            details = {"exception_type": type(exc.original_exception).__name__}
        return cls(
            code=exc.error_code,
            message=exc.message,
            status_code=exc.status_code,
            details=details,
        )
