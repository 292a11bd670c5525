"""Image generation response models."""

import base64
import binascii
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from imagestudio.models.metrics import GenerationMetrics
from imagestudio.models.responses import GenerationError

IMAGE_MIME_TYPE = "image/jpeg"


class GeneratedImage(BaseModel):
    """A single generated image as returned by the upstream."""

    model_config = ConfigDict(frozen=True)

    encoded_data: str = Field(..., min_length=1, description="Base64-encoded image payload")
    source_prompt: str = Field(..., description="Prompt the image was generated from")

    @field_validator("encoded_data")
    @classmethod
    def validate_base64(cls, value: str) -> str:
        try:
            base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError(f"encoded_data is not valid base64: {e}") from e
        return value

    @property
    def data_uri(self) -> str:
        """Displayable data URI for the image."""
        return f"data:{IMAGE_MIME_TYPE};base64,{self.encoded_data}"

    def decode(self) -> bytes:
        """Return the raw image bytes."""
        return base64.b64decode(self.encoded_data)


class ImageGenerationResponse(BaseModel):
    """Response model for image generation."""

    success: bool = Field(..., description="Whether generation succeeded")
    images: Optional[list[GeneratedImage]] = Field(None, description="Generated images (present if success=True)")
    metrics: Optional[GenerationMetrics] = Field(None, description="Performance tracking")
    error: Optional[GenerationError] = Field(None, description="Error details if success=False")

    @model_validator(mode="after")
    def validate_success_state(self):
        """Ensure success state is consistent."""
        if self.success is True:
            if not self.images:
                raise ValueError("images must be present when success=True")
            if self.error:
                raise ValueError("error must be None when success=True")
        else:
            if not self.error:
                raise ValueError("error must be present when success=False")
            if self.images:
                raise ValueError("images must be None when success=False")
        return self
