"""Request models for imagestudio."""

from pydantic import BaseModel, Field, field_validator

# Image counts offered to the user
IMAGE_COUNT_OPTIONS: tuple[int, ...] = (1, 2, 3, 4)

# All images are square
ASPECT_RATIO = "1:1"

# Ask the upstream for inline base64 payloads rather than URLs
RESPONSE_FORMAT = "b64_json"


class ImageGenerationRequest(BaseModel):
    """Request model for image generation."""

    prompt: str = Field(..., min_length=1, description="Image generation prompt")
    num_images: int = Field(
        1,
        ge=IMAGE_COUNT_OPTIONS[0],
        le=IMAGE_COUNT_OPTIONS[-1],
        description="Number of images to generate (1-4)",
    )

    @field_validator("prompt")
    @classmethod
    def prompt_not_blank(cls, value: str) -> str:
        """Reject whitespace-only prompts; the text itself is kept as typed."""
        if not value.strip():
            raise ValueError("prompt must not be blank")
        return value
