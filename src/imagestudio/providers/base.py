"""Base provider interface for image generation."""

from typing import Protocol

from typing_extensions import runtime_checkable


@runtime_checkable
class ImageProvider(Protocol):
    """Protocol for image generation providers."""

    async def generate(self, prompt: str, num_images: int) -> list[str]:
        """
        Generate images from a prompt.

        Args:
            prompt: Text prompt for image generation
            num_images: Number of images to generate in one upstream call

        Returns:
            List of base64-encoded images, in upstream order

        Raises:
            ImageGenerationError: Tagged with the failure category
        """
        ...
