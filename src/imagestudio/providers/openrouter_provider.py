"""OpenRouter image generation provider."""

import json
import logging
from typing import Any

import httpx

from imagestudio.config import GeneratorSettings
from imagestudio.models.errors import ErrorCode, ImageGenerationError, classify_upstream_failure
from imagestudio.models.requests import ASPECT_RATIO, RESPONSE_FORMAT

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = "API_KEY environment variable is not set. Please set it to your OpenRouter key."
EMPTY_RESULT_MESSAGE = "The API did not return any images."
UPSTREAM_FALLBACK_MESSAGE = "Failed to fetch from OpenRouter."
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred during image generation."
FAILURE_PREFIX = "Failed to generate images: "


class OpenRouterImageProvider:
    """Image provider using an OpenRouter-style images endpoint."""

    def __init__(self, settings: GeneratorSettings, client: httpx.AsyncClient | None = None):
        """
        Initialize OpenRouter provider.

        Args:
            settings: Credential, endpoint and model configuration
            client: Optional shared HTTP client (a short-lived one is opened per call otherwise)
        """
        self.settings = settings
        self.client = client
        self.generate_url = f"{settings.base_url.rstrip('/')}/images/generations"

    def build_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.settings.api_key}",
            "Content-Type": "application/json",
            "HTTP-Referer": self.settings.app_url,
            "X-Title": self.settings.app_title,
        }

    def build_payload(self, prompt: str, num_images: int) -> dict[str, Any]:
        return {
            "model": self.settings.model,
            "prompt": prompt,
            "n": num_images,
            "response_format": RESPONSE_FORMAT,
            "aspect_ratio": ASPECT_RATIO,
        }

    async def generate(self, prompt: str, num_images: int) -> list[str]:
        """
        Generate images through the proxy.

        Args:
            prompt: Text prompt for image generation
            num_images: Number of images to request (the caller bounds this)

        Returns:
            List of base64-encoded images, one per upstream entry

        Raises:
            ImageGenerationError: CONFIGURATION_ERROR before any request when the key
                is missing; AUTH_ERROR, UPSTREAM_ERROR, EMPTY_RESULT or UNKNOWN_ERROR
                for failures of the request itself
        """
        if not self.settings.has_api_key:
            raise ImageGenerationError(ErrorCode.CONFIGURATION_ERROR, MISSING_KEY_MESSAGE)

        logger.debug(
            f"Requesting {num_images} image(s) from {self.settings.model} "
            f"(prompt length {len(prompt)})"
        )

        try:
            if self.client is not None:
                response = await self._post(self.client, prompt, num_images)
            else:
                async with httpx.AsyncClient(timeout=self.settings.timeout_seconds) as client:
                    response = await self._post(client, prompt, num_images)

            if not response.is_success:
                raise self._upstream_error(response)

            return self._extract_images(response.json())

        except ImageGenerationError:
            raise
        except Exception as e:
            logger.error(f"Error generating images via OpenRouter: {e}")
            message = str(e) or UNKNOWN_ERROR_MESSAGE
            raise ImageGenerationError(
                ErrorCode.UNKNOWN_ERROR,
                f"{FAILURE_PREFIX}{message}",
                original_exception=e,
            )

    async def _post(self, client: httpx.AsyncClient, prompt: str, num_images: int) -> httpx.Response:
        return await client.post(
            self.generate_url,
            headers=self.build_headers(),
            json=self.build_payload(prompt, num_images),
            timeout=self.settings.timeout_seconds,
        )

    def _upstream_error(self, response: httpx.Response) -> ImageGenerationError:
        """Turn a non-success response into a tagged error."""
        upstream_message = None
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict) and isinstance(body.get("error"), dict):
            raw_message = body["error"].get("message")
            if isinstance(raw_message, str):
                upstream_message = raw_message
            elif raw_message is not None:
                # Some upstream providers nest a structured object here
                upstream_message = json.dumps(raw_message)

        logger.error(f"OpenRouter API error response ({response.status_code}): {body if body is not None else response.text}")

        return ImageGenerationError(
            classify_upstream_failure(response.status_code, upstream_message),
            f"{FAILURE_PREFIX}API Error ({response.status_code}): {upstream_message or UPSTREAM_FALLBACK_MESSAGE}",
            status_code=response.status_code,
        )

    def _extract_images(self, body: Any) -> list[str]:
        data = body.get("data") if isinstance(body, dict) else None
        if not data:
            raise ImageGenerationError(ErrorCode.EMPTY_RESULT, f"{FAILURE_PREFIX}{EMPTY_RESULT_MESSAGE}")

        images: list[str] = []
        for index, entry in enumerate(data):
            encoded = entry.get("b64_json") if isinstance(entry, dict) else None
            if not encoded:
                # All-or-nothing: one bad entry fails the batch
                raise ImageGenerationError(
                    ErrorCode.UNKNOWN_ERROR,
                    f"{FAILURE_PREFIX}image {index + 1} of {len(data)} has no base64 data",
                )
            images.append(encoded)

        logger.debug(f"OpenRouter returned {len(images)} image(s)")
        return images
