"""Image generation service that wraps a provider in a response envelope."""

import json
import logging
import time
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError

from imagestudio.models.errors import ErrorCode, ImageGenerationError
from imagestudio.models.image_responses import GeneratedImage, ImageGenerationResponse
from imagestudio.models.metrics import GenerationMetrics
from imagestudio.models.requests import ImageGenerationRequest
from imagestudio.models.responses import GenerationError
from imagestudio.providers.base import ImageProvider
from imagestudio.services.metrics_service import MetricsService
from imagestudio.services.retry_service import call_with_retry

logger = logging.getLogger(__name__)


class ImageService:
    """Runs one generation request against a provider and reports the outcome."""

    def __init__(
        self,
        provider: ImageProvider,
        model_name: str | None = None,
        max_attempts: int = 1,
        retry_config: dict[str, Any] | None = None,
        metrics_service: MetricsService | None = None,
    ):
        """
        Initialize image service.

        Args:
            provider: Provider that performs the upstream call
            model_name: Model identifier reported in metrics
            max_attempts: Provider calls allowed per request (1 = no retry)
            retry_config: Optional custom tenacity configuration
            metrics_service: Optional MetricsService for recording metrics
        """
        self.provider = provider
        self.model_name = model_name
        self.max_attempts = max_attempts
        self.retry_config = retry_config
        self.metrics_service = metrics_service

    async def generate(self, request: ImageGenerationRequest) -> ImageGenerationResponse:
        """
        Generate images for a validated request.

        Args:
            request: Image generation request

        Returns:
            ImageGenerationResponse with the images in upstream order, or an error
        """
        start_time = time.time()
        attempts = 1

        input_json = json.dumps({
            "prompt_length": len(request.prompt),
            "num_images": request.num_images,
        })

        try:
            encoded_images, attempts = await call_with_retry(
                self.provider.generate,
                request.prompt,
                request.num_images,
                max_attempts=self.max_attempts,
                retry_config=self.retry_config,
            )

            try:
                images = [
                    GeneratedImage(encoded_data=encoded, source_prompt=request.prompt)
                    for encoded in encoded_images
                ]
            except ValidationError as e:
                raise ImageGenerationError(
                    ErrorCode.UNKNOWN_ERROR,
                    "Failed to generate images: the API returned data that is not valid base64.",
                    original_exception=e,
                )

            if not images:
                raise ImageGenerationError(
                    ErrorCode.EMPTY_RESULT,
                    "Failed to generate images: The API did not return any images.",
                )

            metrics = self._build_metrics(start_time, attempts, input_json, image_count=len(images))
            return ImageGenerationResponse(success=True, images=images, metrics=metrics)

        except ImageGenerationError as e:
            logger.warning(f"Image generation failed [{e.error_code.value}]: {e.message}")
            # Provider failures carry their own call count
            attempts = max(attempts, e.attempts)
            return ImageGenerationResponse(
                success=False,
                error=GenerationError.from_exception(e),
                metrics=self._build_metrics(start_time, attempts, input_json),
            )
        except Exception as e:
            logger.exception("Unexpected error during image generation")
            return ImageGenerationResponse(
                success=False,
                error=GenerationError(
                    code=ErrorCode.UNKNOWN_ERROR,
                    message=f"Failed to generate images: {e}",
                    details={"exception_type": type(e).__name__},
                ),
                metrics=self._build_metrics(start_time, attempts, input_json),
            )

    def _build_metrics(
        self,
        start_time: float,
        attempts: int,
        input_json: str,
        image_count: int = 0,
    ) -> GenerationMetrics:
        metrics = GenerationMetrics(
            duration_ms=int((time.time() - start_time) * 1000),
            model_used=self.model_name,
            image_count=image_count,
            attempt_count=attempts,
            timestamp=datetime.now(timezone.utc),
            input=input_json,
        )
        if self.metrics_service is not None:
            self.metrics_service.record(metrics)
        return metrics
