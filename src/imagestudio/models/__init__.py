"""Models package for imagestudio."""

from imagestudio.models.errors import ErrorCode, ImageGenerationError, classify_upstream_failure, is_retryable
from imagestudio.models.image_responses import GeneratedImage, ImageGenerationResponse
from imagestudio.models.metrics import GenerationMetrics
from imagestudio.models.requests import IMAGE_COUNT_OPTIONS, ImageGenerationRequest
from imagestudio.models.responses import GenerationError

__all__ = [
    "ErrorCode",
    "ImageGenerationError",
    "classify_upstream_failure",
    "is_retryable",
    "GeneratedImage",
    "GenerationError",
    "GenerationMetrics",
    "IMAGE_COUNT_OPTIONS",
    "ImageGenerationRequest",
    "ImageGenerationResponse",
]
