"""imagestudio - Prompt-to-image gallery backed by an OpenRouter-style images API."""

from imagestudio.config import GeneratorSettings
from imagestudio.interfaces import CredentialSelector
from imagestudio.models.errors import ErrorCode, ImageGenerationError, is_retryable
from imagestudio.models.image_responses import GeneratedImage, ImageGenerationResponse
from imagestudio.models.metrics import GenerationMetrics
from imagestudio.models.requests import IMAGE_COUNT_OPTIONS, ImageGenerationRequest
from imagestudio.models.responses import GenerationError
from imagestudio.providers.base import ImageProvider
from imagestudio.providers.openrouter_provider import OpenRouterImageProvider
from imagestudio.services.gallery_service import GalleryShell, GenerationInProgressError
from imagestudio.services.image_service import ImageService
from imagestudio.services.metrics_service import MetricsService
from imagestudio.utils.download import build_download_filename

__version__ = "0.1.0"

__all__ = [
    # Configuration
    "GeneratorSettings",
    # Interfaces
    "CredentialSelector",
    "ImageProvider",
    # Request/response types
    "IMAGE_COUNT_OPTIONS",
    "ImageGenerationRequest",
    "ImageGenerationResponse",
    "GeneratedImage",
    "GenerationMetrics",
    # Errors
    "ErrorCode",
    "GenerationError",
    "ImageGenerationError",
    "is_retryable",
    # Providers
    "OpenRouterImageProvider",
    # Services
    "GalleryShell",
    "GenerationInProgressError",
    "ImageService",
    "MetricsService",
    # Utilities
    "build_download_filename",
]
