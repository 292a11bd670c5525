"""Gallery shell: form state, generation and downloads for one user session."""

import logging
from datetime import datetime, timezone
from typing import Optional

import httpx
from pydantic import BaseModel, Field

from imagestudio.config import GeneratorSettings
from imagestudio.interfaces import CredentialSelector
from imagestudio.models.errors import ErrorCode, has_auth_marker
from imagestudio.models.image_responses import IMAGE_MIME_TYPE, GeneratedImage
from imagestudio.models.requests import IMAGE_COUNT_OPTIONS, ImageGenerationRequest
from imagestudio.models.responses import GenerationError
from imagestudio.providers.openrouter_provider import OpenRouterImageProvider
from imagestudio.services.image_service import ImageService
from imagestudio.services.metrics_service import MetricsService
from imagestudio.utils.download import build_download_filename

logger = logging.getLogger(__name__)

EMPTY_PROMPT_MESSAGE = "Please enter a prompt."
AUTH_ERROR_MESSAGE = "Your API key is invalid or was not found. Please select a valid API key."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred."


class GenerationInProgressError(RuntimeError):
    """Raised when a generation is requested while another one is still running."""


class DownloadFile(BaseModel):
    """A file ready to hand to the browser."""

    filename: str
    content: bytes
    media_type: str = IMAGE_MIME_TYPE


class GalleryImage(BaseModel):
    """Displayable entry for one generated image."""

    index: int
    src: str = Field(..., description="Data URI of the image")
    prompt: str


class ShellState(BaseModel):
    """Snapshot of the shell, as shown to the user."""

    prompt: str
    num_images: int
    is_loading: bool
    error: Optional[str] = None
    has_credential: bool
    images: list[GalleryImage] = Field(default_factory=list)


class GalleryShell:
    """Holds the UI state of one session and drives generation through an ImageService."""

    def __init__(
        self,
        image_service: ImageService,
        settings: GeneratorSettings | None = None,
        credential_selector: CredentialSelector | None = None,
    ):
        self.image_service = image_service
        self.settings = settings
        self.credential_selector = credential_selector

        self.prompt = ""
        self.num_images = IMAGE_COUNT_OPTIONS[0]
        self.is_loading = False
        self.error: str | None = None
        self.images: list[GeneratedImage] = []
        self.has_credential = settings.has_api_key if settings is not None else True

    @classmethod
    def from_settings(
        cls,
        settings: GeneratorSettings,
        client: httpx.AsyncClient | None = None,
        credential_selector: CredentialSelector | None = None,
        metrics_service: MetricsService | None = None,
    ) -> "GalleryShell":
        """Wire a shell to the OpenRouter provider described by `settings`."""
        provider = OpenRouterImageProvider(settings, client=client)
        image_service = ImageService(
            provider,
            model_name=settings.model,
            max_attempts=settings.max_attempts,
            metrics_service=metrics_service,
        )
        return cls(image_service, settings=settings, credential_selector=credential_selector)

    def set_num_images(self, num_images: int) -> None:
        if num_images not in IMAGE_COUNT_OPTIONS:
            raise ValueError(f"num_images must be one of {IMAGE_COUNT_OPTIONS}, got {num_images}")
        self.num_images = num_images

    async def generate(self) -> list[GeneratedImage]:
        """
        Generate images for the current prompt and count.

        Returns:
            The new images (empty when validation or generation failed; see `error`)

        Raises:
            GenerationInProgressError: If a previous generation has not finished
        """
        if self.is_loading:
            raise GenerationInProgressError("A generation is already in progress")

        if not self.prompt.strip():
            self.error = EMPTY_PROMPT_MESSAGE
            return []

        self.is_loading = True
        self.error = None
        self.images = []

        try:
            request = ImageGenerationRequest(prompt=self.prompt, num_images=self.num_images)
            response = await self.image_service.generate(request)

            if response.success:
                self.images = list(response.images or [])
                # The upstream accepted the key
                self.has_credential = True
                logger.info(f"Generated {len(self.images)} image(s)")
            else:
                self._show_error(response.error)
        finally:
            self.is_loading = False

        return self.images

    def _show_error(self, error: GenerationError | None) -> None:
        if error is None:
            self.error = UNEXPECTED_ERROR_MESSAGE
            return

        if error.code == ErrorCode.AUTH_ERROR or has_auth_marker(error.message):
            logger.warning("Upstream rejected the API key; asking for a new one")
            self.error = AUTH_ERROR_MESSAGE
            self.has_credential = False
            return

        self.error = error.message

    def download(self, index: int, now: datetime | None = None) -> DownloadFile:
        """
        Prepare image `index` (0-based) of the current batch for download.

        Raises:
            IndexError: If there is no image at that position
        """
        if not 0 <= index < len(self.images):
            raise IndexError(f"No image at index {index}")

        moment = now or datetime.now(timezone.utc)
        image = self.images[index]
        return DownloadFile(
            filename=build_download_filename(moment, index, len(self.images)),
            content=image.decode(),
        )

    async def check_credential(self) -> bool:
        """Refresh `has_credential` from the selector hook, if there is one."""
        if self.credential_selector is not None:
            self.has_credential = await self.credential_selector.has_selected_api_key()
        elif self.settings is not None:
            self.has_credential = self.settings.has_api_key
        return self.has_credential

    async def select_credential(self) -> bool:
        """Open the key selection dialog and assume the user picked a key."""
        if self.credential_selector is None:
            logger.warning("No credential selector available; set API_KEY instead")
            return self.has_credential

        await self.credential_selector.open_select_key()
        self.has_credential = True
        self.error = None
        return self.has_credential

    def state(self) -> ShellState:
        return ShellState(
            prompt=self.prompt,
            num_images=self.num_images,
            is_loading=self.is_loading,
            error=self.error,
            has_credential=self.has_credential,
            images=[
                GalleryImage(index=index, src=image.data_uri, prompt=image.source_prompt)
                for index, image in enumerate(self.images)
            ],
        )
