"""Shared pytest fixtures for imagestudio tests."""

import base64
import json

import httpx
import pytest

from imagestudio.config import GeneratorSettings
from imagestudio.models.errors import ErrorCode, ImageGenerationError
from imagestudio.services.gallery_service import GalleryShell
from imagestudio.services.image_service import ImageService


def encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


SAMPLE_IMAGES = [encode(f"jpeg-bytes-{i}".encode()) for i in range(1, 5)]


class MockImageProvider:
    """Mock image provider for testing."""

    def __init__(self, images: list[str] | None = None, errors: list[Exception] | None = None):
        """
        Initialize mock provider.

        Args:
            images: Payloads to return (defaults to one sample per requested image)
            errors: Exceptions to raise on successive calls before succeeding
        """
        self.images = images
        self.errors = list(errors or [])
        self.calls: list[tuple[str, int]] = []

    @property
    def call_count(self) -> int:
        return len(self.calls)

    async def generate(self, prompt: str, num_images: int) -> list[str]:
        """Mock generate method."""
        self.calls.append((prompt, num_images))

        if self.errors:
            raise self.errors.pop(0)

        if self.images is not None:
            return list(self.images)
        return SAMPLE_IMAGES[:num_images]


class FakeCredentialSelector:
    """Stand-in for a host key-selection hook."""

    def __init__(self, selected: bool = False):
        self.selected = selected
        self.open_count = 0

    async def has_selected_api_key(self) -> bool:
        return self.selected

    async def open_select_key(self) -> None:
        self.open_count += 1
        self.selected = True


class RecordingTransport:
    """httpx handler that records requests and replies with a canned response."""

    def __init__(self, status_code: int = 200, body=None, raw: bytes | None = None, exc: Exception | None = None):
        self.status_code = status_code
        self.body = body
        self.raw = raw
        self.exc = exc
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if self.raw is not None:
            return httpx.Response(self.status_code, content=self.raw)
        return httpx.Response(self.status_code, json=self.body)

    def last_payload(self) -> dict:
        return json.loads(self.requests[-1].content)


def make_client(transport: RecordingTransport) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(transport))


@pytest.fixture
def settings():
    """Settings with a test key and default endpoint."""
    return GeneratorSettings(api_key="test-key")


@pytest.fixture
def mock_image_provider():
    """Fixture for a working mock image provider."""
    return MockImageProvider()


@pytest.fixture
def shell(mock_image_provider, settings):
    """Gallery shell wired to the mock provider."""
    return GalleryShell(ImageService(mock_image_provider), settings=settings)


@pytest.fixture
def auth_failure():
    return ImageGenerationError(
        ErrorCode.AUTH_ERROR,
        "Failed to generate images: API Error (401): No auth credentials found",
        status_code=401,
    )
