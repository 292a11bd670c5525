"""Tests for the opt-in retry service."""

import pytest
from tenacity import stop_after_attempt, wait_none

from conftest import SAMPLE_IMAGES, MockImageProvider
from imagestudio.models.errors import ErrorCode, ImageGenerationError
from imagestudio.models.requests import ImageGenerationRequest
from imagestudio.services.image_service import ImageService
from imagestudio.services.retry_service import build_retry_config, call_with_retry


def fast_retry_config(max_attempts: int) -> dict:
    """Default retry policy without the waits."""
    config = build_retry_config(max_attempts)
    config["wait"] = wait_none()
    return config


def busy_error() -> ImageGenerationError:
    return ImageGenerationError(ErrorCode.UPSTREAM_ERROR, "API Error (503): busy", status_code=503)


@pytest.mark.asyncio
async def test_single_attempt_by_default():
    provider = MockImageProvider(errors=[busy_error()])

    with pytest.raises(ImageGenerationError):
        await call_with_retry(provider.generate, "A red dragon", 1)

    assert provider.call_count == 1


@pytest.mark.asyncio
async def test_retry_succeeds_after_retryable_failures():
    provider = MockImageProvider(errors=[busy_error(), busy_error()])

    result, attempts = await call_with_retry(
        provider.generate, "A red dragon", 2, retry_config=fast_retry_config(3)
    )

    assert result == SAMPLE_IMAGES[:2]
    assert attempts == 3
    assert provider.call_count == 3


@pytest.mark.asyncio
async def test_retry_exhausts_after_max_attempts():
    provider = MockImageProvider(errors=[busy_error() for _ in range(5)])

    with pytest.raises(ImageGenerationError) as exc_info:
        await call_with_retry(provider.generate, "A red dragon", 1, retry_config=fast_retry_config(3))

    assert exc_info.value.status_code == 503
    assert provider.call_count == 3


@pytest.mark.asyncio
async def test_no_retry_on_auth_error():
    error = ImageGenerationError(ErrorCode.AUTH_ERROR, "API Error (401): invalid key", status_code=401)
    provider = MockImageProvider(errors=[error])

    with pytest.raises(ImageGenerationError):
        await call_with_retry(provider.generate, "A red dragon", 1, retry_config=fast_retry_config(3))

    assert provider.call_count == 1


@pytest.mark.asyncio
async def test_no_retry_on_other_exceptions():
    provider = MockImageProvider(errors=[ValueError("bad input")])

    with pytest.raises(ValueError):
        await call_with_retry(provider.generate, "A red dragon", 1, retry_config=fast_retry_config(3))

    assert provider.call_count == 1


@pytest.mark.asyncio
async def test_image_service_reports_attempt_count():
    provider = MockImageProvider(errors=[busy_error()])
    config = {**fast_retry_config(2), "stop": stop_after_attempt(2)}
    service = ImageService(provider, max_attempts=2, retry_config=config)

    response = await service.generate(ImageGenerationRequest(prompt="A red dragon"))

    assert response.success is True
    assert response.metrics.attempt_count == 2


@pytest.mark.asyncio
async def test_exhausted_retry_records_every_attempt():
    provider = MockImageProvider(errors=[busy_error() for _ in range(3)])
    service = ImageService(provider, max_attempts=3, retry_config=fast_retry_config(3))

    response = await service.generate(ImageGenerationRequest(prompt="A red dragon"))

    assert response.success is False
    assert provider.call_count == 3
    assert response.metrics.attempt_count == 3


@pytest.mark.asyncio
async def test_exhausted_retry_stamps_attempts_on_error():
    provider = MockImageProvider(errors=[busy_error() for _ in range(3)])

    with pytest.raises(ImageGenerationError) as exc_info:
        await call_with_retry(provider.generate, "A red dragon", 1, retry_config=fast_retry_config(3))

    assert exc_info.value.attempts == 3
