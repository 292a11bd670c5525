"""Opt-in retry with exponential backoff for provider calls.

Generation is single-attempt unless a caller asks for more than one attempt.
"""

import logging
from typing import Any, Awaitable, Callable, TypeVar

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from imagestudio.models.errors import ImageGenerationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _is_retryable_failure(exc: BaseException) -> bool:
    return isinstance(exc, ImageGenerationError) and exc.retryable


def _log_retry(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(f"Attempt {retry_state.attempt_number} failed, retrying: {exc}")


def build_retry_config(max_attempts: int) -> dict[str, Any]:
    """Retry configuration for up to `max_attempts` calls at 1s, 2s, 4s intervals."""
    return {
        "stop": stop_after_attempt(max_attempts),
        "wait": wait_exponential(multiplier=1, min=1, max=4),
        "retry": retry_if_exception(_is_retryable_failure),
        "before_sleep": _log_retry,
        "reraise": True,
    }


async def call_with_retry(
    func: Callable[..., Awaitable[T]],
    *args: Any,
    max_attempts: int = 1,
    retry_config: dict[str, Any] | None = None,
    **kwargs: Any,
) -> tuple[T, int]:
    """
    Execute an async function, retrying retryable generation failures.

    Args:
        func: Async function to execute
        *args: Positional arguments for func
        max_attempts: Total calls allowed (1 disables retry)
        retry_config: Optional custom tenacity configuration. If None, uses the default.
        **kwargs: Keyword arguments for func

    Returns:
        Tuple of (result from func, number of attempts made)

    Raises:
        ImageGenerationError: The last failure once attempts are exhausted, or the
            first non-retryable one, with `attempts` set to the calls made
        Exception: Anything else func raises, unchanged
    """
    if max_attempts <= 1 and retry_config is None:
        return await func(*args, **kwargs), 1

    config = retry_config or build_retry_config(max_attempts)

    attempt_number = 0
    try:
        async for attempt in AsyncRetrying(**config):
            with attempt:
                attempt_number = attempt.retry_state.attempt_number
                result = await func(*args, **kwargs)
    except ImageGenerationError as e:
        e.attempts = attempt_number
        raise
    return result, attempt_number
