"""Error code definitions for imagestudio."""

from enum import Enum


class ErrorCode(str, Enum):
    """Error category codes for generation operations."""

    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    AUTH_ERROR = "AUTH_ERROR"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    EMPTY_RESULT = "EMPTY_RESULT"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


# Upstream statuses that mean the credential was rejected
AUTH_STATUS_CODES = {401, 403}

# Upstream statuses worth another attempt when retry is enabled
RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}

# Last-resort text markers for credential problems. These follow the wording of
# the upstream provider and stop matching if that wording changes.
AUTH_ERROR_MARKERS = (
    "api key not valid",
    "invalid api key",
    "requested entity was not found",
    "no auth credentials",
    "user not found",
)


def has_auth_marker(message: str | None) -> bool:
    """Check if an error message carries one of the known credential-failure markers."""
    if not isinstance(message, str) or not message:
        return False
    lowered = message.lower()
    return any(marker in lowered for marker in AUTH_ERROR_MARKERS)


def classify_upstream_failure(status_code: int, message: str | None = None) -> ErrorCode:
    """Pick an error code for a non-success upstream response.

    The status code decides when it is conclusive; the message text is only
    consulted for statuses that do not identify a credential problem on their own.
    """
    if status_code in AUTH_STATUS_CODES:
        return ErrorCode.AUTH_ERROR
    if has_auth_marker(message):
        return ErrorCode.AUTH_ERROR
    return ErrorCode.UPSTREAM_ERROR


def is_retryable(code: ErrorCode, status_code: int | None = None) -> bool:
    """Check if a failure is worth retrying."""
    return code == ErrorCode.UPSTREAM_ERROR and status_code in RETRYABLE_STATUS_CODES


class ImageGenerationError(Exception):
    """Raised by providers when an image generation request fails."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int | None = None,
        original_exception: Exception | None = None,
    ):
        super().__init__(message)
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.original_exception = original_exception
        # Provider calls made before this error was given up on
        self.attempts = 1

    @property
    def retryable(self) -> bool:
        return is_retryable(self.error_code, self.status_code)
