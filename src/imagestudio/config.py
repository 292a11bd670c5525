"""Runtime configuration for imagestudio."""

import os
from typing import Optional

from pydantic import BaseModel, Field

DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_MODEL = "google/imagen-3.0"
DEFAULT_APP_URL = "http://localhost:8000"
DEFAULT_APP_TITLE = "AI Image Generator"


class GeneratorSettings(BaseModel):
    """Settings shared by the provider and the gallery shell.

    Build one explicitly (usually with `from_env`) and pass it to whatever
    needs it; nothing in the package reads the environment on its own.
    """

    api_key: Optional[str] = Field(None, description="OpenRouter API key")
    base_url: str = Field(DEFAULT_BASE_URL, description="Base URL of the image generation proxy")
    model: str = Field(DEFAULT_MODEL, description="Upstream model identifier")
    app_url: str = Field(DEFAULT_APP_URL, description="Sent as HTTP-Referer to identify the app")
    app_title: str = Field(DEFAULT_APP_TITLE, description="Sent as X-Title to identify the app")
    timeout_seconds: Optional[float] = Field(None, gt=0, description="Per-request timeout (None = wait indefinitely)")
    max_attempts: int = Field(1, ge=1, le=5, description="Provider calls per generation (1 = no retry)")

    @classmethod
    def from_env(cls, **overrides) -> "GeneratorSettings":
        """
        Build settings from environment variables.

        Args:
            **overrides: Explicit values that win over the environment

        Environment:
            API_KEY (or OPENROUTER_API_KEY), IMAGESTUDIO_BASE_URL, IMAGESTUDIO_MODEL,
            IMAGESTUDIO_APP_URL, IMAGESTUDIO_APP_TITLE, IMAGESTUDIO_TIMEOUT_SECONDS,
            IMAGESTUDIO_MAX_ATTEMPTS
        """
        values = {
            "api_key": os.getenv("API_KEY") or os.getenv("OPENROUTER_API_KEY"),
            "base_url": os.getenv("IMAGESTUDIO_BASE_URL"),
            "model": os.getenv("IMAGESTUDIO_MODEL"),
            "app_url": os.getenv("IMAGESTUDIO_APP_URL"),
            "app_title": os.getenv("IMAGESTUDIO_APP_TITLE"),
            "timeout_seconds": os.getenv("IMAGESTUDIO_TIMEOUT_SECONDS"),
            "max_attempts": os.getenv("IMAGESTUDIO_MAX_ATTEMPTS"),
        }
        # Unset variables fall back to field defaults
        values = {key: value for key, value in values.items() if value}
        values.update(overrides)
        return cls(**values)

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key and self.api_key.strip())
