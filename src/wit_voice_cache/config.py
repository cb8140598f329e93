"""
Configuration for the voice service and the local cache location.

Values come from the environment, optionally seeded from a ``.env``
file in the working directory.
"""

import logging
import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, field_validator

from .errors import ConfigurationError

logger = logging.getLogger("wit-voice-cache.config")

DEFAULT_API_HOST = "https://api.wit.ai"
DEFAULT_API_VERSION = "20220622"
DEFAULT_TIMEOUT = 10.0


class WitConfiguration(BaseModel):
    """Connection settings for the Wit.ai voice endpoint."""

    server_token: str = Field(default="", description="Wit app server access token")
    api_host: str = Field(default=DEFAULT_API_HOST, description="Base URL of the Wit API")
    api_version: str = Field(default=DEFAULT_API_VERSION, description="API version date (v=...)")
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, description="Request timeout in seconds")

    @field_validator("api_host")
    @classmethod
    def _strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def voices_url(self) -> str:
        return f"{self.api_host}/voices"


class CacheSettings(BaseModel):
    """Where the voice snapshot lives."""

    project_dir: Path = Field(default_factory=Path.cwd, description="Project root directory")


def load_configuration() -> tuple[WitConfiguration, CacheSettings]:
    """Build configuration from environment variables.

    Reads ``WIT_SERVER_TOKEN``, ``WIT_API_HOST``, ``WIT_API_VERSION``,
    ``WIT_REQUEST_TIMEOUT`` and ``WIT_PROJECT_DIR``.

    Returns:
        Tuple of (service configuration, cache settings).

    Raises:
        ConfigurationError: If WIT_REQUEST_TIMEOUT is not a positive number.
    """
    if not load_dotenv(find_dotenv(usecwd=True)):
        logger.debug(".env file not found, using process environment only")

    raw_timeout = os.getenv("WIT_REQUEST_TIMEOUT", "")
    try:
        timeout = float(raw_timeout) if raw_timeout.strip() else DEFAULT_TIMEOUT
    except ValueError:
        raise ConfigurationError(
            f"WIT_REQUEST_TIMEOUT must be a number of seconds, got {raw_timeout!r}"
        ) from None
    if not timeout > 0:
        raise ConfigurationError(
            f"WIT_REQUEST_TIMEOUT must be greater than 0, got {raw_timeout!r}"
        )

    wit = WitConfiguration(
        server_token=os.getenv("WIT_SERVER_TOKEN", ""),
        api_host=os.getenv("WIT_API_HOST", DEFAULT_API_HOST),
        api_version=os.getenv("WIT_API_VERSION", DEFAULT_API_VERSION),
        timeout=timeout,
    )
    settings = CacheSettings(
        project_dir=Path(os.getenv("WIT_PROJECT_DIR", "") or Path.cwd()).resolve(),
    )
    logger.debug("Voice cache project dir: %s", settings.project_dir)
    return wit, settings
