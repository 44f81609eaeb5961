"""Client configuration with environment variable loading.

Pydantic-based configuration for the chat client.
Only the backend base address is required in practice; everything else has
sensible defaults.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Load environment variables from .env file
load_dotenv()


class ClientConfig(BaseModel):
    """Configuration for the StratSync chat client.

    Attributes:
        api_base_url: Base address of the StratSync backend.
        request_timeout: Seconds to wait for a backend response.
        artifact_dir: Directory for summary documents (None for system temp).
        title: Page and window title.
    """

    model_config = ConfigDict(validate_default=True)

    api_base_url: str = Field(
        default_factory=lambda: os.getenv("API_BASE_URL", "http://localhost:8000"),
        description="Backend base URL",
    )
    request_timeout: float = Field(
        default_factory=lambda: os.getenv("REQUEST_TIMEOUT", "120"),
        gt=0.0,
        le=600.0,
        description="Backend request timeout in seconds",
    )
    artifact_dir: Path | None = Field(
        default_factory=lambda: os.getenv("SUMMARY_ARTIFACT_DIR") or None,
        description="Where summary documents are written (None for system temp)",
    )
    title: str = Field(
        default_factory=lambda: os.getenv("APP_TITLE", "StratSync"),
        description="Application title",
    )

    @field_validator("api_base_url")
    @classmethod
    def validate_api_base_url(cls, v: str) -> str:
        """Require an http(s) URL and drop any trailing slash."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError(
                "API_BASE_URL must start with http:// or https://"
            )
        return v.rstrip("/")


def get_client_config() -> ClientConfig:
    """Create client configuration from environment.

    Returns:
        Configured ClientConfig instance.

    Raises:
        ValueError: If API_BASE_URL is not an http(s) URL.
    """
    return ClientConfig()
