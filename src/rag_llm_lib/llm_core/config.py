"""Environment-backed settings shared by the provider implementations."""

import os
from typing import Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field

from .logger import get_logger

logger = get_logger(__name__)


class ProviderSettings(BaseModel):
    """
    Process-level provider settings. Per-agent settings live in ``LLMConfig``.

    Attributes:
        gcp_project_id: Google Cloud project used by the Vertex AI provider.
        gcp_region: Vertex AI location.
        openai_base_url: Override for the OpenAI API base URL.
        anthropic_base_url: Base URL of the Anthropic Messages API.
        anthropic_version: Value of the ``anthropic-version`` header.
        request_timeout: Timeout in seconds for a single HTTP request.
        stream_buffer_size: Fragments buffered between a stream producer and its consumer.
    """

    gcp_project_id: Optional[str] = None
    gcp_region: str = "us-central1"
    openai_base_url: Optional[str] = None
    anthropic_base_url: str = "https://api.anthropic.com"
    anthropic_version: str = "2023-06-01"
    request_timeout: float = 120.0
    stream_buffer_size: int = Field(default=64, ge=1)

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "ProviderSettings":
        """Build settings from environment variables.

        Args:
            load_env_file: Load a ``.env`` file (searched upwards from the working directory) first.

        Returns:
            The settings.
        """
        if load_env_file:
            env_file = find_dotenv(usecwd=True)
            if env_file:
                logger.debug(f"Loading .env from: {env_file}")
                load_dotenv(env_file)

        values = {
            "gcp_project_id": os.getenv("GCP_PROJECT_ID") or None,
            "gcp_region": os.getenv("GCP_REGION"),
            "openai_base_url": os.getenv("OPENAI_BASE_URL") or None,
            "anthropic_base_url": os.getenv("ANTHROPIC_BASE_URL"),
        }
        return cls(**{k: v for k, v in values.items() if v is not None})
