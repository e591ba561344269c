"""Relay configuration with environment variable loading.

Pydantic-based configuration for the outbound Ollama connection.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Load environment variables from .env file
load_dotenv()


class RelayConfig(BaseModel):
    """Configuration for talking to the Ollama backend.

    Attributes:
        ollama_base_url: Base address of the Ollama HTTP API.
        stream_timeout: Seconds to wait on generate/chat reads.
        model_action_timeout: Seconds to wait on pull/delete calls.
        list_timeout: Seconds to wait on the model listing call.
    """

    # Environment-provided defaults go through the same validation
    model_config = ConfigDict(validate_default=True)

    ollama_base_url: str = Field(
        default_factory=lambda: os.getenv("OLLAMA_BASE_URL", "http://localhost:11434"),
        description="Ollama API base URL",
    )
    stream_timeout: float = Field(
        default_factory=lambda: float(os.getenv("RELAY_STREAM_TIMEOUT", "300")),
        gt=0,
        description="Timeout for streaming generate/chat requests",
    )
    model_action_timeout: float = Field(
        default_factory=lambda: float(os.getenv("RELAY_MODEL_ACTION_TIMEOUT", "300")),
        gt=0,
        description="Timeout for pull/delete requests (model downloads can take minutes)",
    )
    list_timeout: float = Field(
        default_factory=lambda: float(os.getenv("RELAY_LIST_TIMEOUT", "10")),
        gt=0,
        description="Timeout for listing local models",
    )

    @field_validator("ollama_base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an http(s) URL and drop any trailing slash."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError(
                "OLLAMA_BASE_URL must be an http:// or https:// URL"
            )
        return v.rstrip("/")


def get_relay_config() -> RelayConfig:
    """Create relay configuration from environment.

    Returns:
        Configured RelayConfig instance.

    Raises:
        ValueError: If the base URL or a timeout is invalid.
    """
    return RelayConfig()
