"""Outbound access to the Ollama HTTP API.

Responsibilities:
    - Environment-driven configuration (base URL, timeouts)
    - One short-lived HTTPX client per relayed request
    - Translation of transport failures and error statuses into BackendError

Maintains clean separation from the inbound HTTP layer.
"""

from ollama_relay.backend.client import (
    BackendError,
    BackendResponseError,
    BackendStatusError,
    BackendStream,
    BackendTimeoutError,
    BackendUnavailableError,
    OllamaClient,
)
from ollama_relay.backend.config import RelayConfig, get_relay_config

__all__ = [
    "BackendError",
    "BackendResponseError",
    "BackendStatusError",
    "BackendStream",
    "BackendTimeoutError",
    "BackendUnavailableError",
    "OllamaClient",
    "RelayConfig",
    "get_relay_config",
]
