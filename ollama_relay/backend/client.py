"""HTTPX client for the Ollama HTTP API.

Each call builds its own ``httpx.AsyncClient`` so concurrent requests never
share connection state. Streaming calls hand the open client and response
to a ``BackendStream``, which the caller must close.

Transport failures and non-success statuses are translated into
``BackendError`` subclasses carrying the HTTP status the relay answers with.
"""

import logging
from collections.abc import AsyncIterator
from typing import Any

import httpx
from fastapi import status
from pydantic import ValidationError

from ollama_relay.backend.config import RelayConfig, get_relay_config
from ollama_relay.models.schemas import ModelList

logger = logging.getLogger(__name__)

GENERATE_PATH = "/api/generate"
CHAT_PATH = "/api/chat"
PULL_PATH = "/api/pull"
DELETE_PATH = "/api/delete"
TAGS_PATH = "/api/tags"


class BackendError(Exception):
    """Base class for failures talking to Ollama."""

    status_code: int = status.HTTP_502_BAD_GATEWAY


class BackendUnavailableError(BackendError):
    """Raised when Ollama cannot be reached."""


class BackendTimeoutError(BackendError):
    """Raised when Ollama does not answer within the configured timeout."""

    status_code = status.HTTP_504_GATEWAY_TIMEOUT


class BackendResponseError(BackendError):
    """Raised when Ollama answers with a body the relay cannot decode."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class BackendStatusError(BackendError):
    """Raised when Ollama answers with a non-success status.

    Attributes:
        backend_status: Status code returned by Ollama.
        body: Response body text, stripped.
    """

    def __init__(self, context: str, backend_status: int, body: str) -> None:
        self.backend_status = backend_status
        self.body = body.strip()
        # Error statuses pass through; anything else outside 2xx is a gateway error
        if backend_status >= 400:
            self.status_code = backend_status
        super().__init__(
            f"Ollama API error{context}: Status {backend_status}, Message: {self.body}"
        )


class BackendStream:
    """An open streaming response from Ollama.

    Owns both the response and the client that produced it.
    """

    def __init__(self, client: httpx.AsyncClient, response: httpx.Response) -> None:
        self._client = client
        self.response = response

    def lines(self) -> AsyncIterator[str]:
        """Iterate the response body one line at a time."""
        return self.response.aiter_lines()

    async def aclose(self) -> None:
        """Close the backend response and its client. Safe to call twice."""
        await self.response.aclose()
        await self._client.aclose()


class OllamaClient:
    """Relay-side client for the Ollama endpoints.

    Args:
        config: Optional relay configuration. Loads from environment if not provided.
        transport: Optional HTTPX transport, used to substitute the network in tests.
    """

    def __init__(
        self,
        config: RelayConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or get_relay_config()
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._config.ollama_base_url

    def _new_client(self, timeout: float) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout),
            transport=self._transport,
        )

    def _translate_transport_error(self, exc: httpx.TransportError, path: str) -> BackendError:
        if isinstance(exc, httpx.TimeoutException):
            logger.error(f"Timed out waiting for Ollama {path}: {exc!r}")
            return BackendTimeoutError(
                f"Timed out waiting for Ollama at {self.base_url}. {exc}"
            )
        logger.error(f"Error connecting to Ollama {path}: {exc!r}")
        return BackendUnavailableError(
            f"Could not connect to Ollama. Please ensure Ollama is running on "
            f"{self.base_url}. {exc}"
        )

    async def open_stream(self, path: str, payload: dict[str, Any]) -> BackendStream:
        """Start a streaming request and wait for the response headers.

        Args:
            path: Ollama endpoint path (generate or chat).
            payload: JSON request body.

        Returns:
            The open stream, positioned before the first body line.

        Raises:
            BackendUnavailableError: If Ollama cannot be reached.
            BackendTimeoutError: If Ollama does not respond in time.
            BackendStatusError: If Ollama answers with a non-success status.
        """
        client = self._new_client(self._config.stream_timeout)
        try:
            request = client.build_request("POST", path, json=payload)
            response = await client.send(request, stream=True)
        except httpx.TransportError as e:
            await client.aclose()
            raise self._translate_transport_error(e, path) from e

        if not response.is_success:
            try:
                body = await response.aread()
            finally:
                await response.aclose()
                await client.aclose()
            text = body.decode("utf-8", errors="replace")
            logger.warning(
                f"Ollama {path} returned non-success status: {response.status_code}, body: {text}"
            )
            raise BackendStatusError("", response.status_code, text)

        return BackendStream(client, response)

    async def _request(
        self,
        method: str,
        path: str,
        timeout: float,
        payload: dict[str, Any] | None = None,
    ) -> httpx.Response:
        async with self._new_client(timeout) as client:
            try:
                return await client.request(method, path, json=payload)
            except httpx.TransportError as e:
                raise self._translate_transport_error(e, path) from e

    async def _model_action(
        self, method: str, path: str, payload: dict[str, Any], context: str
    ) -> httpx.Response:
        response = await self._request(
            method, path, self._config.model_action_timeout, payload
        )
        if not response.is_success:
            logger.warning(
                f"Ollama {path} returned non-success status: "
                f"{response.status_code}, body: {response.text}"
            )
            raise BackendStatusError(context, response.status_code, response.text)
        return response

    async def pull_model(self, payload: dict[str, Any]) -> httpx.Response:
        """Ask Ollama to download a model. Blocks until the download finishes."""
        return await self._model_action("POST", PULL_PATH, payload, " pulling model")

    async def delete_model(self, payload: dict[str, Any]) -> httpx.Response:
        """Ask Ollama to remove a model."""
        return await self._model_action("DELETE", DELETE_PATH, payload, " deleting model")

    async def list_models(self) -> ModelList:
        """Fetch the locally available models.

        Returns:
            Model names reported by /api/tags.

        Raises:
            BackendResponseError: If the body is not a valid tags response.
        """
        response = await self._request("GET", TAGS_PATH, self._config.list_timeout)
        if not response.is_success:
            logger.warning(
                f"Ollama {TAGS_PATH} returned non-success status: "
                f"{response.status_code}, body: {response.text}"
            )
            raise BackendStatusError(" fetching models", response.status_code, response.text)

        try:
            return ModelList.model_validate_json(response.content)
        except ValidationError as e:
            logger.error(f"Error parsing Ollama tags response: {e}")
            raise BackendResponseError("Error parsing Ollama models response.") from e
