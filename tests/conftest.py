"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - fake_ollama: In-process stand-in for the Ollama HTTP API
    - relay_config: Configuration pointing at the fake backend
    - ollama_client: OllamaClient wired to the fake backend
    - async_client: HTTPX client for API testing
"""

from collections.abc import AsyncGenerator

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from ollama_relay.api import app
from ollama_relay.api.routes import get_ollama_client
from ollama_relay.backend.client import OllamaClient
from ollama_relay.backend.config import RelayConfig
from tests.fake_ollama import OLLAMA_URL, FakeOllama


@pytest.fixture
def fake_ollama() -> FakeOllama:
    """Return a fresh fake backend with no endpoints registered."""
    return FakeOllama()


@pytest.fixture
def relay_config() -> RelayConfig:
    """Return configuration pointing at the fake backend."""
    return RelayConfig(
        ollama_base_url=OLLAMA_URL,
        stream_timeout=5.0,
        model_action_timeout=5.0,
        list_timeout=1.0,
    )


@pytest.fixture
def ollama_client(fake_ollama: FakeOllama, relay_config: RelayConfig) -> OllamaClient:
    """Return an OllamaClient that talks to the fake backend."""
    return OllamaClient(relay_config, transport=httpx.MockTransport(fake_ollama))


@pytest.fixture
async def async_client(
    fake_ollama: FakeOllama, relay_config: RelayConfig
) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing against the fake backend.

    Yields:
        Configured AsyncClient for making test requests.
    """
    app.dependency_overrides[get_ollama_client] = lambda: OllamaClient(
        relay_config, transport=httpx.MockTransport(fake_ollama)
    )
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.clear()
