"""In-process stand-in for the Ollama HTTP API.

Plugged into OllamaClient through httpx.MockTransport, so tests need no
network or running Ollama server.
"""

import json
from collections.abc import Callable
from typing import Any

import httpx

OLLAMA_URL = "http://ollama.test"

Handler = Callable[[httpx.Request], httpx.Response]


def ndjson(*lines: str) -> bytes:
    """Join raw lines the way Ollama streams them."""
    return "".join(f"{line}\n" for line in lines).encode()


def ndjson_response(*lines: str) -> httpx.Response:
    """Build a successful streaming response from raw lines."""
    return httpx.Response(
        200,
        content=ndjson(*lines),
        headers={"Content-Type": "application/x-ndjson"},
    )


def sse_data(text: str) -> list[str]:
    """Extract the payload of every ``data:`` event in an SSE body."""
    return [
        line.removeprefix("data: ")
        for line in text.split("\n")
        if line.startswith("data: ")
    ]


class FakeOllama:
    """Records requests and answers them from per-endpoint handlers.

    Unregistered endpoints answer 404 like Ollama does.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._handlers: dict[tuple[str, str], Handler] = {}

    def on(self, method: str, path: str, answer: httpx.Response | Handler) -> None:
        if isinstance(answer, httpx.Response):
            # Responses are single use, so hand out a copy per request
            self._handlers[(method, path)] = lambda request: httpx.Response(
                answer.status_code, headers=answer.headers, content=answer.content
            )
        else:
            self._handlers[(method, path)] = answer

    def fail(self, method: str, path: str, error: type[httpx.TransportError]) -> None:
        def raise_error(request: httpx.Request) -> httpx.Response:
            raise error("simulated failure", request=request)

        self._handlers[(method, path)] = raise_error

    def last_json(self) -> Any:
        return json.loads(self.requests[-1].content)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        handler = self._handlers.get((request.method, request.url.path))
        if handler is None:
            return httpx.Response(404, text="404 page not found")
        return handler(request)



class TrackingStream(httpx.AsyncByteStream):
    """Response body that records whether the relay closed it."""

    def __init__(self, *chunks: bytes) -> None:
        self._chunks = chunks
        self.closed = False

    async def __aiter__(self):
        for chunk in self._chunks:
            yield chunk

    async def aclose(self) -> None:
        self.closed = True
