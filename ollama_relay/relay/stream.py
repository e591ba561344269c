"""Streaming relay from Ollama NDJSON output to Server-Sent Events.

Ollama streams one complete JSON object per line. Each line that carries
output text is forwarded verbatim as one SSE ``data:`` event; the chunk
with ``done`` set ends the stream with the ``[DONE]`` sentinel.
"""

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import aclosing
from enum import Enum

import httpx
from pydantic import ValidationError

from ollama_relay.backend.client import BackendStream
from ollama_relay.models.schemas import BackendStreamChunk

logger = logging.getLogger(__name__)

DONE_EVENT = "data: [DONE]\n\n"
TRUNCATED_COMMENT = ": backend stream ended before completion\n\n"

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    "X-Accel-Buffering": "no",
}


class StreamKind(str, Enum):
    """Which streaming endpoint produced the chunks."""

    GENERATE = "generate"
    CHAT = "chat"


def format_event(data: str) -> str:
    """Frame a payload as a single SSE data event."""
    return f"data: {data}\n\n"


def parse_chunk(line: str) -> BackendStreamChunk | None:
    """Parse one backend line, returning None if it is not a valid chunk."""
    try:
        return BackendStreamChunk.model_validate_json(line)
    except ValidationError:
        logger.warning(f"Skipping malformed backend chunk: {line}")
        return None


def chunk_content(chunk: BackendStreamChunk, kind: StreamKind) -> str:
    """Return the output fragment a chunk carries for the given endpoint."""
    if kind is StreamKind.CHAT:
        return chunk.message.content if chunk.message else ""
    return chunk.response or ""


async def relay_events(lines: AsyncIterator[str], kind: StreamKind) -> AsyncIterator[str]:
    """Translate backend lines into SSE events, in order.

    Args:
        lines: Backend body, one line per item.
        kind: Endpoint the lines came from.

    Yields:
        One event per line with output content, then exactly one ``[DONE]``.
    """
    try:
        async for line in lines:
            if not line.strip():
                continue

            chunk = parse_chunk(line)
            if chunk is None:
                continue

            if chunk.error:
                logger.warning(f"Ollama reported an error mid-stream: {chunk.error}")

            if chunk_content(chunk, kind):
                yield format_event(line)

            if chunk.done:
                yield DONE_EVENT
                return
    except httpx.TransportError as e:
        logger.warning(f"Lost Ollama {kind.value} stream mid-response: {e!r}")
    else:
        logger.warning(f"Ollama {kind.value} stream ended without a done chunk")

    yield TRUNCATED_COMMENT
    yield DONE_EVENT


async def relay_backend_stream(
    stream: BackendStream,
    kind: StreamKind,
    is_disconnected: Callable[[], Awaitable[bool]] | None = None,
) -> AsyncIterator[str]:
    """Relay an open backend stream and always close it afterwards.

    Stops early when ``is_disconnected`` reports the client has gone, or when
    the consumer stops iterating (cancellation or ``aclose``).

    Args:
        stream: Open Ollama response.
        kind: Endpoint the stream came from.
        is_disconnected: Optional check for a departed client.

    Yields:
        SSE-framed events.
    """
    try:
        async with aclosing(relay_events(stream.lines(), kind)) as events:
            async for event in events:
                if is_disconnected is not None and await is_disconnected():
                    logger.info(f"Client disconnected, abandoning Ollama {kind.value} stream")
                    break
                yield event
    finally:
        await stream.aclose()
