"""Server-Sent-Events relay for Ollama's streaming endpoints.

Responsibilities:
    - Line-by-line parsing of Ollama NDJSON chunks
    - Forwarding output-bearing lines verbatim as SSE events
    - Terminal ``[DONE]`` sentinel on completion or premature end
    - Closing the backend stream on completion or client disconnect
"""

from ollama_relay.relay.stream import (
    DONE_EVENT,
    SSE_HEADERS,
    StreamKind,
    relay_backend_stream,
    relay_events,
)

__all__ = ["DONE_EVENT", "SSE_HEADERS", "StreamKind", "relay_backend_stream", "relay_events"]
