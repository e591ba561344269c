"""Ollama Relay - streaming HTTP relay between a browser UI and Ollama.

Combines FastAPI for the inbound HTTP surface, HTTPX for the outbound
Ollama calls, and Pydantic for request and chunk validation.

Components:
    - api: Unified action endpoint, model listing and SSE responses
    - backend: Ollama HTTP client and configuration
    - relay: NDJSON to Server-Sent-Events translation
    - models: Request/response schemas
"""

__version__ = "0.1.0"
