"""FastAPI endpoints for the Ollama relay.

HTTP and streaming routes with async request handling.
Supports Server-Sent Events for real-time generate and chat output.

Endpoints:
    - GET /health: Service health status
    - POST /relay-action: Unified generate, chat, pull and delete actions
    - GET /models: Locally available Ollama models
"""

from ollama_relay.api.app import app, create_app

__all__ = ["app", "create_app"]
