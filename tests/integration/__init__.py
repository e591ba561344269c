"""Integration tests for components working together as a system.

Coverage:
    - POST /relay-action streaming for generate and chat
    - POST /relay-action pull and delete pass-through
    - GET /models listing
    - Request validation and backend error mapping

Uses the real FastAPI app over ASGITransport with Ollama replaced by
httpx.MockTransport.
"""
