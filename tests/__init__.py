"""Test package for Ollama Relay.

Unit tests for isolated logic and integration tests for the HTTP surface.

Structure:
    - unit/: Schemas, configuration, backend client and relay core
    - integration/: FastAPI app driven end to end
    - fake_ollama.py: In-process Ollama stand-in used by both

Leverages pytest with pytest-asyncio and pytest-check for soft assertions.
"""
