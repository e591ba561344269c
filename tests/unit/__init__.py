"""Unit tests for individual components in isolation.

Coverage:
    - models/: Action union, chunk and model list validation
    - backend/: Configuration and Ollama client error translation
    - relay/: Line-by-line SSE translation and stream cleanup

Uses the fake backend or plain async iterators instead of a live Ollama.
Leverages pytest-check for multiple assertions per test.
"""
