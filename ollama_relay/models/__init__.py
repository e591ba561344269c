"""Pydantic models for relay requests, backend chunks and responses.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - RelayAction: Tagged union of generate, chat, pull and delete actions
    - ChatMessage: Individual message in a conversation
    - BackendStreamChunk: One line of Ollama's streaming output
    - ModelList: Locally available models
"""

from ollama_relay.models.schemas import (
    BackendStreamChunk,
    ChatAction,
    ChatMessage,
    DeleteAction,
    GenerateAction,
    MessageFragment,
    ModelInfo,
    ModelList,
    PullAction,
    RelayAction,
    relay_action_adapter,
)

__all__ = [
    "BackendStreamChunk",
    "ChatAction",
    "ChatMessage",
    "DeleteAction",
    "GenerateAction",
    "MessageFragment",
    "ModelInfo",
    "ModelList",
    "PullAction",
    "RelayAction",
    "relay_action_adapter",
]
