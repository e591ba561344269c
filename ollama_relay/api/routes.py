"""Unified relay endpoint and model listing.

Parses the unified action request, dispatches it to the matching Ollama
endpoint, and answers with either an SSE stream or a plain body.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.responses import StreamingResponse
from pydantic import ValidationError
from starlette.background import BackgroundTask

from ollama_relay.backend.client import CHAT_PATH, GENERATE_PATH, OllamaClient
from ollama_relay.backend.config import RelayConfig, get_relay_config
from ollama_relay.models.schemas import (
    ChatAction,
    DeleteAction,
    GenerateAction,
    ModelList,
    PullAction,
    RelayAction,
    relay_action_adapter,
)
from ollama_relay.relay.stream import SSE_HEADERS, StreamKind, relay_backend_stream

logger = logging.getLogger(__name__)

router = APIRouter(tags=["relay"])


def get_ollama_client(config: RelayConfig = Depends(get_relay_config)) -> OllamaClient:
    """Build a fresh Ollama client for the current request."""
    return OllamaClient(config)


def _describe_validation_error(exc: ValidationError) -> str:
    """Summarise why a relay request was rejected.

    Args:
        exc: The validation error raised while parsing the body.

    Returns:
        A human-readable message for the 400 response.
    """
    error = exc.errors()[0]
    if error["type"] == "union_tag_invalid":
        return f"Unknown action type: {error['ctx']['tag']}"
    if error["type"] == "union_tag_not_found":
        return "Invalid request payload: actionType is required"
    if error["type"] == "json_invalid":
        return f"Invalid request payload: {error['msg']}"

    location = ".".join(str(part) for part in error["loc"])
    if not location:
        return f"Invalid request payload: {error['msg']}"
    return f"Invalid request payload: {location}: {error['msg']}"


async def _parse_action(request: Request) -> RelayAction:
    """Read and validate the unified action body.

    Raises:
        HTTPException: 400 if the body is not a valid relay action.
    """
    body = await request.body()
    try:
        return relay_action_adapter.validate_json(body)
    except ValidationError as e:
        detail = _describe_validation_error(e)
        logger.warning(f"Rejected relay request: {detail}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
        ) from e


async def _stream_response(
    request: Request,
    client: OllamaClient,
    path: str,
    kind: StreamKind,
    action: GenerateAction | ChatAction,
) -> StreamingResponse:
    # Errors raised here happen before any event is sent
    stream = await client.open_stream(path, action.to_backend_payload())

    return StreamingResponse(
        relay_backend_stream(stream, kind, request.is_disconnected),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
        background=BackgroundTask(stream.aclose),
    )


@router.post("/relay-action")
async def relay_action(
    request: Request,
    client: OllamaClient = Depends(get_ollama_client),
) -> Response:
    """Relay a generate, chat, pull or delete action to Ollama.

    Generate and chat answer with ``text/event-stream``: one ``data:`` event
    per backend chunk with output, then ``data: [DONE]``. Pull and delete
    answer with Ollama's response body as plain text.

    Raises:
        400: Malformed JSON, unknown actionType or missing fields.
        502: Ollama unreachable.
        504: Ollama timed out.
        4xx/5xx: Status returned by Ollama.
    """
    action = await _parse_action(request)
    logger.info(f"Relaying {action.action_type} action for model {action.model}")

    match action:
        case GenerateAction():
            return await _stream_response(
                request, client, GENERATE_PATH, StreamKind.GENERATE, action
            )
        case ChatAction():
            return await _stream_response(
                request, client, CHAT_PATH, StreamKind.CHAT, action
            )
        case PullAction():
            response = await client.pull_model(action.to_backend_payload())
        case DeleteAction():
            response = await client.delete_model(action.to_backend_payload())

    return Response(
        content=response.content,
        status_code=response.status_code,
        media_type="text/plain",
    )


@router.get("/models", response_model=ModelList)
async def list_models(client: OllamaClient = Depends(get_ollama_client)) -> ModelList:
    """List the models available in Ollama.

    Returns:
        ``{"models": [{"name": ...}, ...]}``
    """
    return await client.list_models()
