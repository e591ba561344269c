from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class ChatMessage(BaseModel):
    """A single chat message in the conversation.

    Attributes:
        role: The speaker identifier (user, assistant, or system).
        content: The message text.
    """

    role: str
    content: str


class _ActionBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    model: str = Field(..., min_length=1)

    def to_backend_payload(self) -> dict[str, Any]:
        raise NotImplementedError


class GenerateAction(_ActionBase):
    """Single prompt completion, streamed from /api/generate."""

    action_type: Literal["generate"] = Field(alias="actionType")
    prompt: str

    def to_backend_payload(self) -> dict[str, Any]:
        return {"model": self.model, "prompt": self.prompt, "stream": True}


class ChatAction(_ActionBase):
    """Multi-turn chat completion, streamed from /api/chat."""

    action_type: Literal["chat"] = Field(alias="actionType")
    messages: list[ChatMessage] = Field(..., min_length=1)

    def to_backend_payload(self) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": [message.model_dump() for message in self.messages],
            "stream": True,
        }


class PullAction(_ActionBase):
    """Download a model into the backend."""

    action_type: Literal["pull"] = Field(alias="actionType")

    def to_backend_payload(self) -> dict[str, Any]:
        # Ollama names the model "name" for model management calls
        return {"name": self.model}


class DeleteAction(_ActionBase):
    """Remove a model from the backend."""

    action_type: Literal["delete"] = Field(alias="actionType")

    def to_backend_payload(self) -> dict[str, Any]:
        return {"name": self.model}


RelayAction = Annotated[
    GenerateAction | ChatAction | PullAction | DeleteAction,
    Field(discriminator="action_type"),
]

relay_action_adapter = TypeAdapter(RelayAction)


class MessageFragment(BaseModel):
    """Partial assistant message carried by a chat chunk."""

    role: str | None = None
    content: str = ""


class BackendStreamChunk(BaseModel):
    """One line of Ollama's newline-delimited streaming output.

    Attributes:
        response: Text fragment emitted by /api/generate.
        message: Message fragment emitted by /api/chat.
        done: Whether the backend finished producing output.
        error: Error text reported by the backend mid-stream.
    """

    model_config = ConfigDict(extra="ignore")

    response: str | None = None
    message: MessageFragment | None = None
    done: bool = False
    error: str | None = None


class ModelInfo(BaseModel):
    """A locally available model."""

    model_config = ConfigDict(extra="ignore")

    name: str


class ModelList(BaseModel):
    """Response shape of GET /models, mirroring Ollama's /api/tags."""

    model_config = ConfigDict(extra="ignore")

    models: list[ModelInfo] = Field(default_factory=list)
