from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Author of a conversation message."""

    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    """Represents a chat message in a conversation."""

    model_config = ConfigDict(frozen=True)

    role: Role = Field(description="Role of the message sender: 'user' or 'assistant'")
    content: str = Field(description="Content of the message")


class ChatRequest(BaseModel):
    """Body of a streaming chat-completions request."""

    model: str = Field(description="Model identifier")
    messages: list[ChatMessage] = Field(description="Conversation history, oldest first")
    stream: bool = Field(default=True, description="Always true; batch replies are not supported")


class ChunkDelta(BaseModel):
    """Incremental fragment carried by one streamed choice."""

    content: str | None = None
    reasoning_content: str | None = None


class ChunkChoice(BaseModel):
    delta: ChunkDelta


class ChatCompletionChunk(BaseModel):
    """One ``data:`` payload of a streaming chat-completions response.

    Only the fields Hambur renders are modelled; anything else the
    provider sends is ignored.
    """

    choices: list[ChunkChoice]
