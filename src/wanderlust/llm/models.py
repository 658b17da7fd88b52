from pydantic import BaseModel, ConfigDict, Field

from ..memory.models import GroundingChunk


class ChatMessage(BaseModel):
    """Represents a chat message in a conversation."""

    model_config = ConfigDict(frozen=True)

    role: str = Field(description="Role of the message sender: 'system', 'user' or 'model'")
    content: str = Field(description="Content of the message")


class LLMResponse(BaseModel):
    """Response from an LLM provider."""

    model_config = ConfigDict(frozen=True)

    content: str = Field(description="Generated text content")
    model: str = Field(description="Model that generated the response")
    usage: dict[str, int] | None = Field(
        default=None,
        description="Token usage information"
    )
    grounding_chunks: tuple[GroundingChunk, ...] | None = Field(
        default=None,
        description="Citations returned by the grounding tool, if any"
    )
