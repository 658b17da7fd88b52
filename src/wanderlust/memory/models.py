"""Data models for the conversation log.

These models define the structure of messages and grounding citations,
independent of the storage backend used. The serialized form uses the
camelCase field names of the persisted record (``groundingChunks``,
``placeAnswerSources``...) so logs written by earlier clients still load.
"""

import json
import time
from collections.abc import Iterable
from enum import Enum
from typing import Annotated, Any, ClassVar, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, TypeAdapter
from uuid_extensions import uuid7


def now_ms() -> int:
    """Current wall-clock time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


def new_message_id() -> str:
    """Generate a fresh, time-ordered message identifier."""
    return str(uuid7())


class Role(str, Enum):
    """Who authored a turn."""

    USER = "user"
    MODEL = "model"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class WebSource(_Frozen):
    uri: str
    title: str


class ReviewSnippet(_Frozen):
    review_text: str = Field(alias="reviewText")


class PlaceAnswerSource(_Frozen):
    review_snippets: tuple[ReviewSnippet, ...] = Field(default=(), alias="reviewSnippets")


class MapsSource(_Frozen):
    uri: str
    title: str
    place_answer_sources: tuple[PlaceAnswerSource, ...] | None = Field(
        default=None, alias="placeAnswerSources"
    )


class WebChunk(_Frozen):
    """A generic web citation."""

    kind: ClassVar[str] = "web"

    web: WebSource


class MapsChunk(_Frozen):
    """A Google Maps place citation."""

    kind: ClassVar[str] = "maps"

    maps: MapsSource


def _chunk_kind(value: Any) -> str | None:
    # Exactly one of "web"/"maps" must be present; anything else fails validation
    if isinstance(value, dict):
        present = {"web", "maps"} & value.keys()
        return present.pop() if len(present) == 1 else None
    return getattr(value, "kind", None)


GroundingChunk = Annotated[
    Union[
        Annotated[WebChunk, Tag("web")],
        Annotated[MapsChunk, Tag("maps")],
    ],
    Discriminator(_chunk_kind),
]


class Message(_Frozen):
    """A single turn in the conversation.

    Once created a message is never modified; the log only grows or is
    cleared wholesale.
    """

    id: str = Field(default_factory=new_message_id, description="Opaque unique identifier")
    role: Role
    text: str = Field(description="Markdown-formatted message text")
    timestamp: int = Field(default_factory=now_ms, description="Creation time in epoch milliseconds")
    grounding_chunks: tuple[GroundingChunk, ...] | None = Field(
        default=None,
        alias="groundingChunks",
        description="Citations attached to a model reply",
    )


_LOG_ADAPTER = TypeAdapter(list[Message])


def serialize_log(messages: Iterable[Message]) -> str:
    """Serialize an ordered message log to its persisted JSON form."""
    payload = [
        message.model_dump(mode="json", by_alias=True, exclude_none=True)
        for message in messages
    ]
    return json.dumps(payload, ensure_ascii=False)


def deserialize_log(raw: str | bytes) -> list[Message]:
    """Parse a persisted log.

    Raises:
        pydantic.ValidationError: If the data is not valid JSON or does not
            describe a list of messages.
    """
    return _LOG_ADAPTER.validate_json(raw)
