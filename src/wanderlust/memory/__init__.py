"""Conversation log persistence for wanderlust.

Provides the ordered message store and the snapshot backends it
writes through.
"""

from .base import KeyValueBackend
from .factory import create_key_value_backend
from .models import (
    GroundingChunk,
    MapsChunk,
    MapsSource,
    Message,
    PlaceAnswerSource,
    ReviewSnippet,
    Role,
    WebChunk,
    WebSource,
    deserialize_log,
    serialize_log,
)
from .session import DEFAULT_SESSION_KEY, Session, validate_session_key
from .store import MessageStore

__all__ = [
    "DEFAULT_SESSION_KEY",
    "GroundingChunk",
    "KeyValueBackend",
    "MapsChunk",
    "MapsSource",
    "Message",
    "MessageStore",
    "PlaceAnswerSource",
    "ReviewSnippet",
    "Role",
    "Session",
    "WebChunk",
    "WebSource",
    "create_key_value_backend",
    "deserialize_log",
    "serialize_log",
    "validate_session_key",
]
