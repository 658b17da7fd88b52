"""
WanderLust: an AI travel guide you chat with from the terminal.

Replies come from Google Gemini with Google Maps grounding; the
conversation is kept locally and survives restarts.
"""

__version__ = "0.1.0"

from .conversation import ConversationClient, ConversationReply, SessionController
from .locale import Language
from .memory import (
    GroundingChunk,
    MapsChunk,
    Message,
    MessageStore,
    Role,
    Session,
    WebChunk,
    create_key_value_backend,
)

__all__ = [
    "ConversationClient",
    "ConversationReply",
    "GroundingChunk",
    "Language",
    "MapsChunk",
    "Message",
    "MessageStore",
    "Role",
    "Session",
    "SessionController",
    "WebChunk",
    "create_key_value_backend",
]
