"""Conversation session management.

- client.py: the single boundary to the model provider
- controller.py: the send cycle, language toggle and reset
"""

from .client import DEFAULT_TEMPERATURE, ConversationClient, ConversationReply
from .controller import SessionController, TurnState

__all__ = [
    "DEFAULT_TEMPERATURE",
    "ConversationClient",
    "ConversationReply",
    "SessionController",
    "TurnState",
]
