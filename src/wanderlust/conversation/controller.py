"""Orchestrates one user turn from keystroke to persisted model reply."""

import logging
from collections.abc import Callable
from enum import Enum

from ..locale import CLEARED_TEXT, GREETING_TEXT, Language, quick_replies
from ..memory.models import Message, Role, new_message_id, now_ms
from ..memory.store import MessageStore
from .client import ConversationClient

logger = logging.getLogger(__name__)


class TurnState(str, Enum):
    IDLE = "idle"
    SENDING = "sending"


class SessionController:
    """Owns the send cycle, language toggle and conversation reset.

    A turn moves IDLE -> SENDING -> IDLE. While a request is in flight
    further sends are ignored, which is the only backpressure there is.
    """

    def __init__(
        self,
        store: MessageStore,
        client: ConversationClient,
        clock: Callable[[], int] = now_ms,
    ):
        self._store = store
        self._client = client
        self._clock = clock
        self._state = TurnState.IDLE
        self._message_callback: Callable[[Message], None] | None = None

    def set_message_callback(self, callback: Callable[[Message], None] | None) -> None:
        """Register a callback invoked after every message is appended."""
        self._message_callback = callback

    @property
    def state(self) -> TurnState:
        return self._state

    @property
    def is_sending(self) -> bool:
        return self._state is TurnState.SENDING

    @property
    def language(self) -> Language:
        return self._store.session.language

    @property
    def messages(self) -> tuple[Message, ...]:
        return self._store.messages

    @property
    def store(self) -> MessageStore:
        return self._store

    def quick_replies(self) -> tuple[str, ...]:
        return quick_replies(self.language)

    async def start(self) -> tuple[Message, ...]:
        """Connect the store and restore the saved conversation.

        Seeds the greeting when nothing usable was saved.
        """
        await self._store.connect()
        loaded = await self._store.load()
        if not loaded:
            await self._append(self._new_message(Role.MODEL, GREETING_TEXT))
        return self.messages

    async def close(self) -> None:
        await self._store.disconnect()

    async def send(self, text: str) -> Message | None:
        """Run one full turn.

        Returns:
            The appended model message, or None when the send was rejected
            (blank text, or a turn already in flight).
        """
        text = (text or "").strip()
        if not text or self.is_sending:
            return None

        self._state = TurnState.SENDING
        try:
            user_message = self._new_message(Role.USER, text)
            await self._append(user_message)

            reply = await self._client.send(self._store.messages, text, self.language)

            model_message = self._new_message(
                Role.MODEL, reply.text, grounding_chunks=reply.grounding_chunks
            )
            await self._append(model_message)
            return model_message
        finally:
            self._state = TurnState.IDLE

    def toggle_language(self) -> Language:
        """Switch to the other language for subsequent turns."""
        session = self._store.session
        session.language = session.language.toggled()
        logger.debug("Language switched to %s", session.language.value)
        return session.language

    async def clear_conversation(self, confirmed: bool) -> bool:
        """Wipe the conversation and reseed a greeting.

        Args:
            confirmed: Explicit user confirmation; without it nothing happens.

        Returns:
            True if the conversation was cleared.
        """
        if not confirmed:
            return False
        await self._store.clear()
        await self._append(self._new_message(Role.MODEL, CLEARED_TEXT[self.language]))
        return True

    async def _append(self, message: Message) -> None:
        await self._store.append(message)
        if self._message_callback is not None:
            self._message_callback(message)

    def _new_message(self, role: Role, text: str, **fields) -> Message:
        # Keep timestamps non-decreasing even if the wall clock steps back
        timestamp = self._clock()
        last = self._store.session.last_message
        if last is not None and timestamp < last.timestamp:
            timestamp = last.timestamp
        return Message(id=new_message_id(), role=role, text=text, timestamp=timestamp, **fields)
