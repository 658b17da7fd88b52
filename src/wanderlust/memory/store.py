"""Durable, ordered message log.

The store is the single writer for a session's log. Every mutation
snapshots the whole log to the backend under the session key; there is
no incremental on-disk append.
"""

import logging
import sqlite3

from pydantic import ValidationError

from .base import KeyValueBackend
from .models import Message, deserialize_log, serialize_log
from .session import Session

logger = logging.getLogger(__name__)


class MessageStore:
    """Ordered container of Messages backed by a snapshot backend."""

    def __init__(self, backend: KeyValueBackend, session: Session):
        self._backend = backend
        self._session = session

    @property
    def session(self) -> Session:
        return self._session

    @property
    def backend(self) -> KeyValueBackend:
        return self._backend

    @property
    def messages(self) -> tuple[Message, ...]:
        """Read-only snapshot of the log in conversation order."""
        return tuple(self._session.messages)

    def __len__(self) -> int:
        return len(self._session.messages)

    async def connect(self) -> None:
        await self._backend.connect()

    async def disconnect(self) -> None:
        await self._backend.disconnect()

    async def load(self) -> list[Message] | None:
        """Load the persisted log into the session.

        Returns:
            The loaded messages, or None if nothing usable is stored. Corrupt
            data is reported to the log and treated as absent.
        """
        try:
            raw = await self._backend.get(self._session.key)
            if raw is None:
                return None
            messages = deserialize_log(raw)
        except ValidationError as e:
            logger.warning(
                "Discarding unreadable conversation log '%s': %s",
                self._session.key,
                e.errors(include_url=False)[:3],
            )
            return None
        except ValueError as e:
            # Undecodable bytes on disk (UnicodeDecodeError)
            logger.warning("Discarding unreadable conversation log '%s': %s", self._session.key, e)
            return None

        self._session.messages = list(messages)
        logger.debug("Loaded %d message(s) from '%s'", len(messages), self._session.key)
        return list(messages)

    async def append(self, message: Message) -> None:
        """Add a message to the tail and persist the full log."""
        self._session.messages.append(message)
        await self._persist()

    async def clear(self) -> None:
        """Empty the log and remove the persisted record."""
        self._session.messages.clear()
        try:
            await self._backend.delete(self._session.key)
        except (OSError, sqlite3.Error):
            logger.exception("Failed to delete conversation log '%s'", self._session.key)

    async def _persist(self) -> None:
        payload = serialize_log(self._session.messages)
        try:
            await self._backend.set(self._session.key, payload)
        except (OSError, sqlite3.Error):
            # The in-memory log stays authoritative; the previous snapshot survives
            logger.exception("Failed to persist conversation log '%s'", self._session.key)
