"""Abstract base class for snapshot persistence backends.

This module defines the interface the message store writes through.
The abstraction hides:
- Storage format (JSON files, SQLite, etc.)
- Persistence mechanism (file, database, in-memory)
- Connection management

A backend is a plain key-value store: each key holds one serialized
snapshot which is always overwritten in full.
"""

from abc import ABC, abstractmethod


class KeyValueBackend(ABC):
    """Abstract key-value persistence backend."""

    @abstractmethod
    async def connect(self) -> None:
        """Initialize the backend."""

    @abstractmethod
    async def disconnect(self) -> None:
        """Close the backend gracefully."""

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the value stored under ``key``, or None if absent."""

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove ``key``. Removing a missing key is not an error."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""

    async def __aenter__(self) -> "KeyValueBackend":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.disconnect()
