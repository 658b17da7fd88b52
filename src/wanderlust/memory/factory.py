"""Factory for creating snapshot persistence backends."""

from typing import Any

from .base import KeyValueBackend


def create_key_value_backend(
    backend: str = "json",
    **kwargs: Any
) -> KeyValueBackend:
    """Create a persistence backend.

    Args:
        backend: Backend type ("memory", "json" or "sqlite")
        **kwargs: Backend-specific configuration (e.g. ``path``)

    Returns:
        KeyValueBackend instance

    Raises:
        ValueError: If backend type is not supported
    """
    if backend == "memory":
        from .in_memory import InMemoryBackend
        return InMemoryBackend(**kwargs)

    elif backend == "json":
        from .json_file import JSONFileBackend
        return JSONFileBackend(**kwargs)

    elif backend == "sqlite":
        from .sqlite import SQLiteBackend
        return SQLiteBackend(**kwargs)

    raise ValueError(
        f"Unsupported storage backend: {backend}. "
        f"Supported backends: memory, json, sqlite"
    )
