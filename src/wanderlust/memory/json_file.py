"""JSON file snapshot backend.

Stores each key as a ``<key>.json`` file in a directory. Writes go to a
temporary file that is then renamed over the target, so an interrupted
write leaves the previous snapshot in place.
"""

import asyncio
import os
import tempfile
from pathlib import Path

from .base import KeyValueBackend
from .session import validate_session_key


class JSONFileBackend(KeyValueBackend):
    """File-per-key persistence for conversation snapshots."""

    def __init__(self, path: str | Path = "~/.wanderlust"):
        self._directory = Path(path).expanduser()

    async def connect(self) -> None:
        """Create the storage directory if needed."""
        self._directory.mkdir(parents=True, exist_ok=True)

    async def disconnect(self) -> None:
        """Nothing to release for plain files."""
        pass

    def _path_for(self, key: str) -> Path:
        return self._directory / f"{validate_session_key(key)}.json"

    async def get(self, key: str) -> str | None:
        path = self._path_for(key)
        if not path.exists():
            return None
        return await asyncio.to_thread(path.read_text, encoding="utf-8")

    async def set(self, key: str, value: str) -> None:
        path = self._path_for(key)
        await asyncio.to_thread(self._write_atomic, path, value)

    def _write_atomic(self, path: Path, value: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.stem}-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(value)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    async def delete(self, key: str) -> None:
        self._path_for(key).unlink(missing_ok=True)

    @property
    def backend_type(self) -> str:
        return "json"

    @property
    def directory(self) -> Path:
        return self._directory
