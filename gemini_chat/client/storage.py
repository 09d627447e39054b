"""Local persistence for the conversation log.

The log is stored as a single JSON blob under one key of a key-value store.
Reads fail soft: a missing or undecodable blob behaves as an empty history.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Sequence

from pydantic import TypeAdapter, ValidationError

from gemini_chat.core.config import settings
from gemini_chat.models.message import Message

logger = logging.getLogger(__name__)

_log_adapter = TypeAdapter(list[Message])


class BlobStore(ABC):
    """Minimal string key-value store."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def remove(self, key: str) -> None:
        ...


class MemoryBlobStore(BlobStore):
    def __init__(self):
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class FileBlobStore(BlobStore):
    """One file per key inside a directory."""

    def __init__(self, directory: Path | None = None):
        self.directory = Path(directory) if directory else settings.data_dir

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> str | None:
        """Return the stored text, or None if absent. Unreadable files raise."""
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self._path(key).write_text(value, encoding="utf-8")

    def remove(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


class HistoryStore:
    """Loads, saves and clears the whole conversation log under a fixed key."""

    def __init__(self, blobs: BlobStore, key: str | None = None):
        self.blobs = blobs
        self.key = key or settings.storage_key

    def load(self) -> list[Message]:
        try:
            raw = self.blobs.get(self.key)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Discarding unreadable chat history under '{self.key}': {e}")
            self._discard()
            return []
        if not raw:
            return []
        try:
            return _log_adapter.validate_json(raw)
        except ValidationError as e:
            logger.warning(f"Discarding unreadable chat history under '{self.key}': {e.error_count()} errors")
            self._discard()
            return []

    def _discard(self) -> None:
        try:
            self.blobs.remove(self.key)
        except OSError as e:
            logger.warning(f"Could not remove chat history under '{self.key}': {e}")

    def save(self, messages: Sequence[Message]) -> None:
        # An empty log never overwrites stored history; clear() is the only eraser.
        if not messages:
            return
        self.blobs.set(self.key, _log_adapter.dump_json(list(messages)).decode("utf-8"))

    def clear(self) -> None:
        self.blobs.remove(self.key)
