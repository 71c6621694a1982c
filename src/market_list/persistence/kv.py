"""Key-value slot storage.

The task store writes its whole list to one named slot. Backends only
need get/set/remove of byte payloads by key, so the store can run against
an in-memory dict in tests and a JSON defaults file in the application.
"""

import base64
import binascii
import json
from abc import ABC, abstractmethod
from pathlib import Path

from market_list.logging import Loggers
from market_list.persistence._utils import atomic_write_text

logger = Loggers.persistence()


class KeyValueStore(ABC):
    """Byte payloads addressed by a string key."""

    @abstractmethod
    def get(self, key: str) -> bytes | None:
        """Return the payload stored under key, or None if absent."""

    @abstractmethod
    def set(self, key: str, value: bytes) -> None:
        """Store value under key, replacing any previous payload.

        Raises:
            OSError: If the backend cannot write.
        """

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete key if present."""

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None


class InMemoryKeyValueStore(KeyValueStore):
    """Dict-backed store that lives for the process."""

    def __init__(self, initial: dict[str, bytes] | None = None) -> None:
        self._values: dict[str, bytes] = dict(initial or {})

    def get(self, key: str) -> bytes | None:
        return self._values.get(key)

    def set(self, key: str, value: bytes) -> None:
        self._values[key] = bytes(value)

    def remove(self, key: str) -> None:
        self._values.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._values)


class JsonFileKeyValueStore(KeyValueStore):
    """Store backed by a single JSON defaults file.

    The file holds one object mapping keys to base64-encoded payloads:

        {"tasks": "W3siaWQiOiAi..."}

    The whole file is read once at construction and rewritten atomically
    on every set/remove. A missing file reads as empty; so does a corrupt
    one, which is logged and replaced on the next write.

    Example:
        >>> defaults = JsonFileKeyValueStore(Path("~/.market_list/defaults.json"))
        >>> defaults.set("tasks", b"[]")
        >>> defaults.get("tasks")
        b'[]'
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path).expanduser()
        self._values: dict[str, str] = self._read()

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError, RecursionError) as e:
            logger.warning("defaults_read_failed", path=str(self._path), error=str(e))
            return {}
        if not isinstance(data, dict):
            logger.warning("defaults_not_an_object", path=str(self._path))
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def _write(self) -> None:
        atomic_write_text(self._path, json.dumps(self._values, indent=2, sort_keys=True))

    def get(self, key: str) -> bytes | None:
        encoded = self._values.get(key)
        if encoded is None:
            return None
        try:
            return base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as e:
            logger.warning("defaults_value_corrupt", key=key, error=str(e))
            return None

    def set(self, key: str, value: bytes) -> None:
        self._values[key] = base64.b64encode(value).decode("ascii")
        self._write()

    def remove(self, key: str) -> None:
        if self._values.pop(key, None) is not None:
            self._write()
