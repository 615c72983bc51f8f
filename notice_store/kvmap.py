"""Key-ordered byte map with size limits, optionally backed by a JSON file."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterator, Optional

logger = logging.getLogger("notice_store.kvmap")

DEFAULT_MAX_KEY_SIZE = 100
DEFAULT_MAX_VALUE_SIZE = 8192


class StableMapError(Exception):
    """Base error for the key-value map."""


class KeyTooLargeError(StableMapError):
    pass


class ValueTooLargeError(StableMapError):
    pass


class StorageWriteError(StableMapError):
    """The backing file could not be written; the map is unchanged."""


class StableMap:
    """Ordered ``str -> bytes`` map.

    Iteration is always in ascending key order. When ``path`` is given the
    whole map is rewritten to that JSON file after every mutation, and
    loaded from it on construction. A mutation whose write fails raises
    StorageWriteError and leaves the map as it was.
    """

    def __init__(
        self,
        path: Optional[Path] = None,
        max_key_size: int = DEFAULT_MAX_KEY_SIZE,
        max_value_size: int = DEFAULT_MAX_VALUE_SIZE,
    ) -> None:
        self._path = Path(path) if path is not None else None
        self._max_key_size = max_key_size
        self._max_value_size = max_value_size
        self._entries: dict[str, bytes] = {}
        if self._path is not None:
            self._load(self._path)

    @property
    def max_key_size(self) -> int:
        return self._max_key_size

    @property
    def max_value_size(self) -> int:
        return self._max_value_size

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _load(self, path: Path) -> None:
        """Load entries from disk. Creates the file if missing."""
        if not path.exists():
            logger.info("No storage file found at %s, starting empty", path)
            path.parent.mkdir(parents=True, exist_ok=True)
            self._persist(self._entries)
            return

        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise StableMapError(f"Cannot parse storage file {path}: {exc}") from exc
        if not isinstance(raw, dict) or not all(
            isinstance(v, str) for v in raw.values()
        ):
            raise StableMapError(f"Storage file {path} has an unexpected layout")

        self._entries = {key: value.encode("utf-8") for key, value in raw.items()}
        logger.info("Loaded %d entries from %s", len(self._entries), path)

    def _persist(self, entries: dict[str, bytes]) -> None:
        """Write ``entries`` to disk. Raises StorageWriteError on I/O failure."""
        if self._path is None:
            return
        payload = {key: entries[key].decode("utf-8") for key in sorted(entries)}
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            tmp.write_text(
                json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8"
            )
            tmp.replace(self._path)
        except OSError as exc:
            logger.error("Failed to write storage file %s: %s", self._path, exc)
            raise StorageWriteError(
                f"Cannot write storage file {self._path}: {exc}"
            ) from exc

    # ------------------------------------------------------------------
    # Map operations
    # ------------------------------------------------------------------

    def get(self, key: str) -> Optional[bytes]:
        return self._entries.get(key)

    def contains_key(self, key: str) -> bool:
        return key in self._entries

    def insert(self, key: str, value: bytes) -> Optional[bytes]:
        """Insert or overwrite ``key``. Returns the previous value, if any."""
        key_size = len(key.encode("utf-8"))
        if key_size > self._max_key_size:
            raise KeyTooLargeError(
                f"Key is {key_size} bytes, limit is {self._max_key_size}"
            )
        if len(value) > self._max_value_size:
            raise ValueTooLargeError(
                f"Value is {len(value)} bytes, limit is {self._max_value_size}"
            )
        if self._path is not None:
            try:
                value.decode("utf-8")
            except UnicodeDecodeError as exc:
                raise StableMapError("File-backed values must be UTF-8 text") from exc
        entries = dict(self._entries)
        previous = entries.get(key)
        entries[key] = bytes(value)
        self._persist(entries)
        self._entries = entries
        return previous

    def remove(self, key: str) -> Optional[bytes]:
        """Remove ``key``. Returns the removed value, or None if absent."""
        if key not in self._entries:
            return None
        entries = dict(self._entries)
        previous = entries.pop(key)
        self._persist(entries)
        self._entries = entries
        return previous

    def keys(self) -> list[str]:
        return sorted(self._entries)

    def values(self) -> list[bytes]:
        return [self._entries[key] for key in self.keys()]

    def items(self) -> list[tuple[str, bytes]]:
        return [(key, self._entries[key]) for key in self.keys()]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __contains__(self, key: object) -> bool:
        return key in self._entries
