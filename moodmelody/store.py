"""
Key-value storage for the MoodMelody service.

The result cache and feedback recorder are written purely against the
KeyValueStore protocol below, so any backend honoring it can be swapped in.
Two backends are provided: an in-memory store and a JSON file store.
"""

from __future__ import annotations

import base64
import binascii
import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Protocol


class StoreError(Exception):
    """Raised when the underlying storage cannot be read or written."""


class KeyValueStore(Protocol):
    """Minimal get/set storage with string-set support."""

    def get(self, key: str) -> bytes | None: ...

    def set(self, key: str, value: bytes) -> None: ...

    def remove(self, key: str) -> None: ...

    def get_string_set(self, key: str) -> set[str]: ...

    def set_string_set(self, key: str, values: set[str]) -> None: ...


class InMemoryKeyValueStore:
    """
    Dictionary-backed store.

    Each operation holds a lock so concurrent callers never observe a
    half-applied write.
    """

    def __init__(self) -> None:
        self._values: dict[str, bytes] = {}
        self._sets: dict[str, frozenset[str]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> bytes | None:
        with self._lock:
            return self._values.get(key)

    def set(self, key: str, value: bytes) -> None:
        with self._lock:
            self._values[key] = bytes(value)

    def remove(self, key: str) -> None:
        with self._lock:
            self._values.pop(key, None)
            self._sets.pop(key, None)

    def get_string_set(self, key: str) -> set[str]:
        with self._lock:
            return set(self._sets.get(key, ()))

    def set_string_set(self, key: str, values: set[str]) -> None:
        with self._lock:
            self._sets[key] = frozenset(values)


class FileKeyValueStore:
    """
    Store persisted as a single JSON document.

    Byte values are base64-encoded and string sets are stored as sorted lists.
    Every write replaces the whole file atomically, so readers see either the
    previous or the new document, never a truncated one.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def get(self, key: str) -> bytes | None:
        with self._lock:
            entry = self._load().get("values", {}).get(key)
        if entry is None:
            return None
        try:
            return base64.b64decode(entry, validate=True)
        except (binascii.Error, TypeError) as e:
            raise StoreError(f"Corrupt value for {key!r}: {e}") from e

    def set(self, key: str, value: bytes) -> None:
        encoded = base64.b64encode(value).decode("ascii")
        with self._lock:
            document = self._load()
            document.setdefault("values", {})[key] = encoded
            self._write(document)

    def remove(self, key: str) -> None:
        with self._lock:
            document = self._load()
            removed_value = document.get("values", {}).pop(key, None)
            removed_set = document.get("sets", {}).pop(key, None)
            if removed_value is not None or removed_set is not None:
                self._write(document)

    def get_string_set(self, key: str) -> set[str]:
        with self._lock:
            values = self._load().get("sets", {}).get(key, [])
        if not isinstance(values, list) or not all(
            isinstance(v, str) for v in values
        ):
            raise StoreError(f"Corrupt string set for {key!r}")
        return set(values)

    def set_string_set(self, key: str, values: set[str]) -> None:
        with self._lock:
            document = self._load()
            document.setdefault("sets", {})[key] = sorted(values)
            self._write(document)

    # MARK: - Private Helpers

    def _load(self) -> dict[str, Any]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                document = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError(f"Could not read {self.path}: {e}") from e

        if not isinstance(document, dict) or not all(
            isinstance(document.get(section, {}), dict)
            for section in ("values", "sets")
        ):
            raise StoreError(f"Unexpected document structure in {self.path}")
        return document

    def _write(self, document: dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=str(self.path.parent), prefix=self.path.name, suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(document, f, indent=2, sort_keys=True)
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except OSError as e:
            raise StoreError(f"Could not write {self.path}: {e}") from e
