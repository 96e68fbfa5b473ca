# src/todo_sync/storage/entry_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from pathlib import Path
from typing import Any

from ..config import DEFAULT_STORAGE_KEY
from ..core.models import Entry, entries_from_payload, entries_to_payload
from ..errors import PersistenceError

logger = logging.getLogger(__name__)


class JsonEntryStore:
    """
    Key-value blob store backed by a single JSON object file.

    Each key maps to one JSON-encoded blob (a string), the way browser
    local storage would hold it. Other keys in the file are preserved
    on write.

    Writes are atomic: tmp file + os.replace.
    """

    def __init__(self, path: str | Path, key: str = DEFAULT_STORAGE_KEY) -> None:
        if not key or not key.strip():
            raise ValueError("storage key is required")
        self._path = Path(path)
        self._key = key
        logger.info("JsonEntryStore ready path=%s key=%s", self._path, self._key)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def key(self) -> str:
        return self._key

    # ---- low-level helpers ----

    def _read_all(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        data = json.loads(self._path.read_text("utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"storage file must hold an object, got {type(data).__name__}")
        return data

    # ---- public API ----

    def load(self) -> list[Entry] | None:
        """Return stored entries, or None when absent or unreadable."""
        try:
            blob = self._read_all().get(self._key)
        except Exception:
            logger.warning("Failed to read storage file %s", self._path, exc_info=True)
            return None

        if blob is None:
            return None

        try:
            raw = json.loads(blob) if isinstance(blob, str) else blob
            entries = entries_from_payload(raw)
        except Exception:
            logger.warning("Stored blob under key=%s is malformed; ignoring", self._key, exc_info=True)
            return None

        logger.debug("Loaded %d entries from %s", len(entries), self._path)
        return entries

    def save(self, entries: list[Entry]) -> None:
        try:
            try:
                data = self._read_all()
            except ValueError:
                logger.warning("Storage file %s is corrupt; rewriting", self._path)
                data = {}

            data[self._key] = json.dumps(entries_to_payload(entries), ensure_ascii=False)

            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self._path.with_suffix(self._path.suffix + ".tmp")
            tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), "utf-8")
            os.replace(tmp, self._path)
            with contextlib.suppress(Exception):
                os.chmod(self._path, 0o600)
        except OSError as e:
            raise PersistenceError(
                f"failed to write {self._path}", {"path": str(self._path), "key": self._key}
            ) from e

        logger.debug("Saved %d entries to %s", len(entries), self._path)


class InMemoryEntryStore:
    """Ephemeral store, used when persistence is disabled. Holds copies, not live entries."""

    def __init__(self, entries: list[Entry] | None = None) -> None:
        self._blob: list[dict[str, Any]] | None = (
            entries_to_payload(entries) if entries is not None else None
        )
        self.saves = 0

    def load(self) -> list[Entry] | None:
        if self._blob is None:
            return None
        return entries_from_payload(self._blob)

    def save(self, entries: list[Entry]) -> None:
        self._blob = entries_to_payload(entries)
        self.saves += 1
