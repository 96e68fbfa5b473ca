# src/todo_sync/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the engine.

The engine depends on Protocols instead of concrete implementations,
so storage and transport stay swappable and tests can use fakes.
"""

from typing import Protocol

from .models import Entry


class EntryRepo(Protocol):
    """Opaque blob store for the entries list, keyed by a fixed configured key."""

    def load(self) -> list[Entry] | None: ...

    # Raises PersistenceError on failure.
    def save(self, entries: list[Entry]) -> None: ...


class SyncTransport(Protocol):
    """
    Remote task collection.

    Both calls raise SyncError subclasses (PullFailure / PushFailure) on
    transport errors, non-2xx answers or undecodable bodies.
    """

    async def fetch_entries(self) -> list[Entry]: ...

    async def push_entries(self, entries: list[Entry]) -> None: ...

    async def aclose(self) -> None: ...
