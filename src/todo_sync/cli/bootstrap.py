# src/todo_sync/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- takes settings once,
- ensures local (gitignored) directories exist,
- wires the entry store and the HTTP transport into an Engine.
"""

from __future__ import annotations

import logging

from ..config import Settings, get_settings
from ..core.engine import Engine
from ..core.ports import EntryRepo, SyncTransport
from ..storage.entry_store import InMemoryEntryStore, JsonEntryStore
from ..sync.transport import HttpTransport

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings: Settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.storage_path.parent.mkdir(parents=True, exist_ok=True)


def create_store(settings: Settings) -> EntryRepo:
    if not settings.persist_enabled:
        logger.info("Persistence disabled; entries live in memory only")
        return InMemoryEntryStore()
    return JsonEntryStore(settings.storage_path, key=settings.storage_key)


def create_transport(settings: Settings) -> SyncTransport | None:
    if not settings.sync_enabled:
        return None
    return HttpTransport(settings.server_url, timeout_seconds=settings.request_timeout_seconds)


def create_engine(*, settings: Settings | None = None) -> Engine:
    """
    Build the Engine from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    transport = create_transport(settings)
    if transport is not None:
        logger.info("Sync target %s every %.1fs", settings.server_url, settings.push_interval_seconds)

    return Engine(
        store=create_store(settings),
        transport=transport,
        push_interval_seconds=settings.push_interval_seconds,
    )
