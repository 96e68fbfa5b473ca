# tests/conftest.py

from __future__ import annotations

import pytest

from todo_sync.core.engine import Engine

from .fakes import FakeEntryStore


@pytest.fixture()
def store() -> FakeEntryStore:
    return FakeEntryStore()


@pytest.fixture()
def engine(store: FakeEntryStore) -> Engine:
    """
    Engine without sync, wired to a recording fake store.
    """
    return Engine(store=store)
