# src/todo_sync/errors.py

"""Structured error types shared by the state engine, sync and storage layers."""

from __future__ import annotations

from typing import Any, Mapping


class TodoSyncError(RuntimeError):
    """Base error carrying a machine-readable code and details."""

    code = "TODO_SYNC_ERROR"

    def __init__(self, message: str, details: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details: dict[str, Any] = dict(details or {})

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, "details": self.details}


class IndexOutOfRange(TodoSyncError, IndexError):
    """A filter-relative index does not resolve to an entry."""

    code = "INDEX_OUT_OF_RANGE"

    def __init__(self, index: int, size: int, filter_name: str) -> None:
        super().__init__(
            f"index {index} out of range for {filter_name} view of {size} entries",
            {"index": index, "size": size, "filter": filter_name},
        )
        self.index = index
        self.size = size


class SyncError(TodoSyncError):
    code = "SYNC_FAILED"

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        details: Mapping[str, Any] | None = None,
    ) -> None:
        merged = dict(details or {})
        if status_code is not None:
            merged["status_code"] = status_code
        super().__init__(message, merged)
        self.status_code = status_code


class PullFailure(SyncError):
    code = "PULL_FAILED"


class PushFailure(SyncError):
    code = "PUSH_FAILED"


class PersistenceError(TodoSyncError):
    code = "PERSISTENCE_FAILED"
