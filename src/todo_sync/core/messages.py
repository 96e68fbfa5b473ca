# src/todo_sync/core/messages.py

"""Typed messages accepted by Engine.dispatch."""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import PullFailure, PushFailure
from .models import Entry, Filter


@dataclass(slots=True, frozen=True)
class Add:
    # None -> take the text from the new-entry input buffer
    description: str | None = None


@dataclass(slots=True, frozen=True)
class SetFilter:
    filter: Filter


@dataclass(slots=True, frozen=True)
class Toggle:
    index: int


@dataclass(slots=True, frozen=True)
class ToggleEdit:
    index: int


@dataclass(slots=True, frozen=True)
class Edit:
    index: int
    # None -> take the text from the edit buffer
    text: str | None = None


@dataclass(slots=True, frozen=True)
class Remove:
    index: int


@dataclass(slots=True, frozen=True)
class ToggleAll:
    pass


@dataclass(slots=True, frozen=True)
class ClearCompleted:
    pass


@dataclass(slots=True, frozen=True)
class UpdateNewText:
    text: str


@dataclass(slots=True, frozen=True)
class UpdateEditText:
    text: str


@dataclass(slots=True, frozen=True)
class Tick:
    pass


@dataclass(slots=True, frozen=True)
class PullCompleted:
    entries: tuple[Entry, ...] | None = None
    error: PullFailure | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.entries is not None


@dataclass(slots=True, frozen=True)
class PushCompleted:
    error: PushFailure | None = None


@dataclass(slots=True, frozen=True)
class Nope:
    pass


Message = (
    Add
    | SetFilter
    | Toggle
    | ToggleEdit
    | Edit
    | Remove
    | ToggleAll
    | ClearCompleted
    | UpdateNewText
    | UpdateEditText
    | Tick
    | PullCompleted
    | PushCompleted
    | Nope
)

# Messages after which the entries list is written to the store.
ENTRY_MUTATING = (Add, Toggle, ToggleEdit, Edit, Remove, ToggleAll, ClearCompleted, PullCompleted)
