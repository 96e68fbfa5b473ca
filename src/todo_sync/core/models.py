# src/todo_sync/core/models.py

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


def _new_entry_id() -> str:
    return uuid.uuid4().hex


@dataclass(slots=True)
class Entry:
    """
    A single task record.

    `id` is process-local: it is assigned at creation, never serialized and
    ignored by equality. Index resolution uses it to tell apart entries whose
    visible fields are identical.
    """

    description: str
    completed: bool = False
    editing: bool = False
    id: str = field(default_factory=_new_entry_id, compare=False, repr=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "description": self.description,
            "completed": self.completed,
            "editing": self.editing,
        }

    @classmethod
    def from_dict(cls, raw: Any) -> Entry:
        if not isinstance(raw, dict):
            raise ValueError(f"entry must be an object, got {type(raw).__name__}")
        description = raw.get("description")
        if not isinstance(description, str):
            raise ValueError("entry.description must be a string")
        return cls(
            description=description,
            completed=_flag(raw, "completed"),
            editing=_flag(raw, "editing"),
        )


def _flag(raw: dict[str, Any], name: str) -> bool:
    # Absent -> False; present must be a JSON boolean ("false" is truthy).
    value = raw.get(name, False)
    if not isinstance(value, bool):
        raise ValueError(f"entry.{name} must be a boolean, got {type(value).__name__}")
    return value


def entries_to_payload(entries: list[Entry]) -> list[dict[str, Any]]:
    return [e.to_dict() for e in entries]


def entries_from_payload(raw: Any) -> list[Entry]:
    """Decode a JSON array of entry objects; raises ValueError on bad shape."""
    if not isinstance(raw, list):
        raise ValueError(f"expected a list of entries, got {type(raw).__name__}")
    return [Entry.from_dict(item) for item in raw]


class Filter(StrEnum):
    """View predicate over entries."""

    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"

    def fit(self, entry: Entry) -> bool:
        if self is Filter.ACTIVE:
            return not entry.completed
        if self is Filter.COMPLETED:
            return entry.completed
        return True

    @property
    def href(self) -> str:
        if self is Filter.ALL:
            return "#/"
        return f"#/{self.value}"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @classmethod
    def from_href(cls, raw: str | None) -> Filter:
        if not raw:
            return cls.ALL
        tail = raw.strip().removeprefix("#").strip("/")
        try:
            return cls(tail)
        except ValueError:
            return cls.ALL

    @classmethod
    def parse(cls, raw: str) -> Filter:
        """Accept a name ("active") or an href ("#/active"); raise ValueError otherwise."""
        s = (raw or "").strip().lower()
        if s.startswith("#"):
            s = s.removeprefix("#").strip("/") or cls.ALL.value
        try:
            return cls(s)
        except ValueError:
            raise ValueError(f"unknown filter: {raw!r}") from None
