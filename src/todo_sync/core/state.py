# src/todo_sync/core/state.py

"""
Todo list state.

Every index accepted by a mutator is relative to the filtered view
(entries that fit the active filter, in backing order), never to the
backing list. Mutators resolve it back to a backing position first.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..errors import IndexOutOfRange
from .models import Entry, Filter


@dataclass
class TodoState:
    entries: list[Entry] = field(default_factory=list)
    filter: Filter = Filter.ALL
    new_entry_text: str = ""
    edit_buffer: str = ""

    # ---- queries ----

    def visible(self) -> list[tuple[int, Entry]]:
        """Filtered view as (filtered index, entry) pairs."""
        return list(enumerate(e for e in self.entries if self.filter.fit(e)))

    def total(self) -> int:
        return len(self.entries)

    def total_completed(self) -> int:
        return sum(1 for e in self.entries if Filter.COMPLETED.fit(e))

    def total_active(self) -> int:
        return sum(1 for e in self.entries if Filter.ACTIVE.fit(e))

    def is_all_completed(self) -> bool:
        view = [e for e in self.entries if self.filter.fit(e)]
        if not view:
            return False
        return all(e.completed for e in view)

    # ---- index resolution ----

    def resolve(self, idx: int) -> int:
        """Map a filtered index to its position in the backing list."""
        view = [e for e in self.entries if self.filter.fit(e)]
        if idx < 0 or idx >= len(view):
            raise IndexOutOfRange(idx, len(view), self.filter.value)
        target = view[idx]
        for pos, entry in enumerate(self.entries):
            if entry.id == target.id:
                return pos
        # view is derived from entries, so the target is always present
        raise IndexOutOfRange(idx, len(view), self.filter.value)

    def entry_at(self, idx: int) -> Entry:
        return self.entries[self.resolve(idx)]

    # ---- mutators ----

    def add(self, description: str) -> Entry:
        entry = Entry(description=description)
        self.entries.append(entry)
        self.new_entry_text = ""
        return entry

    def toggle(self, idx: int) -> None:
        entry = self.entry_at(idx)
        entry.completed = not entry.completed

    def toggle_edit(self, idx: int) -> None:
        entry = self.entry_at(idx)
        self.edit_buffer = entry.description
        entry.editing = not entry.editing

    def complete_edit(self, idx: int, text: str) -> None:
        entry = self.entry_at(idx)
        entry.description = text
        entry.editing = not entry.editing
        self.edit_buffer = ""

    def remove(self, idx: int) -> Entry:
        return self.entries.pop(self.resolve(idx))

    def toggle_all(self, value: bool) -> None:
        # Match against the filter before writing: flipping `completed` can
        # move an entry out of the view mid-loop.
        matching = [e for e in self.entries if self.filter.fit(e)]
        for entry in matching:
            entry.completed = value

    def clear_completed(self) -> None:
        # Always drops completed entries, whatever the active filter is.
        self.entries = [e for e in self.entries if Filter.ACTIVE.fit(e)]

    def set_filter(self, flt: Filter) -> None:
        self.filter = flt

    def replace_entries(self, entries: list[Entry]) -> None:
        self.entries = list(entries)

    def update_new_text(self, text: str) -> None:
        self.new_entry_text = text

    def update_edit_text(self, text: str) -> None:
        self.edit_buffer = text
