# src/todo_sync/connectors/view.py

"""Plain-text rendering of TodoState (read-only)."""

from __future__ import annotations

from ..core.models import Entry, Filter
from ..core.state import TodoState


def render_entry(idx: int, entry: Entry) -> str:
    mark = "[x]" if entry.completed else "[ ]"
    line = f"  {idx:>3}. {mark} {entry.description}"
    if entry.editing:
        line += "  (editing)"
    return line


def render_filters(current: Filter) -> str:
    parts = []
    for flt in Filter:
        if flt is current:
            parts.append(f"*{flt.label}* <{flt.href}>")
        else:
            parts.append(f"{flt.label} <{flt.href}>")
    return " | ".join(parts)


def render_state(state: TodoState, *, title: str = "todos") -> str:
    lines = [title]

    if state.new_entry_text:
        lines.append(f"  > {state.new_entry_text}")

    visible = state.visible()
    toggle_all = "[x]" if state.is_all_completed() else "[ ]"
    lines.append(f"  {toggle_all} toggle all")

    if visible:
        lines.extend(render_entry(idx, e) for idx, e in visible)
    else:
        lines.append("  (nothing here)")

    if any(e.editing for _, e in visible) and state.edit_buffer:
        lines.append(f"  edit: {state.edit_buffer}")

    # Counts the whole list, not just the active entries.
    lines.append(f"{state.total()} item(s) left")
    lines.append(render_filters(state.filter))
    lines.append(f"Clear completed ({state.total_completed()})")
    return "\n".join(lines)
