# tests/test_view.py

from __future__ import annotations

from todo_sync.connectors.view import render_filters, render_state
from todo_sync.core.models import Filter
from todo_sync.core.state import TodoState

from .fakes import make_state


def test_render_uses_filtered_indices() -> None:
    st = make_state(("a", True), ("b", False), ("c", False), flt=Filter.ACTIVE)
    out = render_state(st)

    assert "0. [ ] b" in out
    assert "1. [ ] c" in out
    assert "[x] a" not in out
    assert "3 item(s) left" in out
    assert "Clear completed (1)" in out


def test_render_marks_editing_and_toggle_all() -> None:
    st = make_state(("a", True))
    st.toggle_edit(0)
    out = render_state(st, title="mine")

    assert out.splitlines()[0] == "mine"
    assert "[x] toggle all" in out
    assert "[x] a  (editing)" in out
    assert "edit: a" in out


def test_render_empty_view() -> None:
    out = render_state(TodoState(filter=Filter.COMPLETED))
    assert "(nothing here)" in out
    assert "[ ] toggle all" in out
    assert "0 item(s) left" in out


def test_render_filters_highlights_current() -> None:
    out = render_filters(Filter.COMPLETED)
    assert out == "All <#/> | Active <#/active> | *Completed* <#/completed>"
