# tests/test_state.py

from __future__ import annotations

import itertools

import pytest

from todo_sync.core.models import Entry, Filter
from todo_sync.core.state import TodoState
from todo_sync.errors import IndexOutOfRange

from .fakes import make_state, snapshot

MIXED = (("a", True), ("b", False), ("c", True), ("d", False), ("e", False))


def test_toggle_under_all() -> None:
    st = make_state(("buy milk", False))
    st.toggle(0)
    assert snapshot(st) == [("buy milk", True, False)]


@pytest.mark.parametrize("flt", list(Filter))
def test_toggle_hits_exactly_the_filtered_element(flt: Filter) -> None:
    st = make_state(*MIXED, flt=flt)
    view_size = len(st.visible())

    for i in range(view_size):
        st = make_state(*MIXED, flt=flt)
        before = snapshot(st)
        target = [e for e in st.entries if flt.fit(e)][i]
        backing_pos = next(p for p, e in enumerate(st.entries) if e is target)

        st.toggle(i)

        after = snapshot(st)
        for pos, (b, a) in enumerate(zip(before, after)):
            if pos == backing_pos:
                assert a == (b[0], not b[1], b[2])
            else:
                assert a == b


def test_toggle_resolves_duplicates_by_slot_not_value() -> None:
    st = make_state(("same", True), ("same", False), ("same", False), flt=Filter.ACTIVE)
    st.toggle(1)
    assert [e.completed for e in st.entries] == [True, False, True]


def test_remove_under_active() -> None:
    st = make_state(("a", True), ("b", False), flt=Filter.ACTIVE)
    st.remove(0)
    assert snapshot(st) == [("a", True, False)]


def test_remove_keeps_order_of_the_rest() -> None:
    st = make_state(*MIXED, flt=Filter.COMPLETED)
    removed = st.remove(1)
    assert removed.description == "c"
    assert [e.description for e in st.entries] == ["a", "b", "d", "e"]


@pytest.mark.parametrize("op", ["toggle", "toggle_edit", "remove"])
@pytest.mark.parametrize("idx", [2, 7, -1])
def test_out_of_range_is_recoverable(op: str, idx: int) -> None:
    st = make_state(("a", True), ("b", False), flt=Filter.COMPLETED)
    before = snapshot(st)

    with pytest.raises(IndexOutOfRange) as info:
        getattr(st, op)(idx)

    assert info.value.code == "INDEX_OUT_OF_RANGE"
    assert info.value.details["size"] == 1
    assert snapshot(st) == before


def test_out_of_range_on_empty_view_is_an_index_error() -> None:
    st = make_state(("a", False), flt=Filter.COMPLETED)
    with pytest.raises(IndexError):
        st.complete_edit(0, "x")


def test_add_appends_regardless_of_filter_and_clears_input() -> None:
    st = make_state(("a", True), flt=Filter.COMPLETED)
    st.update_new_text("typed")
    st.add("new")
    assert snapshot(st) == [("a", True, False), ("new", False, False)]
    assert st.new_entry_text == ""
    # Not visible under COMPLETED, still stored.
    assert [e.description for _, e in st.visible()] == ["a"]


def test_add_accepts_empty_description() -> None:
    st = TodoState()
    st.add("")
    assert snapshot(st) == [("", False, False)]


def test_toggle_edit_prefills_buffer_and_leaves_others_alone() -> None:
    st = make_state(("a", False), ("b", True), ("c", False), flt=Filter.ACTIVE)
    st.entries[1].editing = True

    st.toggle_edit(1)

    assert st.edit_buffer == "c"
    assert [e.editing for e in st.entries] == [False, True, True]

    st.toggle_edit(1)
    assert [e.editing for e in st.entries] == [False, True, False]


def test_complete_edit_sets_text_and_leaves_edit_mode() -> None:
    st = make_state(("a", False), ("b", False))
    st.toggle_edit(1)
    st.update_edit_text("bee")

    st.complete_edit(1, st.edit_buffer)

    assert snapshot(st) == [("a", False, False), ("bee", False, False)]
    assert st.edit_buffer == ""


def test_toggle_all_active_only_touches_unfinished() -> None:
    st = make_state(*MIXED, flt=Filter.ACTIVE)
    before = snapshot(st)

    st.toggle_all(True)

    for b, a in zip(before, snapshot(st)):
        if not b[1]:
            assert a[1] is True
        else:
            assert a == b
    assert st.total_completed() == len(MIXED)


def test_toggle_all_completed_false_reopens_only_completed() -> None:
    st = make_state(*MIXED, flt=Filter.COMPLETED)
    st.toggle_all(False)
    assert st.total_completed() == 0
    assert st.is_all_completed() is False


@pytest.mark.parametrize("flt", list(Filter))
def test_clear_completed_ignores_active_filter(flt: Filter) -> None:
    st = make_state(*MIXED, flt=flt)
    expected = [(d, c, False) for d, c in MIXED if not c]
    st.clear_completed()
    assert snapshot(st) == expected
    assert st.filter is flt


@pytest.mark.parametrize("flt", list(Filter))
def test_clear_completed_all_done(flt: Filter) -> None:
    st = make_state(("a", True), ("b", True), flt=flt)
    st.clear_completed()
    assert st.entries == []


@pytest.mark.parametrize("flt", list(Filter))
def test_is_all_completed_false_on_empty_view(flt: Filter) -> None:
    assert TodoState(filter=flt).is_all_completed() is False


def test_is_all_completed_scoped_to_view() -> None:
    st = make_state(("a", True), ("b", False), flt=Filter.COMPLETED)
    assert st.is_all_completed() is True
    st.set_filter(Filter.ALL)
    assert st.is_all_completed() is False
    st.set_filter(Filter.ACTIVE)
    assert st.is_all_completed() is False


def test_counts_do_not_depend_on_filter() -> None:
    counts = set()
    for flt in Filter:
        st = make_state(*MIXED, flt=flt)
        counts.add((st.total(), st.total_completed(), st.total_active()))
    assert counts == {(5, 2, 3)}


def test_no_operation_reorders_backing_list() -> None:
    st = make_state(*MIXED)
    ids = [e.id for e in st.entries]

    for flt, op in itertools.product(Filter, ("toggle", "toggle_edit")):
        st.set_filter(flt)
        if st.visible():
            getattr(st, op)(0)
        assert [e.id for e in st.entries] == ids


def test_set_filter_does_not_touch_entries() -> None:
    st = make_state(*MIXED)
    before = snapshot(st)
    st.set_filter(Filter.COMPLETED)
    assert snapshot(st) == before


def test_replace_entries_keeps_filter_and_buffers() -> None:
    st = make_state(("a", False), flt=Filter.ACTIVE)
    st.update_new_text("draft")
    st.update_edit_text("edit")

    st.replace_entries([Entry("x")])

    assert snapshot(st) == [("x", False, False)]
    assert (st.filter, st.new_entry_text, st.edit_buffer) == (Filter.ACTIVE, "draft", "edit")
