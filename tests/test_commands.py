# tests/test_commands.py

from __future__ import annotations

import asyncio

import pytest

from todo_sync.cli.commands import CommandRegistry, CommandResult, registry
from todo_sync.connectors.console_connector import handle_line
from todo_sync.core import messages as m
from todo_sync.core.engine import Engine
from todo_sync.core.models import Entry, Filter

from .fakes import FakeEntryStore, FakeTransport, snapshot


def test_command_registry_routes_and_aliases(engine: Engine) -> None:
    reg = CommandRegistry()
    called = {"n": 0}

    def h(engine, args):
        called["n"] += 1
        return CommandResult(reply=" ".join(args))

    reg.register("echo", h, "echo", aliases=["ec"])

    assert reg.handle(engine, "/echo a b").reply == "a b"
    assert reg.handle(engine, "/EC c").reply == "c"
    assert called["n"] == 2


def test_command_registry_unknown_and_non_command(engine: Engine) -> None:
    reg = CommandRegistry()
    assert reg.handle(engine, "hello") is None
    assert "Unknown command" in (reg.handle(engine, "/nope").reply or "")
    assert "Empty command" in (reg.handle(engine, "/").reply or "")


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("/add buy milk", [m.UpdateNewText("buy milk"), m.Add()]),
        ("/toggle 2", [m.Toggle(2)]),
        ("/edit 0", [m.ToggleEdit(0)]),
        ("/save 1", [m.Edit(1)]),
        ("/save 1 new text", [m.UpdateEditText("new text"), m.Edit(1)]),
        ("/rm 3", [m.Remove(3)]),
        ("/all", [m.ToggleAll()]),
        ("/clear", [m.ClearCompleted()]),
        ("/filter active", [m.SetFilter(Filter.ACTIVE)]),
        ("/f #/completed", [m.SetFilter(Filter.COMPLETED)]),
    ],
)
def test_commands_map_to_messages(engine: Engine, line: str, expected: list) -> None:
    result = registry.handle(engine, line)
    assert result is not None
    assert result.messages == expected


@pytest.mark.parametrize(
    "line", ["/toggle", "/toggle x", "/rm", "/filter", "/filter someday", "/filter #/bogus"]
)
def test_bad_arguments_reply_without_messages(engine: Engine, line: str) -> None:
    result = registry.handle(engine, line)
    assert result is not None
    assert result.messages == []
    assert result.reply


def test_push_requires_sync(engine: Engine) -> None:
    result = registry.handle(engine, "/push")
    assert result is not None and result.messages == []
    assert "disabled" in (result.reply or "")


def test_status_and_help(engine: Engine) -> None:
    engine.dispatch(m.Add("a"))
    status = registry.handle(engine, "/status")
    assert status is not None and "Entries: 1" in (status.reply or "")
    assert "Sync: OFF" in (status.reply or "")

    help_text = registry.handle(engine, "/help")
    assert help_text is not None and "/toggle" in (help_text.reply or "")


async def _with_runner(engine: Engine, lines: list[str]) -> list[str | None]:
    runner = asyncio.create_task(engine.run())
    try:
        return [await handle_line(engine, line) for line in lines]
    finally:
        runner.cancel()
        await asyncio.gather(runner, return_exceptions=True)


@pytest.mark.asyncio
async def test_console_lines_drive_the_engine() -> None:
    store = FakeEntryStore()
    engine = Engine(store=store)

    outputs = await _with_runner(
        engine,
        ["buy milk", "walk dog", "/toggle 0", "/filter active", "/edit 0", "/save 0 walk the dog"],
    )

    assert snapshot(engine.state) == [("buy milk", True, False), ("walk the dog", False, False)]
    assert engine.state.filter is Filter.ACTIVE
    assert store.last is not None and store.last[1]["description"] == "walk the dog"
    assert outputs[-1] is not None and "walk the dog" in outputs[-1]


@pytest.mark.asyncio
async def test_console_reports_bad_index() -> None:
    engine = Engine(store=FakeEntryStore([Entry("a")]))
    (out,) = await _with_runner(engine, ["/rm 5"])
    assert out is not None and out.startswith("Error: index 5 out of range")
    assert snapshot(engine.state) == [("a", False, False)]


@pytest.mark.asyncio
async def test_console_push_queues_a_tick() -> None:
    transport = FakeTransport()
    engine = Engine(store=FakeEntryStore([Entry("a")]), transport=transport, push_interval_seconds=60)

    (out,) = await _with_runner(engine, ["/push"])
    await asyncio.sleep(0.01)
    await engine.stop()

    assert out == "Push queued."
    assert transport.pushed == [[{"description": "a", "completed": False, "editing": False}]]
