# src/todo_sync/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from ..core import messages as m
from ..core.engine import Engine
from ..core.models import Filter

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CommandResult:
    """What a command wants: messages to dispatch (in order) and/or a reply."""

    messages: list[m.Message] = field(default_factory=list)
    reply: str | None = None
    show_list: bool = False


CommandHandler = Callable[[Engine, list[str]], CommandResult]


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, engine: Engine, line: str) -> CommandResult | None:
        """
        Handle a string like "/command args".
        Returns None if the line is not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return CommandResult(reply="Empty command. Use /help to list available commands.")

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return CommandResult(reply=f"Unknown command: /{name}. Use /help to list available commands.")

        return handler(engine, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  (plain text adds a new entry)")
        return "\n".join(lines)


registry = CommandRegistry()


def _parse_index(args: list[str], usage: str) -> int | CommandResult:
    if not args:
        return CommandResult(reply=f"Usage: {usage}")
    try:
        return int(args[0])
    except ValueError:
        return CommandResult(reply=f"Not an index: {args[0]!r}. Usage: {usage}")


def text_to_messages(text: str) -> list[m.Message]:
    """Plain input line: type it into the new-entry field, then press Enter."""
    return [m.UpdateNewText(text), m.Add()]


def cmd_help(engine: Engine, args: list[str]) -> CommandResult:
    return CommandResult(reply=registry.build_help())


def cmd_list(engine: Engine, args: list[str]) -> CommandResult:
    return CommandResult(show_list=True)


def cmd_status(engine: Engine, args: list[str]) -> CommandResult:
    st = engine.state
    lines = [
        "Status:",
        f"  Entries: {st.total()} (completed: {st.total_completed()})",
        f"  Filter: {st.filter.value} <{st.filter.href}>",
    ]
    if engine.sync is None:
        lines.append("  Sync: OFF")
    else:
        lines.append(
            f"  Sync: ON (every {engine.push_interval_seconds:g}s, "
            f"pushes: {engine.sync.pushes_started}, in flight: {engine.sync.inflight})"
        )
    return CommandResult(reply="\n".join(lines))


def cmd_add(engine: Engine, args: list[str]) -> CommandResult:
    # An empty description is accepted, like pressing Enter on an empty field.
    return CommandResult(messages=text_to_messages(" ".join(args)), show_list=True)


def cmd_toggle(engine: Engine, args: list[str]) -> CommandResult:
    idx = _parse_index(args, "/toggle <index>")
    if isinstance(idx, CommandResult):
        return idx
    return CommandResult(messages=[m.Toggle(idx)], show_list=True)


def cmd_edit(engine: Engine, args: list[str]) -> CommandResult:
    idx = _parse_index(args, "/edit <index>")
    if isinstance(idx, CommandResult):
        return idx
    return CommandResult(messages=[m.ToggleEdit(idx)], show_list=True)


def cmd_save(engine: Engine, args: list[str]) -> CommandResult:
    """
    /save <index>          -> commit the edit buffer (pre-filled by /edit)
    /save <index> <text>   -> type <text> into the edit field, then commit
    """
    idx = _parse_index(args, "/save <index> [text]")
    if isinstance(idx, CommandResult):
        return idx
    msgs: list[m.Message] = []
    if len(args) > 1:
        msgs.append(m.UpdateEditText(" ".join(args[1:])))
    msgs.append(m.Edit(idx))
    return CommandResult(messages=msgs, show_list=True)


def cmd_remove(engine: Engine, args: list[str]) -> CommandResult:
    idx = _parse_index(args, "/rm <index>")
    if isinstance(idx, CommandResult):
        return idx
    return CommandResult(messages=[m.Remove(idx)], show_list=True)


def cmd_toggle_all(engine: Engine, args: list[str]) -> CommandResult:
    return CommandResult(messages=[m.ToggleAll()], show_list=True)


def cmd_clear(engine: Engine, args: list[str]) -> CommandResult:
    return CommandResult(messages=[m.ClearCompleted()], show_list=True)


def cmd_filter(engine: Engine, args: list[str]) -> CommandResult:
    if not args:
        return CommandResult(reply="Usage: /filter all|active|completed")
    try:
        flt = Filter.parse(args[0])
    except ValueError:
        return CommandResult(reply=f"Unknown filter: {args[0]}. Use all, active or completed.")
    return CommandResult(messages=[m.SetFilter(flt)], show_list=True)


def cmd_push(engine: Engine, args: list[str]) -> CommandResult:
    if engine.sync is None:
        return CommandResult(reply="Sync is disabled.")
    return CommandResult(messages=[m.Tick()], reply="Push queued.")


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the current view.", aliases=["ls"])
registry.register("status", cmd_status, help_text="Show counts and sync status.")
registry.register("add", cmd_add, help_text="Add an entry: /add <text>.", aliases=["a"])
registry.register("toggle", cmd_toggle, help_text="Flip completed: /toggle <index>.", aliases=["t"])
registry.register("edit", cmd_edit, help_text="Enter/leave edit mode: /edit <index>.", aliases=["e"])
registry.register("save", cmd_save, help_text="Finish editing: /save <index> [text].", aliases=["s"])
registry.register("rm", cmd_remove, help_text="Remove an entry: /rm <index>.", aliases=["remove", "del"])
registry.register("all", cmd_toggle_all, help_text="Toggle all visible entries.")
registry.register("clear", cmd_clear, help_text="Drop all completed entries.")
registry.register(
    "filter", cmd_filter, help_text="Switch view: /filter all | active | completed.", aliases=["f"]
)
registry.register("push", cmd_push, help_text="Push to the server now.")
