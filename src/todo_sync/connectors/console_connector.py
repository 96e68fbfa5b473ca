# src/todo_sync/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..cli.commands import text_to_messages
from ..core.engine import DispatchResult, Engine
from .view import render_state

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


async def _read_line(prompt: str) -> str:
    # input() blocks; keep it off the loop so ticks and network completions
    # keep flowing while the user types.
    return await asyncio.to_thread(input, prompt)


async def handle_line(engine: Engine, line: str, *, title: str = "todos") -> str | None:
    """
    Turn one console line into messages, apply them through the engine queue
    and return the text to show (None for nothing).
    """
    result = command_registry.handle(engine, line)
    if result is None:
        messages = text_to_messages(line)
        show_list = True
        reply = None
    else:
        messages = result.messages
        show_list = result.show_list
        reply = result.reply

    errors: list[str] = []
    for msg in messages:
        outcome: DispatchResult = await engine.submit(msg)
        if outcome.error is not None:
            errors.append(outcome.error.message)
            break

    out: list[str] = []
    if reply:
        out.append(reply)
    if errors:
        out.extend(f"Error: {e}" for e in errors)
    if show_list:
        out.append(render_state(engine.state, title=title))
    return "\n".join(out) if out else None


async def run_console_loop(engine: Engine, *, title: str = "todos") -> None:
    """REPL front-end. Requires engine.run() to be consuming the queue."""
    logger.info("Console connector started.")
    _print_ts("[CONSOLE] Type a task to add it. Use /help for commands. Use /exit to quit.\n")
    print(render_state(engine.state, title=title))

    while True:
        try:
            line = (await _read_line("> ")).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not line:
            continue

        if line.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            text = await handle_line(engine, line, title=title)
        except Exception:
            logger.exception("Console command crashed.")
            _print_ts("Internal error while handling the input.")
            continue

        if text:
            print(text)

    logger.info("Console connector finished.")
