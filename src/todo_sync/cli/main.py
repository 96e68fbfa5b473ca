# src/todo_sync/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds the Engine, then runs on one asyncio loop:
- the engine queue consumer,
- the startup pull and the push ticker,
- the console REPL (optional; otherwise headless until a signal).
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal

from ..cli.bootstrap import create_engine
from ..config import Settings, get_settings
from ..connectors.console_connector import run_console_loop
from ..core.engine import Engine
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


async def _shutdown(engine: Engine, runner: asyncio.Task[None]) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    runner.cancel()
    await asyncio.gather(runner, return_exceptions=True)

    # Apply completions that arrived after the runner stopped, then save.
    try:
        engine.drain()
    except Exception:
        logger.exception("Failed to drain pending messages.")

    try:
        await engine.stop()
    except Exception:
        logger.exception("Engine stop failed.")


async def run_app(settings: Settings) -> None:
    engine = create_engine(settings=settings)
    runner = asyncio.create_task(engine.run(), name="todo-sync-engine")
    engine.start(pull=settings.pull_on_start)

    stop_main = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        # Some platforms do not support signal handlers on the loop.
        with contextlib.suppress(NotImplementedError, RuntimeError):
            loop.add_signal_handler(sig, stop_main.set)

    try:
        if settings.console_enabled:
            console = asyncio.create_task(run_console_loop(engine, title=settings.app_name))
            stopper = asyncio.create_task(stop_main.wait())
            await asyncio.wait({console, stopper}, return_when=asyncio.FIRST_COMPLETED)
            stopper.cancel()
            if not console.done():
                # The thread blocked in input() stays until the user hits Enter.
                console.cancel()
        else:
            logger.info("Console disabled. Syncing in the background. Press Ctrl+C to stop.")
            await stop_main.wait()
    finally:
        await _shutdown(engine, runner)


def main() -> None:
    settings = get_settings()

    level_name = str(settings.log_level).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    try:
        asyncio.run(run_app(settings))
    except KeyboardInterrupt:
        pass
    logger.info("Bye.")


if __name__ == "__main__":
    main()
