# src/todo_sync/sync/ticker.py

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)


async def run_ticker(
        on_tick: Callable[[], None],
        *,
        interval_seconds: float = 5.0,
) -> None:
    """
    Call on_tick every interval_seconds, forever.

    The first tick fires one interval after start. A failing callback is
    logged and the loop keeps going. To stop the ticker, cancel the task.
    """
    sleep_s = max(0.01, float(interval_seconds))

    while True:
        await asyncio.sleep(sleep_s)
        try:
            on_tick()
        except Exception:
            logger.exception("tick callback failed")
