# src/todo_sync/sync/controller.py

from __future__ import annotations

"""
Sync controller.

Two independent flows against the remote task collection:
- startup pull: one GET, result delivered as PullCompleted,
- recurring push: one POST per tick with the whole entries list,
  result delivered as PushCompleted.

Network calls run as asyncio tasks. The controller never touches State:
every outcome goes back through the engine's message queue.
"""

import asyncio
import logging
from collections.abc import Callable

from ..core.messages import Message, PullCompleted, PushCompleted
from ..core.models import Entry
from ..core.ports import SyncTransport
from ..errors import PullFailure, PushFailure

logger = logging.getLogger(__name__)


class SyncController:
    def __init__(self, transport: SyncTransport, post: Callable[[Message], None]) -> None:
        self._transport = transport
        self._post = post
        # Strong refs so the loop does not garbage-collect running requests.
        self._inflight: set[asyncio.Task[None]] = set()
        self._pull_started = False
        self.pushes_started = 0

    @property
    def transport(self) -> SyncTransport:
        return self._transport

    @property
    def inflight(self) -> int:
        return len(self._inflight)

    def _spawn(self, coro, name: str) -> asyncio.Task[None]:
        task = asyncio.get_running_loop().create_task(coro, name=name)
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)
        return task

    # ---- startup pull ----

    def start_pull(self) -> asyncio.Task[None] | None:
        """Issue the startup GET. Only the first call does anything."""
        if self._pull_started:
            logger.debug("startup pull already issued; ignoring")
            return None
        self._pull_started = True
        logger.info("Startup pull started")
        return self._spawn(self._pull(), name="todo-sync-pull")

    async def _pull(self) -> None:
        try:
            entries = await self._transport.fetch_entries()
        except PullFailure as e:
            self._post(PullCompleted(error=e))
            return
        except Exception as e:
            logger.exception("unexpected error during pull")
            self._post(PullCompleted(error=PullFailure(f"unexpected pull error: {e}")))
            return
        self._post(PullCompleted(entries=tuple(entries)))

    # ---- recurring push ----

    def push(self, entries: list[Entry]) -> asyncio.Task[None]:
        """
        POST a snapshot of entries. Fire-and-forget: earlier pushes that are
        still in flight are left alone.
        """
        snapshot = [
            Entry(description=e.description, completed=e.completed, editing=e.editing)
            for e in entries
        ]
        self.pushes_started += 1
        logger.debug("Push #%d started entries=%d inflight=%d", self.pushes_started, len(snapshot), self.inflight)
        return self._spawn(self._push(snapshot), name=f"todo-sync-push-{self.pushes_started}")

    async def _push(self, entries: list[Entry]) -> None:
        try:
            await self._transport.push_entries(entries)
        except PushFailure as e:
            self._post(PushCompleted(error=e))
            return
        except Exception as e:
            logger.exception("unexpected error during push")
            self._post(PushCompleted(error=PushFailure(f"unexpected push error: {e}")))
            return
        self._post(PushCompleted())

    # ---- completion handling (called from Engine.dispatch) ----

    @staticmethod
    def handle_pull_completed(msg: PullCompleted) -> list[Entry] | None:
        """Return the entries to install, or None to keep the current ones."""
        if msg.ok:
            entries = list(msg.entries or ())
            logger.info("Startup pull succeeded entries=%d", len(entries))
            return entries
        err = msg.error
        logger.warning(
            "Startup pull failed; keeping local entries: %s",
            err.message if err is not None else "no payload",
        )
        return None

    @staticmethod
    def handle_push_completed(msg: PushCompleted) -> None:
        if msg.error is None:
            logger.debug("Push completed")
            return
        logger.warning("Push failed (not retried): %s", msg.error.message)

    async def close(self) -> None:
        """Cancel in-flight requests and release the transport."""
        tasks = list(self._inflight)
        for t in tasks:
            t.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        await self._transport.aclose()
