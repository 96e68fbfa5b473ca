# src/todo_sync/core/engine.py

"""
Engine: the single writer of TodoState.

UI intents, ticker fires and network completions all arrive as messages.
dispatch() applies one message to completion before the next one is taken
off the queue, then persists the entries if the message could change them.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from ..errors import IndexOutOfRange, PersistenceError
from ..sync.controller import SyncController
from ..sync.ticker import run_ticker
from . import messages as m
from .models import Entry
from .ports import EntryRepo, SyncTransport
from .state import TodoState

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class DispatchResult:
    message: m.Message
    error: IndexOutOfRange | None = None
    persisted: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(slots=True)
class _Envelope:
    msg: m.Message
    reply: asyncio.Future[DispatchResult] | None = None


class Engine:
    def __init__(
        self,
        *,
        store: EntryRepo,
        transport: SyncTransport | None = None,
        push_interval_seconds: float = 5.0,
        state: TodoState | None = None,
    ) -> None:
        self.store = store
        if state is None:
            state = TodoState(entries=self._load_entries())
        self.state = state
        self.push_interval_seconds = push_interval_seconds

        self._queue: asyncio.Queue[_Envelope] = asyncio.Queue()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._ticker: asyncio.Task[None] | None = None
        self.sync: SyncController | None = (
            SyncController(transport, self.post) if transport is not None else None
        )

    def _load_entries(self) -> list[Entry]:
        try:
            entries = self.store.load()
        except Exception:
            logger.exception("Failed to load entries; starting empty")
            return []
        if entries is None:
            logger.info("No stored entries; starting empty")
            return []
        logger.info("Restored %d entries from storage", len(entries))
        return entries

    # ---- message intake ----

    def post(self, msg: m.Message) -> None:
        """Enqueue a message; must be called from the engine's loop."""
        self._queue.put_nowait(_Envelope(msg))

    def post_threadsafe(self, msg: m.Message) -> None:
        """Enqueue a message from a foreign thread."""
        if self._loop is None:
            raise RuntimeError("engine is not running")
        self._loop.call_soon_threadsafe(self._queue.put_nowait, _Envelope(msg))

    async def submit(self, msg: m.Message) -> DispatchResult:
        """Enqueue a message and wait until run() has applied it."""
        reply: asyncio.Future[DispatchResult] = asyncio.get_running_loop().create_future()
        self._queue.put_nowait(_Envelope(msg, reply))
        return await reply

    # ---- lifecycle ----

    def start(self, *, pull: bool = True) -> None:
        """Issue the startup pull and start the push ticker (needs a running loop)."""
        self._loop = asyncio.get_running_loop()
        if self.sync is None:
            logger.info("Sync disabled; running local-only")
            return
        if pull:
            self.sync.start_pull()
        if self._ticker is None:
            self._ticker = self._loop.create_task(
                run_ticker(lambda: self.post(m.Tick()), interval_seconds=self.push_interval_seconds),
                name="todo-sync-ticker",
            )

    def _process(self, env: _Envelope) -> DispatchResult | None:
        try:
            result = self.dispatch(env.msg)
        except Exception as e:
            logger.exception("dispatch crashed msg=%r", env.msg)
            if env.reply is not None and not env.reply.done():
                env.reply.set_exception(e)
            return None
        if env.reply is not None and not env.reply.done():
            env.reply.set_result(result)
        return result

    async def run(self) -> None:
        """Apply queued messages forever, one at a time. Cancel to stop."""
        self._loop = asyncio.get_running_loop()
        while True:
            env = await self._queue.get()
            try:
                self._process(env)
            finally:
                self._queue.task_done()

    def drain(self) -> list[DispatchResult]:
        """Apply every queued message now, without waiting for new ones."""
        results: list[DispatchResult] = []
        while not self._queue.empty():
            env = self._queue.get_nowait()
            try:
                result = self._process(env)
            finally:
                self._queue.task_done()
            if result is not None:
                results.append(result)
        return results

    async def stop(self) -> None:
        if self._ticker is not None:
            self._ticker.cancel()
            await asyncio.gather(self._ticker, return_exceptions=True)
            self._ticker = None
        if self.sync is not None:
            await self.sync.close()
        self.persist()

    # ---- dispatch ----

    def dispatch(self, msg: m.Message) -> DispatchResult:
        try:
            self._apply(msg)
        except IndexOutOfRange as e:
            logger.warning("Ignoring %s: %s", type(msg).__name__, e.message)
            return DispatchResult(message=msg, error=e)

        persisted = False
        if isinstance(msg, m.ENTRY_MUTATING):
            if isinstance(msg, m.PullCompleted) and not msg.ok:
                return DispatchResult(message=msg)
            persisted = self.persist()
        return DispatchResult(message=msg, persisted=persisted)

    def _apply(self, msg: m.Message) -> None:
        st = self.state
        match msg:
            case m.Add(description=description):
                st.add(st.new_entry_text if description is None else description)
            case m.SetFilter(filter=flt):
                st.set_filter(flt)
            case m.Toggle(index=idx):
                st.toggle(idx)
            case m.ToggleEdit(index=idx):
                st.toggle_edit(idx)
            case m.Edit(index=idx, text=text):
                st.complete_edit(idx, st.edit_buffer if text is None else text)
            case m.Remove(index=idx):
                st.remove(idx)
            case m.ToggleAll():
                st.toggle_all(not st.is_all_completed())
            case m.ClearCompleted():
                st.clear_completed()
            case m.UpdateNewText(text=text):
                st.update_new_text(text)
            case m.UpdateEditText(text=text):
                st.update_edit_text(text)
            case m.Tick():
                logger.debug("tick")
                if self.sync is not None:
                    self.sync.push(st.entries)
            case m.PullCompleted():
                entries = SyncController.handle_pull_completed(msg)
                if entries is not None:
                    # Replaces local edits made while the pull was in flight.
                    st.replace_entries(entries)
            case m.PushCompleted():
                SyncController.handle_push_completed(msg)
            case m.Nope():
                pass
            case _:
                raise TypeError(f"unknown message: {msg!r}")

    def persist(self) -> bool:
        try:
            self.store.save(self.state.entries)
        except PersistenceError as e:
            logger.error("Persisting entries failed: %s", e.message)
            return False
        except Exception:
            logger.exception("Persisting entries failed")
            return False
        return True
