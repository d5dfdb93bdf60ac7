"""Shared concurrency primitives for snapshot persistence.

Two primitives are exposed:

1. **Locker** -- a single-slot asyncio gate.  Saves lock it while a write is
   pending; readers (``similarity_search``, concurrent ``save`` callers)
   ``await gate.wait()`` so they never observe the map mid-rewrite.

2. **Debouncer** -- a per-key single-flight timer table.  Each
   ``schedule(key, ...)`` cancels the pending timer for that key and starts
   a new one, so a burst of mutations collapses into one physical write.
   A module-level ``debounce`` instance is shared process-wide, mirroring
   how every index over the same storage path funnels its writes through
   one timer.

Both primitives outlive any single event loop (shared state is process-wide,
while ``asyncio.run`` creates a fresh loop per call).  A timer whose loop has
stopped is reported as not pending, and a gate locked from a new loop gets a
fresh event, so callers can re-issue work that died with an old loop.
"""

from __future__ import annotations

import asyncio
import inspect
from typing import Any, Callable

import structlog

logger = structlog.get_logger(logger_name=__name__)

TaskFactory = Callable[[], Any]


def _running_loop() -> asyncio.AbstractEventLoop | None:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


def _loop_is_live(loop: asyncio.AbstractEventLoop) -> bool:
    """Return ``True`` if *loop* can still run callbacks scheduled on it."""
    return loop.is_running() and not loop.is_closed()


class Locker:
    """Single-holder asynchronous latch.

    Starts locked.  ``unlock()`` releases every waiter at once; ``lock()``
    re-arms the gate.  Re-locking while still locked keeps the current
    pending state, so overlapping saves all resolve on the same unlock.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._loop = _running_loop()

    @property
    def locked(self) -> bool:
        return not self._event.is_set()

    def lock(self) -> None:
        # A released event is replaced rather than cleared: waiters from the
        # previous cycle have already been woken and must stay released.
        # An event armed under another loop may be bound to it, so it is
        # replaced as well.
        loop = _running_loop()
        if self._event.is_set() or loop is not self._loop:
            self._event = asyncio.Event()
            self._loop = loop

    def unlock(self) -> None:
        self._event.set()

    async def wait(self) -> None:
        """Return once the gate is unlocked (immediately if it already is)."""
        await self._event.wait()


class Debouncer:
    """Coalesce repeated task requests per key into one delayed execution.

    Timers live on the running event loop; only the last task scheduled for
    a key within the delay window runs.  Task failures are logged and
    swallowed so a failing write never crashes the loop.
    """

    def __init__(self) -> None:
        self._timers: dict[str, tuple[asyncio.AbstractEventLoop, asyncio.TimerHandle]] = {}
        # Fired but unfinished task per key.
        self._inflight: dict[str, asyncio.Task[None]] = {}
        # Strong references so fired tasks are not garbage-collected mid-flight.
        self._running: set[asyncio.Task[None]] = set()

    def schedule(self, key: str, func: TaskFactory, delay: float) -> None:
        """Run *func* after *delay* seconds unless *key* is rescheduled first.

        Must be called from within a running event loop.
        """
        loop = asyncio.get_running_loop()
        previous = self._timers.pop(key, None)
        if previous is not None:
            previous[1].cancel()
            logger.debug("debounce_rescheduled", key=key)
        self._timers[key] = (loop, loop.call_later(delay, self._fire, key, func))

    def pending(self, key: str) -> bool:
        """Return ``True`` while work for *key* is waiting or running on a live loop.

        A timer left behind by a loop that has since stopped can never fire;
        it is discarded and reported as not pending.
        """
        entry = self._timers.get(key)
        if entry is not None:
            loop, timer = entry
            if _loop_is_live(loop):
                return True
            del self._timers[key]
            timer.cancel()
            logger.debug("debounce_timer_expired", key=key)

        task = self._inflight.get(key)
        return task is not None and not task.done() and _loop_is_live(task.get_loop())

    def cancel(self, key: str) -> bool:
        """Cancel the pending timer for *key*; return whether one existed."""
        entry = self._timers.pop(key, None)
        if entry is None:
            return False
        entry[1].cancel()
        return True

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _fire(self, key: str, func: TaskFactory) -> None:
        self._timers.pop(key, None)
        task = asyncio.ensure_future(self._run(key, func))
        self._inflight[key] = task
        self._running.add(task)
        task.add_done_callback(lambda done: self._finished(key, done))

    def _finished(self, key: str, task: asyncio.Task[None]) -> None:
        self._running.discard(task)
        if self._inflight.get(key) is task:
            del self._inflight[key]

    @staticmethod
    async def _run(key: str, func: TaskFactory) -> None:
        try:
            result = func()
            if inspect.isawaitable(result):
                await result
        except Exception as exc:
            logger.error("debounced_task_failed", key=key, error=str(exc))


debounce = Debouncer()
