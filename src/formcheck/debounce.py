"""Timer-based deferral for real-time validation."""

from __future__ import annotations

import asyncio
import heapq
import itertools
from abc import ABC, abstractmethod
from typing import Callable, Protocol


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class Scheduler(ABC):
    @abstractmethod
    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> Cancellable:
        """Run callback once after delay_ms milliseconds."""
        ...


class AsyncioScheduler(Scheduler):
    """Schedules callbacks on an asyncio event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> Cancellable:
        return self.loop.call_later(delay_ms / 1000, callback)


class _ManualHandle:
    def __init__(self, due: int, seq: int, callback: Callable[[], None]) -> None:
        self.due = due
        self.seq = seq
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    def __lt__(self, other: _ManualHandle) -> bool:
        return (self.due, self.seq) < (other.due, other.seq)


class ManualScheduler(Scheduler):
    """Virtual clock; callbacks only run when ``advance`` moves time past them."""

    def __init__(self) -> None:
        self.now = 0
        self._queue: list[_ManualHandle] = []
        self._seq = itertools.count()

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> Cancellable:
        if len(self._queue) > 2 * self.pending():
            self._prune()
        handle = _ManualHandle(self.now + delay_ms, next(self._seq), callback)
        heapq.heappush(self._queue, handle)
        return handle

    def pending(self) -> int:
        return sum(1 for h in self._queue if not h.cancelled)

    def _prune(self) -> None:
        self._queue = [h for h in self._queue if not h.cancelled]
        heapq.heapify(self._queue)

    def advance(self, ms: int) -> None:
        target = self.now + ms
        while self._queue and self._queue[0].due <= target:
            handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self.now = handle.due
            handle.callback()
        self.now = target


class Debouncer:
    """Runs ``callback`` once change events stop arriving for ``delay_ms``.

    Each ``trigger`` supersedes the pending run. A delay of 0 runs the callback
    synchronously without touching the scheduler.
    """

    def __init__(
        self, scheduler: Scheduler, delay_ms: int, callback: Callable[[], None]
    ) -> None:
        if delay_ms < 0:
            raise ValueError("Debounce must be >= 0.")
        self.scheduler = scheduler
        self.delay_ms = delay_ms
        self.callback = callback
        self._pending: Cancellable | None = None
        self._closed = False

    def trigger(self) -> None:
        if self._closed:
            return
        self.cancel()
        if self.delay_ms == 0:
            self.callback()
        else:
            self._pending = self.scheduler.call_later(self.delay_ms, self._fire)

    def _fire(self) -> None:
        self._pending = None
        if not self._closed:
            self.callback()

    def cancel(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def close(self) -> None:
        self.cancel()
        self._closed = True
