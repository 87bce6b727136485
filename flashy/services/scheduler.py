import asyncio
from abc import ABC, abstractmethod
import heapq
import itertools
from typing import Callable

Transition = Callable[[], None]


class Handle:
    def __init__(self):
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class Scheduler(ABC):
    """One-shot delayed transitions. A delay <= 0 runs the transition inline."""

    @abstractmethod
    def schedule(self, delay_ms: int, transition: Transition) -> Handle:
        ...


class ManualScheduler(Scheduler):
    """
    Simulated clock for tests and headless use: nothing fires until
    `advance()` moves time forward.
    """

    def __init__(self):
        self.now = 0
        self._queue: list = []
        self._seq = itertools.count()

    def schedule(self, delay_ms: int, transition: Transition) -> Handle:
        handle = Handle()
        if delay_ms <= 0:
            transition()
            return handle
        heapq.heappush(self._queue, (self.now + delay_ms, next(self._seq), handle, transition))
        return handle

    @property
    def pending(self) -> int:
        return sum(1 for _, _, h, _ in self._queue if not h.cancelled)

    def advance(self, ms: int) -> int:
        """Move the clock forward, firing due transitions in order. Returns how many fired."""
        target = self.now + ms
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, handle, transition = heapq.heappop(self._queue)
            self.now = due
            if handle.cancelled:
                continue
            transition()
            fired += 1
        self.now = target
        return fired


class _LoopHandle(Handle):
    def __init__(self, timer: asyncio.TimerHandle):
        super().__init__()
        self._timer = timer

    def cancel(self) -> None:
        super().cancel()
        self._timer.cancel()


class AsyncioScheduler(Scheduler):
    """Runs transitions on the running event loop via call_later; call from a coroutine."""

    def schedule(self, delay_ms: int, transition: Transition) -> Handle:
        if delay_ms <= 0:
            transition()
            return Handle()
        loop = asyncio.get_running_loop()
        return _LoopHandle(loop.call_later(delay_ms / 1000, transition))
