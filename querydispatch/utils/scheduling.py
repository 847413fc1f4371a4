"""Deferred-callback schedulers used by the timing controllers.

Controllers only depend on the small :class:`Scheduler` capability, so the
same debounce/throttle code runs against the asyncio event loop in
production and against :class:`VirtualScheduler` in tests.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
import time
from typing import Callable, Protocol

Callback = Callable[[], None]


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def now(self) -> float:
        """Return a monotonic instant in milliseconds."""
        ...

    def after(self, delay_ms: float, fn: Callback) -> TimerHandle:
        """Run ``fn`` once ``delay_ms`` milliseconds from now."""
        ...


def _check_delay(delay_ms: float) -> None:
    if delay_ms < 0:
        raise ValueError(f"delay must be non-negative, got {delay_ms}")


class AsyncioScheduler:
    """Scheduler backed by ``loop.call_later``."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def now(self) -> float:
        return time.monotonic() * 1000.0

    def after(self, delay_ms: float, fn: Callback) -> asyncio.TimerHandle:
        _check_delay(delay_ms)
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay_ms / 1000.0, fn)


class _VirtualTimer:
    __slots__ = ("due", "seq", "callback", "cancelled")

    def __init__(self, due: float, seq: int, callback: Callback) -> None:
        self.due = due
        self.seq = seq
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    def __lt__(self, other: "_VirtualTimer") -> bool:
        return (self.due, self.seq) < (other.due, other.seq)


class VirtualScheduler:
    """Simulated clock; time only moves when :meth:`advance` is called.

    Timers due at or before the target instant fire in expiry order, ties in
    scheduling order. Timers scheduled by a callback fire in the same advance
    if they fall inside the window.
    """

    def __init__(self, start_ms: float = 0.0) -> None:
        self._now = float(start_ms)
        self._queue: list[_VirtualTimer] = []
        self._seq = itertools.count()

    def now(self) -> float:
        return self._now

    def after(self, delay_ms: float, fn: Callback) -> _VirtualTimer:
        _check_delay(delay_ms)
        timer = _VirtualTimer(self._now + delay_ms, next(self._seq), fn)
        heapq.heappush(self._queue, timer)
        return timer

    @property
    def pending(self) -> int:
        return sum(1 for timer in self._queue if not timer.cancelled)

    def advance(self, delta_ms: float) -> int:
        _check_delay(delta_ms)
        return self.advance_to(self._now + delta_ms)

    def advance_to(self, instant_ms: float) -> int:
        """Move the clock forward, returning the number of callbacks fired."""

        if instant_ms < self._now:
            raise ValueError("virtual clock cannot move backwards")
        fired = 0
        while self._queue and self._queue[0].due <= instant_ms:
            timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            self._now = max(self._now, timer.due)
            timer.cancelled = True
            timer.callback()
            fired += 1
        self._now = instant_ms
        return fired


__all__ = [
    "AsyncioScheduler",
    "Callback",
    "Scheduler",
    "TimerHandle",
    "VirtualScheduler",
]
