"""Leading-edge throttle controller."""

from __future__ import annotations

from typing import Any, Callable

from querydispatch.logging import logger
from querydispatch.services.exceptions import ControllerClosedError
from querydispatch.utils.scheduling import Scheduler, TimerHandle


class Throttler:
    """Invoke ``target`` at most once per ``limit_ms``; extra calls are dropped.

    There is no trailing invocation: a call made while suppressed is lost.
    """

    def __init__(
        self,
        target: Callable[[str], Any],
        limit_ms: float,
        scheduler: Scheduler,
    ) -> None:
        if limit_ms < 0:
            raise ValueError(f"limit_ms must be non-negative, got {limit_ms}")
        self._target = target
        self.limit_ms = limit_ms
        self._scheduler = scheduler
        self._suppressed = False
        self._reset_handle: TimerHandle | None = None
        self._closed = False

    @property
    def suppressed(self) -> bool:
        return self._suppressed

    @property
    def closed(self) -> bool:
        return self._closed

    def __call__(self, term: str) -> bool:
        if self._closed:
            raise ControllerClosedError("throttler is closed")
        if self._suppressed:
            logger.debug("throttle_dropped", term=term)
            return False

        self._start_window()
        self._target(term)
        logger.debug("throttle_fired", term=term, limit_ms=self.limit_ms)
        return True

    def force(self, term: str) -> None:
        """Fire regardless of suppression and restart the cooldown window."""
        if self._closed:
            raise ControllerClosedError("throttler is closed")
        self._start_window()
        self._target(term)
        logger.debug("throttle_forced", term=term, limit_ms=self.limit_ms)

    def close(self) -> None:
        if self._closed:
            return
        if self._reset_handle is not None:
            self._reset_handle.cancel()
            self._reset_handle = None
        self._closed = True
        logger.debug("controller_closed", controller="throttle")

    def __enter__(self) -> "Throttler":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _start_window(self) -> None:
        if self._reset_handle is not None:
            self._reset_handle.cancel()
        self._suppressed = True
        self._reset_handle = self._scheduler.after(self.limit_ms, self._reset)

    def _reset(self) -> None:
        self._suppressed = False
        self._reset_handle = None


__all__ = ["Throttler"]
