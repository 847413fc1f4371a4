"""Trailing debounce controller."""

from __future__ import annotations

from typing import Any, Callable

from querydispatch.logging import logger
from querydispatch.services.exceptions import ControllerClosedError
from querydispatch.utils.scheduling import Scheduler, TimerHandle


class Debouncer:
    """Fire ``target`` with the last received term after ``delay_ms`` of quiet.

    Every call cancels the previously scheduled invocation, so at most one
    timer is live per instance. :meth:`close` must run when the consumer goes
    away; use the instance as a context manager to guarantee it.
    """

    def __init__(
        self,
        target: Callable[[str], Any],
        delay_ms: float,
        scheduler: Scheduler,
    ) -> None:
        if delay_ms < 0:
            raise ValueError(f"delay_ms must be non-negative, got {delay_ms}")
        self._target = target
        self.delay_ms = delay_ms
        self._scheduler = scheduler
        self._handle: TimerHandle | None = None
        self._pending_term: str | None = None
        self._closed = False

    @property
    def pending(self) -> bool:
        return self._handle is not None

    @property
    def closed(self) -> bool:
        return self._closed

    def __call__(self, term: str) -> None:
        if self._closed:
            raise ControllerClosedError("debouncer is closed")
        self._cancel_handle()
        self._pending_term = term
        self._handle = self._scheduler.after(self.delay_ms, self._fire)
        logger.debug("debounce_scheduled", term=term, delay_ms=self.delay_ms)

    def cancel(self) -> bool:
        """Drop the pending invocation without firing it."""
        had_pending = self._cancel_handle()
        if had_pending:
            logger.debug("debounce_cancelled", term=self._pending_term)
        self._pending_term = None
        return had_pending

    def flush(self) -> bool:
        """Fire the pending invocation now instead of waiting."""
        if self._handle is None:
            return False
        term = self._pending_term
        self._cancel_handle()
        self._pending_term = None
        self._target(term)
        return True

    def close(self) -> None:
        if self._closed:
            return
        self.cancel()
        self._closed = True
        logger.debug("controller_closed", controller="debounce")

    def __enter__(self) -> "Debouncer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _cancel_handle(self) -> bool:
        if self._handle is None:
            return False
        self._handle.cancel()
        self._handle = None
        return True

    def _fire(self) -> None:
        term = self._pending_term
        self._handle = None
        self._pending_term = None
        logger.debug("debounce_fired", term=term)
        self._target(term)


__all__ = ["Debouncer"]
