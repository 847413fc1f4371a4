"""Route input changes to the debounced and throttled search paths."""

from __future__ import annotations

from querydispatch.config import DispatcherSettings, get_settings
from querydispatch.logging import logger
from querydispatch.services.debounce import Debouncer
from querydispatch.services.exceptions import ControllerClosedError
from querydispatch.services.search import SearchExecutor, StateListener
from querydispatch.services.throttle import Throttler
from querydispatch.utils.scheduling import AsyncioScheduler, Scheduler


class DispatchCoordinator:
    """Feed every keystroke to both timing controllers.

    The debounced path always receives the term. The throttled path is only
    called when more than ``throttle_limit_ms`` passed since the last
    coordinator-level forward. The throttler keeps its own suppression flag on
    top of this gate and stays authoritative; the two are not kept in sync.
    A blank term skips both gates and is forced through the throttler.
    """

    def __init__(
        self,
        executor: SearchExecutor,
        scheduler: Scheduler,
        *,
        debounce_delay_ms: float = 300,
        throttle_limit_ms: float = 800,
    ) -> None:
        self.executor = executor
        self._scheduler = scheduler
        self.throttle_limit_ms = throttle_limit_ms
        self.debouncer = Debouncer(executor.execute, debounce_delay_ms, scheduler)
        self.throttler = Throttler(executor.execute, throttle_limit_ms, scheduler)
        self._term = ""
        self._last_fire: float | None = None
        self._closed = False

    @property
    def term(self) -> str:
        return self._term

    @property
    def last_fire(self) -> float | None:
        return self._last_fire

    @property
    def closed(self) -> bool:
        return self._closed

    def on_input_change(self, raw_term: str) -> None:
        if self._closed:
            raise ControllerClosedError("dispatcher is closed")
        self._term = raw_term
        self.debouncer(raw_term)

        now = self._scheduler.now()
        if not raw_term.strip():
            # Clearing the field always answers right away.
            self.throttler.force(raw_term)
            self._last_fire = now
            logger.debug("dispatch_throttle_gate", term=raw_term, fired=True)
        elif self._gate_open(now):
            fired = self.throttler(raw_term)
            self._last_fire = now
            logger.debug("dispatch_throttle_gate", term=raw_term, fired=fired)

    def close(self) -> None:
        if self._closed:
            return
        self.debouncer.close()
        self.throttler.close()
        self._closed = True

    def __enter__(self) -> "DispatchCoordinator":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _gate_open(self, now: float) -> bool:
        if self._last_fire is None:
            return True
        return now - self._last_fire > self.throttle_limit_ms


def create_dispatcher(
    settings: DispatcherSettings | None = None,
    *,
    scheduler: Scheduler | None = None,
    listener: StateListener | None = None,
) -> DispatchCoordinator:
    """Wire an executor and coordinator from settings."""

    settings = settings or get_settings()
    executor = SearchExecutor(
        settings.search.candidates,
        no_match_message=settings.search.no_match_message,
    )
    if listener is not None:
        executor.subscribe(listener)
    return DispatchCoordinator(
        executor,
        scheduler or AsyncioScheduler(),
        debounce_delay_ms=settings.timing.debounce_delay_ms,
        throttle_limit_ms=settings.timing.throttle_limit_ms,
    )


__all__ = ["DispatchCoordinator", "create_dispatcher"]
