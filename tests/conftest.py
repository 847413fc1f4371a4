"""Shared pytest fixtures for timing-controller and dispatcher tests."""

from __future__ import annotations

import pytest

from querydispatch.services.search import SearchExecutor
from querydispatch.utils.scheduling import VirtualScheduler

SAMPLE_CANDIDATES = ["daniel0113", "rebeka", "kriszta", "Krisztián01"]


class RecordingTarget:
    """Callable that remembers when and with what it was invoked."""

    def __init__(self, scheduler: VirtualScheduler) -> None:
        self._scheduler = scheduler
        self.calls: list[tuple[float, str]] = []

    def __call__(self, term: str) -> None:
        self.calls.append((self._scheduler.now(), term))

    # Lets the recorder stand in for a SearchExecutor.
    execute = __call__

    @property
    def terms(self) -> list[str]:
        return [term for _, term in self.calls]


@pytest.fixture
def scheduler() -> VirtualScheduler:
    return VirtualScheduler()


@pytest.fixture
def target(scheduler) -> RecordingTarget:
    return RecordingTarget(scheduler)


@pytest.fixture
def executor() -> SearchExecutor:
    return SearchExecutor(SAMPLE_CANDIDATES, no_match_message="No match.")
