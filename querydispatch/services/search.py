"""Search execution and state publishing."""

from __future__ import annotations

from typing import Callable, Iterable, Sequence

from querydispatch.config import NO_MATCH_MESSAGE
from querydispatch.domain.models import SearchState
from querydispatch.logging import logger

SearchFn = Callable[[str, Sequence[str]], Sequence[str]]
StateListener = Callable[[SearchState], None]


def prefix_search(term: str, candidates: Sequence[str]) -> list[str]:
    """Case-insensitive prefix match that keeps candidate order and casing."""

    needle = term.lower()
    return [candidate for candidate in candidates if candidate.lower().startswith(needle)]


class SearchExecutor:
    """Runs lookups and is the only writer of :class:`SearchState`."""

    def __init__(
        self,
        candidates: Iterable[str],
        *,
        search: SearchFn = prefix_search,
        no_match_message: str = NO_MATCH_MESSAGE,
    ) -> None:
        self._candidates: tuple[str, ...] = tuple(candidates)
        self._search = search
        self.no_match_message = no_match_message
        self._state = SearchState()
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> SearchState:
        return self._state

    @property
    def candidates(self) -> tuple[str, ...]:
        return self._candidates

    def update_candidates(self, candidates: Iterable[str]) -> None:
        """Replace the candidate set; applies from the next execution."""
        self._candidates = tuple(candidates)

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def execute(self, term: str) -> None:
        previous = self._state
        self._publish(previous.model_copy(update={"busy": True, "message": ""}))

        if not term.strip():
            self._publish(SearchState())
            return

        try:
            matches = tuple(self._search(term, self._candidates))
        except Exception:
            self._publish(previous.model_copy(update={"busy": False}))
            raise

        if matches:
            self._publish(SearchState(results=matches))
        else:
            self._publish(SearchState(message=self.no_match_message))
        logger.debug("search_executed", term=term, matches=len(matches))

    def _publish(self, state: SearchState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)


__all__ = ["SearchExecutor", "SearchFn", "StateListener", "prefix_search"]
