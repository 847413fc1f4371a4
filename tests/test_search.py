"""Search executor and prefix matching."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from querydispatch.config import NO_MATCH_MESSAGE
from querydispatch.domain.models import SearchState
from querydispatch.services.search import SearchExecutor, prefix_search


@pytest.mark.parametrize(
    ("term", "expected_results", "expected_message"),
    [
        ("dan", ("daniel0113",), ""),
        ("kri", ("kriszta", "Krisztián01"), ""),
        ("KRI", ("kriszta", "Krisztián01"), ""),
        ("zzz", (), "No match."),
        ("", (), ""),
        ("   ", (), ""),
    ],
)
def test_execute_publishes_expected_state(executor, term, expected_results, expected_message):
    executor.execute(term)

    assert executor.state.results == expected_results
    assert executor.state.message == expected_message
    assert executor.state.busy is False


def test_execute_is_idempotent(executor):
    executor.execute("reb")
    first = executor.state
    executor.execute("reb")

    assert executor.state == first == SearchState(results=("rebeka",))


def test_state_does_not_depend_on_history(executor):
    executor.execute("zzz")
    executor.execute("dan")
    after_miss = executor.state

    fresh = SearchExecutor(executor.candidates, no_match_message="No match.")
    fresh.execute("dan")

    assert after_miss == fresh.state


def test_listeners_see_busy_then_settled_state(executor):
    published: list[SearchState] = []
    executor.subscribe(published.append)

    executor.execute("dan")
    executor.execute("")

    assert published == [
        SearchState(busy=True),
        SearchState(results=("daniel0113",)),
        SearchState(results=("daniel0113",), busy=True),
        SearchState(),
    ]


def test_unsubscribe_stops_notifications(executor):
    published: list[SearchState] = []
    unsubscribe = executor.subscribe(published.append)

    executor.execute("dan")
    unsubscribe()
    unsubscribe()
    executor.execute("reb")

    assert len(published) == 2


def test_update_candidates_applies_on_next_execution(executor):
    executor.execute("new")
    assert executor.state.message == "No match."

    executor.update_candidates(["newuser1", "NewUser2"])
    executor.execute("new")

    assert executor.state.results == ("newuser1", "NewUser2")


def test_failing_search_clears_busy_and_propagates():
    def broken(term, candidates):
        raise RuntimeError("lookup failed")

    executor = SearchExecutor(["a"], search=broken)
    published: list[SearchState] = []
    executor.subscribe(published.append)

    with pytest.raises(RuntimeError):
        executor.execute("a")

    assert executor.state == SearchState()
    assert [state.busy for state in published] == [True, False]


def test_default_no_match_message():
    executor = SearchExecutor(["rebeka"])
    executor.execute("x")

    assert executor.state.message == NO_MATCH_MESSAGE


def test_prefix_search_keeps_order_and_casing():
    candidates = ["tesztuser", "Teszt", "admin@dan0.pw", "tesztvagyok"]

    assert prefix_search("TESZT", candidates) == ["tesztuser", "Teszt", "tesztvagyok"]
    assert prefix_search("dan", candidates) == []
    assert prefix_search("", candidates) == candidates


def test_search_state_is_immutable():
    state = SearchState(results=("a",))

    with pytest.raises(ValidationError):
        state.busy = True  # type: ignore[misc]


def test_busy_publish_drops_stale_message(executor):
    executor.execute("zzz")
    published: list[SearchState] = []
    executor.subscribe(published.append)

    executor.execute("   ")

    assert published == [SearchState(busy=True), SearchState()]
