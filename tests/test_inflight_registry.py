from __future__ import annotations

from typing import Any

import httpx
import pytest

from guardian_gg.client.errors import HttpError
from guardian_gg.client.inflight import InFlightRegistry, request_key

URL = "https://api.guardian.gg/elo/1/"


def _recorder(calls: list[tuple[str, Any, Any]], name: str):
    def callback(error: Any, payload: Any) -> None:
        calls.append((name, error, payload))

    return callback


def test_first_add_is_not_pending_and_later_adds_are() -> None:
    registry = InFlightRegistry()
    calls: list[tuple[str, Any, Any]] = []

    assert registry.add("GET", URL, _recorder(calls, "a")) is False
    assert registry.add("GET", URL, _recorder(calls, "b")) is True
    assert registry.add("GET", URL, _recorder(calls, "c")) is True

    assert len(registry) == 1
    assert registry.waiting("GET", URL) == 3
    assert calls == []


def test_run_delivers_identical_result_in_registration_order() -> None:
    registry = InFlightRegistry()
    calls: list[tuple[str, Any, Any]] = []
    payload = [{"mode": 1, "elo": 10, "rank": 2}]

    for name in ("a", "b", "c"):
        registry.add("GET", URL, _recorder(calls, name))

    registry.run("GET", URL, None, payload)

    assert [c[0] for c in calls] == ["a", "b", "c"]
    assert all(c[1] is None and c[2] is payload for c in calls)
    assert len(registry) == 0


def test_add_after_run_starts_a_new_cycle() -> None:
    registry = InFlightRegistry()
    calls: list[tuple[str, Any, Any]] = []

    registry.add("GET", URL, _recorder(calls, "a"))
    registry.run("GET", URL, None, 1)

    assert registry.add("GET", URL, _recorder(calls, "b")) is False
    registry.run("GET", URL, None, 2)

    assert calls == [("a", None, 1), ("b", None, 2)]


def test_different_methods_and_urls_do_not_coalesce() -> None:
    registry = InFlightRegistry()
    noop = lambda error, payload: None  # noqa: E731

    assert registry.add("GET", URL, noop) is False
    assert registry.add("POST", URL, noop) is False
    assert registry.add("GET", "https://api.guardian.gg/elo/2/", noop) is False
    assert len(registry) == 3


def test_query_parameter_order_is_not_normalized() -> None:
    registry = InFlightRegistry()
    noop = lambda error, payload: None  # noqa: E731

    assert registry.add("GET", "https://x/a/?p=1&q=2", noop) is False
    assert registry.add("GET", "https://x/a/?q=2&p=1", noop) is False


def test_url_objects_and_strings_share_one_key() -> None:
    registry = InFlightRegistry()
    calls: list[tuple[str, Any, Any]] = []

    registry.add("get", httpx.URL(URL), _recorder(calls, "a"))
    assert registry.add("GET", URL, _recorder(calls, "b")) is True
    assert request_key("get", httpx.URL(URL)) in registry

    registry.run("GET", httpx.URL(URL), None, "ok")
    assert [c[0] for c in calls] == ["a", "b"]


def test_run_for_unknown_key_is_a_noop() -> None:
    registry = InFlightRegistry()

    registry.run("GET", URL, None, "spurious")

    assert len(registry) == 0


def test_second_run_for_same_key_is_ignored() -> None:
    registry = InFlightRegistry()
    calls: list[tuple[str, Any, Any]] = []

    registry.add("GET", URL, _recorder(calls, "a"))
    registry.run("GET", URL, None, 1)
    registry.run("GET", URL, None, 2)

    assert calls == [("a", None, 1)]


def test_errors_reach_every_waiter() -> None:
    registry = InFlightRegistry()
    calls: list[tuple[str, Any, Any]] = []
    error = HttpError("boom", code=500)

    registry.add("GET", URL, _recorder(calls, "a"))
    registry.add("GET", URL, _recorder(calls, "b"))
    registry.run("GET", URL, error, None)

    assert calls == [("a", error, None), ("b", error, None)]


def test_raising_waiter_does_not_starve_the_others() -> None:
    registry = InFlightRegistry()
    calls: list[tuple[str, Any, Any]] = []

    def bad(error: Any, payload: Any) -> None:
        raise ValueError("callback failed")

    registry.add("GET", URL, bad)
    registry.add("GET", URL, _recorder(calls, "b"))

    with pytest.raises(ValueError, match="callback failed"):
        registry.run("GET", URL, None, "ok")

    assert calls == [("b", None, "ok")]
    assert len(registry) == 0


def test_waiter_re_adding_during_delivery_starts_fresh_entry() -> None:
    registry = InFlightRegistry()
    results: list[bool] = []

    def again(error: Any, payload: Any) -> None:
        results.append(registry.add("GET", URL, lambda e, p: None))

    registry.add("GET", URL, again)
    registry.run("GET", URL, None, "ok")

    assert results == [False]
    assert registry.waiting("GET", URL) == 1


def test_independent_registries_do_not_share_state() -> None:
    first = InFlightRegistry()
    second = InFlightRegistry()
    noop = lambda error, payload: None  # noqa: E731

    assert first.add("GET", URL, noop) is False
    assert second.add("GET", URL, noop) is False
