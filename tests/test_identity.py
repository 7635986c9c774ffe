# tests/test_identity.py

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

from taskboard.core.identity import (
    SESSION_KEY,
    ParticipantCounter,
    is_participant_id,
    resolve_or_create_session,
)


def test_counter_starts_at_one_and_increments() -> None:
    counter = ParticipantCounter()
    assert counter.peek() == 0
    assert [counter.next() for _ in range(3)] == [1, 2, 3]
    assert counter.next_participant_id() == "P4"
    assert counter.peek() == 4


def test_counter_is_unique_under_concurrency() -> None:
    counter = ParticipantCounter()
    n = 2000

    with ThreadPoolExecutor(max_workers=16) as pool:
        values = list(pool.map(lambda _: counter.next(), range(n)))

    assert len(set(values)) == n
    assert sorted(values) == list(range(1, n + 1))
    assert counter.peek() == n


def test_resolve_mints_once_per_session() -> None:
    counter = ParticipantCounter()
    first: dict[str, str] = {}
    second: dict[str, str] = {}

    assert resolve_or_create_session(first, counter) == "P1"
    assert resolve_or_create_session(second, counter) == "P2"
    # same session again: no re-mint
    assert resolve_or_create_session(first, counter) == "P1"
    assert first[SESSION_KEY] == "P1"
    assert counter.peek() == 2


def test_resolve_replaces_malformed_session_value() -> None:
    counter = ParticipantCounter()
    session = {SESSION_KEY: "P0"}

    assert resolve_or_create_session(session, counter) == "P1"
    assert session[SESSION_KEY] == "P1"


def test_resolve_without_session_always_mints() -> None:
    counter = ParticipantCounter()
    assert resolve_or_create_session(None, counter) == "P1"
    assert resolve_or_create_session(None, counter) == "P2"


def test_is_participant_id() -> None:
    assert is_participant_id("P1")
    assert is_participant_id("P42")
    assert not is_participant_id("P0")
    assert not is_participant_id("p1")
    assert not is_participant_id("P01")
    assert not is_participant_id(7)
