# src/taskboard/core/identity.py

from __future__ import annotations

import logging
import re
import threading
from collections.abc import MutableMapping
from typing import Any

logger = logging.getLogger(__name__)

SESSION_KEY = "participant_id"

_PARTICIPANT_RE = re.compile(r"^P[1-9][0-9]*$")


class ParticipantCounter:
    """
    Process-wide participant counter.

    Values are 1, 2, 3, ... and live only in memory: a restart starts over,
    which is fine because participant ids only label sessions.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value = 0

    def next(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    def next_participant_id(self) -> str:
        return f"P{self.next()}"

    def peek(self) -> int:
        """Last value handed out (0 before the first call)."""
        with self._lock:
            return self._value


def is_participant_id(value: Any) -> bool:
    return isinstance(value, str) and _PARTICIPANT_RE.match(value) is not None


def resolve_or_create_session(
    session: MutableMapping[str, Any] | None,
    counter: ParticipantCounter,
) -> str:
    """
    Return the participant id bound to `session`, minting one if needed.

    `session` is whatever mutable mapping the transport keeps per client
    (e.g. Starlette's request.session). An existing well-formed id is
    returned as-is; otherwise a new id is minted and written back so the
    next request from the same client resolves to it. With no session at
    all, a fresh id is returned and nothing is stored.
    """
    if session is not None:
        current = session.get(SESSION_KEY)
        if is_participant_id(current):
            return current
        if current is not None:
            logger.warning("Ignoring malformed participant id in session: %r", current)

    participant_id = counter.next_participant_id()
    if session is not None:
        session[SESSION_KEY] = participant_id
    logger.info("New participant session %s", participant_id)
    return participant_id
