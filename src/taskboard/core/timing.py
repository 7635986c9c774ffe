# src/taskboard/core/timing.py

from __future__ import annotations

import time
import uuid
from collections.abc import Callable
from typing import Any, TypeVar

T = TypeVar("T")


def measure(fn: Callable[..., T], *args: Any, **kwargs: Any) -> tuple[T, int]:
    """
    Run fn(*args, **kwargs) and return (result, elapsed whole milliseconds).

    Exceptions raised by fn propagate unchanged; no duration is reported for them.
    """
    start = time.perf_counter()
    result = fn(*args, **kwargs)
    elapsed_ms = int((time.perf_counter() - start) * 1000)
    return result, max(0, elapsed_ms)


def generate_request_id() -> str:
    """Short opaque id for one request (12 hex chars)."""
    return uuid.uuid4().hex[:12]
