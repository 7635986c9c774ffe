# src/taskboard/metrics/sink.py

from __future__ import annotations

import csv
import io
import logging
import threading
from pathlib import Path

from ..errors import MetricsWriteError
from .events import METRICS_HEADER, MetricEvent, event_to_row

logger = logging.getLogger(__name__)

# One lock per resolved path, so two sinks on the same file still serialize.
_PATH_LOCKS: dict[Path, threading.Lock] = {}
_PATH_LOCKS_GUARD = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    key = path.resolve()
    with _PATH_LOCKS_GUARD:
        lock = _PATH_LOCKS.get(key)
        if lock is None:
            lock = _PATH_LOCKS[key] = threading.Lock()
        return lock


def _encode_rows(rows: list[list[str]]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerows(rows)
    return buf.getvalue()


class CsvMetricsSink:
    """
    Append-only CSV metrics log.

    Layout:
    - header row (METRICS_HEADER), written once when the file is missing or empty
    - one row per recorded event, "\\n"-terminated, UTF-8

    Values are written with the csv module's minimal quoting: plain values come
    out as plain comma-joined text, and a value holding a comma, quote or
    newline is quoted instead of breaking the row.

    Thread-safety:
    - header check and append happen under one lock per file
    - each record() is a single write of a fully encoded row
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._lock = _lock_for(self._path)
        self._dir_ready = False

    @property
    def path(self) -> Path:
        return self._path

    def _append(self, rows: list[list[str]]) -> None:
        # Caller holds self._lock.
        if not self._dir_ready:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._dir_ready = True
        with self._path.open("a", encoding="utf-8", newline="") as fh:
            if fh.tell() == 0:
                rows = [list(METRICS_HEADER), *rows]
                logger.info("Metrics log created path=%s", self._path)
            if rows:
                fh.write(_encode_rows(rows))

    def ensure_header(self) -> None:
        """Create the file with its header if needed. Idempotent."""
        with self._lock:
            try:
                self._append([])
            except OSError as e:
                raise MetricsWriteError(f"cannot initialize metrics log {self._path}: {e}") from e

    def record(self, event: MetricEvent) -> None:
        row = event_to_row(event)
        with self._lock:
            try:
                self._append([row])
            except OSError as e:
                raise MetricsWriteError(f"cannot append to metrics log {self._path}: {e}") from e
        logger.debug(
            "Metric recorded session=%s request=%s task=%s step=%s ms=%s",
            event.session_id,
            event.request_id,
            event.task_code.value,
            event.step.value,
            event.duration_ms,
        )


class InMemoryMetricsSink:
    """Keeps events in a list. Used when the CSV log is disabled."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._events: list[MetricEvent] = []

    def ensure_header(self) -> None:
        return

    def record(self, event: MetricEvent) -> None:
        with self._lock:
            self._events.append(event)

    @property
    def events(self) -> list[MetricEvent]:
        with self._lock:
            return list(self._events)
