# src/taskboard/metrics/events.py

"""
Metric event record and the pure builders callers use to make one.

Nothing here does I/O; writing happens only in MetricsSink.record().
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum

METRICS_HEADER: tuple[str, ...] = (
    "ts_iso",
    "session_id",
    "request_id",
    "task_code",
    "step",
    "outcome",
    "ms",
    "http_status",
    "js_mode",
)


class TaskCode(StrEnum):
    ADD = "T1_add"
    DELETE = "T2_delete"
    FILTER = "T3_filter"


class Step(StrEnum):
    SUCCESS = "success"
    VALIDATION_ERROR = "validation_error"
    FAIL = "fail"


class JsMode(StrEnum):
    ON = "on"
    OFF = "off"

    @classmethod
    def from_flag(cls, enabled: bool) -> JsMode:
        return cls.ON if enabled else cls.OFF


@dataclass(frozen=True, slots=True)
class MetricEvent:
    timestamp: datetime
    session_id: str
    request_id: str
    task_code: TaskCode
    step: Step
    outcome: str
    duration_ms: int
    http_status: int
    js_mode: JsMode


def utc_now() -> datetime:
    return datetime.now(UTC)


def format_instant(ts: datetime) -> str:
    """
    ISO-8601 instant in UTC with a 'Z' suffix, e.g. 2026-10-19T08:00:00.120Z.

    The fraction is printed in groups of three digits, as many as needed
    (none, millis or micros), like java.time's ISO_INSTANT.
    """
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=UTC)
    ts = ts.astimezone(UTC)
    if ts.microsecond == 0:
        timespec = "seconds"
    elif ts.microsecond % 1000 == 0:
        timespec = "milliseconds"
    else:
        timespec = "microseconds"
    return ts.isoformat(timespec=timespec).replace("+00:00", "Z")


def parse_instant(raw: str) -> datetime:
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    return datetime.fromisoformat(raw)


def event_to_row(event: MetricEvent) -> list[str]:
    return [
        format_instant(event.timestamp),
        event.session_id,
        event.request_id,
        event.task_code.value,
        event.step.value,
        event.outcome,
        str(event.duration_ms),
        str(event.http_status),
        event.js_mode.value,
    ]


# ---- convenience builders ----


def success_event(
    *,
    session_id: str,
    request_id: str,
    task_code: TaskCode,
    duration_ms: int,
    js_mode: JsMode,
    timestamp: datetime | None = None,
) -> MetricEvent:
    return MetricEvent(
        timestamp=timestamp or utc_now(),
        session_id=session_id,
        request_id=request_id,
        task_code=task_code,
        step=Step.SUCCESS,
        outcome="",
        duration_ms=max(0, int(duration_ms)),
        http_status=200,
        js_mode=js_mode,
    )


def validation_error_event(
    *,
    session_id: str,
    request_id: str,
    task_code: TaskCode,
    outcome: str,
    js_mode: JsMode,
    timestamp: datetime | None = None,
) -> MetricEvent:
    return MetricEvent(
        timestamp=timestamp or utc_now(),
        session_id=session_id,
        request_id=request_id,
        task_code=task_code,
        step=Step.VALIDATION_ERROR,
        outcome=outcome,
        duration_ms=0,
        http_status=400,
        js_mode=js_mode,
    )


def fail_event(
    *,
    session_id: str,
    request_id: str,
    task_code: TaskCode,
    outcome: str,
    js_mode: JsMode,
    timestamp: datetime | None = None,
) -> MetricEvent:
    return MetricEvent(
        timestamp=timestamp or utc_now(),
        session_id=session_id,
        request_id=request_id,
        task_code=task_code,
        step=Step.FAIL,
        outcome=outcome,
        duration_ms=0,
        http_status=500,
        js_mode=js_mode,
    )
