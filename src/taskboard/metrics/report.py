# src/taskboard/metrics/report.py

"""Read a metrics log back and summarize it per task code and step."""

from __future__ import annotations

import csv
import statistics
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from ..errors import MetricsFormatError
from .events import METRICS_HEADER, JsMode, MetricEvent, Step, TaskCode, parse_instant


@dataclass(frozen=True, slots=True)
class TaskSummary:
    task_code: TaskCode
    step: Step
    count: int
    participants: int
    median_ms: float
    max_ms: int


def _row_to_event(row: list[str], line_no: int) -> MetricEvent:
    if len(row) != len(METRICS_HEADER):
        raise MetricsFormatError(f"line {line_no}: expected {len(METRICS_HEADER)} fields, got {len(row)}")
    ts, session_id, request_id, task_code, step, outcome, ms, status, js_mode = row
    try:
        return MetricEvent(
            timestamp=parse_instant(ts),
            session_id=session_id,
            request_id=request_id,
            task_code=TaskCode(task_code),
            step=Step(step),
            outcome=outcome,
            duration_ms=int(ms),
            http_status=int(status),
            js_mode=JsMode(js_mode),
        )
    except ValueError as e:
        raise MetricsFormatError(f"line {line_no}: {e}") from e


def read_events(path: str | Path) -> list[MetricEvent]:
    """Parse a metrics log. A missing file reads as no events."""
    p = Path(path)
    if not p.exists():
        return []
    with p.open("r", encoding="utf-8", newline="") as fh:
        reader = csv.reader(fh)
        header = next(reader, None)
        if header is None:
            return []
        if tuple(header) != METRICS_HEADER:
            raise MetricsFormatError(f"{p}: unexpected header {header!r}")
        return [_row_to_event(row, reader.line_num) for row in reader if row]


def summarize(events: Iterable[MetricEvent]) -> list[TaskSummary]:
    groups: dict[tuple[TaskCode, Step], list[MetricEvent]] = defaultdict(list)
    for e in events:
        groups[(e.task_code, e.step)].append(e)

    out: list[TaskSummary] = []
    for (task_code, step), items in sorted(groups.items(), key=lambda kv: (kv[0][0].value, kv[0][1].value)):
        durations = [e.duration_ms for e in items]
        out.append(
            TaskSummary(
                task_code=task_code,
                step=step,
                count=len(items),
                participants=len({e.session_id for e in items}),
                median_ms=float(statistics.median(durations)),
                max_ms=max(durations),
            )
        )
    return out


def format_summary(rows: list[TaskSummary]) -> str:
    if not rows:
        return "No metric events recorded."
    lines = [f"{'task':<10} {'step':<17} {'count':>6} {'people':>6} {'median_ms':>10} {'max_ms':>7}"]
    for r in rows:
        lines.append(
            f"{r.task_code.value:<10} {r.step.value:<17} {r.count:>6} "
            f"{r.participants:>6} {r.median_ms:>10.1f} {r.max_ms:>7}"
        )
    return "\n".join(lines)
