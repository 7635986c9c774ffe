# tests/test_metrics_sink.py

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, datetime
from pathlib import Path

import pytest

from taskboard.errors import MetricsWriteError
from taskboard.metrics.events import (
    JsMode,
    MetricEvent,
    Step,
    TaskCode,
    event_to_row,
    fail_event,
    format_instant,
    success_event,
    validation_error_event,
)
from taskboard.metrics.report import read_events
from taskboard.metrics.sink import CsvMetricsSink, InMemoryMetricsSink

from .fakes import read_lines

HEADER = "ts_iso,session_id,request_id,task_code,step,outcome,ms,http_status,js_mode"
FIXED_TS = datetime(2026, 10, 19, 8, 30, 0, 250000, tzinfo=UTC)


def _event(i: int = 0, **overrides) -> MetricEvent:
    fields = dict(
        session_id=f"P{i + 1}",
        request_id=f"req{i:04d}",
        task_code=TaskCode.ADD,
        duration_ms=3,
        js_mode=JsMode.OFF,
        timestamp=FIXED_TS,
    )
    fields.update(overrides)
    return success_event(**fields)


def test_builders_fill_fixed_defaults() -> None:
    ok = success_event(
        session_id="P1", request_id="r1", task_code=TaskCode.ADD, duration_ms=7, js_mode=JsMode.ON
    )
    assert (ok.step, ok.outcome, ok.http_status, ok.duration_ms) == (Step.SUCCESS, "", 200, 7)

    bad = validation_error_event(
        session_id="P1",
        request_id="r2",
        task_code=TaskCode.DELETE,
        outcome="invalid_id",
        js_mode=JsMode.OFF,
    )
    assert (bad.step, bad.outcome, bad.http_status, bad.duration_ms) == (
        Step.VALIDATION_ERROR,
        "invalid_id",
        400,
        0,
    )

    boom = fail_event(
        session_id="P1",
        request_id="r3",
        task_code=TaskCode.FILTER,
        outcome="internal_error",
        js_mode=JsMode.OFF,
    )
    assert (boom.step, boom.outcome, boom.http_status, boom.duration_ms) == (
        Step.FAIL,
        "internal_error",
        500,
        0,
    )


def test_row_field_order_and_instant_format() -> None:
    row = event_to_row(_event(js_mode=JsMode.ON))
    assert row == [
        "2026-10-19T08:30:00.250Z",
        "P1",
        "req0000",
        "T1_add",
        "success",
        "",
        "3",
        "200",
        "on",
    ]
    assert format_instant(datetime(2026, 1, 2, 3, 4, 5)) == "2026-01-02T03:04:05Z"


@pytest.mark.parametrize(
    ("micros", "expected"),
    [
        (0, "2026-10-19T08:30:00Z"),
        (120000, "2026-10-19T08:30:00.120Z"),
        (7000, "2026-10-19T08:30:00.007Z"),
        (123456, "2026-10-19T08:30:00.123456Z"),
    ],
)
def test_instant_fraction_uses_three_digit_groups(micros: int, expected: str) -> None:
    ts = datetime(2026, 10, 19, 8, 30, 0, micros, tzinfo=UTC)
    assert format_instant(ts) == expected


def test_log_directory_is_created_once(tmp_path: Path, monkeypatch) -> None:
    path = tmp_path / "nested" / "metrics.csv"
    calls: list[Path] = []
    real_mkdir = Path.mkdir

    def counting_mkdir(self: Path, *args, **kwargs) -> None:
        calls.append(self)
        real_mkdir(self, *args, **kwargs)

    monkeypatch.setattr(Path, "mkdir", counting_mkdir)

    sink = CsvMetricsSink(path)
    sink.ensure_header()
    for i in range(5):
        sink.record(_event(i))

    assert calls == [path.parent]
    assert len(read_lines(path)) == 6


def test_header_written_once_then_rows_appended(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "metrics.csv"
    sink = CsvMetricsSink(path)

    sink.record(_event(0))
    sink.record(_event(1))
    sink.ensure_header()

    lines = read_lines(path)
    assert lines == [
        HEADER,
        "2026-10-19T08:30:00.250Z,P1,req0000,T1_add,success,,3,200,off",
        "2026-10-19T08:30:00.250Z,P2,req0001,T1_add,success,,3,200,off",
    ]
    assert path.read_bytes().endswith(b"off\n")


def test_existing_log_is_appended_not_rewritten(tmp_path: Path) -> None:
    path = tmp_path / "metrics.csv"
    CsvMetricsSink(path).record(_event(0))
    CsvMetricsSink(path).record(_event(1))

    lines = read_lines(path)
    assert lines.count(HEADER) == 1
    assert len(lines) == 3


def test_concurrent_records_produce_whole_rows(tmp_path: Path) -> None:
    path = tmp_path / "metrics.csv"
    n = 400
    # several sink objects on the same file, as separate components might hold
    sinks = [CsvMetricsSink(path) for _ in range(4)]

    with ThreadPoolExecutor(max_workers=16) as pool:
        list(pool.map(lambda i: sinks[i % 4].record(_event(i)), range(n)))

    lines = read_lines(path)
    assert lines[0] == HEADER
    assert len(lines) == n + 1
    assert all(len(line.split(",")) == 9 for line in lines[1:])
    assert sorted(line.split(",")[2] for line in lines[1:]) == [f"req{i:04d}" for i in range(n)]


def test_concurrent_first_time_initialization_writes_one_header(tmp_path: Path) -> None:
    path = tmp_path / "metrics.csv"
    workers = 8
    barrier = threading.Barrier(workers)

    def init() -> None:
        sink = CsvMetricsSink(path)
        barrier.wait()
        sink.ensure_header()

    with ThreadPoolExecutor(max_workers=workers) as pool:
        for f in [pool.submit(init) for _ in range(workers)]:
            f.result()

    assert read_lines(path) == [HEADER]


def test_delimiters_in_values_are_quoted_and_read_back(tmp_path: Path) -> None:
    path = tmp_path / "metrics.csv"
    sink = CsvMetricsSink(path)
    event = fail_event(
        session_id="P1",
        request_id="r1",
        task_code=TaskCode.ADD,
        outcome='bad, "odd"\nvalue',
        js_mode=JsMode.OFF,
        timestamp=FIXED_TS,
    )
    sink.record(event)

    assert read_events(path) == [event]


def test_unwritable_destination_raises_metrics_write_error(tmp_path: Path) -> None:
    # the destination is a directory, so opening it for append fails
    sink = CsvMetricsSink(tmp_path)

    with pytest.raises(MetricsWriteError) as excinfo:
        sink.record(_event(0))
    assert isinstance(excinfo.value.__cause__, OSError)


def test_in_memory_sink_keeps_events() -> None:
    sink = InMemoryMetricsSink()
    sink.ensure_header()
    sink.record(_event(0))

    assert sink.events == [_event(0)]
