# src/taskboard/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires concrete implementations into AppState (counter/tasks/metrics).
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.identity import ParticipantCounter
from ..core.ports import MetricsSink
from ..core.state import AppState
from ..metrics.sink import CsvMetricsSink, InMemoryMetricsSink
from ..tasks.task_store import InMemoryTaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.metrics_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    metrics: MetricsSink
    if settings.metrics_enabled:
        metrics = CsvMetricsSink(settings.metrics_path)
        metrics.ensure_header()
        logger.info("Metrics log: %s", settings.metrics_path)
    else:
        metrics = InMemoryMetricsSink()
        logger.info("Metrics log disabled; events kept in memory only.")

    return AppState(
        settings=settings,
        counter=ParticipantCounter(),
        task_store=InMemoryTaskStore(),
        metrics=metrics,
    )
