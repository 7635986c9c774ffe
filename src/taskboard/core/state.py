# src/taskboard/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from .identity import ParticipantCounter
from .ports import MetricsSink, TaskRepo


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules.
    settings: object

    counter: ParticipantCounter
    task_store: TaskRepo
    metrics: MetricsSink
