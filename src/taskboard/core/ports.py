# src/taskboard/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The request-handling code depends on Protocols instead of concrete classes,
so the in-memory store and the CSV sink stay swappable and easy to fake.
"""

from typing import Protocol

from ..metrics.events import MetricEvent
from ..tasks.task_models import Task


class TaskRepo(Protocol):
    def add(self, title: str) -> Task: ...
    def delete(self, task_id: int) -> bool: ...
    def all(self) -> list[Task]: ...
    def filter(self, query: str) -> list[Task]: ...
    def count(self) -> int: ...


class MetricsSink(Protocol):
    """Append-only event destination. record() is the only place doing I/O."""

    def ensure_header(self) -> None: ...
    def record(self, event: MetricEvent) -> None: ...
