# src/taskboard/errors.py

from __future__ import annotations


class TaskboardError(Exception):
    """Base class for errors raised by taskboard."""


class ValidationFailure(TaskboardError):
    """
    Request input rejected before it reaches the task store.

    `reason` is the short code written to the metrics log
    (e.g. "blank_title", "invalid_id").
    """

    def __init__(self, reason: str, message: str | None = None) -> None:
        super().__init__(message or reason)
        self.reason = reason


class MetricsWriteError(TaskboardError):
    """The metrics log could not be appended to."""


class MetricsFormatError(TaskboardError):
    """A metrics log on disk does not have the expected layout."""
