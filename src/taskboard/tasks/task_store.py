# src/taskboard/tasks/task_store.py

from __future__ import annotations

import logging
import threading

from .task_models import Task

logger = logging.getLogger(__name__)


class InMemoryTaskStore:
    """
    In-memory task list.

    Ids come from a high-water mark, not from len(tasks), so an id is never
    handed out twice even after deletions.

    Thread-safety:
    - every method takes the same lock
    - readers get a new list, never the internal one
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tasks: list[Task] = []
        self._last_id = 0
        logger.info("TaskStore ready (in-memory)")

    # ---- public API ----

    def add(self, title: str) -> Task:
        """Append a task. `title` must already be trimmed and non-blank."""
        with self._lock:
            self._last_id += 1
            task = Task(id=self._last_id, title=title)
            self._tasks.append(task)
        logger.debug("Task added id=%s", task.id)
        return task

    def delete(self, task_id: int) -> bool:
        """Remove the task with this id. Returns False if there was none."""
        with self._lock:
            for idx, task in enumerate(self._tasks):
                if task.id == task_id:
                    del self._tasks[idx]
                    break
            else:
                return False
        logger.debug("Task deleted id=%s", task_id)
        return True

    def all(self) -> list[Task]:
        with self._lock:
            return list(self._tasks)

    def filter(self, query: str) -> list[Task]:
        """
        Case-insensitive substring match on titles, in insertion order.

        An empty (or whitespace-only) query matches every task.
        """
        needle = (query or "").strip().casefold()
        snapshot = self.all()
        if not needle:
            return snapshot
        return [t for t in snapshot if needle in t.title.casefold()]

    def get(self, task_id: int) -> Task | None:
        with self._lock:
            for task in self._tasks:
                if task.id == task_id:
                    return task
        return None

    def count(self) -> int:
        with self._lock:
            return len(self._tasks)
