# src/taskboard/tasks/task_models.py

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Task:
    id: int
    title: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
