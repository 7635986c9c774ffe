# src/taskboard/tasks/task_api.py

"""
Instrumented task operations used by request handlers.

Each call:
- validates raw input (ValidationFailure -> validation_error event),
- times the store call (success event with the measured ms),
- on an unexpected store error records a fail event and re-raises.

Exactly one metric event is recorded per call, whatever the outcome.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from ..core.state import AppState
from ..core.timing import generate_request_id, measure
from ..errors import ValidationFailure
from ..metrics.events import (
    JsMode,
    TaskCode,
    fail_event,
    success_event,
    validation_error_event,
)
from .task_models import Task

logger = logging.getLogger(__name__)

T = TypeVar("T")

BLANK_TITLE = "blank_title"
INVALID_ID = "invalid_id"
INTERNAL_ERROR = "internal_error"


@dataclass(frozen=True, slots=True)
class RequestContext:
    participant_id: str
    request_id: str
    js_mode: JsMode

    @classmethod
    def new(cls, participant_id: str, *, js_mode: JsMode = JsMode.OFF) -> RequestContext:
        return cls(participant_id=participant_id, request_id=generate_request_id(), js_mode=js_mode)


def validate_title(raw: Any) -> str:
    title = raw.strip() if isinstance(raw, str) else ""
    if not title:
        raise ValidationFailure(BLANK_TITLE, "title must not be blank")
    return title


def parse_task_id(raw: Any) -> int:
    if isinstance(raw, bool):
        raise ValidationFailure(INVALID_ID, f"not a task id: {raw!r}")
    if isinstance(raw, int):
        return raw
    try:
        return int(str(raw).strip())
    except ValueError:
        raise ValidationFailure(INVALID_ID, f"not a task id: {raw!r}") from None


def _instrumented(
    state: AppState,
    ctx: RequestContext,
    task_code: TaskCode,
    validate: Callable[[], Any],
    op: Callable[[Any], T],
) -> T:
    try:
        arg = validate()
    except ValidationFailure as e:
        logger.info(
            "%s rejected session=%s request=%s reason=%s",
            task_code.value,
            ctx.participant_id,
            ctx.request_id,
            e.reason,
        )
        state.metrics.record(
            validation_error_event(
                session_id=ctx.participant_id,
                request_id=ctx.request_id,
                task_code=task_code,
                outcome=e.reason,
                js_mode=ctx.js_mode,
            )
        )
        raise

    try:
        result, ms = measure(op, arg)
    except Exception:
        logger.exception(
            "%s failed session=%s request=%s", task_code.value, ctx.participant_id, ctx.request_id
        )
        state.metrics.record(
            fail_event(
                session_id=ctx.participant_id,
                request_id=ctx.request_id,
                task_code=task_code,
                outcome=INTERNAL_ERROR,
                js_mode=ctx.js_mode,
            )
        )
        raise

    state.metrics.record(
        success_event(
            session_id=ctx.participant_id,
            request_id=ctx.request_id,
            task_code=task_code,
            duration_ms=ms,
            js_mode=ctx.js_mode,
        )
    )
    return result


def add_task(state: AppState, ctx: RequestContext, raw_title: Any) -> Task:
    task = _instrumented(
        state, ctx, TaskCode.ADD, lambda: validate_title(raw_title), state.task_store.add
    )
    logger.info("Task %s added by %s", task.id, ctx.participant_id)
    return task


def delete_task(state: AppState, ctx: RequestContext, raw_id: Any) -> bool:
    """Delete by id. An unknown id is still a success; the result says whether anything was removed."""
    removed = _instrumented(
        state, ctx, TaskCode.DELETE, lambda: parse_task_id(raw_id), state.task_store.delete
    )
    logger.info("Task delete id=%s by %s removed=%s", raw_id, ctx.participant_id, removed)
    return removed


def filter_tasks(state: AppState, ctx: RequestContext, query: Any) -> list[Task]:
    return _instrumented(
        state,
        ctx,
        TaskCode.FILTER,
        lambda: query.strip() if isinstance(query, str) else "",
        state.task_store.filter,
    )
