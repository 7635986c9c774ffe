# src/taskboard/web/app.py

"""
HTTP shell over the task core (FastAPI).

Routes map one-to-one onto the instrumented operations in tasks.task_api;
this module only resolves the participant, picks status codes and shapes JSON.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import Depends, FastAPI, Header, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.middleware.sessions import SessionMiddleware

from ..core.identity import resolve_or_create_session
from ..core.state import AppState
from ..errors import MetricsWriteError, ValidationFailure
from ..metrics.events import JsMode
from ..tasks import task_api
from ..tasks.task_api import RequestContext

logger = logging.getLogger(__name__)
access_logger = logging.getLogger("taskboard.web.access")

_FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def _read_title(request: Request) -> Any:
    """
    Pull `title` out of a form or JSON body.

    Anything unreadable (no body, bad JSON, a non-object payload) yields None,
    which the add operation rejects as a blank title.
    """
    content_type = request.headers.get("content-type", "").lower()
    if content_type.startswith(_FORM_TYPES):
        form = await request.form()
        return form.get("title")

    raw = await request.body()
    if not raw.strip():
        return None
    try:
        payload = json.loads(raw)
    except ValueError:
        return None
    return payload.get("title") if isinstance(payload, dict) else None


def create_app(state: AppState) -> FastAPI:
    settings = state.settings
    app = FastAPI(title="Taskboard", version="0.1.0")
    app.state.taskboard = state

    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret,
        session_cookie=settings.session_cookie,
        same_site="strict",
        https_only=bool(getattr(settings, "cookie_secure", False)),
    )

    @app.middleware("http")
    async def _access_log(request: Request, call_next):
        try:
            response = await call_next(request)
        except Exception:
            access_logger.info("%s %s - %s", request.method, request.url.path, 500)
            raise
        access_logger.info("%s %s - %s", request.method, request.url.path, response.status_code)
        return response

    @app.exception_handler(ValidationFailure)
    async def _validation_failure(_request: Request, exc: ValidationFailure) -> JSONResponse:
        return JSONResponse(status_code=400, content={"ok": False, "detail": exc.reason})

    @app.exception_handler(MetricsWriteError)
    async def _metrics_unavailable(_request: Request, exc: MetricsWriteError) -> JSONResponse:
        logger.error("Metrics log unavailable: %s", exc)
        return JSONResponse(status_code=500, content={"ok": False, "detail": "metrics_unavailable"})

    def participant(request: Request) -> str:
        return resolve_or_create_session(request.session, state.counter)

    def request_context(
        participant_id: str = Depends(participant),
        hx_request: str | None = Header(default=None),
    ) -> RequestContext:
        is_htmx = (hx_request or "").strip().lower() == "true"
        return RequestContext.new(participant_id, js_mode=JsMode.from_flag(is_htmx))

    @app.get("/health")
    def health() -> dict[str, Any]:
        return {
            "ok": True,
            "tasks": state.task_store.count(),
            "participants": state.counter.peek(),
        }

    @app.get("/tasks")
    def list_tasks(participant_id: str = Depends(participant)) -> dict[str, Any]:
        tasks = state.task_store.all()
        return {"participant_id": participant_id, "tasks": [t.to_dict() for t in tasks]}

    @app.post("/tasks")
    async def add_task(request: Request, ctx: RequestContext = Depends(request_context)) -> dict[str, Any]:
        title = await _read_title(request)
        task = await run_in_threadpool(task_api.add_task, state, ctx, title)
        return {"ok": True, "task": task.to_dict(), "request_id": ctx.request_id}

    @app.post("/tasks/{task_id}/delete")
    def delete_task(task_id: str, ctx: RequestContext = Depends(request_context)) -> dict[str, Any]:
        removed = task_api.delete_task(state, ctx, task_id)
        return {"ok": True, "removed": removed, "request_id": ctx.request_id}

    @app.get("/tasks/search")
    def search_tasks(q: str = "", ctx: RequestContext = Depends(request_context)) -> dict[str, Any]:
        tasks = task_api.filter_tasks(state, ctx, q)
        return {
            "ok": True,
            "query": q.strip(),
            "tasks": [t.to_dict() for t in tasks],
            "count": len(tasks),
            "request_id": ctx.request_id,
        }

    return app
