# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskboard.cli.bootstrap import create_initial_state
from taskboard.core.state import AppState


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the web app.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    data_dir = tmp_path / "data"
    return SimpleNamespace(
        app_name="taskboard-test",
        log_level="DEBUG",
        host="127.0.0.1",
        port=0,
        session_cookie="TASKBOARD_TEST_SESSION",
        session_secret="test-secret",
        cookie_secure=False,
        data_dir=data_dir,
        metrics_path=data_dir / "metrics.csv",
        metrics_enabled=True,
    )


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """
    AppState wired by the real composition root.

    NOTE: the CSV sink writes under tmp_path; reading it back is part of what we test.
    """
    return create_initial_state(settings=settings)
