# src/taskboard/cli/main.py

"""
CLI entrypoint.

- `serve` (default): initialize logging, build AppState, run the HTTP app under uvicorn.
- `report`: print a per-task summary of the metrics log.
"""

from __future__ import annotations

import argparse
import logging
import sys

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..errors import MetricsFormatError
from ..logging_setup import setup_logging
from ..metrics.report import format_summary, read_events, summarize

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="taskboard", description="Multi-participant task list service.")
    sub = parser.add_subparsers(dest="command")

    serve = sub.add_parser("serve", help="Run the HTTP server (default).")
    serve.add_argument("--host", default=None, help="Bind address (default: settings.host).")
    serve.add_argument("--port", type=int, default=None, help="Port (default: settings.port).")

    report = sub.add_parser("report", help="Summarize the metrics log.")
    report.add_argument("--path", default=None, help="Metrics CSV (default: settings.metrics_path).")
    return parser


def _serve(settings, host: str | None, port: int | None) -> None:
    import uvicorn

    from ..web.app import create_app

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)
    state = create_initial_state(settings=settings)
    app = create_app(state)

    # log_config=None: uvicorn logs through the root handlers set up above.
    uvicorn.run(app, host=host or settings.host, port=port or settings.port, log_config=None)
    logger.info("Bye.")


def _report(settings, path: str | None) -> int:
    try:
        events = read_events(path or settings.metrics_path)
    except MetricsFormatError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    print(format_summary(summarize(events)))
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    settings = get_settings()

    if args.command == "report":
        return _report(settings, args.path)

    _serve(settings, getattr(args, "host", None), getattr(args, "port", None))
    return 0


if __name__ == "__main__":
    sys.exit(main())
