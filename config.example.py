# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit real secrets (TASKBOARD_SESSION_SECRET belongs in .env, which is gitignored).

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKBOARD_APP_NAME": "App display name (default: taskboard).",
    "TASKBOARD_LOG_LEVEL": "Console logging level (default: INFO).",
    # HTTP
    "TASKBOARD_HOST": "Bind address (default: 0.0.0.0).",
    "TASKBOARD_PORT": "Port (default: $PORT, then 8080).",
    # Sessions
    "TASKBOARD_SESSION_COOKIE": "Session cookie name (default: TASKBOARD_SESSION).",
    "TASKBOARD_SESSION_SECRET": (
        "Cookie signing secret. Unset => random per process, so participant ids reset on restart."
    ),
    "TASKBOARD_COOKIE_SECURE": "Mark the session cookie Secure/HTTPS-only (true/false).",
    # Paths (gitignored)
    "TASKBOARD_DATA_DIR": "Local data directory for logs and metrics (default: data).",
    "TASKBOARD_METRICS_PATH": "Metrics CSV path (default: <data_dir>/metrics.csv).",
    "TASKBOARD_METRICS_ENABLED": "Write the metrics CSV (true/false, default: true).",
}
