"""
Metrics subsystem.

Components:
- events.py: MetricEvent, enums and the pure event builders
- sink.py: append-only CSV log (and an in-memory variant)
- report.py: read the log back and summarize it
"""
