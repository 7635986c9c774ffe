"""Multi-participant task list service with a per-request metrics log."""
