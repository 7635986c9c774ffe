"""
Task subsystem.

Components:
- task_models.py: data structures (Task)
- task_store.py: in-memory, lock-guarded storage
- task_api.py: instrumented operations used by request handlers
"""
