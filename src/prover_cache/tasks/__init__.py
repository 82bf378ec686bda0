# src/prover_cache/tasks/__init__.py

from .task_models import Task, TaskType, TaskWrapper
from .task_store import ConcurrencyMode, TaskCache

__all__ = ["ConcurrencyMode", "Task", "TaskCache", "TaskType", "TaskWrapper"]
