# src/prover_cache/__init__.py

"""Durable cache of in-flight prover tasks."""

from .errors import (
    DeserializationError,
    SerializationError,
    StorageUnavailable,
    StorageWriteError,
    TaskCacheError,
)
from .tasks.task_models import Task, TaskType, TaskWrapper
from .tasks.task_store import ConcurrencyMode, TaskCache

__all__ = [
    "ConcurrencyMode",
    "DeserializationError",
    "SerializationError",
    "StorageUnavailable",
    "StorageWriteError",
    "Task",
    "TaskCache",
    "TaskCacheError",
    "TaskType",
    "TaskWrapper",
]
