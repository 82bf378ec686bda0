# src/prover_cache/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) between the task cache and its collaborators.

Producers and coordinator listeners depend on TaskRepo rather than on the
concrete SQLite-backed TaskCache, which keeps them testable with fakes.
"""

from typing import Protocol

from ..tasks.task_models import TaskWrapper


class TaskRepo(Protocol):
    def put_task(self, task_wrapper: TaskWrapper) -> None: ...
    def get_last_task(self) -> TaskWrapper | None: ...
    def delete_task(self, task_id: str) -> bool | None: ...
