# src/prover_cache/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class TaskType(StrEnum):
    UNDEFINED = "undefined"
    CHUNK = "chunk"
    BATCH = "batch"
    BUNDLE = "bundle"

    @classmethod
    def parse(cls, raw: Any) -> TaskType:
        if not raw:
            return cls.UNDEFINED
        try:
            return cls(str(raw))
        except ValueError:
            return cls.UNDEFINED


@dataclass(slots=True)
class Task:
    """
    One unit of proof-generation work as handed out by the coordinator.

    `task_data` is opaque to the cache; it is stored and returned verbatim.
    """

    id: str
    task_type: TaskType
    task_data: str
    hard_fork_name: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "task_type": str(self.task_type),
            "task_data": self.task_data,
            "hard_fork_name": self.hard_fork_name,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Task:
        if not isinstance(data, dict):
            raise TypeError(f"task must be an object, got {type(data).__name__}")
        task_id = data["id"]
        task_data = data["task_data"]
        if not isinstance(task_id, str) or not isinstance(task_data, str):
            raise TypeError("task.id and task.task_data must be strings")
        return cls(
            id=task_id,
            task_type=TaskType.parse(data.get("task_type")),
            task_data=task_data,
            hard_fork_name=str(data.get("hard_fork_name") or ""),
        )


@dataclass(slots=True)
class TaskWrapper:
    """The persisted task record: the task plus how often it was handed out."""

    task: Task
    count: int = 0

    @property
    def task_id(self) -> str:
        return self.task.id

    def increment_count(self) -> None:
        self.count += 1

    def to_dict(self) -> dict[str, Any]:
        return {"task": self.task.to_dict(), "count": self.count}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TaskWrapper:
        if not isinstance(data, dict):
            raise TypeError(f"task record must be an object, got {type(data).__name__}")
        count = data.get("count", 0)
        # bool is an int subclass; reject it explicitly.
        if not isinstance(count, int) or isinstance(count, bool) or count < 0:
            raise ValueError(f"invalid count: {count!r}")
        return cls(task=Task.from_dict(data["task"]), count=count)
