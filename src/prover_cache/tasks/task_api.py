# src/prover_cache/tasks/task_api.py

from __future__ import annotations

import logging

from ..core.ports import TaskRepo
from .task_models import Task, TaskWrapper

logger = logging.getLogger(__name__)


def cache_task(repo: TaskRepo, task: Task) -> TaskWrapper:
    """
    Persist a freshly fetched task before the prover starts on it.
    Errors from the store propagate to the caller.
    """
    task_wrapper = TaskWrapper(task=task, count=0)
    repo.put_task(task_wrapper)
    logger.debug("Cached task task_id=%s type=%s", task.id, task.task_type)
    return task_wrapper


def resume_last_task(repo: TaskRepo) -> TaskWrapper | None:
    """
    Pick up the most recent cached task after a restart.

    The hand-out counter is bumped and written back before returning, so a task
    that keeps crashing the prover is visible through its count.
    """
    task_wrapper = repo.get_last_task()
    if task_wrapper is None:
        return None

    task_wrapper.increment_count()
    repo.put_task(task_wrapper)
    logger.info(
        "Resuming cached task task_id=%s count=%s", task_wrapper.task_id, task_wrapper.count
    )
    return task_wrapper
