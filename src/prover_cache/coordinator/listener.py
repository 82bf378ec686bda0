# src/prover_cache/coordinator/listener.py

from __future__ import annotations

import logging
from typing import Protocol

from ..core.ports import TaskRepo
from .types import SubmitProofRequest

logger = logging.getLogger(__name__)


class Listener(Protocol):
    """Coordinator-side hook, called once per accepted proof submission."""

    def on_proof_submitted(self, req: SubmitProofRequest) -> None: ...


class ListenerHub:
    """
    Fan-out used by the coordinator client after a successful submission.

    Listener failures are logged and never reach the caller, so one broken
    listener cannot affect the submission pipeline or the other listeners.
    """

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def __len__(self) -> int:
        return len(self._listeners)

    def notify_proof_submitted(self, req: SubmitProofRequest) -> None:
        for listener in list(self._listeners):
            try:
                listener.on_proof_submitted(req)
            except Exception:
                logger.exception(
                    "listener %s failed on proof submitted, task_id=%s",
                    type(listener).__name__,
                    req.task_id,
                )


class ClearCacheCoordinatorListener:
    """
    Drop a task from the task cache once its proof has been submitted.

    Holds a reference to a cache owned elsewhere; never opens or closes it.
    A failed delete is logged and absorbed: a stale record is harmless, it is
    skipped or deleted again by a later event for the same id.
    """

    def __init__(self, task_cache: TaskRepo) -> None:
        self.task_cache = task_cache

    def on_proof_submitted(self, req: SubmitProofRequest) -> None:
        task_id = req.task_id
        try:
            existed = self.task_cache.delete_task(task_id)
        except Exception as e:
            logger.error("delete task from task cache failed, task_id=%s: %s", task_id, e)
            return

        if existed is False:
            logger.info("task already absent from task cache, task_id=%s", task_id)
        else:
            logger.info("delete task from task cache successfully, task_id=%s", task_id)
