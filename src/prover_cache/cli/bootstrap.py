# src/prover_cache/cli/bootstrap.py

"""
Composition root.

Opens the task cache once and hands the same instance to every collaborator:
task producers get it directly, the coordinator listener hub gets it wrapped
in a ClearCacheCoordinatorListener.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..config import Settings, get_settings
from ..coordinator.listener import ClearCacheCoordinatorListener, ListenerHub
from ..tasks.task_store import TaskCache

logger = logging.getLogger(__name__)


@dataclass
class ProverState:
    settings: Settings
    task_cache: TaskCache
    listeners: ListenerHub = field(default_factory=ListenerHub)

    def close(self) -> None:
        self.task_cache.close()


def create_task_cache(settings: Settings) -> TaskCache:
    """
    Open the task cache described by settings.

    StorageUnavailable is deliberately not caught: the prover cannot run without
    its task history.
    """
    return TaskCache(
        settings.task_cache_path,
        concurrency=settings.task_cache_concurrency,
        open_timeout=settings.task_cache_open_timeout,
    )


def wire_listeners(hub: ListenerHub, task_cache: TaskCache) -> ClearCacheCoordinatorListener:
    listener = ClearCacheCoordinatorListener(task_cache=task_cache)
    hub.add_listener(listener)
    return listener


def create_initial_state(*, settings: Settings | None = None) -> ProverState:
    if settings is None:
        settings = get_settings()

    settings.data_dir.mkdir(parents=True, exist_ok=True)

    state = ProverState(settings=settings, task_cache=create_task_cache(settings))
    wire_listeners(state.listeners, state.task_cache)
    logger.info("Task cache wired to %d coordinator listener(s).", len(state.listeners))
    return state
