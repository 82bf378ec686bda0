# tests/conftest.py

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from prover_cache.config import Settings
from prover_cache.tasks.task_store import ConcurrencyMode, TaskCache


@pytest.fixture()
def cache_dir(tmp_path: Path) -> Path:
    return tmp_path / "task_cache"


@pytest.fixture()
def task_cache(cache_dir: Path) -> Iterator[TaskCache]:
    """A real SQLite-backed cache in a per-test directory, closed afterwards."""
    cache = TaskCache(cache_dir, open_timeout=0.1)
    try:
        yield cache
    finally:
        cache.close()


@pytest.fixture()
def settings(tmp_path: Path, cache_dir: Path) -> Settings:
    """
    Explicit settings for tests; nothing is read from the environment or .env.
    """
    return Settings(
        app_name="prover-test",
        log_level="WARNING",
        log_to_file=False,
        data_dir=tmp_path,
        task_cache_path=cache_dir,
        task_cache_concurrency=ConcurrencyMode.SINGLE_THREAD,
        task_cache_open_timeout=0.1,
    )
