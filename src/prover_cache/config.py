# src/prover_cache/config.py

"""Settings loaded from environment variables (+ a local .env, if present).

- One Settings object for the whole process.
- Nothing is opened or created at import time.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

from .tasks.task_store import ConcurrencyMode

ENV_PREFIX = "PROVER"

_TRUTHY = frozenset({"1", "true", "yes", "y", "on"})

logger = logging.getLogger(__name__)


def _read(key: str) -> str | None:
    """PROVER_<key>, stripped; unset and blank both read as None."""
    raw = os.environ.get(f"{ENV_PREFIX}_{key}")
    if raw is None or not raw.strip():
        return None
    return raw.strip()


def _read_bool(key: str, default: bool) -> bool:
    raw = _read(key)
    return default if raw is None else raw.lower() in _TRUTHY


def _read_float(key: str, default: float) -> float:
    raw = _read(key)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("%s_%s=%r is not a number, using %s.", ENV_PREFIX, key, raw, default)
        return default


def _read_path(key: str, default: Path) -> Path:
    raw = _read(key)
    return default if raw is None else Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_to_file: bool

    # ---- Local data paths ----
    data_dir: Path
    task_cache_path: Path

    # ---- Task cache ----
    task_cache_concurrency: ConcurrencyMode
    task_cache_open_timeout: float

    @staticmethod
    def from_env() -> "Settings":
        data_dir = _read_path("DATA_DIR", Path(".local/prover"))

        return Settings(
            app_name=_read("APP_NAME") or "prover",
            log_level=(_read("LOG_LEVEL") or "INFO").upper(),
            log_to_file=_read_bool("LOG_TO_FILE", True),
            data_dir=data_dir,
            task_cache_path=_read_path("TASK_CACHE_PATH", data_dir / "task_cache"),
            task_cache_concurrency=ConcurrencyMode.parse(_read("TASK_CACHE_CONCURRENCY")),
            task_cache_open_timeout=max(0.0, _read_float("TASK_CACHE_OPEN_TIMEOUT", 5.0)),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    load_dotenv(override=False)
    return Settings.from_env()
