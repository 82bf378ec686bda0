# src/prover_cache/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILENAME = "prover.log"
LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


class _ConsoleNoiseFilter(logging.Filter):
    """Console shows every prover_cache record; other sources need WARNING+, py.warnings ERROR+."""

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name == "prover_cache" or name.startswith("prover_cache."):
            return True
        if name == "py.warnings":
            return record.levelno >= logging.ERROR
        return record.levelno >= logging.WARNING


def _handler(handler: logging.Handler, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    *,
    log_dir: str | Path | None = ".local/prover",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> None:
    """
    Route all records to stderr (filtered) and, unless log_dir is None, to
    <log_dir>/prover.log (unfiltered).

    Replaces whatever handlers the root logger had. Run before the task cache
    is opened so its "ready" line lands in the file.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for existing in list(root.handlers):
        root.removeHandler(existing)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    console = _handler(logging.StreamHandler(sys.stderr), console_level, formatter)
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = logging.FileHandler(str(log_dir / LOG_FILENAME), encoding="utf-8")
        root.addHandler(_handler(log_file, file_level, formatter))

    logging.captureWarnings(True)
