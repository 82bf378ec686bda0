# tests/test_logging_setup.py

from __future__ import annotations

import logging

from prover_cache.logging_setup import _ConsoleNoiseFilter


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


def test_console_filter_keeps_own_logs() -> None:
    f = _ConsoleNoiseFilter()
    assert f.filter(_record("prover_cache.tasks.task_store", logging.DEBUG))
    assert f.filter(_record("prover_cache", logging.INFO))


def test_console_filter_quiets_third_party_and_warnings() -> None:
    f = _ConsoleNoiseFilter()
    assert not f.filter(_record("urllib3", logging.INFO))
    assert f.filter(_record("urllib3", logging.WARNING))
    assert not f.filter(_record("py.warnings", logging.WARNING))
    assert f.filter(_record("py.warnings", logging.ERROR))
    assert not f.filter(_record("prover_cache_other", logging.INFO))
