# tests/test_logging_setup.py

from __future__ import annotations

import logging

from taskdeck.logging_setup import _ConsoleNoiseFilter


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


def test_console_filter_levels() -> None:
    f = _ConsoleNoiseFilter()

    assert f.filter(_record("taskdeck.tasks.task_repository", logging.DEBUG))
    assert not f.filter(_record("taskdeck.tasks.task_storage", logging.INFO))
    assert f.filter(_record("taskdeck.tasks.task_storage", logging.WARNING))
    assert not f.filter(_record("py.warnings", logging.WARNING))
    assert f.filter(_record("urllib3", logging.ERROR))
