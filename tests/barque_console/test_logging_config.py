from __future__ import annotations

import logging

import pytest
from pythonjsonlogger.json import JsonFormatter

from barque_console.logging_config import configure_logging


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_json_format_is_default(monkeypatch):
    monkeypatch.delenv("BARQUE_CONSOLE_LOG_FORMAT", raising=False)
    configure_logging()
    handlers = logging.getLogger().handlers
    assert len(handlers) == 1
    assert isinstance(handlers[0].formatter, JsonFormatter)


def test_plain_format_from_env(monkeypatch):
    monkeypatch.setenv("BARQUE_CONSOLE_LOG_FORMAT", "plain")
    configure_logging(level=logging.DEBUG)
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert not isinstance(root.handlers[0].formatter, JsonFormatter)


def test_force_format_wins_over_env(monkeypatch):
    monkeypatch.setenv("BARQUE_CONSOLE_LOG_FORMAT", "plain")
    configure_logging(force_format="json")
    assert isinstance(logging.getLogger().handlers[0].formatter, JsonFormatter)
