"""Shared fixtures keeping logging state isolated between tests."""

import logging

import pytest


@pytest.fixture(autouse=True)
def restore_root_logger(monkeypatch):
    """Undo handlers and levels installed by configure_logging() or the CLI."""
    monkeypatch.setenv("GETVERSION_LOG_LEVEL", "WARNING")
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
