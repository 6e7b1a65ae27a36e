"""Shared fixtures."""

import logging

import pytest

from scalatest_launcher import logging_utils


@pytest.fixture
def fresh_logging(monkeypatch):
    """Root logger with configure_logging reset; handlers it adds are removed afterwards."""
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    monkeypatch.setattr(logging_utils, "_configured", False)
    monkeypatch.setattr(logging_utils, "_file_handler", None)

    yield root

    for handler in list(root.handlers):
        if handler not in saved_handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(saved_level)
