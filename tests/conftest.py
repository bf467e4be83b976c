"""Shared test fixtures."""

import logging

import pytest


@pytest.fixture
def restore_root_handlers():
    """Put the root logger back the way pytest left it after setup_logging."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
