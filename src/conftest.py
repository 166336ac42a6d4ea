"""Pytest configuration."""

import logging

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def caplog(caplog):
    """Make loguru logs visible to pytest caplog."""

    class PropagateHandler(logging.Handler):
        def emit(self, record):
            logging.getLogger(record.name).handle(record)

    handler_id = logger.add(PropagateHandler(), format="{message}")
    yield caplog
    try:
        logger.remove(handler_id)
    except ValueError:
        pass


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """Keep a developer's REVDEC_* variables out of the tests."""
    for name in (
        "REVDEC_ABI_PATH",
        "REVDEC_COLLISION_POLICY",
        "REVDEC_INCLUDE_BUILTINS",
        "REVDEC_LOG_LEVEL",
        "REVDEC_LOG_FILE",
    ):
        monkeypatch.delenv(name, raising=False)
