"""Logging helper tests."""

from __future__ import annotations

import io
import logging

import pytest

from wsutils.logging import (
    BASE_LOGGER,
    get_connection_logger,
    get_logger,
    set_logger_level,
    setup_logging,
)


@pytest.fixture
def restore_base_logger():
    logger = logging.getLogger(BASE_LOGGER)
    saved = (logger.level, logger.propagate, list(logger.handlers))
    yield logger
    logger.setLevel(saved[0])
    logger.propagate = saved[1]
    logger.handlers[:] = saved[2]


def test_get_logger_children():
    assert get_logger().name == "ws"
    assert get_logger("wsserver.codec").name == "ws.wsserver.codec"


def test_connection_logger_named_after_peer():
    assert get_connection_logger(("127.0.0.1", 50000)).name == "ws.connection[127.0.0.1:50000]"


def test_setup_logging_installs_single_handler(restore_base_logger):
    setup_logging("debug")
    logger = setup_logging("DEBUG")
    assert logger is restore_base_logger
    assert logger.level == logging.DEBUG
    assert not logger.propagate
    assert len(logger.handlers) == 1


def test_setup_logging_writes_formatted_records(restore_base_logger):
    stream = io.StringIO()
    setup_logging("INFO", stream=stream)
    get_logger("wsserver.dispatch").info("Received message: %s", "hi")
    get_logger("wsserver.dispatch").debug("hidden")
    output = stream.getvalue()
    assert "ws.wsserver.dispatch INFO] Received message: hi" in output
    assert "hidden" not in output


def test_set_logger_level_updates_handlers(restore_base_logger):
    setup_logging("INFO")
    set_logger_level(logging.WARNING)
    logger = restore_base_logger
    assert logger.level == logging.WARNING
    assert logger.handlers[0].level == logging.WARNING


@pytest.mark.parametrize("name", ["chatty", "basicConfig"])
def test_unknown_level_name_falls_back_to_info(restore_base_logger, name: str):
    setup_logging(name)
    assert restore_base_logger.level == logging.INFO
