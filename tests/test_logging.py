"""Tests for the qlift logging helpers."""

from __future__ import annotations

import io
import logging

from qlift.logging import configure_logging, get_logger, set_log_level


def test_get_logger_namespacing_and_cache() -> None:
    """Loggers live below 'qlift' and are cached."""
    logger = get_logger("my_module")
    assert logger.name == "qlift.my_module"
    assert get_logger("my_module") is logger
    assert get_logger("qlift.simulation.engine").name == "qlift.simulation.engine"
    assert get_logger().name == "qlift"
    assert not logger.propagate
    assert len(logger.handlers) == 1


def test_set_log_level_accepts_names() -> None:
    logger = get_logger("levels")
    try:
        set_log_level("debug")
        assert logger.level == logging.DEBUG
        set_log_level(logging.ERROR)
        assert logger.level == logging.ERROR
    finally:
        set_log_level(logging.WARNING)


def test_configure_logging_redirects_output() -> None:
    """configure_logging replaces handlers with one writing to the stream."""
    logger = get_logger("redirect")
    stream = io.StringIO()
    try:
        configure_logging(level="INFO", format_string="%(levelname)s:%(message)s", stream=stream)
        logger.info("hello")
        logger.debug("hidden")
    finally:
        configure_logging()
    assert stream.getvalue() == "INFO:hello\n"
    assert len(logger.handlers) == 1
