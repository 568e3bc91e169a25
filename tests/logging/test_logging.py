"""Tests for centralized logging behavior and configuration."""

import logging
import sys
from io import StringIO

import pytest

from mangler.logging import (
    disable_debug_logging,
    enable_debug_logging,
    get_logger,
    reset_logging,
    set_global_log_level,
    setup_root_logger,
)


@pytest.fixture(autouse=True)
def _reset_logging_each_test():
    """Reset logging state before and after each test to avoid cross-test bleed."""
    reset_logging()
    yield
    reset_logging()


def test_default_handler_writes_to_stderr():
    """Generated words own stdout, so the default handler must use stderr."""
    get_logger("mangler.test")
    handlers = logging.getLogger("mangler").handlers
    assert len(handlers) == 1
    assert isinstance(handlers[0], logging.StreamHandler)
    assert handlers[0].stream is sys.stderr


def test_effective_levels_enable_disable():
    """INFO by default, DEBUG after enable, back to INFO after disable."""
    logger = get_logger("mangler.test")

    capture = StringIO()
    handler = logging.StreamHandler(capture)
    handler.setLevel(logging.DEBUG)
    logger.addHandler(handler)
    try:
        logger.info("info-1")
        assert "info-1" in capture.getvalue()

        logger.debug("debug-1")
        assert "debug-1" not in capture.getvalue()

        enable_debug_logging()
        logger.debug("debug-2")
        assert "debug-2" in capture.getvalue()

        disable_debug_logging()
        logger.debug("debug-3")
        assert "debug-3" not in capture.getvalue()
    finally:
        logger.removeHandler(handler)


def test_global_level_propagates_to_children():
    logger1 = get_logger("mangler.pattern")
    logger2 = get_logger("mangler.mutation")
    assert logger1.getEffectiveLevel() == logging.INFO

    set_global_log_level(logging.WARNING)
    assert logger1.getEffectiveLevel() == logging.WARNING
    assert logger2.getEffectiveLevel() == logging.WARNING
    assert get_logger("mangler.runner").getEffectiveLevel() == logging.WARNING


def test_setup_root_logger_idempotent():
    capture = StringIO()
    setup_root_logger(level=logging.INFO, handler=logging.StreamHandler(capture))

    root_logger = logging.getLogger("mangler")
    assert len(root_logger.handlers) == 1

    setup_root_logger(level=logging.DEBUG)
    assert len(root_logger.handlers) == 1
    assert root_logger.level == logging.INFO


def test_custom_format_string_applied():
    capture = StringIO()
    fmt = "LEVEL:%(levelname)s|NAME:%(name)s|MSG:%(message)s"
    setup_root_logger(
        level=logging.INFO, format_string=fmt, handler=logging.StreamHandler(capture)
    )

    get_logger("mangler.test.format").info("hello")
    out = capture.getvalue()
    assert "LEVEL:INFO" in out
    assert "NAME:mangler.test.format" in out
    assert "MSG:hello" in out
