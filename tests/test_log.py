"""Tests for loguru logging setup."""

from __future__ import annotations

import io
import logging

from loguru import logger

from annostore.log import setup_logging


def test_setup_logging_routes_stdlib_records() -> None:
    stream = io.StringIO()
    handler_id = setup_logging("debug", sink=stream)
    try:
        logging.getLogger("annostore.tests").info("hello from stdlib")
        logger.info("hello from loguru")
    finally:
        logger.remove(handler_id)

    output = stream.getvalue()
    assert "hello from stdlib" in output
    assert "hello from loguru" in output
    assert "Logging initialised (level=DEBUG)" in output


def test_setup_logging_quiets_httpx() -> None:
    handler_id = setup_logging("INFO", sink=io.StringIO())
    logger.remove(handler_id)

    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("httpcore").level == logging.WARNING


def test_setup_logging_exported_from_package() -> None:
    import annostore

    assert annostore.setup_logging is setup_logging
