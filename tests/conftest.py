"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from loguru import logger

from annostore.hooks import HookRegistry


@pytest.fixture
def hooks() -> HookRegistry:
    return HookRegistry()


@pytest.fixture
def log_messages() -> Iterator[list[str]]:
    """Capture loguru output (message text only) for the duration of a test."""
    messages: list[str] = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG", format="{message}")
    yield messages
    logger.remove(handler_id)
