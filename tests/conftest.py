"""Pytest configuration and fixtures."""

import logging

import pytest

from intent.strategies import StrategyRegistry, default_registry


@pytest.fixture(autouse=True)
def reset_intent_logger():
    """Undo logging configuration done by a test on the intent logger."""
    yield

    package_logger = logging.getLogger("intent")
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def registry() -> StrategyRegistry:
    """A child of the default registry that tests may register into."""
    return default_registry().extend()
