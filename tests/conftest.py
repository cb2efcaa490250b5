"""Global pytest configuration."""

import logging

import pytest

from core.logging import LOGGER_NAMESPACE


@pytest.fixture(autouse=True)
def reset_app_logger():
    """Drop handlers installed by configure_logging() so tests stay isolated."""
    logger = logging.getLogger(LOGGER_NAMESPACE)
    level = logger.level
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(level)
