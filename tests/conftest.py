"""Pytest configuration and fixtures."""

import logging

import pytest

from fluentmatch.config import get_settings


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Reset fluentmatch loggers after each test so handlers never leak between tests."""
    yield

    # Module loggers are held by reference, so reset them rather than dropping them
    names = [
        name
        for name, logger in logging.Logger.manager.loggerDict.items()
        if name.startswith("fluentmatch") and isinstance(logger, logging.Logger)
    ]

    for name in names:
        logger = logging.getLogger(name)
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)
        logger.disabled = False


@pytest.fixture(autouse=True)
def default_settings():
    """Reset the cached process-wide settings around each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
