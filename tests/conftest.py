"""Shared fixtures for the roxytags test suite."""

import logging

import pytest


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers installed by setup_logging so streams don't leak between tests."""
    yield
    logger = logging.getLogger("roxytags")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
