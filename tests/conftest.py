"""Shared fixtures for the shapecast test suite."""
import logging

import pytest
import structlog

from shapecast.config import get_settings
from shapecast.validation import number


@pytest.fixture
def fresh_settings():
    """Re-read SHAPECAST_* settings for the duration of a test."""
    get_settings.cache_clear()
    yield get_settings
    get_settings.cache_clear()


@pytest.fixture
def reset_logging():
    """Undo configure_logging() side effects."""
    yield
    library_logger = logging.getLogger("shapecast")
    library_logger.handlers = []
    library_logger.setLevel(logging.NOTSET)
    library_logger.propagate = True
    structlog.reset_defaults()


@pytest.fixture
def non_negative():
    """Element schema rejecting negative numbers."""
    return number().min(0)
