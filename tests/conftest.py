"""Shared pytest fixtures."""

import logging

import pytest

from image_identification.core.logging_config import ROOT_LOGGER


@pytest.fixture(autouse=True)
def restore_function_logger():
    """Every test starts and ends with the same parent logger state."""
    logger = logging.getLogger(ROOT_LOGGER)
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    for handler in handlers:
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = propagate


@pytest.fixture
def function_logs(caplog):
    """caplog attached to the parent logger, which does not propagate to root."""
    logger = logging.getLogger(ROOT_LOGGER)
    logger.addHandler(caplog.handler)
    yield caplog
    logger.removeHandler(caplog.handler)
