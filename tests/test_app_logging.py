"""Tests for logging configuration."""

import logging

from lunch_recommender.app_logging import LOGGER_NAME, configure_logging


def test_configure_logging_idempotent() -> None:
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()

    configure_logging()
    first_count = len(logger.handlers)

    configure_logging()
    second_count = len(logger.handlers)

    assert first_count == 1
    assert second_count == 1


def test_configure_logging_accepts_level_names() -> None:
    logger = logging.getLogger(LOGGER_NAME)

    configure_logging("debug")
    assert logger.level == logging.DEBUG

    configure_logging(logging.WARNING)
    assert logger.level == logging.WARNING
