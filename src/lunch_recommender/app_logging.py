"""Logging configuration helpers."""

import logging

LOGGER_NAME = "lunch_recommender"
LOG_FORMAT = "%(asctime)s %(levelname)s: %(name)s: %(message)s"


def configure_logging(level: int | str = logging.INFO) -> None:
    """Configure application logging with a single stream handler.

    `level` is a logging constant or a level name such as "debug". Calling
    again only updates the level.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper() if isinstance(level, str) else level)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
