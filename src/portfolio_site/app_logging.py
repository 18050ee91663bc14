"""Logging setup for the site's serverless functions."""

import logging

PACKAGE_LOGGER = "portfolio_site"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Per-request lines from the storage and key-value HTTP clients stay at WARNING.
_CLIENT_LOGGERS = ("httpx", "httpcore", "hpack")


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach one stream handler to the package logger and apply the level.

    Calling again only updates the level, so every app factory call in a
    warm function instance shares the same handler.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level.upper())
    for name in _CLIENT_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False
    return logger
