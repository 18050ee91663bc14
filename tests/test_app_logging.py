"""Tests for logging configuration."""

import logging

from fastapi.testclient import TestClient

from portfolio_site.api.app import create_app
from portfolio_site.app_logging import PACKAGE_LOGGER, configure_logging


def test_configure_logging_idempotent() -> None:
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.handlers.clear()

    configure_logging()
    first_count = len(logger.handlers)

    configure_logging()
    second_count = len(logger.handlers)

    assert first_count == 1
    assert second_count == 1
    assert logger.propagate is False


def test_configure_logging_updates_level_and_quiets_clients() -> None:
    logger = configure_logging("debug")

    assert logger.level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.WARNING

    configure_logging("warning")

    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1
    configure_logging()


def test_create_app_applies_configured_level(container) -> None:
    container.settings.log_level = "ERROR"

    TestClient(create_app(container))

    assert logging.getLogger(PACKAGE_LOGGER).level == logging.ERROR
    configure_logging()
