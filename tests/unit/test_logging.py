"""Tests for logging configuration and session log context."""

import logging

import pytest
import structlog

from src.config import Settings, bind_session_context, clear_session_context, configure_logging
from src.config.logging import redact_credentials


@pytest.fixture(autouse=True)
def _clean_context():
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()


class TestRedactCredentials:
    def test_masks_secrets(self):
        event = redact_credentials(None, "info", {"event": "login", "username": "admin", "password": "123"})
        assert event == {"event": "login", "username": "admin", "password": "***"}

    def test_leaves_other_events_alone(self):
        event = {"event": "kpis_computed", "records": 3}
        assert redact_credentials(None, "info", dict(event)) == event


class TestSessionContext:
    def test_bind_and_clear(self):
        bind_session_context("demo", "obra")
        assert structlog.contextvars.get_contextvars() == {"data_mode": "demo", "user": "obra"}

        clear_session_context()
        assert structlog.contextvars.get_contextvars() == {}


class TestConfigureLogging:
    def test_per_logger_levels(self):
        settings = Settings(log_levels={"src.infrastructure.providers": "debug", "httpx": "ERROR"})

        configure_logging(settings)

        assert logging.getLogger("src.infrastructure.providers").level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.ERROR

    def test_default_quiets_http_clients(self):
        assert Settings().log_levels["httpcore"] == "WARNING"
