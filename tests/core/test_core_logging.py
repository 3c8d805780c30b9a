"""Tests for tickerspine.core.logging: structlog configuration + context."""

from __future__ import annotations

import json
import logging

import pytest
import structlog
from structlog.testing import capture_logs

from tickerspine.core.logging import (
    LogContext,
    bind_context,
    clear_context,
    configure_from_settings,
    configure_logging,
    get_logger,
    unbind_context,
)
from tickerspine.core.settings import AuditSettings


# ── Fixtures ─────────────────────────────────────────────────────────────


@pytest.fixture()
def restore_structlog():
    yield
    structlog.reset_defaults()


# ── Context helpers ──────────────────────────────────────────────────────


class TestContextHelpers:
    def test_bind_and_unbind(self):
        bind_context(plugin_id="alerts", run=1)
        assert structlog.contextvars.get_contextvars() == {"plugin_id": "alerts", "run": 1}
        unbind_context("run")
        assert structlog.contextvars.get_contextvars() == {"plugin_id": "alerts"}

    def test_clear(self):
        bind_context(a=1)
        clear_context()
        assert structlog.contextvars.get_contextvars() == {}

    def test_log_context_scopes_keys(self):
        with LogContext(plugin_id="trade-risk"):
            assert structlog.contextvars.get_contextvars()["plugin_id"] == "trade-risk"
        assert "plugin_id" not in structlog.contextvars.get_contextvars()

    @pytest.mark.asyncio
    async def test_async_log_context(self):
        async with LogContext(section_id="golden"):
            assert structlog.contextvars.get_contextvars()["section_id"] == "golden"
        assert "section_id" not in structlog.contextvars.get_contextvars()


# ── Logger ───────────────────────────────────────────────────────────────


class TestGetLogger:
    def test_events_carry_fields(self):
        logger = get_logger("tests.logging")
        with capture_logs() as logs:
            logger.info("audit_run_completed", findings=3)
        assert logs == [{"event": "audit_run_completed", "findings": 3, "log_level": "info"}]


# ── configure_logging ────────────────────────────────────────────────────


class TestConfigureLogging:
    def test_json_output(self, restore_structlog, caplog):
        caplog.set_level(logging.DEBUG)
        configure_logging(level="INFO", json_format=True, service="audit-tests")
        get_logger("tests.json").info("ranked_tv_tickers", order=["MID"])

        payload = json.loads(caplog.records[-1].getMessage())
        assert payload["event"] == "ranked_tv_tickers"
        assert payload["order"] == ["MID"]
        assert payload["service"] == "audit-tests"
        assert payload["level"] == "info"
        assert payload["logger"] == "tests.json"
        assert "timestamp" in payload

    def test_level_filters(self, restore_structlog, caplog):
        caplog.set_level(logging.DEBUG)
        configure_logging(level="WARNING", json_format=True)
        get_logger("tests.filter").info("hidden_event")
        assert "hidden_event" not in caplog.text

    def test_from_settings(self, restore_structlog, caplog):
        caplog.set_level(logging.DEBUG)
        configure_from_settings(AuditSettings(_env_file=None, log_level="debug", log_format="json"))
        get_logger("tests.settings").debug("debug_event")
        assert "debug_event" in caplog.text
