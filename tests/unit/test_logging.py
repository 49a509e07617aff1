"""Tests for structured logging setup."""

import logging

import pytest
import structlog

from tabletcontrol.core.config import Settings
from tabletcontrol.core.logging_config import LogContext, configure_from_settings, configure_logging, get_logger


@pytest.fixture(autouse=True)
def restore_logging():
    yield
    configure_logging(level="DEBUG", json_logs=False)


@pytest.mark.unit
def test_configure_sets_level():
    configure_logging(level="warning")

    assert logging.getLogger().level == logging.WARNING


@pytest.mark.unit
def test_unknown_level_falls_back_to_info():
    configure_logging(level="chatty")

    assert logging.getLogger().level == logging.INFO


@pytest.mark.unit
def test_json_logs(capsys):
    configure_logging(level="INFO", json_logs=True)

    get_logger("tabletcontrol.test").info("project_saved", pages=2)

    out = capsys.readouterr().out
    assert "project_saved" in out
    assert "pages" in out


@pytest.mark.unit
def test_log_context_binds_and_unbinds():
    with LogContext(project="Demo", operation="save"):
        assert structlog.contextvars.get_contextvars() == {"project": "Demo", "operation": "save"}

    assert structlog.contextvars.get_contextvars() == {}


@pytest.mark.unit
def test_nested_log_context_restores_outer_value():
    with LogContext(project="Outer"):
        with LogContext(project="Inner", operation="backup"):
            assert structlog.contextvars.get_contextvars() == {"project": "Inner", "operation": "backup"}
        assert structlog.contextvars.get_contextvars() == {"project": "Outer"}

    assert structlog.contextvars.get_contextvars() == {}


@pytest.mark.unit
def test_configure_from_settings():
    configure_from_settings(Settings(log_level="ERROR"))

    assert logging.getLogger().level == logging.ERROR
