"""
Tests for ww-common structured logging setup.
"""

from __future__ import annotations

import json

import pytest
import structlog

from ww_common.logging import configure_logging


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


class TestConfigureLogging:
    """Tests for configure_logging()."""

    def test_json_line_fields(self, capsys) -> None:
        configure_logging("compliance", level="INFO", json=True)
        structlog.get_logger().info("rule_library_loaded", rules=11)
        line = capsys.readouterr().out.strip().splitlines()[-1]
        data = json.loads(line)
        assert data["event"] == "rule_library_loaded"
        assert data["service"] == "compliance"
        assert data["level"] == "info"
        assert data["rules"] == 11
        assert "timestamp" in data

    def test_level_filtering(self, capsys) -> None:
        configure_logging("compliance", level="WARNING", json=True)
        log = structlog.get_logger()
        log.info("dropped")
        log.warning("kept")
        out = capsys.readouterr().out
        assert "dropped" not in out
        assert "kept" in out

    def test_unknown_level_falls_back_to_info(self, capsys) -> None:
        configure_logging("compliance", level="LOUD", json=True)
        log = structlog.get_logger()
        log.debug("hidden")
        log.info("shown")
        out = capsys.readouterr().out
        assert "hidden" not in out
        assert "shown" in out

    def test_context_vars_merged(self, capsys) -> None:
        configure_logging("compliance", json=True)
        with structlog.contextvars.bound_contextvars(call_id="call-42"):
            structlog.get_logger().info("alert_raised")
        data = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert data["call_id"] == "call-42"

    def test_console_renderer(self, capsys) -> None:
        configure_logging("demo-runner", json=False)
        structlog.get_logger().info("session_reset")
        assert "session_reset" in capsys.readouterr().out
