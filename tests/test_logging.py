"""Tests for structured logging setup."""

from __future__ import annotations

import json
import logging

import structlog

from signal_core.config.schema import LoggingConfig
from signal_core.logging import get_logger, setup_from_config, setup_logging


class TestSetupLogging:
    def test_json_format(self, capsys):
        setup_logging(level="INFO", log_format="json")
        logger = get_logger("test_json")
        logger.info("test message", asset="EUR/USD")

        captured = capsys.readouterr()
        line = json.loads(captured.err.strip())
        assert line["event"] == "test message"
        assert line["asset"] == "EUR/USD"
        assert line["level"] == "info"
        assert "timestamp" in line

    def test_console_format(self, capsys):
        setup_logging(level="INFO", log_format="console")
        logger = get_logger("test_console")
        logger.info("hello console", session="TOKYO")

        captured = capsys.readouterr()
        assert "hello console" in captured.err
        assert "TOKYO" in captured.err

    def test_log_level_filtering(self, capsys):
        setup_logging(level="WARNING", log_format="json")
        logger = get_logger("test_level")
        logger.info("should be hidden")
        logger.warning("should appear")

        captured = capsys.readouterr()
        assert "should be hidden" not in captured.err
        assert "should appear" in captured.err

    def test_get_logger_with_context(self, capsys):
        setup_logging(level="INFO", log_format="json")
        logger = get_logger("test_ctx", asset="BTC/USD", session="LONDON")
        logger.info("context test")

        captured = capsys.readouterr()
        line = json.loads(captured.err.strip())
        assert line["asset"] == "BTC/USD"
        assert line["session"] == "LONDON"

    def test_stdlib_logs_rendered(self, capsys):
        setup_logging(level="INFO", log_format="json")
        logging.getLogger("plain").warning("from stdlib")

        line = json.loads(capsys.readouterr().err.strip())
        assert line["event"] == "from stdlib"
        assert line["level"] == "warning"

    def test_noisy_loggers_quieted(self):
        setup_logging(level="DEBUG", log_format="json")
        assert logging.getLogger("uvicorn.access").level == logging.WARNING

    def test_setup_from_config(self, capsys):
        setup_from_config(LoggingConfig(level="ERROR", format="json"))
        get_logger("test_cfg").warning("hidden")
        assert capsys.readouterr().err == ""

    def test_contextvars_binding(self, capsys):
        setup_logging(level="INFO", log_format="json")
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id="abc123")

        logger = get_logger("test_ctxvars")
        logger.info("with context var")

        captured = capsys.readouterr()
        line = json.loads(captured.err.strip())
        assert line["request_id"] == "abc123"

        structlog.contextvars.clear_contextvars()
