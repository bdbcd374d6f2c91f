"""Tests for diagnostics config and the structlog-backed logfan logger."""

from __future__ import annotations

import json
import logging

import pytest

from logfan.config import LogFanConfig
from logfan.logging import ROOT_LOGGER_NAME, get_logger, setup_logging, shutdown_logging


# =============================================================================
# Config tests
# =============================================================================


class TestConfig:
    def test_default_values(self, monkeypatch):
        for var in (
            "LOGFAN_LOG_DESTINATION",
            "LOGFAN_LOG_LEVEL",
            "LOGFAN_LOG_FORMAT",
            "LOGFAN_LOG_PATH",
        ):
            monkeypatch.delenv(var, raising=False)
        cfg = LogFanConfig()
        assert cfg.log_destination == "stderr"
        assert cfg.log_level == "WARNING"
        assert cfg.log_format == "json"
        assert cfg.jsonl_path is None

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("LOGFAN_LOG_DESTINATION", "jsonl")
        monkeypatch.setenv("LOGFAN_LOG_PATH", "/tmp/x.jsonl")
        cfg = LogFanConfig()
        assert cfg.log_destination == "jsonl"
        assert cfg.jsonl_path == "/tmp/x.jsonl"

    def test_explicit_values(self):
        cfg = LogFanConfig(log_format="console", log_level="DEBUG")
        assert cfg.log_format == "console"
        assert cfg.log_level == "DEBUG"


# =============================================================================
# Logging tests
# =============================================================================


class TestGetLogger:
    def test_plain_stdlib_records_before_setup(self, caplog):
        with caplog.at_level(logging.WARNING, logger=ROOT_LOGGER_NAME):
            get_logger("logfan.test").warning("something.happened", key="value")

        (record,) = [r for r in caplog.records if r.name == "logfan.test"]
        assert record.getMessage() == "something.happened"
        assert record.key == "value"

    def test_respects_level(self, caplog):
        with caplog.at_level(logging.WARNING, logger=ROOT_LOGGER_NAME):
            get_logger("logfan.test").info("too.quiet")
        assert not [r for r in caplog.records if r.name == "logfan.test"]


class TestSetupLogging:
    def test_jsonl_end_to_end(self, tmp_path):
        path = tmp_path / "diag.jsonl"
        setup_logging(
            LogFanConfig(log_destination="jsonl", log_level="WARNING", jsonl_path=str(path))
        )
        get_logger("logfan.dispatcher").warning("delivery.failed", error="disk full")
        get_logger("logfan.dispatcher").info("ignored")
        shutdown_logging()

        (line,) = path.read_text().strip().splitlines()
        record = json.loads(line)
        assert record["event"] == "delivery.failed"
        assert record["error"] == "disk full"
        assert record["logger"] == "logfan.dispatcher"
        assert record["level"] == "warning"
        assert "timestamp" in record

    def test_console_renderer(self, tmp_path):
        path = tmp_path / "diag.log"
        setup_logging(
            LogFanConfig(log_destination="jsonl", log_format="console", jsonl_path=str(path))
        )
        get_logger("logfan.writer").warning("sink.flush_failed", writer="w")
        shutdown_logging()

        text = path.read_text()
        assert "sink.flush_failed" in text
        assert "writer=w" in text

    def test_stderr_destination(self, capsys):
        setup_logging(LogFanConfig(log_destination="stderr", log_format="json"))
        get_logger("logfan.test").error("boom")
        shutdown_logging()
        assert '"event": "boom"' in capsys.readouterr().err

    def test_setup_twice_keeps_one_handler(self):
        pkg = logging.getLogger(ROOT_LOGGER_NAME)
        before = len(pkg.handlers)
        setup_logging(LogFanConfig(log_destination="stderr"))
        setup_logging(LogFanConfig(log_destination="stderr"))
        assert len(pkg.handlers) == before + 1
        shutdown_logging()
        assert len(pkg.handlers) == before

    def test_unknown_destination_raises(self):
        with pytest.raises(ValueError, match="Unknown log destination"):
            setup_logging(LogFanConfig(log_destination="nonexistent"))
