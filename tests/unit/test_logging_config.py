"""Unit tests for ruletrace logging configuration."""

from __future__ import annotations

import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from unittest import mock

import ruletrace
from ruletrace.logging_config import (
    LOGGER_NAME,
    JsonFormatter,
    _get_level,
    _get_logger,
)


class TestSilentByDefault:

    def test_import_produces_no_log_output(self, capfd):
        import importlib

        importlib.reload(ruletrace)

        captured = capfd.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_logger_has_null_handler(self):
        logger = logging.getLogger(LOGGER_NAME)
        assert any(isinstance(h, logging.NullHandler) for h in logger.handlers)

    def test_recording_is_silent(self, capfd):
        trace = ruletrace.create_trace("quiet")
        trace.add_context("obj", object())
        trace.merge(ruletrace.create_trace("child"))

        captured = capfd.readouterr()
        assert captured.err == ""


class TestEnableConsoleLogging:

    def test_adds_stream_handler_and_sets_level(self):
        ruletrace.enable_console_logging(level="DEBUG")

        logger = _get_logger()
        assert logger.level == logging.DEBUG
        assert any(isinstance(h, logging.StreamHandler) for h in logger.handlers)

    def test_outputs_to_stderr(self, capfd):
        ruletrace.enable_console_logging(level="INFO", format="[RT] %(message)s")

        logging.getLogger(f"{LOGGER_NAME}.test").info("hello")

        captured = capfd.readouterr()
        assert "[RT] hello" in captured.err

    def test_debug_records_from_merge(self, capfd):
        ruletrace.enable_console_logging(level="DEBUG")

        parent = ruletrace.create_trace("parent")
        parent.merge(ruletrace.create_trace("child"))

        assert "Merged 1 trace events" in capfd.readouterr().err


class TestEnableFileLogging:

    def test_creates_parent_directories_and_writes(self, tmp_path):
        log_file = tmp_path / "nested" / "ruletrace.log"
        handler = ruletrace.enable_file_logging(log_file, level="INFO", max_bytes=1024, backup_count=2)

        logging.getLogger(f"{LOGGER_NAME}.test").info("file message")
        handler.flush()

        assert isinstance(handler, RotatingFileHandler)
        assert handler.maxBytes == 1024
        assert handler.backupCount == 2
        assert "file message" in log_file.read_text()

    def test_json_format(self, tmp_path):
        log_file = tmp_path / "ruletrace.json"
        handler = ruletrace.enable_file_logging(log_file, json_format=True)

        logging.getLogger(f"{LOGGER_NAME}.test").warning("json message")
        handler.flush()

        record = json.loads(log_file.read_text().strip())
        assert record["message"] == "json message"
        assert record["level"] == "WARNING"
        assert record["logger"] == f"{LOGGER_NAME}.test"


class TestJsonFormatter:

    def test_includes_exception(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = logging.LogRecord(
                LOGGER_NAME, logging.ERROR, __file__, 1, "failed", None, sys.exc_info()
            )

        data = json.loads(JsonFormatter().format(record))
        assert data["message"] == "failed"
        assert "ValueError: boom" in data["exception"]

    def test_enable_json_logging(self, capfd):
        ruletrace.enable_json_logging(level="INFO")

        logging.getLogger(f"{LOGGER_NAME}.test").info("structured")

        err = capfd.readouterr().err.strip()
        assert json.loads(err)["message"] == "structured"


class TestConfigureFromEnv:

    def test_noop_without_variables(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            ruletrace.configure_from_env()

        handlers = _get_logger().handlers
        assert all(isinstance(h, logging.NullHandler) for h in handlers)

    def test_level_only_enables_console(self):
        with mock.patch.dict(os.environ, {"RULETRACE_LOGGING": "debug"}, clear=True):
            ruletrace.configure_from_env()

        logger = _get_logger()
        assert logger.level == logging.DEBUG
        assert any(type(h) is logging.StreamHandler for h in logger.handlers)

    def test_log_file_enables_file_logging(self, tmp_path):
        log_file = tmp_path / "env.log"
        env = {"RULETRACE_LOG_FILE": str(log_file), "RULETRACE_LOG_JSON": "1"}
        with mock.patch.dict(os.environ, env, clear=True):
            ruletrace.configure_from_env()

        handlers = [h for h in _get_logger().handlers if isinstance(h, RotatingFileHandler)]
        assert len(handlers) == 1
        assert isinstance(handlers[0].formatter, JsonFormatter)
        assert _get_logger().level == logging.INFO


class TestLevels:

    def test_get_level(self):
        assert _get_level("warning") == logging.WARNING
        assert _get_level(15) == 15
        assert _get_level("nonsense") == logging.INFO

    def test_set_module_level(self):
        ruletrace.set_module_level("tracing.formatting", "ERROR")

        assert logging.getLogger(f"{LOGGER_NAME}.tracing.formatting").level == logging.ERROR
        logging.getLogger(f"{LOGGER_NAME}.tracing.formatting").setLevel(logging.NOTSET)

    def test_disable_logging(self, capfd):
        ruletrace.enable_console_logging()
        ruletrace.disable_logging()

        logging.getLogger(f"{LOGGER_NAME}.test").critical("silenced")

        assert _get_logger().level > logging.CRITICAL
        assert "silenced" not in capfd.readouterr().err

    def test_set_level(self):
        ruletrace.set_level("ERROR")
        assert _get_logger().level == logging.ERROR
