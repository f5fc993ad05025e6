"""Unit tests for hyperbitbit logging configuration."""

from __future__ import annotations

import json
import logging
import os
from logging.handlers import RotatingFileHandler
from unittest import mock

import hyperbitbit
from hyperbitbit.logging_config import LOGGER_NAME, JsonFormatter, _get_level, _get_logger


def _non_null_handlers() -> list[logging.Handler]:
    return [h for h in _get_logger().handlers if not isinstance(h, logging.NullHandler)]


def _promote_once() -> None:
    """Drive a sketch through one promotion."""
    hbb = hyperbitbit.HyperBitBit[bytes](hash_func=lambda data: int.from_bytes(data, "big"))
    for bucket in range(32):
        hbb.insert((((1 << 55) << 6) | bucket).to_bytes(8, "big"))
    assert hbb.exponent == 1


class TestSilentByDefault:
    """Tests that the library is silent by default."""

    def test_import_produces_no_log_output(self, capfd):
        """Importing and using hyperbitbit produces no output."""
        import importlib

        importlib.reload(hyperbitbit)
        _promote_once()

        captured = capfd.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_logger_has_null_handler(self):
        """The logger has a NullHandler by default."""
        logger = logging.getLogger(LOGGER_NAME)
        assert any(isinstance(h, logging.NullHandler) for h in logger.handlers)


class TestEnableConsoleLogging:
    """Tests for enable_console_logging."""

    def test_sets_level_and_adds_handler(self):
        """Adds a StreamHandler and sets the level."""
        hyperbitbit.enable_console_logging(level="DEBUG")

        assert _get_logger().level == logging.DEBUG
        assert any(isinstance(h, logging.StreamHandler) for h in _non_null_handlers())

    def test_promotions_logged_at_debug(self, capfd):
        """Promotions appear on stderr at DEBUG."""
        hyperbitbit.enable_console_logging(level="DEBUG")
        _promote_once()

        captured = capfd.readouterr()
        assert "Promoted to exponent 1 (estimate 692)" in captured.err

    def test_promotions_hidden_at_info(self, capfd):
        """Promotions are not shown at INFO."""
        hyperbitbit.enable_console_logging(level="INFO")
        _promote_once()

        captured = capfd.readouterr()
        assert "Promoted" not in captured.err

    def test_custom_format(self, capfd):
        """Respects a custom format string."""
        hyperbitbit.enable_console_logging(level="INFO", format="[CUSTOM] %(message)s")

        logging.getLogger(f"{LOGGER_NAME}.test").info("hello")

        captured = capfd.readouterr()
        assert "[CUSTOM] hello" in captured.err


class TestEnableFileLogging:
    """Tests for enable_file_logging."""

    def test_writes_to_file(self, tmp_path):
        """Writes log messages to a rotating file, creating parent directories."""
        log_file = tmp_path / "nested" / "hbb.log"
        handler = hyperbitbit.enable_file_logging(log_file, level="DEBUG", max_bytes=1024, backup_count=3)

        _promote_once()
        handler.flush()

        assert isinstance(handler, RotatingFileHandler)
        assert handler.maxBytes == 1024
        assert handler.backupCount == 3
        assert "Promoted to exponent 1" in log_file.read_text()


class TestEnableJsonLogging:
    """Tests for enable_json_logging."""

    def test_outputs_valid_json(self, capfd):
        """Outputs one JSON object per record."""
        hyperbitbit.enable_json_logging(level="DEBUG")
        _promote_once()

        captured = capfd.readouterr()
        data = json.loads(captured.err.strip().splitlines()[-1])

        assert data["level"] == "DEBUG"
        assert data["logger"] == "hyperbitbit.sketching.hyperbitbit"
        assert data["message"].startswith("Promoted to exponent 1")
        assert "timestamp" in data


class TestConfigureFromEnv:
    """Tests for configure_from_env."""

    def test_respects_level_env(self):
        """HBB_LOGGING sets the level."""
        with mock.patch.dict(os.environ, {"HBB_LOGGING": "DEBUG"}, clear=True):
            hyperbitbit.configure_from_env()

        assert _get_logger().level == logging.DEBUG

    def test_respects_log_file_env(self, tmp_path):
        """HBB_LOG_FILE enables rotating file logging."""
        log_file = tmp_path / "env.log"
        with mock.patch.dict(os.environ, {"HBB_LOG_FILE": str(log_file)}, clear=True):
            hyperbitbit.configure_from_env()

        assert _get_logger().level == logging.INFO
        assert any(isinstance(h, RotatingFileHandler) for h in _non_null_handlers())

    def test_json_file_env(self, tmp_path):
        """HBB_LOG_JSON=1 with a file writes JSON lines."""
        log_file = tmp_path / "env.json"
        env = {"HBB_LOGGING": "INFO", "HBB_LOG_FILE": str(log_file), "HBB_LOG_JSON": "1"}
        with mock.patch.dict(os.environ, env, clear=True):
            hyperbitbit.configure_from_env()

        logging.getLogger(f"{LOGGER_NAME}.test").info("json file test")
        for handler in _non_null_handlers():
            handler.flush()

        assert json.loads(log_file.read_text().strip())["message"] == "json file test"

    def test_json_console_env(self, capfd):
        """HBB_LOG_JSON=1 without a file writes JSON to stderr."""
        with mock.patch.dict(os.environ, {"HBB_LOGGING": "INFO", "HBB_LOG_JSON": "1"}, clear=True):
            hyperbitbit.configure_from_env()

        logging.getLogger(f"{LOGGER_NAME}.test").info("json env test")

        captured = capfd.readouterr()
        assert json.loads(captured.err.strip())["message"] == "json env test"

    def test_does_nothing_when_no_env_vars(self):
        """No handlers are added when no variables are set."""
        initial_count = len(_get_logger().handlers)

        with mock.patch.dict(os.environ, {}, clear=True):
            hyperbitbit.configure_from_env()

        assert len(_get_logger().handlers) == initial_count


class TestLevels:
    """Tests for level name conversion."""

    def test_get_level(self):
        """Level names convert to ints; unknown names default to INFO."""
        assert _get_level("debug") == logging.DEBUG
        assert _get_level(logging.ERROR) == logging.ERROR
        assert _get_level("INVALID") == logging.INFO


class TestDisableLogging:
    """Tests for disable_logging."""

    def test_silences_all_output(self, capfd):
        """Removes handlers and silences output."""
        hyperbitbit.enable_console_logging(level="DEBUG")
        hyperbitbit.disable_logging()

        logging.getLogger(f"{LOGGER_NAME}.test").critical("this should not appear")

        captured = capfd.readouterr()
        assert "this should not appear" not in captured.err
        assert _non_null_handlers() == []


class TestJsonFormatter:
    """Tests for JsonFormatter."""

    def test_format_with_exception(self):
        """Includes exception text."""
        formatter = JsonFormatter()
        try:
            raise RuntimeError("test error")
        except RuntimeError:
            import sys

            exc_info = sys.exc_info()

        record = logging.LogRecord(
            name="test.logger",
            level=logging.ERROR,
            pathname="test.py",
            lineno=1,
            msg="error occurred",
            args=(),
            exc_info=exc_info,
        )

        data = json.loads(formatter.format(record))

        assert data["message"] == "error occurred"
        assert data["logger"] == "test.logger"
        assert "RuntimeError" in data["exception"]
