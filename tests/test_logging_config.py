"""Tests for structured logging configuration."""

import json

import pytest

import errorkit.logging_config as logging_config_module
from errorkit.logging_config import configure_logging, get_logger


class TestLoggingConfiguration:
    """Test configure_logging function."""

    def test_configure_logging_is_idempotent(self) -> None:
        configure_logging(log_level="DEBUG")
        assert logging_config_module._CONFIGURED is True
        configure_logging(log_level="INFO")
        assert logging_config_module._CONFIGURED is True

    def test_configure_logging_accepts_valid_levels(self) -> None:
        for level in ["DEBUG", "INFO", "WARNING", "WARN", "ERROR", "CRITICAL", "error"]:
            logging_config_module._CONFIGURED = False
            configure_logging(log_level=level)

    def test_console_output_mode(self) -> None:
        configure_logging(log_level="INFO", json_output=False)
        get_logger("errorkit.test").info("console line")


class TestStructuredLoggingOutput:
    """JSON lines written by the errorkit logger namespace."""

    def test_log_output_is_json_with_fields(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(log_level="DEBUG")

        logger = get_logger("errorkit.test_module")
        logger.error("render failed", error_code="X_ERROR")

        output = capsys.readouterr().out
        if output.strip():
            for line in output.strip().split("\n"):
                if line.strip():
                    data = json.loads(line)
                    assert data["event"] == "render failed"
                    assert data["error_code"] == "X_ERROR"
                    assert data["level"] == "error"
                    assert data["logger"] == "errorkit.test_module"
                    assert "timestamp" in data

    def test_level_filtering(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(log_level="ERROR")

        get_logger("errorkit.test_module").info("dropped")

        assert "dropped" not in capsys.readouterr().out
