"""Tests for ExceptionLogger."""

import pytest
from structlog.testing import capture_logs

from errorkit.config import Settings
from errorkit.context import ExceptionContext
from errorkit.exception_logger import ExceptionLogger, LogLevel, exception_fields
from errorkit.logging_config import configure_logging
from errorkit.taxonomy import CheckedError, ClientError


class TestExceptionFields:
    def test_taxonomy_error_fields(self):
        error = CheckedError(
            "boom", context=ExceptionContext({"hidden": 1}, {"tenant": "acme", "empty": None})
        )
        fields = exception_fields(error)
        assert fields == {
            "exception_class": "CheckedError",
            "exception_message": "boom",
            "error_id": error.error_id,
            "error_code": "CHECKED_ERROR",
            "error_category": "CHECKED",
            "error_severity": "MEDIUM",
            "ctx_tenant": "acme",
            "ctx_empty": "",
        }

    def test_foreign_error_fields(self):
        assert exception_fields(RuntimeError()) == {
            "exception_class": "RuntimeError",
            "exception_message": "",
        }


class TestLogLevel:
    @pytest.mark.parametrize(
        ("name", "level"),
        [
            ("ERROR", LogLevel.ERROR),
            ("warn", LogLevel.WARNING),
            ("TRACE", LogLevel.DEBUG),
            ("fatal", LogLevel.CRITICAL),
        ],
    )
    def test_from_name(self, name, level):
        assert LogLevel.from_name(name) is level

    def test_unknown_name(self):
        with pytest.raises(ValueError):
            LogLevel.from_name("loud")


class TestExceptionLogger:
    def test_level_shortcuts(self, recording_logger):
        logger = ExceptionLogger(Settings(), logger=recording_logger)
        error = CheckedError("x")
        logger.log_debug(error, "d")
        logger.log_info(error, "i")
        logger.log_warning(error, "w")
        logger.log_error(error, "e")
        assert [(level, event) for level, event, _ in recording_logger.calls] == [
            ("debug", "d"),
            ("info", "i"),
            ("warning", "w"),
            ("error", "e"),
        ]

    def test_log_exception_uses_configured_level(self, recording_logger):
        logger = ExceptionLogger(Settings(log_level="INFO"), logger=recording_logger)
        logger.log_exception(CheckedError("x"), "happened")
        assert recording_logger.calls[0][0] == "info"

    def test_critical_prefix_and_flag(self, recording_logger):
        logger = ExceptionLogger(Settings(), logger=recording_logger)
        logger.log_critical(CheckedError("x"), "meltdown", {"node": "n1"})
        level, event, fields = recording_logger.calls[0]
        assert level == "critical"
        assert event == "CRITICAL: meltdown"
        assert fields["critical"] == "true"
        assert fields["node"] == "n1"

    def test_extra_fields_merged(self, recording_logger):
        logger = ExceptionLogger(Settings(), logger=recording_logger)
        logger.log("error", "m", ClientError(404, "gone"), {"request_id": "r-1"})
        _, _, fields = recording_logger.calls[0]
        assert fields["request_id"] == "r-1"
        assert fields["error_code"] == "HTTP_404_NOT_FOUND"

    def test_disabled_logging_emits_nothing(self, recording_logger):
        logger = ExceptionLogger(Settings(log_exceptions=False), logger=recording_logger)
        logger.log_error(CheckedError("x"), "quiet")
        assert recording_logger.calls == []

    def test_invalid_level_is_suppressed(self, recording_logger):
        logger = ExceptionLogger(Settings(), logger=recording_logger)
        logger.log("loud", "m", CheckedError("x"))
        assert recording_logger.calls == []

    def test_backend_failure_is_suppressed(self):
        class Exploding:
            def error(self, *args, **kwargs):
                raise OSError("disk full")

        ExceptionLogger(Settings(), logger=Exploding()).log_error(CheckedError("x"), "m")

    def test_real_structlog_pipeline(self):
        configure_logging(log_level="DEBUG")
        logger = ExceptionLogger(Settings())
        error = CheckedError("through structlog")
        with capture_logs() as logs:
            logger.log_error(error, "structured")
        assert len(logs) == 1
        entry = logs[0]
        assert entry["event"] == "structured"
        assert entry["log_level"] == "error"
        assert entry["error_id"] == error.error_id
        assert entry["exc_info"] is error
