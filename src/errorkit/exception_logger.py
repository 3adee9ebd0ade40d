"""Structured exception logging.

Every call passes an explicit field map to structlog; nothing is stored in
process-wide or context-local logging state.
"""
from __future__ import annotations

import contextlib
from enum import Enum
from typing import Any, Mapping

import structlog

from errorkit.config import Settings, get_settings
from errorkit.logging_config import get_logger
from errorkit.utils import describe, error_message


class LogLevel(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"

    @classmethod
    def from_name(cls, name: str) -> LogLevel:
        normalized = name.strip().lower()
        aliases = {"warn": "warning", "trace": "debug", "fatal": "critical"}
        return cls(aliases.get(normalized, normalized))


def exception_fields(error: BaseException) -> dict[str, str]:
    """Build the structured field map describing ``error``."""
    fields: dict[str, str] = {
        "exception_class": type(error).__name__,
        "exception_message": error_message(error) or "",
    }
    described = describe(error)
    for source, target in (
        ("error_id", "error_id"),
        ("error_code", "error_code"),
        ("category", "error_category"),
        ("severity", "error_severity"),
    ):
        if source in described:
            fields[target] = str(described[source])
    context = described.get("context")
    if context is not None:
        for key, value in context.all_metadata().items():
            fields[f"ctx_{key}"] = "" if value is None else value
    return fields


class ExceptionLogger:
    """Best-effort structured logger for errors; never raises."""

    def __init__(
        self,
        settings: Settings | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._logger = logger or get_logger(__name__)
        self._default_level = LogLevel.from_name(self._settings.log_level)

    def log(
        self,
        level: LogLevel | str,
        message: str,
        error: BaseException,
        fields: Mapping[str, str] | None = None,
    ) -> None:
        if not self._settings.log_exceptions:
            return
        with contextlib.suppress(Exception):
            resolved = level if isinstance(level, LogLevel) else LogLevel.from_name(level)
            payload: dict[str, Any] = exception_fields(error)
            if fields:
                payload.update(fields)
            emit = getattr(self._logger, resolved.value)
            emit(message, exc_info=error, **payload)

    def log_exception(self, error: BaseException, message: str) -> None:
        """Log at the configured default level."""
        self.log(self._default_level, message, error)

    def log_debug(self, error: BaseException, message: str) -> None:
        self.log(LogLevel.DEBUG, message, error)

    def log_info(self, error: BaseException, message: str) -> None:
        self.log(LogLevel.INFO, message, error)

    def log_warning(self, error: BaseException, message: str) -> None:
        self.log(LogLevel.WARNING, message, error)

    def log_error(self, error: BaseException, message: str) -> None:
        self.log(LogLevel.ERROR, message, error)

    def log_critical(
        self, error: BaseException, message: str, fields: Mapping[str, str] | None = None
    ) -> None:
        self.log(LogLevel.CRITICAL, f"CRITICAL: {message}", error, {**(fields or {}), "critical": "true"})
