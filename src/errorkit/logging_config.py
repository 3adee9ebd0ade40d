"""Structured logging configuration using structlog."""

from __future__ import annotations

import logging.config

import structlog

_CONFIGURED = False

LOGGER_NAMESPACE = "errorkit"


def _shared_processors() -> list[structlog.typing.Processor]:
    return [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.dict_tracebacks,
    ]


def configure_logging(log_level: str = "INFO", json_output: bool = True) -> None:
    """
    Configure structlog over stdlib logging. Idempotent - safe to call multiple times.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING/WARN, ERROR, CRITICAL)
        json_output: JSON lines when True, human-readable console output otherwise
    """
    global _CONFIGURED

    if _CONFIGURED:
        return

    level_name = log_level.upper()
    if level_name == "WARN":
        level_name = "WARNING"
    level_num = getattr(logging, level_name)

    renderer: structlog.typing.Processor = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "structured": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "processor": renderer,
                    "foreign_pre_chain": _shared_processors(),
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "structured",
                    "stream": "ext://sys.stdout",
                },
            },
            "loggers": {
                LOGGER_NAMESPACE: {
                    "level": level_name,
                    "propagate": False,
                    "handlers": ["console"],
                },
            },
        }
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            *_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level_num),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    _CONFIGURED = True


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger instance."""
    return structlog.get_logger(name)  # type: ignore[no-any-return]
