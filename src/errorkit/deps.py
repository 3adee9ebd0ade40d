"""Dependency injection helpers."""

from __future__ import annotations

from errorkit.config import Settings, get_settings
from errorkit.exception_logger import ExceptionLogger
from errorkit.handlers.dispatcher import ErrorDispatcher
from errorkit.renderer import ErrorRenderer
from errorkit.sanitizer import Sanitizer


def create_exception_logger(settings: Settings | None = None) -> ExceptionLogger:
    """Create exception logger bound to the given (or cached) settings."""
    return ExceptionLogger(settings or get_settings())


def create_renderer(
    settings: Settings | None = None,
    sanitizer: Sanitizer | None = None,
) -> ErrorRenderer:
    """Create renderer instance."""
    return ErrorRenderer(settings or get_settings(), sanitizer)


def create_dispatcher(
    settings: Settings | None = None,
    sanitizer: Sanitizer | None = None,
) -> ErrorDispatcher:
    """Create dispatcher with the default handler chain sharing one renderer and logger."""
    resolved = settings or get_settings()
    return ErrorDispatcher(
        settings=resolved,
        renderer=create_renderer(resolved, sanitizer),
        exception_logger=create_exception_logger(resolved),
    )
