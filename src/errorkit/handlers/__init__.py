"""Handlers package - export handler chain types."""

from errorkit.handlers.base import DEFAULT_PRIORITY, ExceptionHandler, PredicateHandler
from errorkit.handlers.builtin import (
    CheckedErrorHandler,
    HttpErrorHandler,
    SystemErrorHandler,
    TaxonomyHandler,
    UncheckedErrorHandler,
    default_handlers,
)
from errorkit.handlers.dispatcher import (
    HANDLING_FAILURE_CODE,
    UNHANDLED_CODE,
    ErrorDispatcher,
)

__all__ = [
    "CheckedErrorHandler",
    "DEFAULT_PRIORITY",
    "ErrorDispatcher",
    "ExceptionHandler",
    "HANDLING_FAILURE_CODE",
    "HttpErrorHandler",
    "PredicateHandler",
    "SystemErrorHandler",
    "TaxonomyHandler",
    "UNHANDLED_CODE",
    "UncheckedErrorHandler",
    "default_handlers",
]
