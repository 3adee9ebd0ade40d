"""errorkit - error classification, dispatch and reporting."""

from errorkit.config import Settings, get_settings
from errorkit.context import ContextBuilder, ExceptionContext
from errorkit.contracts import ErrorDetails, ErrorResponse
from errorkit.deps import create_dispatcher, create_exception_logger, create_renderer
from errorkit.exception_logger import ExceptionLogger, LogLevel
from errorkit.handlers import ErrorDispatcher, ExceptionHandler, PredicateHandler
from errorkit.renderer import ErrorRenderer
from errorkit.sanitizer import sanitize_message
from errorkit.taxonomy import (
    BaseError,
    BusinessLogicError,
    CheckedError,
    ClientError,
    CriticalSystemError,
    DatabaseError,
    DescribableError,
    ErrorCategory,
    FieldError,
    HttpError,
    HttpStatus,
    IOOperationError,
    ServerError,
    Severity,
    UncheckedError,
    ValidationError,
)

__all__ = [
    "BaseError",
    "BusinessLogicError",
    "CheckedError",
    "ClientError",
    "ContextBuilder",
    "CriticalSystemError",
    "DatabaseError",
    "DescribableError",
    "ErrorCategory",
    "ErrorDetails",
    "ErrorDispatcher",
    "ErrorRenderer",
    "ErrorResponse",
    "ExceptionContext",
    "ExceptionHandler",
    "ExceptionLogger",
    "FieldError",
    "HttpError",
    "HttpStatus",
    "IOOperationError",
    "LogLevel",
    "PredicateHandler",
    "ServerError",
    "Settings",
    "Severity",
    "UncheckedError",
    "ValidationError",
    "create_dispatcher",
    "create_exception_logger",
    "create_renderer",
    "get_settings",
    "sanitize_message",
]
