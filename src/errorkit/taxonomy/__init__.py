"""Taxonomy package - export error kinds."""

from errorkit.taxonomy.base import (
    BaseError,
    DescribableError,
    ErrorCategory,
    Severity,
    derive_error_code,
)
from errorkit.taxonomy.checked import CheckedError, DatabaseError, IOOperationError
from errorkit.taxonomy.http import ClientError, HttpError, HttpStatus, ServerError, StatusClass
from errorkit.taxonomy.system import CriticalSystemError, MemoryInfo
from errorkit.taxonomy.unchecked import (
    BusinessLogicError,
    FieldError,
    UncheckedError,
    ValidationError,
)

__all__ = [
    "BaseError",
    "BusinessLogicError",
    "CheckedError",
    "ClientError",
    "CriticalSystemError",
    "DatabaseError",
    "DescribableError",
    "ErrorCategory",
    "FieldError",
    "HttpError",
    "HttpStatus",
    "IOOperationError",
    "MemoryInfo",
    "ServerError",
    "Severity",
    "StatusClass",
    "UncheckedError",
    "ValidationError",
    "derive_error_code",
]
