"""
Base of the error taxonomy.

Every taxonomy error carries:
- error_id: unique correlation token generated at construction
- error_code: machine-readable code, explicit or derived from the class name
- category: fixed per kind (class-level tag), never per instance
- severity: per-kind default, overridable by factories
- timestamp: UTC creation instant
- context: an ExceptionContext owned by the error
- cause: optional link to the previous error in the chain (``__cause__``)
"""
from __future__ import annotations

import re
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from enum import Enum
from typing import Any, ClassVar

from errorkit.context import ExceptionContext


class ErrorCategory(str, Enum):
    """Closed set of error categories."""

    CHECKED = "CHECKED"
    UNCHECKED = "UNCHECKED"
    SYSTEM_ERROR = "ERROR"
    HTTP = "HTTP"
    # Synthetic categories used only by dispatcher fallback responses
    SYSTEM = "SYSTEM"
    UNKNOWN = "UNKNOWN"


class Severity(str, Enum):
    """Ordered qualitative severity levels."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Severity):
            return NotImplemented
        return self.rank >= other.rank


_SEVERITY_RANK = {
    Severity.LOW: 0,
    Severity.MEDIUM: 1,
    Severity.HIGH: 2,
    Severity.CRITICAL: 3,
}

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def derive_error_code(class_name: str) -> str:
    """Derive an error code from a class name.

    ``BusinessLogicException`` -> ``BUSINESS_LOGIC_ERROR``,
    ``IOOperationError`` -> ``IO_OPERATION_ERROR``.
    """
    code = _CAMEL_BOUNDARY.sub("_", class_name).upper()
    if code.endswith("_EXCEPTION"):
        return code[: -len("_EXCEPTION")] + "_ERROR"
    if code == "EXCEPTION":
        return "ERROR"
    if not code.endswith("ERROR"):
        return code + "_ERROR"
    return code


class DescribableError(ABC):
    """Capability interface for errors that expose structured accessors.

    Taxonomy errors implement it. Foreign exceptions may subclass it or be
    registered with ``DescribableError.register(cls)``; anything that is not an
    instance is rendered with the optional fields omitted.
    """

    @property
    @abstractmethod
    def error_id(self) -> str: ...

    @property
    @abstractmethod
    def error_code(self) -> str: ...

    @property
    @abstractmethod
    def category(self) -> ErrorCategory | str: ...

    @property
    @abstractmethod
    def severity(self) -> Severity | str: ...

    @property
    @abstractmethod
    def timestamp(self) -> datetime: ...

    @property
    @abstractmethod
    def context(self) -> ExceptionContext | None: ...


class BaseError(DescribableError, Exception):
    """Root of the taxonomy. Concrete kinds set ``CATEGORY``."""

    CATEGORY: ClassVar[ErrorCategory]
    DEFAULT_SEVERITY: ClassVar[Severity] = Severity.MEDIUM
    DEFAULT_CODE: ClassVar[str | None] = None

    def __init__(
        self,
        message: str | None = None,
        *,
        code: str | None = None,
        cause: BaseException | None = None,
        context: ExceptionContext | None = None,
        severity: Severity | None = None,
    ) -> None:
        if not hasattr(type(self), "CATEGORY"):
            raise TypeError(f"{type(self).__name__} has no category; raise a concrete error kind")
        super().__init__(message)
        self._message = message
        self._error_id = str(uuid.uuid4())
        self._error_code = code or self.DEFAULT_CODE or derive_error_code(type(self).__name__)
        self._timestamp = datetime.now(timezone.utc)
        self._context = context if context is not None else ExceptionContext()
        self._severity_override = severity
        if cause is not None:
            self.__cause__ = cause

    @property
    def error_id(self) -> str:
        return self._error_id

    @property
    def error_code(self) -> str:
        return self._error_code

    @property
    def message(self) -> str | None:
        return self._message

    @property
    def category(self) -> ErrorCategory:
        return type(self).CATEGORY

    @property
    def severity(self) -> Severity:
        return self._severity_override or self.DEFAULT_SEVERITY

    @property
    def timestamp(self) -> datetime:
        return self._timestamp

    @property
    def context(self) -> ExceptionContext:
        return self._context

    @property
    def cause(self) -> BaseException | None:
        return self.__cause__

    def to_dict(self) -> dict[str, Any]:
        """Serialize to structured dict."""
        return {
            "error_id": self.error_id,
            "error_code": self.error_code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.timestamp.isoformat(),
            "context": self.context.to_dict(),
        }

    def __str__(self) -> str:
        return self._message or ""

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(error_id={self.error_id!r}, "
            f"error_code={self.error_code!r}, message={self.message!r})"
        )
