"""Default handlers for each taxonomy branch.

Priorities: system 10, HTTP 15, checked 20, unchecked 30.
"""

from __future__ import annotations

from typing import ClassVar

from errorkit.contracts.response import ErrorResponse
from errorkit.exception_logger import ExceptionLogger
from errorkit.handlers.base import ExceptionHandler
from errorkit.renderer import ErrorRenderer
from errorkit.taxonomy.checked import CheckedError
from errorkit.taxonomy.http import HttpError
from errorkit.taxonomy.system import CriticalSystemError
from errorkit.taxonomy.unchecked import UncheckedError

SYSTEM_ERROR_MESSAGE = "A critical system error has occurred. Please contact support."
MEMORY_MESSAGE = "System is experiencing memory constraints"
STACK_MESSAGE = "System has encountered a stack overflow condition"


class TaxonomyHandler(ExceptionHandler):
    """Matches instances of ``error_type``, logs them and renders a response."""

    error_type: ClassVar[type[BaseException]]

    def __init__(
        self,
        renderer: ErrorRenderer | None = None,
        exception_logger: ExceptionLogger | None = None,
    ) -> None:
        self._renderer = renderer or ErrorRenderer()
        self._exception_logger = exception_logger or ExceptionLogger(self._renderer.settings)

    def can_handle(self, error: BaseException) -> bool:
        return isinstance(error, self.error_type)

    def handle(self, error: BaseException) -> ErrorResponse:
        self.log(error)
        return self.respond(error)

    def log(self, error: BaseException) -> None:
        self._exception_logger.log_exception(error, f"{type(error).__name__} occurred")

    def respond(self, error: BaseException) -> ErrorResponse:
        return self._renderer.to_envelope(self._renderer.to_details(error))


class SystemErrorHandler(TaxonomyHandler):
    priority = 10
    error_type = CriticalSystemError

    def log(self, error: BaseException) -> None:
        self._exception_logger.log_critical(error, "Critical system error occurred")

    def respond(self, error: BaseException) -> ErrorResponse:
        details = self._renderer.to_details(error)
        generic = _generic_system_message(error)
        if generic is not None:
            details = details.model_copy(update={"message": generic})
        return self._renderer.to_envelope(details, message=SYSTEM_ERROR_MESSAGE)


def _generic_system_message(error: BaseException) -> str | None:
    """Replace memory and recursion messages so no internals leak."""
    if not isinstance(error, CriticalSystemError):
        return None
    error_type = error.error_type
    kind = error.context.get_metadata("errorType")
    if error_type == "MemoryError" or kind == "memory":
        return MEMORY_MESSAGE
    if error_type == "RecursionError" or kind == "stack":
        return STACK_MESSAGE
    return None


class HttpErrorHandler(TaxonomyHandler):
    priority = 15
    error_type = HttpError

    def log(self, error: BaseException) -> None:
        if not isinstance(error, HttpError):
            super().log(error)
        elif error.is_server_error():
            self._exception_logger.log_error(error, "HTTP server error occurred")
        elif error.is_client_error():
            self._exception_logger.log_warning(error, "HTTP client error occurred")
        else:
            self._exception_logger.log_info(error, "HTTP exception occurred")

    def respond(self, error: BaseException) -> ErrorResponse:
        if not isinstance(error, HttpError):
            return super().respond(error)
        details = self._renderer.to_details(error)
        return self._renderer.to_envelope(details, http_status_code=error.status_code)


class CheckedErrorHandler(TaxonomyHandler):
    priority = 20
    error_type = CheckedError

    def log(self, error: BaseException) -> None:
        self._exception_logger.log_exception(error, "Checked exception occurred")


class UncheckedErrorHandler(TaxonomyHandler):
    priority = 30
    error_type = UncheckedError

    def log(self, error: BaseException) -> None:
        self._exception_logger.log_exception(
            error, "Unchecked exception occurred - potential programming error"
        )


def default_handlers(
    renderer: ErrorRenderer | None = None,
    exception_logger: ExceptionLogger | None = None,
) -> list[TaxonomyHandler]:
    renderer = renderer or ErrorRenderer()
    exception_logger = exception_logger or ExceptionLogger(renderer.settings)
    return [
        SystemErrorHandler(renderer, exception_logger),
        HttpErrorHandler(renderer, exception_logger),
        CheckedErrorHandler(renderer, exception_logger),
        UncheckedErrorHandler(renderer, exception_logger),
    ]
