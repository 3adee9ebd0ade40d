"""Priority-ordered dispatch of errors to handlers.

The handler list is replaced wholesale on every write, so readers always see
a consistent tuple. The type->handler memo is a pure cache: it is cleared on
every registration change and a lookup racing with a write can only skip
storing its result, never store a handler from a stale list.
"""

from __future__ import annotations

import threading
import uuid
from typing import Iterable

from errorkit.config import Settings, get_settings
from errorkit.contracts.response import ErrorDetails, ErrorResponse
from errorkit.exception_logger import ExceptionLogger
from errorkit.handlers.base import ExceptionHandler
from errorkit.handlers.builtin import default_handlers
from errorkit.renderer import ErrorRenderer
from errorkit.taxonomy.base import DescribableError, ErrorCategory, Severity

UNHANDLED_CODE = "UNHANDLED_EXCEPTION"
HANDLING_FAILURE_CODE = "EXCEPTION_HANDLING_ERROR"
GENERIC_DETAIL_MESSAGE = "An unexpected error occurred"
GENERIC_UNHANDLED_MESSAGE = "An unexpected error occurred. Please contact support."
HANDLING_FAILURE_DETAIL_MESSAGE = "Critical error occurred during exception handling"
HANDLING_FAILURE_MESSAGE = "A critical system error has occurred. Please contact support immediately."


class ErrorDispatcher:
    """Resolves the first matching handler for an error and returns its response."""

    def __init__(
        self,
        settings: Settings | None = None,
        renderer: ErrorRenderer | None = None,
        exception_logger: ExceptionLogger | None = None,
        handlers: Iterable[ExceptionHandler] | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._renderer = renderer or ErrorRenderer(self._settings)
        self._exception_logger = exception_logger or ExceptionLogger(self._settings)
        self._lock = threading.Lock()
        self._handlers: tuple[ExceptionHandler, ...] = ()
        self._memo: dict[type, ExceptionHandler] = {}
        self._generation = 0
        initial = (
            list(handlers)
            if handlers is not None
            else default_handlers(self._renderer, self._exception_logger)
        )
        for handler in initial:
            self.register(handler)

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def handlers(self) -> list[ExceptionHandler]:
        """Snapshot of registered handlers in dispatch order."""
        return list(self._handlers)

    def register(self, handler: ExceptionHandler) -> None:
        """Add a handler; equal priorities keep registration order."""
        with self._lock:
            self._handlers = tuple(
                sorted((*self._handlers, handler), key=lambda h: h.priority)
            )
            self._invalidate()

    def unregister(self, handler: ExceptionHandler) -> bool:
        """Remove a handler. Returns False if it was not registered."""
        with self._lock:
            if handler not in self._handlers:
                return False
            remaining = list(self._handlers)
            remaining.remove(handler)
            self._handlers = tuple(remaining)
            self._invalidate()
            return True

    def clear_cache(self) -> None:
        with self._lock:
            self._invalidate()

    def _invalidate(self) -> None:
        self._memo = {}
        self._generation += 1

    def cached_handler(self, error_type: type) -> ExceptionHandler | None:
        return self._memo.get(error_type)

    def resolve(self, error: BaseException) -> ExceptionHandler | None:
        """First handler in priority order whose predicate accepts ``error``."""
        error_type = type(error)
        caching = self._settings.enable_caching
        with self._lock:
            handlers = self._handlers
            generation = self._generation
            cached = self._memo.get(error_type) if caching else None
        if cached is not None:
            return cached

        for handler in handlers:
            if handler.can_handle(error):
                if caching:
                    with self._lock:
                        if self._generation == generation:
                            self._memo[error_type] = handler
                return handler
        return None

    def dispatch(self, error: BaseException) -> ErrorResponse:
        """Handle ``error``. Never raises for ``Exception`` failures inside handling."""
        try:
            handler = self.resolve(error)
            if handler is None:
                return self._unhandled(error)
            return handler.handle(error)
        except Exception as handling_error:
            return self._handling_failure(error, handling_error)

    def _unhandled(self, error: BaseException) -> ErrorResponse:
        self._exception_logger.log_error(
            error, f"Unhandled exception occurred: {type(error).__name__}"
        )
        disclose = self._settings.include_exception_details
        message = self._renderer.render_message(error) if disclose else GENERIC_DETAIL_MESSAGE
        details = ErrorDetails(
            error_id=str(uuid.uuid4()),
            error_code=UNHANDLED_CODE,
            message=message,
            category=ErrorCategory.UNKNOWN.value,
            severity=Severity.HIGH.value,
            stack_trace=(
                self._renderer.frames(error) if self._settings.include_stack_trace else None
            ),
        )
        envelope_message = (
            f"Unhandled exception: {message}" if disclose else GENERIC_UNHANDLED_MESSAGE
        )
        return self._renderer.to_envelope(details, message=envelope_message)

    def _handling_failure(
        self, error: BaseException, handling_error: Exception
    ) -> ErrorResponse:
        fields = {"original_exception_class": type(error).__name__}
        if isinstance(error, DescribableError):
            fields["original_error_id"] = error.error_id
        self._exception_logger.log_critical(
            handling_error, "Exception handling failed", fields
        )
        details = ErrorDetails(
            error_id=str(uuid.uuid4()),
            error_code=HANDLING_FAILURE_CODE,
            message=HANDLING_FAILURE_DETAIL_MESSAGE,
            category=ErrorCategory.SYSTEM.value,
            severity=Severity.CRITICAL.value,
        )
        return ErrorResponse.from_details(details, message=HANDLING_FAILURE_MESSAGE)
