"""Fatal, unrecoverable system conditions.

A CriticalSystemError always reports category ``ERROR`` and severity
``CRITICAL``; callers cannot override either.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from errorkit.context import ExceptionContext
from errorkit.taxonomy.base import BaseError, ErrorCategory, Severity


@dataclass(frozen=True)
class MemoryInfo:
    """Memory snapshot in bytes at the time of failure."""

    total_memory: int
    free_memory: int
    max_memory: int


def _message_from(cause: BaseException | None, default: str) -> str:
    if cause is not None and str(cause):
        return str(cause)
    return default


class CriticalSystemError(BaseError):
    """Wraps out-of-memory, recursion exhaustion, thread death and import failures."""

    CATEGORY: ClassVar[ErrorCategory] = ErrorCategory.SYSTEM_ERROR
    DEFAULT_SEVERITY: ClassVar[Severity] = Severity.CRITICAL
    DEFAULT_CODE: ClassVar[str | None] = "SYSTEM_ERROR"

    def __init__(
        self,
        message: str | None = None,
        *,
        cause: BaseException | None = None,
        context: ExceptionContext | None = None,
    ) -> None:
        super().__init__(
            message if message is not None else _message_from(cause, "System error occurred"),
            cause=cause,
            context=context,
        )

    @property
    def severity(self) -> Severity:
        return Severity.CRITICAL

    @property
    def error_type(self) -> str | None:
        """Class name of the wrapped condition, if any."""
        if self.__cause__ is None:
            return None
        return type(self.__cause__).__name__

    @classmethod
    def from_exception(
        cls, error: BaseException, context: ExceptionContext | None = None
    ) -> CriticalSystemError:
        return cls(cause=error, context=context)

    @classmethod
    def out_of_memory(
        cls, component: str, memory_requested: int, cause: BaseException | None = None
    ) -> CriticalSystemError:
        context = (
            ExceptionContext.builder()
            .add_data("component", component)
            .add_data("memoryRequested", memory_requested)
            .add_metadata("errorType", "memory")
            .build()
        )
        return cls(_message_from(cause, "Out of memory error"), cause=cause, context=context)

    @classmethod
    def with_memory_info(
        cls, memory_info: MemoryInfo | None, cause: BaseException | None = None
    ) -> CriticalSystemError:
        builder = ExceptionContext.builder().add_metadata("errorType", "memory")
        if memory_info is not None:
            builder.add_data("totalMemory", memory_info.total_memory)
            builder.add_data("freeMemory", memory_info.free_memory)
            builder.add_data("maxMemory", memory_info.max_memory)
        return cls(_message_from(cause, "Out of memory error"), cause=cause, context=builder.build())

    @classmethod
    def stack_overflow(
        cls, method_name: str | None, stack_depth: int, cause: BaseException | None = None
    ) -> CriticalSystemError:
        builder = ExceptionContext.builder()
        if method_name is not None:
            builder.add_data("methodName", method_name)
        builder.add_data("stackDepth", stack_depth).add_metadata("errorType", "stack")
        return cls(_message_from(cause, "Stack overflow error"), cause=cause, context=builder.build())

    @classmethod
    def thread_death(cls, thread_name: str, cause: BaseException | None = None) -> CriticalSystemError:
        context = (
            ExceptionContext.builder()
            .add_data("threadName", thread_name)
            .add_metadata("errorType", "thread")
            .build()
        )
        return cls(_message_from(cause, f"Thread {thread_name} terminated"), cause=cause, context=context)

    @classmethod
    def class_loading(cls, class_name: str, cause: BaseException | None = None) -> CriticalSystemError:
        context = (
            ExceptionContext.builder()
            .add_data("className", class_name)
            .add_metadata("errorType", "classloading")
            .build()
        )
        return cls(_message_from(cause, f"Failed to load {class_name}"), cause=cause, context=context)
