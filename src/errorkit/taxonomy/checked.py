"""Checked errors: recoverable failures the caller is expected to handle."""
from __future__ import annotations

from typing import ClassVar

from errorkit.context import ExceptionContext
from errorkit.taxonomy.base import BaseError, ErrorCategory, Severity


class CheckedError(BaseError):
    """Anticipated, recoverable failure (I/O, database, remote resource)."""

    CATEGORY: ClassVar[ErrorCategory] = ErrorCategory.CHECKED
    DEFAULT_SEVERITY: ClassVar[Severity] = Severity.MEDIUM


class DatabaseError(CheckedError):
    """Database access failure."""

    DEFAULT_CODE: ClassVar[str | None] = "DATABASE_ERROR"

    @classmethod
    def connection_failure(cls, database: str, cause: BaseException | None = None) -> DatabaseError:
        """Connection failures are always HIGH severity."""
        context = (
            ExceptionContext.builder()
            .add_data("database", database)
            .add_metadata("errorType", "connection")
            .build()
        )
        return cls(
            f"Failed to connect to database: {database}",
            code="DATABASE_CONNECTION_ERROR",
            cause=cause,
            context=context,
            severity=Severity.HIGH,
        )

    @classmethod
    def query_failure(cls, query: str, cause: BaseException | None = None) -> DatabaseError:
        context = (
            ExceptionContext.builder()
            .add_data("query", query)
            .add_metadata("errorType", "query")
            .build()
        )
        return cls("Database query failed", code="DATABASE_QUERY_ERROR", cause=cause, context=context)

    @classmethod
    def constraint_violation(cls, constraint: str, table: str | None = None) -> DatabaseError:
        builder = ExceptionContext.builder().add_data("constraint", constraint)
        if table is not None:
            builder.add_data("table", table)
        builder.add_metadata("errorType", "constraint")
        target = f" on {table}" if table else ""
        return cls(
            f"Constraint violated{target}: {constraint}",
            code="DATABASE_CONSTRAINT_ERROR",
            context=builder.build(),
        )


class IOOperationError(CheckedError):
    """File or stream operation failure."""

    DEFAULT_CODE: ClassVar[str | None] = "IO_OPERATION_ERROR"

    @classmethod
    def file_not_found(cls, path: str, cause: BaseException | None = None) -> IOOperationError:
        context = ExceptionContext({"path": path}, {"errorType": "not_found", "operation": "open"})
        return cls(f"File not found: {path}", code="FILE_NOT_FOUND", cause=cause, context=context)

    @classmethod
    def read_failure(cls, path: str, cause: BaseException | None = None) -> IOOperationError:
        context = ExceptionContext({"path": path}, {"errorType": "io", "operation": "read"})
        return cls(f"Failed to read from {path}", cause=cause, context=context)

    @classmethod
    def write_failure(cls, path: str, cause: BaseException | None = None) -> IOOperationError:
        context = ExceptionContext({"path": path}, {"errorType": "io", "operation": "write"})
        return cls(f"Failed to write to {path}", cause=cause, context=context)
