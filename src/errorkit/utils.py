"""Helpers for inspecting arbitrary exceptions.

Structured accessors are read only from DescribableError instances; any
other exception contributes just its class name, message, cause and
traceback.
"""
from __future__ import annotations

import traceback
from datetime import datetime
from enum import Enum
from typing import Any, TypeVar

from errorkit.context import ExceptionContext
from errorkit.taxonomy.base import BaseError, DescribableError
from errorkit.taxonomy.http import HttpError

E = TypeVar("E", bound=BaseException)

DEFAULT_MAX_CHAIN_DEPTH = 100


def enum_text(value: Any) -> str | None:
    """Render enum members by value and everything else with ``str``."""
    if value is None:
        return None
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def error_message(error: BaseException) -> str | None:
    """Return the error message, or None when the error carries none."""
    if isinstance(error, BaseError):
        return error.message
    text = str(error)
    return text or None


def describe(error: BaseException) -> dict[str, Any]:
    """Collect the optional accessors the error exposes.

    Keys are present only when the value is known:
    error_id, error_code, category, severity, timestamp, context, http_status_code.
    """
    fields: dict[str, Any] = {}
    if not isinstance(error, DescribableError):
        return fields
    candidates: dict[str, Any] = {
        "error_id": error.error_id,
        "error_code": error.error_code,
        "category": enum_text(error.category),
        "severity": enum_text(error.severity),
        "timestamp": error.timestamp if isinstance(error.timestamp, datetime) else None,
        "context": error.context if isinstance(error.context, ExceptionContext) else None,
    }
    if isinstance(error, HttpError):
        candidates["http_status_code"] = error.status_code
    for key, value in candidates.items():
        if value is not None:
            fields[key] = value
    return fields


def next_cause(error: BaseException) -> BaseException | None:
    """Follow ``__cause__``, then ``__context__`` unless suppressed."""
    if error.__cause__ is not None:
        return error.__cause__
    if error.__suppress_context__:
        return None
    return error.__context__


def cause_chain(error: BaseException, max_depth: int | None = None) -> list[BaseException]:
    """Return ``[error, cause, cause-of-cause, ...]``.

    Each error appears at most once even if the chain loops, and the walk stops
    after ``max_depth`` entries.
    """
    limit = DEFAULT_MAX_CHAIN_DEPTH if max_depth is None else max_depth
    chain: list[BaseException] = []
    seen: set[int] = set()
    current: BaseException | None = error
    while current is not None and id(current) not in seen and len(chain) < limit:
        seen.add(id(current))
        chain.append(current)
        current = next_cause(current)
    return chain


def root_cause(error: BaseException) -> BaseException:
    return cause_chain(error)[-1]


def find_cause(error: BaseException, cause_type: type[E]) -> E | None:
    """First error in the chain (including ``error``) that is a ``cause_type``."""
    for candidate in cause_chain(error):
        if isinstance(candidate, cause_type):
            return candidate
    return None


def is_caused_by(error: BaseException, cause_type: type[BaseException]) -> bool:
    return find_cause(error, cause_type) is not None


def stack_frames(error: BaseException, limit: int | None = None) -> list[str]:
    """Format the error's traceback as one string per frame, innermost last.

    ``limit`` caps the number of frames; None means no cap.
    """
    if limit is not None and limit < 0:
        raise ValueError("limit must be >= 0")
    frames = [
        f'File "{frame.filename}", line {frame.lineno}, in {frame.name}'
        for frame in traceback.extract_tb(error.__traceback__)
    ]
    if limit is not None:
        frames = frames[:limit]
    return frames


def stack_trace_text(error: BaseException) -> str:
    return "".join(traceback.format_exception(type(error), error, error.__traceback__))


_SIMPLIFIED_MESSAGES: tuple[tuple[type[BaseException], str], ...] = (
    (MemoryError, "The system is out of memory"),
    (RecursionError, "The system ran out of stack space"),
    (TimeoutError, "The operation timed out"),
    (KeyError, "A requested item was not found"),
    (AttributeError, "A required value was not provided"),
    (TypeError, "A value of the wrong type was provided"),
    (ValueError, "An invalid parameter was provided"),
    (OSError, "A file or network operation failed"),
)


def simplified_message(error: BaseException) -> str:
    """User-facing text for common builtin failures; falls back to the message."""
    for error_type, text in _SIMPLIFIED_MESSAGES:
        if isinstance(error, error_type):
            return text
    return error_message(error) or "An error occurred"
