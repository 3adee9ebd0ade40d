"""Key/value context attached to taxonomy errors.

A context holds two namespaces:
- data: arbitrary values keyed by string
- metadata: string values keyed by string (also surfaced as log fields)

Both maps are guarded by a lock so callers can add and read concurrently.
Every accessor returns a snapshot, never the live map.
"""
from __future__ import annotations

import threading
from typing import Any, Mapping, TypeVar

T = TypeVar("T")


def _require_key(key: str) -> None:
    if key is None or not isinstance(key, str) or not key:
        raise ValueError("Context key must be a non-empty string")


class ExceptionContext:
    """Thread-safe data/metadata bag owned by a single error."""

    def __init__(
        self,
        data: Mapping[str, Any] | None = None,
        metadata: Mapping[str, str] | None = None,
    ) -> None:
        self._data: dict[str, Any] = {}
        self._metadata: dict[str, str] = {}
        self._lock = threading.Lock()
        for key, value in (data or {}).items():
            self.add_data(key, value)
        for key, value in (metadata or {}).items():
            self.add_metadata(key, value)

    @classmethod
    def builder(cls) -> ContextBuilder:
        return ContextBuilder()

    def add_data(self, key: str, value: Any) -> ExceptionContext:
        """Store an arbitrary value under ``key``. Returns self for chaining."""
        _require_key(key)
        with self._lock:
            self._data[key] = value
        return self

    def add_metadata(self, key: str, value: str) -> ExceptionContext:
        """Store a string value under ``key``. Non-string values are coerced."""
        _require_key(key)
        with self._lock:
            self._metadata[key] = value if value is None or isinstance(value, str) else str(value)
        return self

    def get(self, key: str) -> Any | None:
        with self._lock:
            return self._data.get(key)

    def get_typed(self, key: str, expected_type: type[T]) -> T | None:
        """Return the value only if it is an instance of ``expected_type``."""
        with self._lock:
            value = self._data.get(key)
        if value is not None and isinstance(value, expected_type):
            return value
        return None

    def get_metadata(self, key: str) -> str | None:
        with self._lock:
            return self._metadata.get(key)

    def has_data(self, key: str) -> bool:
        with self._lock:
            return key in self._data

    def has_metadata(self, key: str) -> bool:
        with self._lock:
            return key in self._metadata

    def all_data(self) -> dict[str, Any]:
        with self._lock:
            return dict(self._data)

    def all_metadata(self) -> dict[str, str]:
        with self._lock:
            return dict(self._metadata)

    def is_empty(self) -> bool:
        with self._lock:
            return not self._data and not self._metadata

    def merge(self, other: ExceptionContext | None) -> ExceptionContext:
        """Copy every entry of ``other`` into this context; ``other`` wins on collision."""
        if other is None or other is self:
            return self
        data = other.all_data()
        metadata = other.all_metadata()
        with self._lock:
            self._data.update(data)
            self._metadata.update(metadata)
        return self

    def copy(self) -> ExceptionContext:
        return ExceptionContext(data=self.all_data(), metadata=self.all_metadata())

    def clear(self) -> None:
        with self._lock:
            self._data.clear()
            self._metadata.clear()

    def to_dict(self) -> dict[str, Any]:
        """Serialize both namespaces to a plain dict."""
        return {"data": self.all_data(), "metadata": self.all_metadata()}

    def __len__(self) -> int:
        with self._lock:
            return len(self._data) + len(self._metadata)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ExceptionContext):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ExceptionContext(data={self.all_data()!r}, metadata={self.all_metadata()!r})"


class ContextBuilder:
    """Fluent builder producing a fresh ExceptionContext."""

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}
        self._metadata: dict[str, str] = {}

    def add_data(self, key: str, value: Any) -> ContextBuilder:
        _require_key(key)
        self._data[key] = value
        return self

    def add_metadata(self, key: str, value: str) -> ContextBuilder:
        _require_key(key)
        self._metadata[key] = value
        return self

    def build(self) -> ExceptionContext:
        return ExceptionContext(data=self._data, metadata=self._metadata)
