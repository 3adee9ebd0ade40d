"""Handler contract for the dispatch chain."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable

from errorkit.contracts.response import ErrorResponse

DEFAULT_PRIORITY = 100


class ExceptionHandler(ABC):
    """Recognizes one shape of error and turns it into a response.

    Lower ``priority`` values are consulted first.
    """

    priority: int = DEFAULT_PRIORITY

    @abstractmethod
    def can_handle(self, error: BaseException) -> bool: ...

    @abstractmethod
    def handle(self, error: BaseException) -> ErrorResponse: ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(priority={self.priority})"


class PredicateHandler(ExceptionHandler):
    """Handler assembled from a predicate and a transform."""

    def __init__(
        self,
        predicate: Callable[[BaseException], bool],
        transform: Callable[[BaseException], ErrorResponse],
        priority: int = DEFAULT_PRIORITY,
        name: str | None = None,
    ) -> None:
        self._predicate = predicate
        self._transform = transform
        self.priority = priority
        self.name = name or getattr(transform, "__name__", "handler")

    def can_handle(self, error: BaseException) -> bool:
        return bool(self._predicate(error))

    def handle(self, error: BaseException) -> ErrorResponse:
        return self._transform(error)

    def __repr__(self) -> str:
        return f"PredicateHandler(name={self.name!r}, priority={self.priority})"
