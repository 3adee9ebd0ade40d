"""Wire-facing error payloads: the details record and the response envelope.

Both serialize with camelCase keys and omit fields that are None. Context
values that have no JSON form serialize as their ``repr``.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any

import pydantic_core
from pydantic import BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

SERIALIZATION_FAILED = "Failed to serialize error details"


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class ErrorDetails(BaseModel):
    """Structured description of one error, with its cause nested below it."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    error_id: str | None = None
    error_code: str | None = None
    message: str | None = None
    category: str | None = None
    severity: str | None = None
    timestamp: str = Field(default_factory=_now_iso)
    context: dict[str, Any] | None = None
    stack_trace: list[str] | None = None
    cause_details: ErrorDetails | None = None

    @field_serializer("context", when_used="json-unless-none")
    def _serialize_context(self, context: dict[str, Any]) -> Any:
        return pydantic_core.to_jsonable_python(context, fallback=repr)

    def _minimal_map(self) -> dict[str, Any]:
        minimal = {
            "errorId": self.error_id,
            "errorCode": self.error_code,
            "message": self.message,
            "timestamp": self.timestamp,
            "error": SERIALIZATION_FAILED,
        }
        return {key: value for key, value in minimal.items() if value is not None}

    def to_map(self) -> dict[str, Any]:
        try:
            return self.model_dump(mode="json", by_alias=True, exclude_none=True)
        except Exception:
            return self._minimal_map()

    def to_json(self) -> str:
        try:
            return self.model_dump_json(by_alias=True, exclude_none=True)
        except Exception:
            return json.dumps(self._minimal_map())


class ErrorResponse(BaseModel):
    """Outward-facing envelope returned by dispatch."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    success: bool = False
    timestamp: str = Field(default_factory=_now_iso)
    message: str | None = None
    details: ErrorDetails | None = None
    http_status_code: int | None = Field(default=None, ge=100, le=599)

    @classmethod
    def success_response(cls, message: str | None = None) -> ErrorResponse:
        return cls(success=True, message=message)

    @classmethod
    def from_details(
        cls,
        details: ErrorDetails,
        http_status_code: int | None = None,
        message: str | None = None,
    ) -> ErrorResponse:
        """Wrap details in a failure envelope; the message defaults to the details message."""
        return cls(
            success=False,
            message=message if message is not None else details.message,
            details=details,
            http_status_code=http_status_code,
        )

    @property
    def has_details(self) -> bool:
        return self.details is not None

    @property
    def has_http_status_code(self) -> bool:
        return self.http_status_code is not None

    def _minimal_map(self) -> dict[str, Any]:
        minimal: dict[str, Any] = {
            "success": self.success,
            "timestamp": self.timestamp,
            "message": self.message,
            "details": None if self.details is None else self.details._minimal_map(),
            "httpStatusCode": self.http_status_code,
        }
        return {key: value for key, value in minimal.items() if value is not None}

    def to_map(self) -> dict[str, Any]:
        try:
            return self.model_dump(mode="json", by_alias=True, exclude_none=True)
        except Exception:
            return self._minimal_map()

    def to_json(self) -> str:
        try:
            return self.model_dump_json(by_alias=True, exclude_none=True)
        except Exception:
            return json.dumps(self._minimal_map())
