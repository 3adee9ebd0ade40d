"""Render errors as details records, envelopes and text formats.

Any exception can be rendered. Fields a foreign exception cannot supply are
omitted; rendering never raises.
"""

from __future__ import annotations

import contextlib
import json
from datetime import datetime, timezone
from typing import Any
from xml.sax.saxutils import escape

import pydantic_core

from errorkit.config import Settings, get_settings
from errorkit.contracts.response import ErrorDetails, ErrorResponse
from errorkit.logging_config import get_logger
from errorkit.sanitizer import Sanitizer, sanitize_message
from errorkit.utils import describe, error_message, next_cause, stack_frames

logger = get_logger(__name__)

RENDER_FAILED = "Failed to render exception"

_XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>'
_XML_ENTITIES = {'"': "&quot;", "'": "&apos;"}
_NAMED_CONTROLS = {"\n": "\\n", "\r": "\\r", "\t": "\\t"}


def escape_control(text: str) -> str:
    """Replace control characters with visible backslash escapes."""
    return "".join(
        _NAMED_CONTROLS.get(ch, f"\\x{ord(ch):02x}") if ord(ch) < 0x20 or ord(ch) == 0x7F else ch
        for ch in text
    )


def escape_xml(text: str | None) -> str:
    if text is None:
        return ""
    return escape_control(escape(text, _XML_ENTITIES))


def _text(value: Any) -> str:
    return escape_control("None" if value is None else str(value))


class ErrorRenderer:
    """Converts errors to ``ErrorDetails``/``ErrorResponse`` and string formats."""

    def __init__(
        self,
        settings: Settings | None = None,
        sanitizer: Sanitizer | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._sanitizer = sanitizer or sanitize_message

    @property
    def settings(self) -> Settings:
        return self._settings

    def render_message(self, error: BaseException) -> str | None:
        """The error message, sanitized when the policy asks for it."""
        message = error_message(error)
        if self._settings.sanitize_messages:
            return self._sanitizer(message)
        return message

    def frames(self, error: BaseException) -> list[str]:
        return stack_frames(error, self._settings.max_stack_trace_elements)

    def to_details(self, error: BaseException, include_stack: bool | None = None) -> ErrorDetails:
        """Build the details record for ``error`` and its causes.

        Causes nest up to ``max_cause_depth`` levels; a cause already rendered
        higher in the chain ends the nesting.
        """
        if include_stack is None:
            include_stack = self._settings.include_stack_trace
        try:
            return self._build_details(error, include_stack)
        except Exception:
            logger.error("error_details_rendering_failed", exception_class=type(error).__name__)
            return ErrorDetails(
                message=RENDER_FAILED, context={"exceptionClass": type(error).__name__}
            )

    def _build_details(self, error: BaseException, include_stack: bool) -> ErrorDetails:
        chain: list[BaseException] = []
        seen: set[int] = set()
        current: BaseException | None = error
        while (
            current is not None
            and id(current) not in seen
            and len(chain) <= self._settings.max_cause_depth
        ):
            seen.add(id(current))
            chain.append(current)
            current = next_cause(current)

        details = self._single_details(chain[-1], include_stack, None)
        for link in reversed(chain[:-1]):
            details = self._single_details(link, include_stack, details)
        return details

    def _single_details(
        self,
        error: BaseException,
        include_stack: bool,
        cause_details: ErrorDetails | None,
    ) -> ErrorDetails:
        described = describe(error)
        context = described.get("context")
        timestamp = described.get("timestamp") or datetime.now(timezone.utc)
        return ErrorDetails(
            error_id=described.get("error_id"),
            error_code=described.get("error_code"),
            message=self.render_message(error),
            category=described.get("category"),
            severity=described.get("severity"),
            timestamp=timestamp.isoformat(),
            context=None if context is None or context.is_empty() else context.to_dict(),
            stack_trace=self.frames(error) if include_stack else None,
            cause_details=cause_details,
        )

    def to_envelope(
        self,
        details: ErrorDetails,
        http_status_code: int | None = None,
        message: str | None = None,
    ) -> ErrorResponse:
        return ErrorResponse.from_details(details, http_status_code=http_status_code, message=message)

    def _timestamp(self, error: BaseException) -> str:
        stamp = describe(error).get("timestamp") or datetime.now(timezone.utc)
        return stamp.strftime(self._settings.datetime_format)

    def to_map(self, error: BaseException, include_stack: bool | None = None) -> dict[str, Any]:
        """Flat map: class, message, timestamp, known accessors, cause, stack."""
        if include_stack is None:
            include_stack = self._settings.include_stack_trace
        described = describe(error)
        result: dict[str, Any] = {
            "class": type(error).__name__,
            "message": self.render_message(error),
            "timestamp": self._timestamp(error),
        }
        for source, target in (
            ("error_id", "errorId"),
            ("error_code", "errorCode"),
            ("category", "category"),
            ("severity", "severity"),
            ("http_status_code", "httpStatusCode"),
        ):
            if source in described:
                result[target] = described[source]
        context = described.get("context")
        if context is not None:
            data = context.all_data()
            if data:
                result["contextData"] = data
            metadata = context.all_metadata()
            if metadata:
                result["metadata"] = metadata
        cause = next_cause(error)
        if cause is not None:
            result["cause"] = {"class": type(cause).__name__, "message": self.render_message(cause)}
        if include_stack:
            result["stackTrace"] = self.frames(error)
        return result

    def to_json(self, error: BaseException, include_stack: bool | None = None) -> str:
        """JSON object of ``to_map``; degrades to a minimal object on failure."""
        try:
            return pydantic_core.to_json(
                self.to_map(error, include_stack), indent=2, fallback=repr
            ).decode()
        except Exception:
            logger.error("error_json_serialization_failed", exception_class=type(error).__name__)
            return self._fallback_json(error)

    def _fallback_json(self, error: BaseException) -> str:
        message = ""
        with contextlib.suppress(Exception):
            message = error_message(error) or ""
        return json.dumps(
            {
                "class": type(error).__name__,
                "message": message,
                "timestamp": datetime.now(timezone.utc).strftime(self._settings.datetime_format),
                "error": "Failed to serialize exception",
            }
        )

    def to_xml(self, error: BaseException, include_stack: bool | None = None) -> str:
        try:
            return self._render_xml(error, include_stack)
        except Exception:
            logger.error("error_xml_rendering_failed", exception_class=type(error).__name__)
            return "\n".join(
                [
                    _XML_HEADER,
                    "<exception>",
                    f"  <class>{escape_xml(type(error).__name__)}</class>",
                    f"  <error>{RENDER_FAILED}</error>",
                    "</exception>",
                ]
            )

    def _render_xml(self, error: BaseException, include_stack: bool | None) -> str:
        if include_stack is None:
            include_stack = self._settings.include_stack_trace
        described = describe(error)
        lines = [
            _XML_HEADER,
            "<exception>",
            f"  <class>{escape_xml(type(error).__name__)}</class>",
            f"  <message>{escape_xml(self.render_message(error))}</message>",
            f"  <timestamp>{escape_xml(self._timestamp(error))}</timestamp>",
        ]
        for key, tag in (
            ("error_id", "errorId"),
            ("error_code", "errorCode"),
            ("category", "category"),
            ("severity", "severity"),
        ):
            if key in described:
                lines.append(f"  <{tag}>{escape_xml(str(described[key]))}</{tag}>")
        cause = next_cause(error)
        if cause is not None:
            lines.extend(
                [
                    "  <cause>",
                    f"    <class>{escape_xml(type(cause).__name__)}</class>",
                    f"    <message>{escape_xml(self.render_message(cause))}</message>",
                    "  </cause>",
                ]
            )
        if include_stack:
            lines.append("  <stackTrace>")
            lines.extend(f"    <frame>{escape_xml(frame)}</frame>" for frame in self.frames(error))
            lines.append("  </stackTrace>")
        lines.append("</exception>")
        return "\n".join(lines)

    def to_plain_text(self, error: BaseException, include_stack: bool | None = None) -> str:
        try:
            return self._render_plain_text(error, include_stack)
        except Exception:
            logger.error("error_text_rendering_failed", exception_class=type(error).__name__)
            return f"Exception: {type(error).__name__}\nError: {RENDER_FAILED}\n"

    def _render_plain_text(self, error: BaseException, include_stack: bool | None) -> str:
        if include_stack is None:
            include_stack = self._settings.include_stack_trace
        described = describe(error)
        message = _text(self.render_message(error))
        lines = [
            f"Exception: {type(error).__name__}",
            f"Message: {message}",
            f"Timestamp: {self._timestamp(error)}",
        ]
        for key, label in (
            ("error_id", "Error ID"),
            ("error_code", "Error Code"),
            ("category", "Category"),
            ("severity", "Severity"),
        ):
            if key in described:
                lines.append(f"{label}: {_text(described[key])}")
        cause = next_cause(error)
        if cause is not None:
            lines.append(f"Caused by: {type(cause).__name__}: {_text(self.render_message(cause))}")
        if include_stack:
            lines.extend(["", "Stack Trace:", "Traceback (most recent call last):"])
            lines.extend(f"  {frame}" for frame in self.frames(error))
            lines.append(f"{type(error).__name__}: {message}")
        return "\n".join(lines) + "\n"

    def to_log_line(self, error: BaseException) -> str:
        """Single-line summary: ``[Kind] message [errorId: ..] [errorCode: ..] caused by ..``."""
        try:
            return self._render_log_line(error)
        except Exception:
            logger.error("error_log_line_rendering_failed", exception_class=type(error).__name__)
            return f"[{type(error).__name__}] {RENDER_FAILED}"

    def _render_log_line(self, error: BaseException) -> str:
        described = describe(error)
        parts = [f"[{type(error).__name__}] {_text(self.render_message(error))}"]
        if "error_id" in described:
            parts.append(f"[errorId: {_text(described['error_id'])}]")
        if "error_code" in described:
            parts.append(f"[errorCode: {_text(described['error_code'])}]")
        cause = next_cause(error)
        if cause is not None:
            parts.append(f"caused by {type(cause).__name__}: {_text(self.render_message(cause))}")
        return " ".join(parts)
