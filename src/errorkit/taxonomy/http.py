"""HTTP errors and the static status catalog they are validated against."""
from __future__ import annotations

import re
from enum import Enum
from typing import Any, ClassVar

from errorkit.context import ExceptionContext
from errorkit.taxonomy.base import BaseError, ErrorCategory, Severity


class StatusClass(str, Enum):
    INFORMATIONAL = "Informational"
    SUCCESS = "Success"
    REDIRECTION = "Redirection"
    CLIENT_ERROR = "Client Error"
    SERVER_ERROR = "Server Error"


class HttpStatus(Enum):
    """Immutable catalog of known HTTP status codes."""

    CONTINUE = (100, "Continue")
    SWITCHING_PROTOCOLS = (101, "Switching Protocols")
    PROCESSING = (102, "Processing")

    OK = (200, "OK")
    CREATED = (201, "Created")
    ACCEPTED = (202, "Accepted")
    NON_AUTHORITATIVE_INFORMATION = (203, "Non-Authoritative Information")
    NO_CONTENT = (204, "No Content")
    RESET_CONTENT = (205, "Reset Content")
    PARTIAL_CONTENT = (206, "Partial Content")

    MULTIPLE_CHOICES = (300, "Multiple Choices")
    MOVED_PERMANENTLY = (301, "Moved Permanently")
    FOUND = (302, "Found")
    SEE_OTHER = (303, "See Other")
    NOT_MODIFIED = (304, "Not Modified")
    USE_PROXY = (305, "Use Proxy")
    TEMPORARY_REDIRECT = (307, "Temporary Redirect")
    PERMANENT_REDIRECT = (308, "Permanent Redirect")

    BAD_REQUEST = (400, "Bad Request")
    UNAUTHORIZED = (401, "Unauthorized")
    PAYMENT_REQUIRED = (402, "Payment Required")
    FORBIDDEN = (403, "Forbidden")
    NOT_FOUND = (404, "Not Found")
    METHOD_NOT_ALLOWED = (405, "Method Not Allowed")
    NOT_ACCEPTABLE = (406, "Not Acceptable")
    PROXY_AUTHENTICATION_REQUIRED = (407, "Proxy Authentication Required")
    REQUEST_TIMEOUT = (408, "Request Timeout")
    CONFLICT = (409, "Conflict")
    GONE = (410, "Gone")
    LENGTH_REQUIRED = (411, "Length Required")
    PRECONDITION_FAILED = (412, "Precondition Failed")
    PAYLOAD_TOO_LARGE = (413, "Payload Too Large")
    URI_TOO_LONG = (414, "URI Too Long")
    UNSUPPORTED_MEDIA_TYPE = (415, "Unsupported Media Type")
    RANGE_NOT_SATISFIABLE = (416, "Range Not Satisfiable")
    EXPECTATION_FAILED = (417, "Expectation Failed")
    IM_A_TEAPOT = (418, "I'm a teapot")
    UNPROCESSABLE_ENTITY = (422, "Unprocessable Entity")
    LOCKED = (423, "Locked")
    FAILED_DEPENDENCY = (424, "Failed Dependency")
    TOO_EARLY = (425, "Too Early")
    UPGRADE_REQUIRED = (426, "Upgrade Required")
    PRECONDITION_REQUIRED = (428, "Precondition Required")
    TOO_MANY_REQUESTS = (429, "Too Many Requests")
    REQUEST_HEADER_FIELDS_TOO_LARGE = (431, "Request Header Fields Too Large")
    UNAVAILABLE_FOR_LEGAL_REASONS = (451, "Unavailable For Legal Reasons")

    INTERNAL_SERVER_ERROR = (500, "Internal Server Error")
    NOT_IMPLEMENTED = (501, "Not Implemented")
    BAD_GATEWAY = (502, "Bad Gateway")
    SERVICE_UNAVAILABLE = (503, "Service Unavailable")
    GATEWAY_TIMEOUT = (504, "Gateway Timeout")
    HTTP_VERSION_NOT_SUPPORTED = (505, "HTTP Version Not Supported")
    VARIANT_ALSO_NEGOTIATES = (506, "Variant Also Negotiates")
    INSUFFICIENT_STORAGE = (507, "Insufficient Storage")
    LOOP_DETECTED = (508, "Loop Detected")
    NOT_EXTENDED = (510, "Not Extended")
    NETWORK_AUTHENTICATION_REQUIRED = (511, "Network Authentication Required")

    def __init__(self, code: int, reason_phrase: str) -> None:
        self.code = code
        self.reason_phrase = reason_phrase

    @property
    def status_class(self) -> StatusClass:
        if self.code < 200:
            return StatusClass.INFORMATIONAL
        if self.code < 300:
            return StatusClass.SUCCESS
        if self.code < 400:
            return StatusClass.REDIRECTION
        if self.code < 500:
            return StatusClass.CLIENT_ERROR
        return StatusClass.SERVER_ERROR

    def is_informational(self) -> bool:
        return 100 <= self.code < 200

    def is_success(self) -> bool:
        return 200 <= self.code < 300

    def is_redirection(self) -> bool:
        return 300 <= self.code < 400

    def is_client_error(self) -> bool:
        return 400 <= self.code < 500

    def is_server_error(self) -> bool:
        return 500 <= self.code < 600

    def is_error(self) -> bool:
        return self.is_client_error() or self.is_server_error()

    @classmethod
    def lookup(cls, code: int) -> HttpStatus | None:
        """Return the catalog entry for ``code`` or None if unknown."""
        return _BY_CODE.get(code)

    @classmethod
    def from_code(cls, code: int) -> HttpStatus:
        status = _BY_CODE.get(code)
        if status is None:
            raise ValueError(f"Unknown HTTP status code: {code}")
        return status

    def __str__(self) -> str:
        return f"{self.code} {self.reason_phrase}"


_BY_CODE: dict[int, HttpStatus] = {status.code: status for status in HttpStatus}

_NON_ALNUM = re.compile(r"[^A-Z0-9]+")


def _status_error_code(status: HttpStatus) -> str:
    reason = _NON_ALNUM.sub("_", status.reason_phrase.upper()).strip("_")
    return f"HTTP_{status.code}_{reason}"


class HttpError(BaseError):
    """Error bound to a validated HTTP status."""

    CATEGORY: ClassVar[ErrorCategory] = ErrorCategory.HTTP

    def __init__(
        self,
        status: HttpStatus | int,
        message: str | None = None,
        *,
        code: str | None = None,
        cause: BaseException | None = None,
        context: ExceptionContext | None = None,
    ) -> None:
        resolved = status if isinstance(status, HttpStatus) else HttpStatus.from_code(status)
        self._validate_status(resolved)
        self._status = resolved
        self.raw_message = message
        if context is None:
            context = (
                ExceptionContext.builder()
                .add_data("statusCode", resolved.code)
                .add_data("reasonPhrase", resolved.reason_phrase)
                .add_data("statusClass", resolved.status_class.value)
                .add_metadata("httpCategory", ErrorCategory.HTTP.value)
                .add_metadata("severity", _severity_for(resolved).value)
                .build()
            )
        prefix = f"[{resolved.code} {resolved.reason_phrase}]"
        super().__init__(
            f"{prefix} {message}" if message else prefix,
            code=code or _status_error_code(resolved),
            cause=cause,
            context=context,
        )

    @classmethod
    def _validate_status(cls, status: HttpStatus) -> None:
        """Hook for subclasses restricted to a status class."""

    @property
    def status(self) -> HttpStatus:
        return self._status

    @property
    def status_code(self) -> int:
        return self._status.code

    @property
    def severity(self) -> Severity:
        return _severity_for(self._status)

    def is_client_error(self) -> bool:
        return self._status.is_client_error()

    def is_server_error(self) -> bool:
        return self._status.is_server_error()

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["status_code"] = self.status_code
        return data


def _severity_for(status: HttpStatus) -> Severity:
    if status.is_client_error():
        return Severity.MEDIUM
    if status.is_server_error():
        return Severity.HIGH
    return Severity.LOW


class ClientError(HttpError):
    """4xx error. Any other status class is rejected at construction."""

    @classmethod
    def _validate_status(cls, status: HttpStatus) -> None:
        if not status.is_client_error():
            raise ValueError(f"Status code {status.code} is not a client error (4xx)")

    @classmethod
    def bad_request(
        cls, message: str, field: str | None = None, value: Any = None
    ) -> ClientError:
        if field is None:
            return cls(HttpStatus.BAD_REQUEST, message)
        context = (
            ExceptionContext.builder()
            .add_data("invalidField", field)
            .add_data("invalidValue", value)
            .add_metadata("errorType", "validation")
            .build()
        )
        return cls(HttpStatus.BAD_REQUEST, message, context=context)

    @classmethod
    def unauthorized(cls, message: str, auth_scheme: str | None = None) -> ClientError:
        if auth_scheme is None:
            return cls(HttpStatus.UNAUTHORIZED, message)
        context = (
            ExceptionContext.builder()
            .add_data("authScheme", auth_scheme)
            .add_metadata("errorType", "authentication")
            .build()
        )
        return cls(HttpStatus.UNAUTHORIZED, message, context=context)

    @classmethod
    def forbidden(
        cls, message: str, resource: str | None = None, required_permission: str | None = None
    ) -> ClientError:
        if resource is None and required_permission is None:
            return cls(HttpStatus.FORBIDDEN, message)
        context = (
            ExceptionContext.builder()
            .add_data("resource", resource)
            .add_data("requiredPermission", required_permission)
            .add_metadata("errorType", "authorization")
            .build()
        )
        return cls(HttpStatus.FORBIDDEN, message, context=context)

    @classmethod
    def not_found(cls, resource_type: str, resource_id: str | None = None) -> ClientError:
        """``not_found("msg")`` or ``not_found("User", "42")``."""
        if resource_id is None:
            return cls(HttpStatus.NOT_FOUND, resource_type)
        context = (
            ExceptionContext.builder()
            .add_data("resourceType", resource_type)
            .add_data("resourceId", resource_id)
            .add_metadata("errorType", "resource_not_found")
            .build()
        )
        return cls(
            HttpStatus.NOT_FOUND,
            f"{resource_type} with ID '{resource_id}' not found",
            context=context,
        )

    @classmethod
    def conflict(cls, message: str) -> ClientError:
        return cls(HttpStatus.CONFLICT, message)

    @classmethod
    def too_many_requests(cls, message: str, retry_after_seconds: int) -> ClientError:
        context = (
            ExceptionContext.builder()
            .add_data("retryAfterSeconds", retry_after_seconds)
            .add_metadata("errorType", "rate_limit")
            .build()
        )
        return cls(HttpStatus.TOO_MANY_REQUESTS, message, context=context)


class ServerError(HttpError):
    """5xx error. Any other status class is rejected at construction."""

    @classmethod
    def _validate_status(cls, status: HttpStatus) -> None:
        if not status.is_server_error():
            raise ValueError(f"Status code {status.code} is not a server error (5xx)")

    @classmethod
    def internal_server_error(
        cls,
        message: str,
        cause: BaseException | None = None,
        *,
        component: str | None = None,
    ) -> ServerError:
        """Generic 500. With ``component``, ``message`` names the failed operation."""
        if component is None:
            return cls(HttpStatus.INTERNAL_SERVER_ERROR, message, cause=cause)
        context = (
            ExceptionContext.builder()
            .add_data("component", component)
            .add_data("operation", message)
            .add_metadata("errorType", "internal_error")
            .build()
        )
        return cls(
            HttpStatus.INTERNAL_SERVER_ERROR,
            f"Internal error in {component} during {message} operation",
            cause=cause,
            context=context,
        )

    @classmethod
    def not_implemented(cls, feature: str) -> ServerError:
        context = (
            ExceptionContext.builder()
            .add_data("feature", feature)
            .add_metadata("errorType", "not_implemented")
            .build()
        )
        return cls(HttpStatus.NOT_IMPLEMENTED, f"Feature not implemented: {feature}", context=context)

    @classmethod
    def bad_gateway(cls, upstream_service: str, cause: BaseException | None = None) -> ServerError:
        context = (
            ExceptionContext.builder()
            .add_data("upstreamService", upstream_service)
            .add_metadata("errorType", "bad_gateway")
            .build()
        )
        return cls(
            HttpStatus.BAD_GATEWAY,
            f"Bad response from upstream service: {upstream_service}",
            cause=cause,
            context=context,
        )

    @classmethod
    def service_unavailable(cls, service: str, retry_after_seconds: int | None = None) -> ServerError:
        builder = ExceptionContext.builder().add_data("service", service)
        message = f"Service unavailable: {service}"
        if retry_after_seconds is not None:
            builder.add_data("retryAfterSeconds", retry_after_seconds)
            message += f" (retry after {retry_after_seconds} seconds)"
        builder.add_metadata("errorType", "service_unavailable")
        return cls(HttpStatus.SERVICE_UNAVAILABLE, message, context=builder.build())

    @classmethod
    def gateway_timeout(cls, upstream_service: str, timeout_seconds: int) -> ServerError:
        context = (
            ExceptionContext.builder()
            .add_data("upstreamService", upstream_service)
            .add_data("timeoutSeconds", timeout_seconds)
            .add_metadata("errorType", "gateway_timeout")
            .build()
        )
        return cls(
            HttpStatus.GATEWAY_TIMEOUT,
            f"Gateway timeout waiting for {upstream_service} after {timeout_seconds} seconds",
            context=context,
        )
