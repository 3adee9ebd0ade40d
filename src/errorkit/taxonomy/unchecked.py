"""Unchecked errors: programming mistakes and rule violations."""
from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Any, ClassVar, Iterable, Sequence

from errorkit.context import ExceptionContext
from errorkit.taxonomy.base import BaseError, ErrorCategory, Severity


class UncheckedError(BaseError):
    """Failure the caller is not expected to recover from locally."""

    CATEGORY: ClassVar[ErrorCategory] = ErrorCategory.UNCHECKED
    DEFAULT_SEVERITY: ClassVar[Severity] = Severity.HIGH


class BusinessLogicError(UncheckedError):
    """Violation of a domain rule."""

    DEFAULT_CODE: ClassVar[str | None] = "BUSINESS_LOGIC_ERROR"
    DEFAULT_SEVERITY: ClassVar[Severity] = Severity.HIGH

    def __init__(
        self,
        message: str | None = None,
        *,
        business_rule: str | None = None,
        code: str | None = None,
        cause: BaseException | None = None,
        context: ExceptionContext | None = None,
        severity: Severity | None = None,
    ) -> None:
        super().__init__(message, code=code, cause=cause, context=context, severity=severity)
        self.business_rule = business_rule

    @classmethod
    def rule_violation(cls, rule: str, message: str) -> BusinessLogicError:
        context = (
            ExceptionContext.builder()
            .add_data("businessRule", rule)
            .add_metadata("violationType", "business_rule")
            .build()
        )
        return cls(f"Business rule violation [{rule}]: {message}", business_rule=rule, context=context)

    @classmethod
    def entity_violation(
        cls, rule: str, entity_type: str, entity_id: str, message: str
    ) -> BusinessLogicError:
        context = (
            ExceptionContext.builder()
            .add_data("businessRule", rule)
            .add_data("entityType", entity_type)
            .add_data("entityId", entity_id)
            .add_metadata("violationType", "entity_constraint")
            .build()
        )
        return cls(
            f"Business rule violation [{rule}] for {entity_type}[{entity_id}]: {message}",
            business_rule=rule,
            context=context,
        )

    @classmethod
    def invalid_state_transition(
        cls,
        entity_type: str,
        entity_id: str,
        current_state: str,
        target_state: str,
        allowed_states: Iterable[str],
    ) -> BusinessLogicError:
        allowed = sorted(allowed_states)
        context = (
            ExceptionContext.builder()
            .add_data("entityType", entity_type)
            .add_data("entityId", entity_id)
            .add_data("currentState", current_state)
            .add_data("targetState", target_state)
            .add_data("allowedStates", allowed)
            .add_metadata("violationType", "state_transition")
            .build()
        )
        return cls(
            f"Invalid state transition for {entity_type}[{entity_id}]: cannot transition "
            f"from '{current_state}' to '{target_state}'. Allowed states: {allowed}",
            business_rule="STATE_TRANSITION_RULE",
            context=context,
        )


@dataclass(frozen=True)
class FieldError:
    """A single rejected field inside a ValidationError."""

    field: str
    message: str
    rejected_value: Any = None


class ValidationError(UncheckedError):
    """Aggregate of zero or more field failures under one error id."""

    DEFAULT_CODE: ClassVar[str | None] = "VALIDATION_ERROR"
    DEFAULT_SEVERITY: ClassVar[Severity] = Severity.MEDIUM

    def __init__(
        self,
        message: str | None = None,
        *,
        field_errors: Sequence[FieldError] | None = None,
        code: str | None = None,
        cause: BaseException | None = None,
        context: ExceptionContext | None = None,
        severity: Severity | None = None,
    ) -> None:
        errors = list(field_errors or ())
        if message is None and errors:
            message = _summary(len(errors))
        super().__init__(message, code=code, cause=cause, context=context, severity=severity)
        self._field_errors = errors
        self._errors_lock = threading.Lock()

    @classmethod
    def for_field(cls, field: str, message: str, rejected_value: Any = None) -> ValidationError:
        context = (
            ExceptionContext.builder()
            .add_data("field", field)
            .add_data("rejectedValue", rejected_value)
            .add_metadata("validationType", "field")
            .build()
        )
        return cls(
            f"Validation failed for field '{field}': {message}",
            field_errors=[FieldError(field, message, rejected_value)],
            context=context,
        )

    @classmethod
    def from_field_errors(cls, errors: Sequence[FieldError]) -> ValidationError:
        """Build from a pre-built list; the list is copied."""
        errors = list(errors)
        context = ExceptionContext().add_data("validationErrorCount", len(errors))
        context.add_metadata("validationType", "multi-field")
        for index, error in enumerate(errors):
            context.add_data(f"error_{index}_field", error.field)
            context.add_data(f"error_{index}_message", error.message)
            context.add_data(f"error_{index}_rejectedValue", error.rejected_value)
        return cls(_summary(len(errors)), field_errors=errors, context=context)

    @classmethod
    def field_validation(cls, field_name: str, invalid_value: Any, reason: str) -> ValidationError:
        context = (
            ExceptionContext.builder()
            .add_data("fieldName", field_name)
            .add_data("invalidValue", invalid_value)
            .add_data("validationError", reason)
            .add_metadata("validationType", "field")
            .build()
        )
        return cls(
            f"Field validation failed for '{field_name}': {reason}",
            field_errors=[FieldError(field_name, reason, invalid_value)],
            context=context,
        )

    @classmethod
    def required_field(cls, field_name: str) -> ValidationError:
        context = (
            ExceptionContext.builder()
            .add_data("fieldName", field_name)
            .add_metadata("validationType", "required")
            .build()
        )
        return cls(f"Required field missing: {field_name}", context=context)

    @classmethod
    def multiple_fields(cls, field_names: Sequence[str] | None) -> ValidationError:
        names = list(field_names or ())
        context = (
            ExceptionContext.builder()
            .add_data("fieldNames", names)
            .add_metadata("validationType", "multiple")
            .build()
        )
        field_list = ", ".join(names) if names else "none"
        return cls(f"Multiple field validation failed for: {field_list}", context=context)

    @classmethod
    def business_rule(cls, rule_name: str, rule_description: str) -> ValidationError:
        context = (
            ExceptionContext.builder()
            .add_data("ruleName", rule_name)
            .add_data("ruleDescription", rule_description)
            .add_metadata("validationType", "business-rule")
            .build()
        )
        return cls(
            f"Business rule validation failed: {rule_name} - {rule_description}",
            context=context,
        )

    @property
    def field_errors(self) -> tuple[FieldError, ...]:
        with self._errors_lock:
            return tuple(self._field_errors)

    @property
    def summary(self) -> str:
        with self._errors_lock:
            return _summary(len(self._field_errors))

    def add_field_error(self, field: str, message: str, rejected_value: Any = None) -> ValidationError:
        with self._errors_lock:
            self._field_errors.append(FieldError(field, message, rejected_value))
        return self

    def errors_for_field(self, field: str) -> list[FieldError]:
        with self._errors_lock:
            return [error for error in self._field_errors if error.field == field]

    def has_errors_for_field(self, field: str) -> bool:
        return bool(self.errors_for_field(field))


def _summary(count: int) -> str:
    return f"Validation failed with {count} error(s)"
