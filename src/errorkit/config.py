"""Disclosure policy and handling configuration using pydantic-settings."""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_LEVEL_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL"}
VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class Settings(BaseSettings):
    """How much error detail is exposed, logged and rendered.

    Values come from ``ERRORKIT_*`` environment variables or a ``.env`` file.
    Instances are immutable; use ``with_overrides`` or a preset to derive
    variants.
    """

    model_config = SettingsConfigDict(
        env_prefix="ERRORKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    include_stack_trace: bool = False
    include_exception_details: bool = True
    log_exceptions: bool = True
    log_level: str = "ERROR"
    sanitize_messages: bool = True

    # None means unlimited
    max_stack_trace_elements: int | None = Field(default=20, ge=0)
    enable_caching: bool = True
    datetime_format: str = "%Y-%m-%dT%H:%M:%S.%f"
    max_cause_depth: int = Field(default=10, ge=1)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        upper = v.upper()
        upper = _LEVEL_ALIASES.get(upper, upper)
        if upper not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log_level '{v}'. Must be one of: {', '.join(sorted(VALID_LOG_LEVELS))}"
            )
        return upper

    @classmethod
    def development(cls) -> Settings:
        return cls(
            include_stack_trace=True,
            include_exception_details=True,
            log_exceptions=True,
            log_level="DEBUG",
            sanitize_messages=False,
            max_stack_trace_elements=None,
        )

    @classmethod
    def production(cls) -> Settings:
        return cls(
            include_stack_trace=False,
            include_exception_details=False,
            log_exceptions=True,
            log_level="ERROR",
            sanitize_messages=True,
            max_stack_trace_elements=10,
        )

    @classmethod
    def testing(cls) -> Settings:
        return cls(
            include_stack_trace=True,
            include_exception_details=True,
            log_exceptions=True,
            log_level="WARNING",
            sanitize_messages=False,
            enable_caching=False,
        )

    @classmethod
    def high_security(cls) -> Settings:
        """Minimal exposure: no stacks, no raw messages, sanitized text."""
        return cls(
            include_stack_trace=False,
            include_exception_details=False,
            log_exceptions=True,
            log_level="ERROR",
            sanitize_messages=True,
        )

    @classmethod
    def debugging(cls) -> Settings:
        """Maximum detail for troubleshooting."""
        return cls(
            include_stack_trace=True,
            include_exception_details=True,
            log_exceptions=True,
            log_level="DEBUG",
            sanitize_messages=False,
            max_stack_trace_elements=None,
        )

    def with_overrides(self, **changes: Any) -> Settings:
        """Return a validated copy with ``changes`` applied."""
        return type(self)(**{**self.to_dict(), **changes})

    def to_dict(self) -> dict[str, Any]:
        """Convert settings to a plain dictionary."""
        return {
            "include_stack_trace": self.include_stack_trace,
            "include_exception_details": self.include_exception_details,
            "log_exceptions": self.log_exceptions,
            "log_level": self.log_level,
            "sanitize_messages": self.sanitize_messages,
            "max_stack_trace_elements": self.max_stack_trace_elements,
            "enable_caching": self.enable_caching,
            "datetime_format": self.datetime_format,
            "max_cause_depth": self.max_cause_depth,
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached Settings singleton.

    For testing: call get_settings.cache_clear() after changing env vars.
    """
    return Settings()
