"""Pytest configuration and fixtures."""

import pytest

import errorkit.logging_config as logging_config_module
from errorkit.config import Settings, get_settings
from errorkit.logging_config import configure_logging


@pytest.fixture(scope="session", autouse=True)
def setup_logging() -> None:
    """Configure structlog once for the session.

    cache_logger_on_first_use=False keeps per-test reconfiguration effective.
    """
    configure_logging(log_level="DEBUG")


@pytest.fixture(autouse=True)
def reset_logging_config() -> None:
    """Reset logging config state before each test for isolation."""
    logging_config_module._CONFIGURED = False
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Full disclosure, no sanitizing, caching on."""
    return Settings.testing().with_overrides(enable_caching=True)


@pytest.fixture
def production_settings() -> Settings:
    return Settings.production()


class RecordingLogger:
    """Stand-in for a structlog bound logger that records every call."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, dict]] = []

    def _record(self, level: str):
        def emit(event: str, **fields) -> None:
            self.calls.append((level, event, fields))

        return emit

    def __getattr__(self, name: str):
        if name in {"debug", "info", "warning", "error", "critical"}:
            return self._record(name)
        raise AttributeError(name)


@pytest.fixture
def recording_logger() -> RecordingLogger:
    return RecordingLogger()
