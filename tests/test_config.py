"""Tests for Pydantic Settings configuration."""

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from errorkit.config import Settings, get_settings


class TestSettingsDefaults:
    """Settings with no environment variables."""

    def test_all_defaults(self):
        settings = Settings()
        assert settings.include_stack_trace is False
        assert settings.include_exception_details is True
        assert settings.log_exceptions is True
        assert settings.log_level == "ERROR"
        assert settings.sanitize_messages is True
        assert settings.max_stack_trace_elements == 20
        assert settings.enable_caching is True
        assert settings.max_cause_depth == 10

    def test_to_dict(self):
        config_dict = Settings().to_dict()
        assert set(config_dict) == {
            "include_stack_trace",
            "include_exception_details",
            "log_exceptions",
            "log_level",
            "sanitize_messages",
            "max_stack_trace_elements",
            "enable_caching",
            "datetime_format",
            "max_cause_depth",
        }

    def test_frozen(self):
        settings = Settings()
        with pytest.raises(ValidationError):
            settings.log_level = "DEBUG"


class TestSettingsFromEnv:
    def test_env_prefix(self):
        env = {
            "ERRORKIT_INCLUDE_STACK_TRACE": "true",
            "ERRORKIT_LOG_LEVEL": "warn",
            "ERRORKIT_MAX_STACK_TRACE_ELEMENTS": "5",
        }
        with patch.dict("os.environ", env):
            settings = Settings()
        assert settings.include_stack_trace is True
        assert settings.log_level == "WARNING"
        assert settings.max_stack_trace_elements == 5

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        assert get_settings() is get_settings()

    def test_cache_clear_picks_up_env(self):
        get_settings.cache_clear()
        with patch.dict("os.environ", {"ERRORKIT_SANITIZE_MESSAGES": "false"}):
            get_settings.cache_clear()
            assert get_settings().sanitize_messages is False
        get_settings.cache_clear()


class TestValidation:
    @pytest.mark.parametrize(("raw", "normalized"), [("debug", "DEBUG"), ("Warn", "WARNING"), ("fatal", "CRITICAL")])
    def test_log_level_normalized(self, raw, normalized):
        assert Settings(log_level=raw).log_level == normalized

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(log_level="LOUD")

    def test_negative_stack_limit_rejected(self):
        with pytest.raises(ValidationError):
            Settings(max_stack_trace_elements=-1)

    def test_unlimited_stack(self):
        assert Settings(max_stack_trace_elements=None).max_stack_trace_elements is None

    def test_cause_depth_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(max_cause_depth=0)


class TestPresets:
    def test_production(self):
        settings = Settings.production()
        assert settings.include_stack_trace is False
        assert settings.include_exception_details is False
        assert settings.sanitize_messages is True
        assert settings.max_stack_trace_elements == 10

    def test_development(self):
        settings = Settings.development()
        assert settings.include_stack_trace is True
        assert settings.log_level == "DEBUG"
        assert settings.max_stack_trace_elements is None

    def test_testing(self):
        settings = Settings.testing()
        assert settings.enable_caching is False
        assert settings.log_level == "WARNING"

    def test_high_security(self):
        settings = Settings.high_security()
        assert settings.include_exception_details is False
        assert settings.sanitize_messages is True

    def test_debugging(self):
        settings = Settings.debugging()
        assert settings.include_stack_trace is True
        assert settings.sanitize_messages is False

    def test_with_overrides(self):
        base = Settings.production()
        changed = base.with_overrides(include_stack_trace=True)
        assert changed.include_stack_trace is True
        assert changed.max_stack_trace_elements == 10
        assert base.include_stack_trace is False

    def test_with_overrides_validates(self):
        with pytest.raises(ValidationError):
            Settings().with_overrides(log_level="nope")
