"""Tests for message sanitization."""

import pytest

from errorkit.sanitizer import sanitize_message


class TestSanitizeMessage:
    def test_none_passthrough(self):
        assert sanitize_message(None) is None

    def test_plain_text_untouched(self):
        assert sanitize_message("Order 42 could not be shipped") == "Order 42 could not be shipped"

    @pytest.mark.parametrize(
        ("message", "expected"),
        [
            ("Cannot open /var/lib/app/data.db", "Cannot open [REDACTED_PATH]"),
            ("Cannot open C:\\Users\\bob\\secrets.txt", "Cannot open [REDACTED_PATH]"),
            ("Fetch https://internal.example.com/api?q=1 failed", "Fetch [REDACTED_URL] failed"),
            ("Mail to bob@example.com bounced", "Mail to [REDACTED_EMAIL] bounced"),
            ("Login failed password=hunter2", "Login failed password=[REDACTED]"),
            ("Bad token: abc123", "Bad token=[REDACTED]"),
            ("api_key=XYZ rejected", "api_key=[REDACTED] rejected"),
        ],
    )
    def test_redactions(self, message, expected):
        assert sanitize_message(message) == expected

    def test_url_redacted_before_path(self):
        result = sanitize_message("See http://host/a/b/c")
        assert result == "See [REDACTED_URL]"
        assert "[REDACTED_PATH]" not in result

    def test_multiple_redactions(self):
        result = sanitize_message("user bob@example.com read /etc/app/config")
        assert result == "user [REDACTED_EMAIL] read [REDACTED_PATH]"
