"""Pattern-based redaction of sensitive substrings in error messages."""
from __future__ import annotations

import re
from typing import Callable, Optional

Sanitizer = Callable[[Optional[str]], Optional[str]]

# Order matters: URLs and emails contain slashes/dots the path patterns would eat.
_REDACTIONS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"https?://\S+"), "[REDACTED_URL]"),
    (re.compile(r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b"), "[REDACTED_EMAIL]"),
    (re.compile(r"(?i)\b(password|passwd|token|secret|api[_-]?key|key)\s*[:=]\s*\S+"), r"\1=[REDACTED]"),
    (re.compile(r"\b[A-Za-z]:\\\S+"), "[REDACTED_PATH]"),
    (re.compile(r"(?<!\S)/\S+/\S+"), "[REDACTED_PATH]"),
)


def sanitize_message(message: str | None) -> str | None:
    """Redact file paths, URLs, emails and secret-looking assignments."""
    if message is None:
        return None
    sanitized = message
    for pattern, replacement in _REDACTIONS:
        sanitized = pattern.sub(replacement, sanitized)
    return sanitized
