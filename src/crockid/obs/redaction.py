"""Redaction utilities – keep full identifiers out of log records.

License keys and order codes are effectively bearer secrets, so anything we
log shows only the last few symbols.
"""

from __future__ import annotations

import logging
import re

_VISIBLE_SUFFIX = 4

# Uppercase Base32 runs containing a digit: grouped codes (ABCDE-FGH12-MN)
# or plain runs of 8+ symbols.
_CODE_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"\b(?=[0-9A-Z-]*\d)[0-9A-HJKMNP-TV-Z]{5}(?:-[0-9A-HJKMNP-TV-Z]{1,5})+\b"),
    re.compile(r"\b(?=[0-9A-Z]*\d)[0-9A-HJKMNP-TV-Z]{8,}\b"),
]


def redact_code(code: str, *, visible: int = _VISIBLE_SUFFIX) -> str:
    """Mask all but the last *visible* characters of *code* with ``*``."""
    if visible <= 0 or len(code) <= visible:
        return "*" * len(code)
    return "*" * (len(code) - visible) + code[-visible:]


def redact_value(value: str) -> str:
    """Mask every identifier-looking token inside free text."""
    result = value
    for pat in _CODE_PATTERNS:
        result = pat.sub(lambda m: redact_code(m.group(0)), result)
    return result


class RedactingFilter(logging.Filter):
    """Rewrite each record's rendered message through :func:`redact_value`."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = redact_value(record.getMessage())
        record.args = None
        return True
