"""Observability helpers – logging setup, trace ids and identifier masking."""

from crockid.obs.redaction import RedactingFilter, redact_code, redact_value
from crockid.obs.setup import configure_logging, init_observability

__all__ = [
    "RedactingFilter",
    "configure_logging",
    "init_observability",
    "redact_code",
    "redact_value",
]
