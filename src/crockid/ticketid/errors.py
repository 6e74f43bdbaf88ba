"""Ticket ID errors with stable error codes."""

from __future__ import annotations

from typing import Any

INVALID_EVENT_ID = "INVALID_EVENT_ID"
INVALID_DATE = "INVALID_DATE"
INVALID_CATEGORY = "INVALID_CATEGORY"
INVALID_SEAT = "INVALID_SEAT"
INVALID_SEQUENCE = "INVALID_SEQUENCE"
DECODE_FAILED = "DECODE_FAILED"
INVALID_CHECKSUM = "INVALID_CHECKSUM"
INVALID_LENGTH = "INVALID_LENGTH"
VALUE_OUT_OF_RANGE = "VALUE_OUT_OF_RANGE"


class TicketIDError(ValueError):
    """Raised when a ticket ID cannot be generated or decoded."""

    def __init__(self, code: str, message: str, details: dict[str, Any] | None = None) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(code, message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.code}: {self.message} (details: {self.details})"
        return f"{self.code}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, **self.details}
