"""Ticket ID decoding and validation."""

from __future__ import annotations

from datetime import date

from crockid import checksum
from crockid.codec import decode, is_valid_char, normalize
from crockid.errors import DecodeError
from crockid.ticketid.errors import (
    DECODE_FAILED,
    INVALID_CHECKSUM,
    INVALID_DATE,
    INVALID_LENGTH,
    TicketIDError,
)
from crockid.ticketid.generator import MAX_YEAR, MIN_YEAR
from crockid.ticketid.types import COMPONENTS, TOTAL_LENGTH, TicketID

_LABELS = {
    "event_id": "event ID",
    "event_date": "event date",
    "category": "category ID",
    "seat_id": "seat ID",
    "sequence": "sequence",
}


def _decode_part(part: str, label: str) -> int:
    try:
        return decode(part)
    except DecodeError as exc:
        raise TicketIDError(DECODE_FAILED, f"failed to decode {label}", exc.to_dict()) from exc


def _parse_date(packed: int) -> date:
    year, rest = divmod(packed, 10000)
    month, day = divmod(rest, 100)

    if not MIN_YEAR <= year <= MAX_YEAR:
        raise TicketIDError(INVALID_DATE, f"year out of range ({MIN_YEAR}-{MAX_YEAR})")
    if not 1 <= month <= 12:
        raise TicketIDError(INVALID_DATE, "month out of range (1-12)")
    if not 1 <= day <= 31:
        raise TicketIDError(INVALID_DATE, "day out of range (1-31)")
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise TicketIDError(INVALID_DATE, "invalid calendar date", {"value": packed}) from exc


def _format_id(num: int, prefix: str) -> str:
    return f"{prefix}{num:06d}"


def extract_components(ticket_id: str) -> dict[str, str] | None:
    """Split a ticket ID into raw component strings, or None on bad length."""
    ticket_id = normalize(ticket_id)
    if len(ticket_id) != TOTAL_LENGTH:
        return None
    return {name: ticket_id[start:end] for name, start, end in COMPONENTS}


def decode_ticket_id(ticket_id: str) -> TicketID:
    """Validate and decode a ticket ID (dashes, spaces and case are ignored)."""
    normalized = normalize(ticket_id)

    if len(normalized) != TOTAL_LENGTH:
        raise TicketIDError(
            INVALID_LENGTH,
            f"ticket ID must be exactly {TOTAL_LENGTH} characters",
            {"expected": TOTAL_LENGTH, "actual": len(normalized)},
        )

    if not checksum.validate(normalized):
        raise TicketIDError(INVALID_CHECKSUM, "ticket ID checksum validation failed")

    parts = {name: normalized[start:end] for name, start, end in COMPONENTS}
    values = {name: _decode_part(parts[name], label) for name, label in _LABELS.items()}

    return TicketID(
        event_id=_format_id(values["event_id"], "EVT"),
        event_date=_parse_date(values["event_date"]),
        category_id=_format_id(values["category"], "CAT"),
        seat_id=_format_id(values["seat_id"], "SEAT"),
        sequence=values["sequence"],
        encoded_id=normalized,
        checksum=parts["checksum"],
    )


def is_valid_ticket_id(ticket_id: str) -> bool:
    """Cheap structural check: length, alphabet and checksum."""
    normalized = normalize(ticket_id)
    if len(normalized) != TOTAL_LENGTH:
        return False
    if not all(is_valid_char(c) for c in normalized):
        return False
    return checksum.validate(normalized)
