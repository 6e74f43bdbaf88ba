"""Ticket ID generation.

Format: ``[EEEEE][DDDDD][CCC][SSSSS][RRRR][XX]`` - event, date, category,
seat, sequence and a CRC-10 checksum, 24 symbols in total.
"""

from __future__ import annotations

import time
from datetime import date, datetime

from crockid import checksum, ids
from crockid.codec import BASE, U64_MAX, encode_fixed
from crockid.ticketid.errors import (
    INVALID_CATEGORY,
    INVALID_DATE,
    INVALID_EVENT_ID,
    INVALID_SEAT,
    INVALID_SEQUENCE,
    VALUE_OUT_OF_RANGE,
    TicketIDError,
)
from crockid.ticketid.types import (
    CATEGORY_LENGTH,
    COMPONENTS,
    EVENT_DATE_LENGTH,
    EVENT_ID_LENGTH,
    SEAT_ID_LENGTH,
    SEQUENCE_LENGTH,
    TOTAL_LENGTH,
)

MIN_YEAR = 1970
MAX_YEAR = 2100

_SEQUENCE_SPACE = BASE**SEQUENCE_LENGTH
_SEQUENCE_HALF = 500_000

_DJB2_SEED = 5381


def _djb2(text: str) -> int:
    h = _DJB2_SEED
    for char in text:
        h = ((h << 5) + h + ord(char)) & U64_MAX
    return h


def _parse_numeric(raw: str) -> int | None:
    if raw.isascii() and raw.isdigit():
        num = int(raw)
        if num <= U64_MAX:
            return num
    return None


def _encode_component(raw: str, width: int, label: str) -> str:
    capacity = BASE**width
    num = _parse_numeric(raw)
    if num is None:
        # Free-form ids are folded into the field; distinct names may collide.
        return encode_fixed(_djb2(raw) % capacity, width)
    if num >= capacity:
        raise TicketIDError(
            VALUE_OUT_OF_RANGE,
            f"{label} too large",
            {"value": num, "max": capacity - 1},
        )
    return encode_fixed(num, width)


def _encode_date(event_date: date) -> str:
    if isinstance(event_date, datetime):
        event_date = event_date.date()
    if not MIN_YEAR <= event_date.year <= MAX_YEAR:
        raise TicketIDError(
            INVALID_DATE,
            f"year out of range ({MIN_YEAR}-{MAX_YEAR})",
            {"year": event_date.year},
        )
    packed = event_date.year * 10000 + event_date.month * 100 + event_date.day
    return encode_fixed(packed, EVENT_DATE_LENGTH)


def _encode_sequence(sequence: int) -> str:
    return encode_fixed(sequence % _SEQUENCE_SPACE, SEQUENCE_LENGTH)


def _validate_inputs(event_id: str, category_id: str, seat_id: str, sequence: int) -> None:
    if not event_id:
        raise TicketIDError(INVALID_EVENT_ID, "event ID cannot be empty")
    if not category_id:
        raise TicketIDError(INVALID_CATEGORY, "category ID cannot be empty")
    if not seat_id:
        raise TicketIDError(INVALID_SEAT, "seat ID cannot be empty")
    if sequence < 0:
        raise TicketIDError(INVALID_SEQUENCE, "sequence must be non-negative")


def generate(
    event_id: str,
    event_date: date,
    category_id: str,
    seat_id: str,
    sequence: int,
) -> str:
    """Build a checksummed 24-symbol ticket ID from its components.

    Numeric ids (``"42"``) are stored verbatim and must fit their field;
    anything else is hashed into the field.  Sequences wrap modulo 32**4.
    """
    _validate_inputs(event_id, category_id, seat_id, sequence)

    data = (
        _encode_component(event_id, EVENT_ID_LENGTH, "event ID")
        + _encode_date(event_date)
        + _encode_component(category_id, CATEGORY_LENGTH, "category ID")
        + _encode_component(seat_id, SEAT_ID_LENGTH, "seat ID")
        + _encode_sequence(sequence)
    )
    return checksum.append(data)


def generate_sequence() -> int:
    """Return a sequence number mixing the clock with randomness.

    Two halves of up to 500,000 each keep the result below 32**4.  This
    lowers the odds of a clash between concurrent issuers; it does not rule
    one out.
    """
    time_part = (time.time_ns() // 1000) % _SEQUENCE_HALF
    return time_part + ids.random_below(_SEQUENCE_HALF)


def format_ticket_id(ticket_id: str) -> str:
    """Insert dashes between components: ``01B2M-4K6G8-N3V-9F2HA-7XJ5-QR``.

    Input of the wrong length is returned unchanged.
    """
    if len(ticket_id) != TOTAL_LENGTH:
        return ticket_id
    return "-".join(ticket_id[start:end] for _, start, end in COMPONENTS)
