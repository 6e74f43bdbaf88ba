"""Ticket ID layout and the decoded model."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from crockid.checksum import CHECKSUM_LENGTH

# Component widths in Base32 symbols.
EVENT_ID_LENGTH = 5  # 33.5M events
EVENT_DATE_LENGTH = 5  # YYYYMMDD as an integer
CATEGORY_LENGTH = 3  # 32,768 categories
SEAT_ID_LENGTH = 5  # 33.5M seats
SEQUENCE_LENGTH = 4  # ~1M sequences

TOTAL_LENGTH = (
    EVENT_ID_LENGTH
    + EVENT_DATE_LENGTH
    + CATEGORY_LENGTH
    + SEAT_ID_LENGTH
    + SEQUENCE_LENGTH
    + CHECKSUM_LENGTH
)

# (name, start, end) slices of a normalized 24-symbol ticket ID.
COMPONENTS: tuple[tuple[str, int, int], ...] = (
    ("event_id", 0, 5),
    ("event_date", 5, 10),
    ("category", 10, 13),
    ("seat_id", 13, 18),
    ("sequence", 18, 22),
    ("checksum", 22, 24),
)


class TicketID(BaseModel):
    """Decoded components of a ticket ID."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    event_id: str = Field(..., description="Event identifier, e.g. EVT000042.")
    event_date: date = Field(..., description="Event date (UTC calendar day).")
    category_id: str = Field(..., description="Category identifier, e.g. CAT000007.")
    seat_id: str = Field(..., description="Seat identifier, e.g. SEAT000123.")
    sequence: int = Field(..., ge=0, description="Issue sequence number.")
    encoded_id: str = Field(..., description="Normalized 24-symbol ticket ID.")
    checksum: str = Field(..., description="Trailing 2-symbol CRC-10 checksum.")
