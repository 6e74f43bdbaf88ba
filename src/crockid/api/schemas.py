"""Pydantic schemas for the codec HTTP endpoints."""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, Field

from crockid.codec import MAX_COMPACT_LENGTH, U64_MAX


class ErrorResponse(BaseModel):
    """Standard error envelope."""

    detail: str | dict[str, Any] = Field(
        ...,
        description="Error message or structured payload with code, message and position.",
    )


# -- Encode / decode --


class EncodeRequest(BaseModel):
    value: int = Field(..., ge=0, le=U64_MAX, description="Unsigned 64-bit integer to encode.")
    length: int | None = Field(
        default=None,
        ge=1,
        le=MAX_COMPACT_LENGTH,
        description="Fixed width in symbols. Defaults to the configured width.",
    )
    compact: bool = Field(default=False, description="Use the minimum width instead.")
    checksum: bool | None = Field(
        default=None,
        description="Append a 2-symbol checksum. Defaults to the configured behaviour.",
    )
    group: bool = Field(default=False, description="Insert dashes for display.")


class EncodeResponse(BaseModel):
    code: str = Field(..., description="Encoded identifier.")
    value: int = Field(..., description="The encoded value.")


class DecodeRequest(BaseModel):
    code: str = Field(..., max_length=256, description="Identifier as typed by a human.")
    checksum: bool = Field(
        default=False,
        description="Verify and strip a trailing 2-symbol checksum before decoding.",
    )


class DecodeResponse(BaseModel):
    value: int = Field(..., description="Decoded unsigned integer.")
    normalized: str = Field(..., description="Canonical form of the submitted code.")


# -- Checksum --


class ChecksumRequest(BaseModel):
    data: str = Field(..., max_length=256, description="Base32 data to protect.")


class ChecksumResponse(BaseModel):
    checksum: str = Field(..., description="Two checksum symbols.")
    code: str = Field(..., description="Data with the checksum appended.")


class ValidateRequest(BaseModel):
    codes: list[str] = Field(..., min_length=1, description="Checksummed codes to verify.")


class ValidateResult(BaseModel):
    code: str
    valid: bool


class ValidateResponse(BaseModel):
    results: list[ValidateResult]


# -- Tickets --


class TicketCreateRequest(BaseModel):
    event_id: str = Field(..., min_length=1, description="Numeric or free-form event id.")
    event_date: date = Field(..., description="Event day.")
    category_id: str = Field(..., min_length=1, description="Numeric or free-form category id.")
    seat_id: str = Field(..., min_length=1, description="Numeric or free-form seat id.")
    sequence: int | None = Field(
        default=None,
        ge=0,
        description="Issue sequence. Generated from clock and randomness when omitted.",
    )


class TicketCreateResponse(BaseModel):
    ticket_id: str = Field(..., description="24-symbol ticket ID.")
    formatted: str = Field(..., description="Ticket ID with dashes between components.")
