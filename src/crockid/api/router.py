"""Codec API router."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Request, status

from crockid import checksum, codec
from crockid.api import schemas
from crockid.errors import CodecError
from crockid.obs.redaction import redact_code
from crockid.ticketid import (
    TicketID,
    TicketIDError,
    decode_ticket_id,
    format_ticket_id,
    generate,
    generate_sequence,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["codec"])

_UNPROCESSABLE = {
    422: {
        "model": schemas.ErrorResponse,
        "description": "The input could not be encoded, decoded or validated.",
    }
}


def _reject(exc: CodecError | TicketIDError, code: str | None = None) -> HTTPException:
    if code is not None:
        logger.debug("rejected %s: %s", redact_code(code), exc.code)
    return HTTPException(status_code=422, detail=exc.to_dict())


# ---------------------------------------------------------------------------
# Encode / decode
# ---------------------------------------------------------------------------


@router.post(
    "/encode",
    response_model=schemas.EncodeResponse,
    summary="Encode an integer",
    description="Render an unsigned 64-bit integer as Crockford Base32.",
    responses=_UNPROCESSABLE,
)
def encode(body: schemas.EncodeRequest, request: Request):
    settings = request.app.state.settings
    try:
        if body.compact:
            code = codec.encode_compact(body.value)
        else:
            code = codec.encode_fixed(body.value, body.length or settings.default_length)
    except CodecError as exc:
        raise _reject(exc) from None

    with_checksum = settings.checksum_by_default if body.checksum is None else body.checksum
    if with_checksum:
        code = checksum.append(code)
    if body.group:
        code = codec.group(code, settings.group_size)
    return schemas.EncodeResponse(code=code, value=body.value)


@router.post(
    "/decode",
    response_model=schemas.DecodeResponse,
    summary="Decode an identifier",
    description=(
        "Normalize a human-typed identifier and decode it. With ``checksum`` set, the "
        "trailing two symbols are verified and removed first."
    ),
    responses=_UNPROCESSABLE,
)
def decode(body: schemas.DecodeRequest):
    normalized = codec.normalize(body.code)
    data = normalized
    if body.checksum:
        if not checksum.validate(normalized):
            logger.debug("checksum mismatch for %s", redact_code(normalized))
            raise HTTPException(
                status_code=422,
                detail={"code": "INVALID_CHECKSUM", "message": "checksum validation failed"},
            )
        data = checksum.strip(normalized)
    try:
        value = codec.decode(data)
    except CodecError as exc:
        raise _reject(exc, normalized) from None
    return schemas.DecodeResponse(value=value, normalized=normalized)


# ---------------------------------------------------------------------------
# Checksum
# ---------------------------------------------------------------------------


@router.post(
    "/checksum",
    response_model=schemas.ChecksumResponse,
    summary="Compute a checksum",
    description="Compute the 2-symbol CRC-10 checksum for Base32 data.",
    responses=_UNPROCESSABLE,
)
def compute_checksum(body: schemas.ChecksumRequest):
    try:
        check = checksum.calculate(body.data)
    except CodecError as exc:
        raise _reject(exc, body.data) from None
    return schemas.ChecksumResponse(checksum=check, code=body.data + check)


@router.post(
    "/validate",
    response_model=schemas.ValidateResponse,
    summary="Validate checksummed codes",
    description="Check a batch of codes. Invalid input yields ``valid: false``, never an error.",
    responses={413: {"model": schemas.ErrorResponse, "description": "Batch too large."}},
)
def validate(body: schemas.ValidateRequest, request: Request):
    limit = request.app.state.settings.api_max_batch
    if len(body.codes) > limit:
        raise HTTPException(
            status_code=413,
            detail=f"at most {limit} codes per request",
        )
    results = [
        schemas.ValidateResult(code=code, valid=checksum.validate(codec.normalize(code)))
        for code in body.codes
    ]
    return schemas.ValidateResponse(results=results)


# ---------------------------------------------------------------------------
# Tickets
# ---------------------------------------------------------------------------


@router.post(
    "/tickets",
    response_model=schemas.TicketCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Generate a ticket ID",
    description="Pack event, date, category, seat and sequence into a checksummed ticket ID.",
    responses=_UNPROCESSABLE,
)
def create_ticket(body: schemas.TicketCreateRequest):
    sequence = generate_sequence() if body.sequence is None else body.sequence
    try:
        ticket_id = generate(
            body.event_id, body.event_date, body.category_id, body.seat_id, sequence
        )
    except TicketIDError as exc:
        raise _reject(exc) from None
    return schemas.TicketCreateResponse(ticket_id=ticket_id, formatted=format_ticket_id(ticket_id))


@router.get(
    "/tickets/{ticket_id}",
    response_model=TicketID,
    response_model_by_alias=True,
    summary="Decode a ticket ID",
    description="Validate a ticket ID (dashes allowed) and return its components.",
    responses=_UNPROCESSABLE,
)
def read_ticket(ticket_id: str):
    try:
        return decode_ticket_id(ticket_id)
    except TicketIDError as exc:
        raise _reject(exc, ticket_id) from None
