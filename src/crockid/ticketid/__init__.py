"""Event ticket identifiers built on Crockford Base32 and CRC-10.

A ticket ID packs event, date, category, seat and an issue sequence into 22
symbols and appends a 2-symbol checksum::

    >>> from datetime import date
    >>> tid = generate("42", date(2025, 6, 1), "7", "123", 1)
    >>> decode_ticket_id(tid).event_id
    'EVT000042'
"""

from crockid.ticketid.decoder import decode_ticket_id, extract_components, is_valid_ticket_id
from crockid.ticketid.errors import TicketIDError
from crockid.ticketid.generator import format_ticket_id, generate, generate_sequence
from crockid.ticketid.types import TOTAL_LENGTH, TicketID

__all__ = [
    "TOTAL_LENGTH",
    "TicketID",
    "TicketIDError",
    "decode_ticket_id",
    "extract_components",
    "format_ticket_id",
    "generate",
    "generate_sequence",
    "is_valid_ticket_id",
]
