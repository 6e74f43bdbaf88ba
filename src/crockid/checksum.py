"""CRC-10 check symbols for Base32 identifiers.

A checksummed identifier is ``data + two symbols``.  The two symbols carry a
10-bit CRC (polynomial ``0x233`` plus the implicit top term, i.e.
x^10 + x^9 + x^5 + x^4 + x + 1) computed over the 5-bit values of the data
symbols.  Any error confined to 10 consecutive bits is caught, which covers
every single-symbol substitution and every swap of adjacent symbols.  It does
not correct anything.

The bit loop must stay exactly as written: changing it would invalidate every
identifier already issued.

Note that the register starts at zero, so leading ``0`` symbols do not change
the checksum (``000C1S`` and ``C1S`` share one).  Fixed-width identifiers are
unaffected because their length is checked separately.
"""

from __future__ import annotations

from collections.abc import Iterable

from crockid.codec import normalize, symbol_of, value_of
from crockid.errors import InvalidCharacterError

POLYNOMIAL = 0x233
CHECKSUM_LENGTH = 2

_TOP_BIT = 0x200
_REGISTER_MASK = 0xFFFF
_CRC_MASK = 0x3FF


def crc10(values: Iterable[int]) -> int:
    """Run the CRC-10 register over 5-bit symbol *values* and return 10 bits."""
    crc = 0
    for value in values:
        crc ^= (value & 0x1F) << 5
        for _ in range(5):
            if crc & _TOP_BIT:
                crc = ((crc << 1) ^ POLYNOMIAL) & _REGISTER_MASK
            else:
                crc = (crc << 1) & _REGISTER_MASK
    return crc & _CRC_MASK


def _symbol_values(data: str) -> list[int]:
    values: list[int] = []
    for position, char in enumerate(data):
        value = value_of(char)
        if value is None:
            raise InvalidCharacterError(char, position)
        values.append(value)
    return values


def calculate(data: str) -> str:
    """Return the 2-symbol checksum of *data*.

    Aliases are resolved exactly as :func:`crockid.codec.decode` does, so
    ``abc123`` and ``ABC123`` share a checksum, as do ``1O`` and ``10``.
    Raises :class:`InvalidCharacterError` for anything outside the decode
    mapping; invalid characters are never treated as zero.
    """
    crc = crc10(_symbol_values(data))
    return symbol_of(crc >> 5) + symbol_of(crc & 0x1F)


def append(data: str) -> str:
    """Return *data* followed by its checksum."""
    return data + calculate(data)


def validate(text: str) -> bool:
    """Return True when the last two symbols of *text* match the rest.

    Never raises: short input and invalid characters simply yield False, so
    this is safe to call on untrusted strings.
    """
    if len(text) < CHECKSUM_LENGTH + 1:
        return False

    data, provided = text[:-CHECKSUM_LENGTH], text[-CHECKSUM_LENGTH:]
    try:
        expected = calculate(data)
    except InvalidCharacterError:
        return False
    return normalize(provided) == normalize(expected)


def strip(text: str) -> str:
    """Drop the trailing checksum; two characters or fewer yields ``""``."""
    if len(text) <= CHECKSUM_LENGTH:
        return ""
    return text[:-CHECKSUM_LENGTH]


def extract(text: str) -> str:
    """Return the trailing two characters, or ``""`` for shorter input."""
    if len(text) < CHECKSUM_LENGTH:
        return ""
    return text[-CHECKSUM_LENGTH:]


__all__ = [
    "CHECKSUM_LENGTH",
    "POLYNOMIAL",
    "append",
    "calculate",
    "crc10",
    "extract",
    "strip",
    "validate",
]
