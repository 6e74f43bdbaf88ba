"""Crockford Base32 encoding for human-readable identifiers.

Alphabet
--------
``0123456789ABCDEFGHJKMNPQRSTVWXYZ`` - digits followed by uppercase letters
with ``I``, ``L``, ``O`` and ``U`` excluded.  A symbol's position is its value,
so the ordering must never change: previously issued identifiers decode with
the same table forever.

Decoding
--------
* Case-insensitive (``a``..``z`` decode like ``A``..``Z``).
* Look-alike corrections: ``I``/``i`` and ``L``/``l`` read as ``1``,
  ``O``/``o`` reads as ``0``.
* ``U``/``u`` is rejected; it is too close to ``V`` to guess.

All functions are pure.  The decode table is built once at import time and
never mutated, so every function here is safe to call from any thread.
"""

from __future__ import annotations

from crockid.errors import (
    DecodeOverflowError,
    EmptyInputError,
    InvalidCharacterError,
    InvalidLengthError,
    ValueRangeError,
    ValueTooLargeError,
)

ALPHABET = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"
BASE = len(ALPHABET)

U64_MAX = (1 << 64) - 1

# 32**13 = 2**65, so every u64 fits in 13 symbols.
MAX_COMPACT_LENGTH = 13

_OVERFLOW_GUARD = U64_MAX // BASE

_ALIASES = {"I": 1, "L": 1, "O": 0}


def _build_decode_table() -> tuple[int, ...]:
    table = [-1] * 128
    for value, symbol in enumerate(ALPHABET):
        table[ord(symbol)] = value
        table[ord(symbol.lower())] = value
    for alias, value in _ALIASES.items():
        table[ord(alias)] = value
        table[ord(alias.lower())] = value
    return tuple(table)


# Indexed by code point; -1 marks characters outside the mapping.
_DECODE_TABLE = _build_decode_table()

_NORMALIZE_TABLE = str.maketrans({"-": None, " ": None, "I": "1", "L": "1", "O": "0"})


def _check_u64(value: int) -> None:
    # bool is an int subclass but never a meaningful identifier.
    if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= U64_MAX:
        raise ValueRangeError(value, U64_MAX)


def value_of(char: str) -> int | None:
    """Return the 5-bit value of *char*, or ``None`` when it is not accepted."""
    if len(char) != 1:
        return None
    code = ord(char)
    if code >= 128:
        return None
    value = _DECODE_TABLE[code]
    return None if value < 0 else value


def symbol_of(value: int) -> str:
    """Return the canonical symbol for a value in ``0..31``."""
    if not isinstance(value, int) or not 0 <= value < BASE:
        raise ValueRangeError(value, BASE - 1)
    return ALPHABET[value]


def is_valid_char(char: str) -> bool:
    """Return True when *char* decodes (canonical symbols, either case, plus I/L/O)."""
    return value_of(char) is not None


def encode_fixed(value: int, length: int) -> str:
    """Encode *value* as exactly *length* symbols, left-padded with ``0``.

    >>> encode_fixed(12345, 6)
    '000C1S'
    >>> encode_fixed(32, 2)
    '10'

    Raises :class:`InvalidLengthError` when ``length < 1`` and
    :class:`ValueTooLargeError` when *value* needs more than *length* symbols;
    the value is never truncated.
    """
    _check_u64(value)
    if not isinstance(length, int) or isinstance(length, bool) or length < 1:
        raise InvalidLengthError(length)

    out = ["0"] * length
    remaining = value
    for i in range(length - 1, -1, -1):
        remaining, digit = divmod(remaining, BASE)
        out[i] = ALPHABET[digit]
        if remaining == 0:
            break

    if remaining:
        raise ValueTooLargeError(value, length)
    return "".join(out)


def encode_compact(value: int) -> str:
    """Encode *value* with the fewest symbols; ``0`` encodes to ``"0"``."""
    _check_u64(value)
    if value == 0:
        return ALPHABET[0]

    out: list[str] = []
    while value:
        value, digit = divmod(value, BASE)
        out.append(ALPHABET[digit])
    return "".join(reversed(out))


def decode(text: str) -> int:
    """Decode Base32 *text* (most significant symbol first) to an integer.

    >>> decode("C1S")
    12345
    >>> decode("c1s")
    12345

    Raises :class:`EmptyInputError`, :class:`InvalidCharacterError` with the
    offending character and its 0-based position, or
    :class:`DecodeOverflowError` when the value would not fit in 64 bits.
    """
    if not text:
        raise EmptyInputError()

    result = 0
    for position, char in enumerate(text):
        value = value_of(char)
        if value is None:
            raise InvalidCharacterError(char, position)
        if result > _OVERFLOW_GUARD:
            raise DecodeOverflowError(position)
        result = result * BASE + value
        if result > U64_MAX:
            raise DecodeOverflowError(position)
    return result


def normalize(text: str) -> str:
    """Canonicalise user input: uppercase, drop spaces and hyphens, fix I/L/O.

    No validation happens here; characters such as ``U`` survive and are
    rejected later by :func:`decode`.  ``normalize(normalize(s)) == normalize(s)``.
    """
    return text.upper().translate(_NORMALIZE_TABLE)


def group(text: str, size: int = 5, sep: str = "-") -> str:
    """Insert *sep* every *size* characters for display (``ABCDE-FGH``)."""
    if not isinstance(size, int) or isinstance(size, bool) or size < 1:
        raise InvalidLengthError(size)
    return sep.join(text[i : i + size] for i in range(0, len(text), size))


__all__ = [
    "ALPHABET",
    "BASE",
    "MAX_COMPACT_LENGTH",
    "U64_MAX",
    "decode",
    "encode_compact",
    "encode_fixed",
    "group",
    "is_valid_char",
    "normalize",
    "symbol_of",
    "value_of",
]
