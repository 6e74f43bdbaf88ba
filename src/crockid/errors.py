"""Exception hierarchy for the codec and checksum.

Every error carries a stable machine-readable ``code`` plus the structured
fields needed to pinpoint the problem (offending character, 0-based position,
requested length).  The CLI and HTTP layers render :meth:`CodecError.details`
directly, so field names here are part of the public contract.
"""

from __future__ import annotations

from typing import Any

# ── Error codes ───────────────────────────────────────────────────────────

EMPTY_INPUT = "EMPTY_INPUT"
INVALID_CHARACTER = "INVALID_CHARACTER"
OVERFLOW = "OVERFLOW"
INVALID_LENGTH = "INVALID_LENGTH"
VALUE_TOO_LARGE = "VALUE_TOO_LARGE"
VALUE_OUT_OF_RANGE = "VALUE_OUT_OF_RANGE"


class CodecError(ValueError):
    """Base class for all codec and checksum failures."""

    code = "CODEC_ERROR"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def details(self) -> dict[str, Any]:
        return {}

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, **self.details()}


# ── Encode-time ───────────────────────────────────────────────────────────


class EncodeError(CodecError):
    """Raised when an integer cannot be rendered as Base32."""


class InvalidLengthError(EncodeError):
    code = INVALID_LENGTH

    def __init__(self, length: int) -> None:
        self.length = length
        super().__init__(f"length must be a positive integer, got {length!r}")

    def details(self) -> dict[str, Any]:
        return {"length": self.length}


class ValueTooLargeError(EncodeError):
    """The value needs more symbols than the requested fixed width."""

    code = VALUE_TOO_LARGE

    def __init__(self, value: int, length: int) -> None:
        self.value = value
        self.length = length
        super().__init__(f"value {value} too large for {length} Base32 characters")

    def details(self) -> dict[str, Any]:
        return {"value": self.value, "length": self.length}


class ValueRangeError(EncodeError):
    """The value is not an unsigned 64-bit integer."""

    code = VALUE_OUT_OF_RANGE

    def __init__(self, value: object, upper: int) -> None:
        self.value = value
        self.upper = upper
        super().__init__(f"value must be an integer in [0, {upper}], got {value!r}")

    def details(self) -> dict[str, Any]:
        return {"value": repr(self.value), "max": self.upper}


# ── Decode-time ───────────────────────────────────────────────────────────


class DecodeError(CodecError):
    """Raised when text cannot be decoded to an integer."""


class EmptyInputError(DecodeError):
    code = EMPTY_INPUT

    def __init__(self) -> None:
        super().__init__("empty Base32 string")


class ChecksumError(CodecError):
    """Raised when a checksum cannot be computed over the given data."""


class InvalidCharacterError(DecodeError, ChecksumError):
    """A character outside the decode mapping, with its 0-based position."""

    code = INVALID_CHARACTER

    def __init__(self, char: str, position: int) -> None:
        self.char = char
        self.position = position
        super().__init__(f"invalid Base32 character {char!r} at position {position}")

    def details(self) -> dict[str, Any]:
        return {"char": self.char, "position": self.position}


class DecodeOverflowError(DecodeError):
    """The decoded value would exceed 64 bits."""

    code = OVERFLOW

    def __init__(self, position: int) -> None:
        self.position = position
        super().__init__(f"value overflow at position {position}")

    def details(self) -> dict[str, Any]:
        return {"position": self.position}


__all__ = [
    "EMPTY_INPUT",
    "INVALID_CHARACTER",
    "INVALID_LENGTH",
    "OVERFLOW",
    "VALUE_OUT_OF_RANGE",
    "VALUE_TOO_LARGE",
    "ChecksumError",
    "CodecError",
    "DecodeError",
    "DecodeOverflowError",
    "EmptyInputError",
    "EncodeError",
    "InvalidCharacterError",
    "InvalidLengthError",
    "ValueRangeError",
    "ValueTooLargeError",
]
