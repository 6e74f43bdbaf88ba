"""
crockid - human-readable identifiers

Crockford Base32 encoding of unsigned 64-bit integers with look-alike
correction, plus a 2-symbol CRC-10 checksum that catches typos, swapped and
doubled characters.  Suitable for order codes, license keys and short URLs.
"""

from crockid.checksum import append, calculate, extract, strip, validate
from crockid.codec import (
    ALPHABET,
    decode,
    encode_compact,
    encode_fixed,
    group,
    is_valid_char,
    normalize,
)
from crockid.errors import (
    ChecksumError,
    CodecError,
    DecodeError,
    DecodeOverflowError,
    EmptyInputError,
    EncodeError,
    InvalidCharacterError,
    InvalidLengthError,
    ValueRangeError,
    ValueTooLargeError,
)
from crockid.version import __version__

__all__ = [
    "ALPHABET",
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
    "__version__",
    "append",
    "calculate",
    "decode",
    "encode_compact",
    "encode_fixed",
    "extract",
    "group",
    "is_valid_char",
    "normalize",
    "strip",
    "validate",
]
