"""Random Base32 codes (license keys, voucher codes, short links).

Scheme
------
* Draw uniformly random symbols from the Crockford alphabet (5 bits each).
* Optionally append the 2-symbol CRC-10 checksum so typos are caught before
  any lookup happens.

Randomness is not a uniqueness guarantee; callers that need unique codes must
still check for collisions (or derive codes from a sequence instead).

Implementation notes
--------------------
* Per-thread XOF reader using cryptography's XOFHash(SHAKE128).
* A process-wide master key is generated from os.urandom(32) at import time.
* Each stream is domain-separated and bound to (master_key, tid, per-reader OS randomness).
* Fork safety: the thread-local reader is dropped in the child via
  os.register_at_fork, so a child never replays the parent's stream. Where the
  hook is unavailable we fall back to comparing PIDs.
"""

from __future__ import annotations

import contextlib
import os
import sys
import threading
import warnings

from cryptography.hazmat.primitives import hashes

from crockid import checksum
from crockid.codec import ALPHABET, MAX_COMPACT_LENGTH, U64_MAX
from crockid.errors import InvalidLengthError, ValueRangeError

_DOMAIN = b"crockid:codes:v1\x00"

_MASTER_KEY = os.urandom(32)

_tls = threading.local()

_U64_MASK = (1 << 64) - 1


def _u64le(x: int) -> bytes:
    return (x & _U64_MASK).to_bytes(8, "little", signed=False)


def _clear_tls_after_fork_child() -> None:
    with contextlib.suppress(Exception):
        _tls.__dict__.clear()


_FORK_HOOK_INSTALLED = False
try:
    os.register_at_fork(after_in_child=_clear_tls_after_fork_child)
    _FORK_HOOK_INSTALLED = True
except AttributeError:
    # register_at_fork is not available on this platform.
    _FORK_HOOK_INSTALLED = False

if not _FORK_HOOK_INSTALLED and hasattr(os, "fork"):
    warnings.warn(
        "os.register_at_fork is unavailable; falling back to PID checks so a forked "
        "child never reuses the parent's random stream.",
        RuntimeWarning,
        stacklevel=2,
    )


class _ShakeXOFReader:
    __slots__ = ("_xof",)

    def __init__(self, tid: int) -> None:
        alg = hashes.SHAKE128(digest_size=sys.maxsize)
        xof = hashes.XOFHash(alg)

        # domain || master_key || tid || randombytes(16)
        xof.update(_DOMAIN)
        xof.update(_MASTER_KEY)
        xof.update(_u64le(tid))
        xof.update(os.urandom(16))

        self._xof = xof

    def read(self, nbytes: int) -> bytes:
        return self._xof.squeeze(nbytes)


def _thread_reader() -> _ShakeXOFReader:
    reader = getattr(_tls, "reader", None)
    if reader is not None:
        if _FORK_HOOK_INSTALLED:
            return reader
        if getattr(_tls, "pid", None) == os.getpid():
            return reader

    reader = _ShakeXOFReader(threading.get_ident())
    _tls.reader = reader
    if not _FORK_HOOK_INSTALLED:
        _tls.pid = os.getpid()
    return reader


def random_bytes(nbytes: int) -> bytes:
    """Return *nbytes* random bytes from the per-thread XOF stream."""
    if nbytes <= 0:
        raise ValueError("nbytes must be > 0")
    return _thread_reader().read(nbytes)


def random_below(bound: int) -> int:
    """Return a uniform integer in ``[0, bound)`` for ``1 <= bound <= 2**64``."""
    if not 1 <= bound <= U64_MAX + 1:
        raise ValueRangeError(bound, U64_MAX + 1)
    if bound == 1:
        return 0
    # Rejection sampling over the smallest power-of-two range covering bound.
    nbits = (bound - 1).bit_length()
    nbytes = (nbits + 7) // 8
    mask = (1 << nbits) - 1
    while True:
        candidate = int.from_bytes(random_bytes(nbytes), "big") & mask
        if candidate < bound:
            return candidate


def random_code(length: int = 8, *, with_checksum: bool = True) -> str:
    """Return *length* random symbols, plus a checksum when *with_checksum* is set.

    >>> code = random_code(10)
    >>> len(code), checksum.validate(code)
    (12, True)
    """
    if not isinstance(length, int) or isinstance(length, bool) or length < 1:
        raise InvalidLengthError(length)
    # One byte per symbol; the top three bits are discarded.
    raw = random_bytes(length)
    code = "".join(ALPHABET[b & 0x1F] for b in raw)
    return checksum.append(code) if with_checksum else code


def random_value(length: int = MAX_COMPACT_LENGTH) -> int:
    """Return a random integer that encodes in at most *length* symbols."""
    if isinstance(length, bool) or not isinstance(length, int):
        raise InvalidLengthError(length)
    if not 1 <= length <= MAX_COMPACT_LENGTH:
        raise InvalidLengthError(length)
    return random_below(min(32**length, U64_MAX + 1))


__all__ = [
    "random_below",
    "random_bytes",
    "random_code",
    "random_value",
]
