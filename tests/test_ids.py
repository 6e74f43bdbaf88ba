"""Tests for random code generation."""

from __future__ import annotations

import threading

import pytest

from crockid import checksum
from crockid.codec import ALPHABET, MAX_COMPACT_LENGTH, U64_MAX, encode_compact
from crockid.errors import InvalidLengthError, ValueRangeError
from crockid.ids import random_below, random_bytes, random_code, random_value


class TestRandomBytes:
    def test_length(self):
        assert len(random_bytes(16)) == 16

    def test_successive_reads_differ(self):
        assert random_bytes(16) != random_bytes(16)

    @pytest.mark.parametrize("nbytes", [0, -1])
    def test_rejects_non_positive(self, nbytes):
        with pytest.raises(ValueError):
            random_bytes(nbytes)

    def test_threads_get_independent_streams(self):
        results: list[bytes] = []
        lock = threading.Lock()

        def worker() -> None:
            value = random_bytes(32)
            with lock:
                results.append(value)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(set(results)) == 8


class TestRandomBelow:
    def test_range(self):
        for bound in (1, 2, 7, 32, 1000, 2**40 + 3):
            for _ in range(20):
                assert 0 <= random_below(bound) < bound

    def test_full_u64_range(self):
        assert 0 <= random_below(U64_MAX + 1) <= U64_MAX

    @pytest.mark.parametrize("bound", [0, -3, 2**64 + 1])
    def test_invalid_bound(self, bound):
        with pytest.raises(ValueRangeError):
            random_below(bound)


class TestRandomCode:
    def test_with_checksum(self):
        code = random_code(10)
        assert len(code) == 12
        assert checksum.validate(code)

    def test_without_checksum(self):
        code = random_code(6, with_checksum=False)
        assert len(code) == 6
        assert all(c in ALPHABET for c in code)

    def test_codes_differ(self):
        codes = {random_code(12) for _ in range(100)}
        assert len(codes) == 100

    def test_invalid_length(self):
        with pytest.raises(InvalidLengthError):
            random_code(0)
        with pytest.raises(InvalidLengthError):
            random_code(2.0)


class TestRandomValue:
    def test_fits_requested_width(self):
        for length in (1, 4, MAX_COMPACT_LENGTH):
            for _ in range(20):
                assert len(encode_compact(random_value(length))) <= length

    @pytest.mark.parametrize("length", [0, MAX_COMPACT_LENGTH + 1, 2.0, True])
    def test_invalid_length(self, length):
        with pytest.raises(InvalidLengthError):
            random_value(length)
