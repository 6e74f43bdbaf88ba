"""Tests for ticket ID generation and decoding."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from crockid import checksum
from crockid.codec import encode_fixed
from crockid.ticketid import (
    TOTAL_LENGTH,
    TicketID,
    TicketIDError,
    decode_ticket_id,
    extract_components,
    format_ticket_id,
    generate,
    generate_sequence,
    is_valid_ticket_id,
)

_EVENT_DATE = date(2025, 6, 1)
_TICKET = "0001AK9ZZ90070003V00013X"


@pytest.fixture()
def ticket_id() -> str:
    return generate("42", _EVENT_DATE, "7", "123", 1)


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------


class TestGenerate:
    def test_known_layout(self, ticket_id):
        assert ticket_id == _TICKET
        assert len(ticket_id) == TOTAL_LENGTH == 24

    def test_checksum_valid(self, ticket_id):
        assert checksum.validate(ticket_id)

    def test_datetime_accepted(self):
        assert generate("42", datetime(2025, 6, 1, 18, 30), "7", "123", 1) == _TICKET

    def test_free_form_ids_are_hashed(self):
        a = generate("concert-2025", _EVENT_DATE, "vip", "A-12", 5)
        b = generate("concert-2025", _EVENT_DATE, "vip", "A-12", 5)
        c = generate("concert-2026", _EVENT_DATE, "vip", "A-12", 5)
        assert a == b
        assert a[:5] != c[:5]
        assert checksum.validate(a)

    def test_sequence_wraps(self):
        wrapped = generate("1", _EVENT_DATE, "1", "1", 32**4 + 3)
        direct = generate("1", _EVENT_DATE, "1", "1", 3)
        assert wrapped == direct

    @pytest.mark.parametrize(
        ("kwargs", "code"),
        [
            ({"event_id": ""}, "INVALID_EVENT_ID"),
            ({"category_id": ""}, "INVALID_CATEGORY"),
            ({"seat_id": ""}, "INVALID_SEAT"),
            ({"sequence": -1}, "INVALID_SEQUENCE"),
            ({"event_id": str(32**5)}, "VALUE_OUT_OF_RANGE"),
            ({"category_id": str(32**3)}, "VALUE_OUT_OF_RANGE"),
            ({"seat_id": "99999999999"}, "VALUE_OUT_OF_RANGE"),
            ({"event_date": date(1969, 12, 31)}, "INVALID_DATE"),
            ({"event_date": date(2101, 1, 1)}, "INVALID_DATE"),
        ],
    )
    def test_invalid_inputs(self, kwargs, code):
        params = {
            "event_id": "42",
            "event_date": _EVENT_DATE,
            "category_id": "7",
            "seat_id": "123",
            "sequence": 1,
        }
        params.update(kwargs)
        with pytest.raises(TicketIDError) as exc_info:
            generate(**params)
        assert exc_info.value.code == code
        assert str(exc_info.value).startswith(code)

    def test_largest_numeric_ids(self):
        ticket = generate(str(32**5 - 1), _EVENT_DATE, str(32**3 - 1), str(32**5 - 1), 0)
        decoded = decode_ticket_id(ticket)
        assert decoded.event_id == f"EVT{32**5 - 1:06d}"
        assert decoded.category_id == "CAT32767"


class TestGenerateSequence:
    def test_range(self):
        for _ in range(50):
            assert 0 <= generate_sequence() < 32**4


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


class TestFormat:
    def test_dashes_between_components(self, ticket_id):
        assert format_ticket_id(ticket_id) == "0001A-K9ZZ9-007-0003V-0001-3X"

    def test_wrong_length_unchanged(self):
        assert format_ticket_id("ABC") == "ABC"

    def test_formatted_form_decodes(self, ticket_id):
        assert decode_ticket_id(format_ticket_id(ticket_id)).encoded_id == ticket_id


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


class TestDecode:
    def test_components(self, ticket_id):
        ticket = decode_ticket_id(ticket_id)
        assert isinstance(ticket, TicketID)
        assert ticket.event_id == "EVT000042"
        assert ticket.event_date == _EVENT_DATE
        assert ticket.category_id == "CAT000007"
        assert ticket.seat_id == "SEAT000123"
        assert ticket.sequence == 1
        assert ticket.encoded_id == ticket_id
        assert ticket.checksum == "3X"

    def test_lowercase_and_dashes(self, ticket_id):
        ticket = decode_ticket_id(format_ticket_id(ticket_id).lower())
        assert ticket.event_id == "EVT000042"

    def test_camel_case_json(self, ticket_id):
        payload = decode_ticket_id(ticket_id).model_dump(mode="json", by_alias=True)
        assert payload["eventId"] == "EVT000042"
        assert payload["eventDate"] == "2025-06-01"
        assert payload["encodedId"] == ticket_id

    def test_wrong_length(self):
        with pytest.raises(TicketIDError) as exc_info:
            decode_ticket_id("ABC")
        assert exc_info.value.code == "INVALID_LENGTH"
        assert exc_info.value.details == {"expected": 24, "actual": 3}

    def test_bad_checksum(self, ticket_id):
        corrupted = "1" + ticket_id[1:]
        with pytest.raises(TicketIDError) as exc_info:
            decode_ticket_id(corrupted)
        assert exc_info.value.code == "INVALID_CHECKSUM"

    def test_impossible_date(self):
        # 2025-02-30 packs into the date field but is not a calendar day.
        data = "0001A" + "K9ZKP" + "007" + "0003V" + "0001"
        ticket = checksum.append(data)
        with pytest.raises(TicketIDError) as exc_info:
            decode_ticket_id(ticket)
        assert exc_info.value.code == "INVALID_DATE"

    @pytest.mark.parametrize("packed", [19691231, 21010101])
    def test_year_out_of_range(self, packed):
        data = "0001A" + encode_fixed(packed, 5) + "007" + "0003V" + "0001"
        ticket = checksum.append(data)
        assert checksum.validate(ticket)
        with pytest.raises(TicketIDError) as exc_info:
            decode_ticket_id(ticket)
        assert exc_info.value.code == "INVALID_DATE"
        assert "year out of range" in exc_info.value.message

    def test_month_out_of_range(self):
        ticket = checksum.append("0001A" + encode_fixed(20251301, 5) + "007" + "0003V" + "0001")
        with pytest.raises(TicketIDError) as exc_info:
            decode_ticket_id(ticket)
        assert exc_info.value.code == "INVALID_DATE"

    def test_extract_components(self, ticket_id):
        assert extract_components(ticket_id) == {
            "event_id": "0001A",
            "event_date": "K9ZZ9",
            "category": "007",
            "seat_id": "0003V",
            "sequence": "0001",
            "checksum": "3X",
        }

    def test_extract_components_wrong_length(self):
        assert extract_components("ABC") is None


class TestIsValid:
    def test_valid(self, ticket_id):
        assert is_valid_ticket_id(ticket_id)
        assert is_valid_ticket_id(format_ticket_id(ticket_id))

    def test_invalid(self, ticket_id):
        assert not is_valid_ticket_id(ticket_id[:-1])
        assert not is_valid_ticket_id("U" + ticket_id[1:])
        assert not is_valid_ticket_id(ticket_id[:-2] + "ZZ")
