"""Tests for the HTTP API."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from crockid.app import create_app
from crockid.config import Settings
from crockid.version import __version__


@pytest.fixture()
def client():
    return TestClient(create_app(Settings()))


class TestHealth:
    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "healthy", "version": __version__}

    def test_trace_id_generated(self, client):
        resp = client.get("/health")
        assert len(resp.headers["X-Trace-Id"]) == 32

    def test_trace_id_echoed(self, client):
        resp = client.get("/health", headers={"X-Trace-Id": "abc123"})
        assert resp.headers["X-Trace-Id"] == "abc123"


# ---------------------------------------------------------------------------
# /encode and /decode
# ---------------------------------------------------------------------------


class TestEncode:
    def test_defaults(self, client):
        resp = client.post("/encode", json={"value": 12345})
        assert resp.status_code == 200
        assert resp.json() == {"code": "00000C1S69", "value": 12345}

    def test_compact_without_checksum(self, client):
        resp = client.post("/encode", json={"value": 99999, "compact": True, "checksum": False})
        assert resp.json()["code"] == "31MZ"

    def test_grouped(self, client):
        resp = client.post("/encode", json={"value": 12345, "group": True})
        assert resp.json()["code"] == "00000-C1S69"

    def test_too_large_for_width(self, client):
        resp = client.post("/encode", json={"value": 1024, "length": 2, "checksum": False})
        assert resp.status_code == 422
        detail = resp.json()["detail"]
        assert detail["code"] == "VALUE_TOO_LARGE"
        assert detail["length"] == 2

    def test_negative_rejected_by_schema(self, client):
        resp = client.post("/encode", json={"value": -1})
        assert resp.status_code == 422

    def test_configured_defaults(self):
        settings = Settings(default_length=6, checksum_by_default=False)
        client = TestClient(create_app(settings))
        assert client.post("/encode", json={"value": 12345}).json()["code"] == "000C1S"


class TestDecode:
    def test_decode(self, client):
        resp = client.post("/decode", json={"code": "00-0c1s"})
        assert resp.status_code == 200
        assert resp.json() == {"value": 12345, "normalized": "000C1S"}

    def test_decode_with_checksum(self, client):
        resp = client.post("/decode", json={"code": "00000-c1s69", "checksum": True})
        assert resp.json()["value"] == 12345

    def test_bad_checksum(self, client):
        resp = client.post("/decode", json={"code": "00000C1S70", "checksum": True})
        assert resp.status_code == 422
        assert resp.json()["detail"]["code"] == "INVALID_CHECKSUM"

    def test_invalid_character(self, client):
        resp = client.post("/decode", json={"code": "ABU"})
        assert resp.status_code == 422
        assert resp.json()["detail"] == {
            "code": "INVALID_CHARACTER",
            "message": "invalid Base32 character 'U' at position 2",
            "char": "U",
            "position": 2,
        }

    def test_empty(self, client):
        resp = client.post("/decode", json={"code": "--"})
        assert resp.status_code == 422
        assert resp.json()["detail"]["code"] == "EMPTY_INPUT"

    def test_overflow(self, client):
        resp = client.post("/decode", json={"code": "G000000000000"})
        assert resp.json()["detail"] == {
            "code": "OVERFLOW",
            "message": "value overflow at position 12",
            "position": 12,
        }


# ---------------------------------------------------------------------------
# /checksum and /validate
# ---------------------------------------------------------------------------


class TestChecksum:
    def test_compute(self, client):
        resp = client.post("/checksum", json={"data": "ABC123"})
        assert resp.status_code == 200
        assert resp.json() == {"checksum": "TF", "code": "ABC123TF"}

    def test_invalid_data(self, client):
        resp = client.post("/checksum", json={"data": "ORD-123"})
        assert resp.status_code == 422
        assert resp.json()["detail"]["position"] == 3


class TestValidate:
    def test_batch(self, client):
        resp = client.post("/validate", json={"codes": ["ABC123TF", "abc-123-tf", "BAC123TF", "!"]})
        assert resp.status_code == 200
        assert [r["valid"] for r in resp.json()["results"]] == [True, True, False, False]

    def test_empty_batch(self, client):
        assert client.post("/validate", json={"codes": []}).status_code == 422

    def test_batch_limit(self):
        client = TestClient(create_app(Settings(api_max_batch=2)))
        resp = client.post("/validate", json={"codes": ["ABC123TF"] * 3})
        assert resp.status_code == 413


# ---------------------------------------------------------------------------
# /tickets
# ---------------------------------------------------------------------------


_TICKET_BODY = {
    "event_id": "42",
    "event_date": "2025-06-01",
    "category_id": "7",
    "seat_id": "123",
    "sequence": 1,
}


class TestTickets:
    def test_create(self, client):
        resp = client.post("/tickets", json=_TICKET_BODY)
        assert resp.status_code == 201
        assert resp.json() == {
            "ticket_id": "0001AK9ZZ90070003V00013X",
            "formatted": "0001A-K9ZZ9-007-0003V-0001-3X",
        }

    def test_create_generated_sequence(self, client):
        body = {k: v for k, v in _TICKET_BODY.items() if k != "sequence"}
        resp = client.post("/tickets", json=body)
        assert resp.status_code == 201
        ticket_id = resp.json()["ticket_id"]
        assert client.get(f"/tickets/{ticket_id}").status_code == 200

    def test_create_out_of_range(self, client):
        resp = client.post("/tickets", json={**_TICKET_BODY, "event_id": str(32**5)})
        assert resp.status_code == 422
        assert resp.json()["detail"]["code"] == "VALUE_OUT_OF_RANGE"

    def test_create_bad_year(self, client):
        resp = client.post("/tickets", json={**_TICKET_BODY, "event_date": "1969-12-31"})
        assert resp.status_code == 422
        assert resp.json()["detail"]["code"] == "INVALID_DATE"

    def test_read(self, client):
        resp = client.get("/tickets/0001A-K9ZZ9-007-0003V-0001-3X")
        assert resp.status_code == 200
        data = resp.json()
        assert data["eventId"] == "EVT000042"
        assert data["eventDate"] == "2025-06-01"
        assert data["categoryId"] == "CAT000007"
        assert data["seatId"] == "SEAT000123"
        assert data["sequence"] == 1
        assert data["encodedId"] == "0001AK9ZZ90070003V00013X"

    def test_read_bad_checksum(self, client):
        resp = client.get("/tickets/1001AK9ZZ90070003V00013X")
        assert resp.status_code == 422
        assert resp.json()["detail"]["code"] == "INVALID_CHECKSUM"

    def test_read_wrong_length(self, client):
        resp = client.get("/tickets/ABC")
        assert resp.json()["detail"]["code"] == "INVALID_LENGTH"
