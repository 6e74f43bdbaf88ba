"""crockid quickstart – order codes with typo detection.

Run:
    uv run uvicorn examples.quickstart:app --reload

Open http://localhost:8000/docs to interact with the API.

Order flow:
    1. POST /orders                 → new order with a checksummed code
    2. (customer reads the code over the phone, maybe with typos)
    3. GET  /orders/{code}          → look the order up; typos are rejected
"""

from fastapi import HTTPException

from crockid import checksum, codec
from crockid.app import create_app
from crockid.ids import random_value

app = create_app()

_ORDERS: dict[int, dict] = {}


@app.post("/orders", status_code=201)
def create_order(item: str):
    """Store an order under a random 40-bit id and hand back a readable code."""
    order_id = random_value(8)
    _ORDERS[order_id] = {"item": item}
    code = checksum.append(codec.encode_fixed(order_id, 8))
    return {"code": codec.group(code), "item": item}


@app.get("/orders/{code}")
def read_order(code: str):
    """Accepts any casing, dashes, and O/I/L look-alikes."""
    normalized = codec.normalize(code)
    if not checksum.validate(normalized):
        raise HTTPException(status_code=404, detail="unknown order code (check for typos)")
    order = _ORDERS.get(codec.decode(checksum.strip(normalized)))
    if order is None:
        raise HTTPException(status_code=404, detail="unknown order code")
    return {"code": normalized, **order}
