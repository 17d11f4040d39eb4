# tests/test_routes.py
import asyncio
import json

import pytest
from fastapi.testclient import TestClient

from receipt_processor.main import app
from receipt_processor.routes.receipts import get_store
from receipt_processor.store import ReceiptStore

TARGET = {
    "retailer": "Target",
    "purchaseDate": "2022-01-01",
    "purchaseTime": "13:01",
    "items": [
        {"shortDescription": "Mountain Dew 12PK", "price": "6.49"},
        {"shortDescription": "Emils Cheese Pizza", "price": "12.25"},
        {"shortDescription": "Knorr Creamy Chicken", "price": "1.26"},
        {"shortDescription": "Doritos Nacho Cheese", "price": "3.35"},
        {"shortDescription": "   Klarbrunn 12-PK 12 FL OZ  ", "price": "12.00"},
    ],
    "total": "35.35",
}

@pytest.fixture
def store():
    return ReceiptStore()

@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()

def test_process_then_points(client):
    r = client.post("/receipts/process", json=TARGET)
    assert r.status_code == 200
    rid = r.json()["id"]

    r = client.get(f"/receipts/{rid}/points")
    assert r.status_code == 200
    assert r.json() == {"points": 28}

def test_identical_payloads_are_stored_separately(client, store):
    a = client.post("/receipts/process", json=TARGET).json()["id"]
    b = client.post("/receipts/process", json=TARGET).json()["id"]
    assert a != b
    assert len(store) == 2
    assert client.get(f"/receipts/{a}/points").json() == {"points": 28}
    assert client.get(f"/receipts/{b}/points").json() == {"points": 28}

@pytest.mark.parametrize("body", [
    b"",
    b"{not json",
    b"[]",
    json.dumps({"retailer": 12}).encode(),
    json.dumps({"items": [{"shortDescription": "x", "price": 1.25}]}).encode(),
])
def test_malformed_receipt_is_rejected(client, store, body):
    r = client.post("/receipts/process", content=body, headers={"Content-Type": "application/json"})
    assert r.status_code == 400
    assert r.text == "invalid receipt"
    assert r.headers["content-type"].startswith("text/plain")
    assert len(store) == 0

def test_receipt_without_fields_is_accepted(client, store):
    r = client.post("/receipts/process", json={"unknown": "ignored", "retailer": None})
    assert r.status_code == 200
    assert len(store) == 1

def test_unknown_id_is_404(client):
    r = client.get("/receipts/0190d7a0-0000-7000-8000-000000000000/points")
    assert r.status_code == 404
    assert r.text == "Id not found"

def test_unscoreable_receipt_is_422(client):
    rid = client.post("/receipts/process", json={**TARGET, "total": "abc"}).json()["id"]
    r = client.get(f"/receipts/{rid}/points")
    assert r.status_code == 422
    assert r.text == "receipt could not be scored"

def test_health_reports_receipt_count(client):
    client.post("/receipts/process", json=TARGET)
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"ok": True, "receipts": 1}

@pytest.mark.parametrize("body", [
    b"null",
    b'{"retailer": "Target"} trailing',
    b'{"retailer": "Target"}{"retailer": "Target"}',
    b'{"retailer": "Tar\xffget"}',
])
def test_strict_decoding_rejects_body(client, store, body):
    r = client.post("/receipts/process", content=body, headers={"Content-Type": "application/json"})
    assert r.status_code == 400
    assert len(store) == 0

def test_json_keys_are_case_sensitive(client, store):
    rid = client.post("/receipts/process", json={**TARGET, "Retailer": "Walmart", "retailer": None}).json()["id"]
    assert store.find_by_id(rid).receipt.retailer == ""
    assert client.get(f"/receipts/{rid}/points").json() == {"points": 22}

def test_submit_runs_off_the_event_loop(client, store, monkeypatch):
    seen = {}
    original = store.submit

    def submit(receipt):
        try:
            asyncio.get_running_loop()
            seen["on_loop"] = True
        except RuntimeError:
            seen["on_loop"] = False
        return original(receipt)

    monkeypatch.setattr(store, "submit", submit)
    r = client.post("/receipts/process", json=TARGET)
    assert r.status_code == 200
    assert seen == {"on_loop": False}
