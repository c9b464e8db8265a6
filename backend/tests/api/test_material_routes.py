"""Material Routes: submission, transfer and history over HTTP.

Invariants:
    - POST /materials needs a registered caller; the caller becomes owner
    - POST /materials/{id}/transfers enforces the full guard chain
    - Failed transfers leave owner and history unchanged
"""

import logging

from tests.api.http_helpers import as_participant


async def _submit(client, owner: str = "GALICE") -> int:
    res = await client.post(
        "/api/v1/materials",
        json={"waste_type": "metal", "weight": 1500, "description": "cans"},
        headers=as_participant(owner),
    )
    assert res.status_code == 201
    return res.json()["id"]


async def test_submit_material_sets_owner(client, registered):
    waste_id = await _submit(client)
    res = await client.get(f"/api/v1/materials/{waste_id}")
    assert res.status_code == 200
    assert res.json()["owner"] == "GALICE"
    assert res.json()["waste_type"] == "metal"


async def test_submit_without_header_returns_401(client):
    res = await client.post(
        "/api/v1/materials", json={"waste_type": "paper", "weight": 10},
    )
    assert res.status_code == 401


async def test_submit_rejects_zero_weight(client, registered):
    res = await client.post(
        "/api/v1/materials", json={"waste_type": "paper", "weight": 0},
        headers=as_participant("GALICE"),
    )
    assert res.status_code == 400


async def test_unknown_material_returns_404(client):
    res = await client.get("/api/v1/materials/42")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "MATERIAL_NOT_FOUND"


async def test_history_empty_before_any_transfer(client, registered):
    waste_id = await _submit(client)
    res = await client.get(f"/api/v1/materials/{waste_id}/transfers")
    assert res.status_code == 200
    assert res.json() == {"waste_id": waste_id, "transfers": []}


async def test_transfer_then_repeat_fails_not_owner(client, registered):
    waste_id = await _submit(client)
    res = await client.post(
        f"/api/v1/materials/{waste_id}/transfers",
        json={"from": "GALICE", "to": "GBOB", "note": "note"},
        headers=as_participant("GALICE"),
    )
    assert res.status_code == 200
    assert res.json()["owner"] == "GBOB"

    res = await client.post(
        f"/api/v1/materials/{waste_id}/transfers",
        json={"from": "GALICE", "to": "GBOB", "note": "note2"},
        headers=as_participant("GALICE"),
    )
    assert res.status_code == 403
    assert res.json()["error"]["code"] == "NOT_OWNER"

    history = (await client.get(f"/api/v1/materials/{waste_id}/transfers")).json()
    assert len(history["transfers"]) == 1
    assert history["transfers"][0]["from"] == "GALICE"
    assert history["transfers"][0]["to"] == "GBOB"
    assert history["transfers"][0]["note"] == "note"


async def test_transfer_with_foreign_header_returns_401(client, registered):
    waste_id = await _submit(client)
    res = await client.post(
        f"/api/v1/materials/{waste_id}/transfers",
        json={"from": "GALICE", "to": "GBOB"},
        headers=as_participant("GBOB"),
    )
    assert res.status_code == 401
    material = (await client.get(f"/api/v1/materials/{waste_id}")).json()
    assert material["owner"] == "GALICE"


async def test_transfer_to_unregistered_receiver_returns_400(client, registered):
    waste_id = await _submit(client)
    res = await client.post(
        f"/api/v1/materials/{waste_id}/transfers",
        json={"from": "GALICE", "to": "GCAROL"},
        headers=as_participant("GALICE"),
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "RECEIVER_NOT_REGISTERED"


async def test_unregistered_sender_reported_before_receiver(client):
    res = await client.post(
        "/api/v1/materials/1/transfers",
        json={"from": "GX", "to": "GY"},
        headers=as_participant("GX"),
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "SENDER_NOT_REGISTERED"


async def test_rejected_transfer_logs_address_and_waste_id(client, registered, caplog):
    waste_id = await _submit(client)
    with caplog.at_level(logging.WARNING, logger="scavenger.api.error_handlers"):
        res = await client.post(
            f"/api/v1/materials/{waste_id}/transfers",
            json={"from": "GBOB", "to": "GALICE"},
            headers=as_participant("GBOB"),
        )
    assert res.status_code == 403

    record = next(
        r for r in caplog.records if r.name == "scavenger.api.error_handlers"
    )
    assert record.levelno == logging.WARNING
    assert record.error_code == "NOT_OWNER"
    assert record.address == "GBOB"
    assert record.waste_id == waste_id
    assert record.path == f"/api/v1/materials/{waste_id}/transfers"
