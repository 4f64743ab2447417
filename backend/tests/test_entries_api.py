"""
Integration tests for the entry endpoints.
"""

import re
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import SQLAlchemyError

from backend.app.services.ledger_store import LedgerStore
from backend.app.services.uploads import UploadStorage


async def save(client, headers, payload):
    response = await client.post("/api/save-entry", json=payload, headers=headers)
    assert response.status_code == 200
    return response.json()


async def list_entries(client, headers):
    response = await client.get("/api/get-entries", headers=headers)
    assert response.status_code == 200
    return response.json()


@pytest.mark.asyncio
async def test_save_scenario_computes_totals(client, auth_headers):
    data = await save(client, auth_headers, {
        "uniqueID": "NSGD-1",
        "amount": 1000,
        "payments": [{"paid": 400, "expenditure": 100}],
    })

    assert data["success"] is True
    entry = data["entry"]
    assert entry["uniqueID"] == "NSGD-1"
    assert entry["paid"] == 400
    assert entry["expenditure"] == 100
    assert entry["due"] == 600
    assert entry["balance"] == 300
    assert entry["payments"][0]["mode"] == "Cash"
    assert re.fullmatch(r"\d{2}/\d{2}/\d{4}", entry["payments"][0]["date"])
    assert "_id" in entry


@pytest.mark.asyncio
async def test_save_without_uid_generates_one(client, auth_headers):
    data = await save(client, auth_headers, {"amount": 50})

    assert data["success"] is True
    assert re.fullmatch(r"NSGD-\d{5}", data["entry"]["uniqueID"])
    assert data["entry"]["name"] == "Unnamed"
    assert data["entry"]["contact"] == ""


@pytest.mark.asyncio
async def test_generated_uid_skips_taken_keys(client, auth_headers):
    await save(client, auth_headers, {"uniqueID": "NSGD-11111", "name": "First"})

    with patch(
        "backend.app.domain.ledger.ledger_service.generate_unique_id",
        side_effect=["NSGD-11111", "NSGD-22222"],
    ):
        data = await save(client, auth_headers, {"name": "Second"})

    assert data["entry"]["uniqueID"] == "NSGD-22222"
    names = {e["uniqueID"]: e["name"] for e in await list_entries(client, auth_headers)}
    assert names == {"NSGD-11111": "First", "NSGD-22222": "Second"}


@pytest.mark.asyncio
async def test_identity_fields_are_sticky(client, auth_headers):
    await save(client, auth_headers, {
        "uniqueID": "X",
        "name": "Bob",
        "contact": "555-0100",
        "agent": "Ravi",
        "agentPhone": "555-0199",
        "amount": 300,
    })

    data = await save(client, auth_headers, {"uniqueID": "X"})

    entry = data["entry"]
    assert entry["name"] == "Bob"
    assert entry["contact"] == "555-0100"
    assert entry["agent"] == "Ravi"
    assert entry["agentPhone"] == "555-0199"
    assert entry["amount"] == 300

    entries = await list_entries(client, auth_headers)
    assert len(entries) == 1
    assert entries[0]["name"] == "Bob"


@pytest.mark.asyncio
async def test_update_replaces_payments_and_recomputes(client, auth_headers):
    await save(client, auth_headers, {
        "uniqueID": "NSGD-7", "amount": 1000, "payments": [{"paid": 400}],
    })

    data = await save(client, auth_headers, {
        "uniqueID": "NSGD-7",
        "amount": 1200,
        "payments": [{"paid": 400}, {"paid": 100, "expenditure": 30, "mode": "UPI"}],
    })

    entry = data["entry"]
    assert [p["paid"] for p in entry["payments"]] == [400, 100]
    assert entry["paid"] == 500
    assert entry["due"] == 700
    assert entry["balance"] == 470


@pytest.mark.asyncio
async def test_entries_listed_newest_first(client, auth_headers):
    for uid in ("NSGD-A", "NSGD-B", "NSGD-C"):
        await save(client, auth_headers, {"uniqueID": uid})

    uids = [e["uniqueID"] for e in await list_entries(client, auth_headers)]
    assert uids == ["NSGD-C", "NSGD-B", "NSGD-A"]


@pytest.mark.asyncio
async def test_update_history(client, auth_headers):
    await save(client, auth_headers, {
        "uniqueID": "NSGD-3", "name": "Meera", "amount": 800, "date": "01/09/2026",
    })

    response = await client.post("/api/update-history", json={
        "uniqueID": "NSGD-3",
        "payments": [{"paid": 300, "expenditure": 20, "date": "05/09/2026"}, {"paid": "200"}],
    }, headers=auth_headers)

    data = response.json()
    assert data["success"] is True
    entry = data["entry"]
    assert entry["name"] == "Meera"
    assert entry["amount"] == 800
    assert entry["date"] == "01/09/2026"
    assert entry["paid"] == 500
    assert entry["expenditure"] == 20
    assert entry["due"] == 300
    assert entry["balance"] == 480


@pytest.mark.asyncio
async def test_update_history_unknown_uid_writes_nothing(client, auth_headers):
    response = await client.post("/api/update-history", json={
        "uniqueID": "NSGD-404", "payments": [{"paid": 10}],
    }, headers=auth_headers)

    assert response.status_code == 200
    assert response.json() == {"success": False, "msg": "Entry not found"}
    assert await list_entries(client, auth_headers) == []


@pytest.mark.asyncio
async def test_delete_entry_removes_it_and_its_uploads(client, auth_headers, upload_storage):
    await save(client, auth_headers, {"uniqueID": "NSGD-1"})
    await save(client, auth_headers, {"uniqueID": "NSGD-2"})
    upload_storage.save("NSGD-1", "receipt.pdf", b"%PDF")

    response = await client.delete("/api/delete-entry/NSGD-1", headers=auth_headers)

    assert response.json() == {"success": True}
    uids = [e["uniqueID"] for e in await list_entries(client, auth_headers)]
    assert uids == ["NSGD-2"]
    assert not upload_storage.area("NSGD-1").exists()


@pytest.mark.asyncio
async def test_delete_unknown_entry(client, auth_headers):
    response = await client.delete("/api/delete-entry/NSGD-0", headers=auth_headers)
    assert response.json() == {"success": False}


@pytest.mark.asyncio
async def test_save_persistence_failure_is_reported(client, auth_headers):
    with patch.object(LedgerStore, "upsert", AsyncMock(side_effect=SQLAlchemyError("boom"))):
        data = await save(client, auth_headers, {"uniqueID": "NSGD-9"})

    assert data == {"success": False}


@pytest.mark.asyncio
async def test_list_failure_returns_empty_list(client, auth_headers):
    with patch.object(LedgerStore, "find_all", AsyncMock(side_effect=SQLAlchemyError("down"))):
        assert await list_entries(client, auth_headers) == []


@pytest.mark.asyncio
async def test_save_response_matches_listed_entry_shape(client, auth_headers):
    data = await save(client, auth_headers, {"uniqueID": "NSGD-8", "name": "Lata"})

    entry = data["entry"]
    assert entry["agent"] is None
    assert entry["agentPhone"] is None

    listed = (await list_entries(client, auth_headers))[0]
    assert set(entry) == set(listed)

    response = await client.post("/api/update-history", json={
        "uniqueID": "NSGD-8", "payments": [],
    }, headers=auth_headers)
    assert set(response.json()["entry"]) == set(listed)


@pytest.mark.asyncio
async def test_delete_dot_dot_uid_keeps_shared_uploads(client, auth_headers, upload_storage):
    upload_storage.save(None, "a.pdf", b"%PDF")

    response = await client.delete("/api/delete-entry/%2E%2E", headers=auth_headers)

    assert response.json() == {"success": False}
    assert upload_storage.area("general").is_dir()
    assert any(upload_storage.area("general").iterdir())


@pytest.mark.asyncio
async def test_delete_reports_found_when_upload_cleanup_fails(client, auth_headers):
    await save(client, auth_headers, {"uniqueID": "NSGD-6"})

    with patch.object(UploadStorage, "remove_area", side_effect=OSError("busy")):
        response = await client.delete("/api/delete-entry/NSGD-6", headers=auth_headers)

    assert response.json() == {"success": True}
    assert await list_entries(client, auth_headers) == []
