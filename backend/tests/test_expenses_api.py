"""
Integration tests for the expense endpoints.
"""

import re

import pytest


@pytest.mark.asyncio
async def test_save_and_list_expenses(client, auth_headers):
    response = await client.post("/api/save-expense", json={
        "date": "10/10/2026", "description": "Fuel", "amount": "1500.5",
    }, headers=auth_headers)

    data = response.json()
    assert data["success"] is True
    assert data["expense"]["description"] == "Fuel"
    assert data["expense"]["amount"] == 1500.5
    assert data["expense"]["date"] == "10/10/2026"

    await client.post("/api/save-expense", json={"description": "Tea"}, headers=auth_headers)

    expenses = (await client.get("/api/get-expenses", headers=auth_headers)).json()
    assert [e["description"] for e in expenses] == ["Tea", "Fuel"]
    assert expenses[0]["amount"] == 0
    assert re.fullmatch(r"\d{2}/\d{2}/\d{4}", expenses[0]["date"])


@pytest.mark.asyncio
async def test_delete_expense(client, auth_headers):
    created = (await client.post("/api/save-expense", json={
        "description": "Rent", "amount": 9000,
    }, headers=auth_headers)).json()["expense"]

    response = await client.delete(f"/api/delete-expense/{created['_id']}", headers=auth_headers)
    assert response.json() == {"success": True}

    assert (await client.get("/api/get-expenses", headers=auth_headers)).json() == []

    response = await client.delete(f"/api/delete-expense/{created['_id']}", headers=auth_headers)
    assert response.json() == {"success": False}


@pytest.mark.asyncio
async def test_delete_expense_malformed_id(client, auth_headers):
    response = await client.delete("/api/delete-expense/not-a-number", headers=auth_headers)
    assert response.json()["success"] is False
