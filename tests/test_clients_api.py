"""Tests for consultant client endpoints."""

import pytest

CLIENT = {
    "name": "Ana",
    "company": "Acme Ltda",
    "email": "ana@acme.com",
    "contract_value": "1500.00",
    "commission_rate": "10",
}


@pytest.mark.asyncio
async def test_create_client_generates_token(api):
    response = await api.post("/api/v1/clients", json=CLIENT)

    assert response.status_code == 201
    data = response.json()
    assert data["access_token"]
    assert data["is_active"] is True


@pytest.mark.asyncio
async def test_linked_login_cannot_be_reused_on_create(api):
    first = await api.post("/api/v1/clients", json={**CLIENT, "auth_user_id": "u1"})
    assert first.status_code == 201

    response = await api.post(
        "/api/v1/clients",
        json={**CLIENT, "name": "Bruno", "company": "Beta SA", "auth_user_id": "u1"},
    )

    assert response.status_code == 409
    assert response.json()["detail"] == "Account already linked to a client"
    listing = await api.get("/api/v1/clients")
    assert [c["company"] for c in listing.json()] == ["Acme Ltda"]


@pytest.mark.asyncio
async def test_linked_login_cannot_be_reused_on_update(api):
    await api.post("/api/v1/clients", json={**CLIENT, "auth_user_id": "u1"})
    other = (await api.post("/api/v1/clients", json={**CLIENT, "company": "Beta SA"})).json()

    response = await api.patch(f"/api/v1/clients/{other['id']}", json={"auth_user_id": "u1"})

    assert response.status_code == 409
    response = await api.get(f"/api/v1/clients/{other['id']}")
    assert response.json()["auth_user_id"] is None


@pytest.mark.asyncio
async def test_rotate_access_token(api):
    client = (await api.post("/api/v1/clients", json=CLIENT)).json()

    response = await api.post(f"/api/v1/clients/{client['id']}/access-token")

    assert response.status_code == 200
    assert response.json()["access_token"] not in (None, client["access_token"])
    assert (await api.get(f"/api/v1/portal/{client['access_token']}")).status_code == 404
