"""Tests for tenant mail settings endpoints."""

import pytest


@pytest.mark.asyncio
async def test_settings_missing(api):
    response = await api.get("/api/v1/settings")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_password_is_never_returned(api):
    response = await api.put(
        "/api/v1/settings",
        json={
            "smtp_host": "smtp.example.com",
            "smtp_port": 465,
            "smtp_user": "consultant@example.com",
            "smtp_password": "app-password",
            "reminder_subject": "Decide on {{BID}}",
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert "smtp_password" not in data
    assert data["has_smtp_password"] is True
    assert data["smtp_port"] == 465


@pytest.mark.asyncio
async def test_blank_password_keeps_stored_secret(api):
    await api.put(
        "/api/v1/settings",
        json={"smtp_user": "consultant@example.com", "smtp_password": "app-password"},
    )

    response = await api.put("/api/v1/settings", json={"sender_name": "Bid Desk", "smtp_password": ""})

    assert response.status_code == 200
    assert response.json()["has_smtp_password"] is True
    assert response.json()["sender_name"] == "Bid Desk"
    assert response.json()["smtp_user"] == "consultant@example.com"


@pytest.mark.asyncio
async def test_settings_are_per_tenant(api, auth):
    await api.put("/api/v1/settings", json={"smtp_user": "consultant@example.com"})

    auth.login("tenant-b")

    assert (await api.get("/api/v1/settings")).status_code == 404
