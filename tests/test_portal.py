"""Tests for client decision capture through the portal."""

from datetime import date

import pytest

from bidtracker.models import BidDecision, BidStatus
from conftest import OTHER_TENANT

DEADLINE = date(2026, 10, 20)


@pytest.mark.asyncio
async def test_portal_lists_client_bids(api, make_client, make_bid):
    client = await make_client()
    await make_bid(client, date(2026, 10, 20), title="Older")
    await make_bid(client, date(2026, 11, 3), title="Newer")

    response = await api.get(f"/api/v1/portal/{client.access_token}")

    assert response.status_code == 200
    data = response.json()
    assert data["client"] == {"name": "Ana", "company": "Acme Ltda"}
    assert [b["title"] for b in data["bids"]] == ["Newer", "Older"]


@pytest.mark.asyncio
async def test_unknown_token_is_rejected(api):
    response = await api.get("/api/v1/portal/not-a-token")

    assert response.status_code == 404
    assert response.json()["detail"] == "Invalid access"


@pytest.mark.asyncio
async def test_participate_moves_to_waiting_bid(api, db, make_client, make_bid):
    client = await make_client()
    bid = await make_bid(client, DEADLINE, status=BidStatus.WAITING_CLIENT, notified=True)

    response = await api.post(
        f"/api/v1/portal/{client.access_token}/decisions",
        json={"bid_id": bid.id, "decision": "Participate"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "Waiting Bid"
    assert data["decision"] == "Participate"
    assert data["decision_at"] is not None

    await db.refresh(bid)
    assert bid.status == BidStatus.WAITING_BID
    assert bid.decision == BidDecision.PARTICIPATE


@pytest.mark.asyncio
async def test_second_decision_is_stale(api, db, make_client, make_bid):
    client = await make_client()
    bid = await make_bid(client, DEADLINE, status=BidStatus.WAITING_CLIENT, notified=True)
    url = f"/api/v1/portal/{client.access_token}/decisions"

    first = await api.post(url, json={"bid_id": bid.id, "decision": "Discard"})
    second = await api.post(url, json={"bid_id": bid.id, "decision": "Participate"})

    assert first.status_code == 200
    assert first.json()["status"] == "Discarded"
    assert second.status_code == 409
    assert second.json()["detail"] == "This bid has already been decided"

    await db.refresh(bid)
    assert bid.status == BidStatus.DISCARDED
    assert bid.decision == BidDecision.DISCARD


@pytest.mark.asyncio
async def test_decision_before_reminder_is_stale(api, make_client, make_bid):
    client = await make_client()
    bid = await make_bid(client, DEADLINE)

    response = await api.post(
        f"/api/v1/portal/{client.access_token}/decisions",
        json={"bid_id": bid.id, "decision": "Participate"},
    )

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_other_clients_bid_is_not_found(api, make_client, make_bid):
    client = await make_client()
    stranger = await make_client(tenant_id=OTHER_TENANT, name="Eve")
    bid = await make_bid(stranger, DEADLINE, status=BidStatus.WAITING_CLIENT, notified=True)

    response = await api.post(
        f"/api/v1/portal/{client.access_token}/decisions",
        json={"bid_id": bid.id, "decision": "Participate"},
    )

    assert response.status_code == 404


@pytest.mark.parametrize("decision", ["Maybe", "Pending"])
@pytest.mark.asyncio
async def test_invalid_decision_is_rejected(api, make_client, make_bid, decision):
    client = await make_client()
    bid = await make_bid(client, DEADLINE, status=BidStatus.WAITING_CLIENT, notified=True)

    response = await api.post(
        f"/api/v1/portal/{client.access_token}/decisions",
        json={"bid_id": bid.id, "decision": decision},
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_revoked_token_stops_working(api, make_client):
    client = await make_client()
    token = client.access_token

    revoke = await api.delete(f"/api/v1/clients/{client.id}/access-token")
    assert revoke.status_code == 200
    assert revoke.json()["access_token"] is None

    response = await api.get(f"/api/v1/portal/{token}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_logged_in_client_decides(api, auth, make_client, make_bid):
    client = await make_client(auth_user_id="client-user-1")
    bid = await make_bid(client, DEADLINE, status=BidStatus.WAITING_CLIENT, notified=True)
    auth.login("client-user-1", "ana@acme.com")

    listing = await api.get("/api/v1/client-portal/bids")
    assert listing.status_code == 200
    assert [b["id"] for b in listing.json()["bids"]] == [bid.id]

    response = await api.post(
        "/api/v1/client-portal/decisions",
        json={"bid_id": bid.id, "decision": "Discard"},
    )
    assert response.status_code == 200
    assert response.json()["status"] == "Discarded"


@pytest.mark.asyncio
async def test_unlinked_account_is_forbidden(api, auth):
    auth.login("nobody")

    response = await api.get("/api/v1/client-portal/bids")

    assert response.status_code == 403
