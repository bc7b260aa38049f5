"""Tests for revenue rollups."""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from bidtracker.models import Bid, BidStatus, Client, SettlementStatus
from bidtracker.services.financial_service import (
    commission_for,
    monthly_revenue,
    revenue_summary,
    shift_months,
)
from conftest import TENANT


def client(contract_value: str, joined: date, active: bool = True) -> Client:
    return Client(
        tenant_id=TENANT,
        name="C",
        company="C",
        contract_value=Decimal(contract_value),
        is_active=active,
        created_at=datetime(joined.year, joined.month, joined.day, tzinfo=timezone.utc),
    )


def bid(status: BidStatus, deadline: date, final_value: str | None, rate: str = "10", **kwargs) -> Bid:
    return Bid(
        tenant_id=TENANT,
        client_id=1,
        title="B",
        deadline=deadline,
        status=status,
        final_value=Decimal(final_value) if final_value is not None else None,
        commission_rate=Decimal(rate),
        **kwargs,
    )


def test_commission_of_won_bid():
    assert commission_for(bid(BidStatus.WON, date(2026, 3, 10), "10000")) == Decimal("1000")


def test_commission_without_final_value_is_zero():
    assert commission_for(bid(BidStatus.WON, date(2026, 3, 10), None)) == Decimal("0")


def test_commission_of_lost_bid_is_zero():
    assert commission_for(bid(BidStatus.LOST, date(2026, 3, 10), "10000")) == Decimal("0")


def test_fixed_revenue_counts_clients_joined_by_month_end():
    clients = [
        client("1000", date(2026, 1, 15)),
        client("500", date(2026, 3, 31)),
        client("700", date(2026, 4, 1)),
        client("900", date(2026, 1, 1), active=False),
    ]

    march = monthly_revenue(clients, [], date(2026, 3, 1))

    assert march.fixed_revenue == Decimal("1500")
    assert march.commission_revenue == Decimal("0")
    assert march.month == date(2026, 3, 1)


def test_commission_booked_in_deadline_month():
    bids = [
        bid(BidStatus.WON, date(2026, 3, 31), "10000"),
        bid(BidStatus.WON, date(2026, 4, 1), "20000"),
        bid(BidStatus.WAITING_BID, date(2026, 3, 5), "50000"),
    ]

    march = monthly_revenue([client("1000", date(2026, 1, 1))], bids, date(2026, 3, 17))

    assert march.commission_revenue == Decimal("1000")
    assert march.total == Decimal("2000")


def test_summary_splits_pending_and_paid():
    bids = [
        bid(BidStatus.WON, date(2026, 3, 1), "10000", settlement_status=SettlementStatus.PAID),
        bid(BidStatus.WON, date(2026, 4, 1), "5000", settlement_status=SettlementStatus.PENDING),
        bid(
            BidStatus.WON,
            date(2026, 5, 1),
            "2000",
            settlement_status=SettlementStatus.AWAITING_INVOICE,
        ),
    ]
    clients = [client("1000", date(2026, 1, 1)), client("400", date(2026, 1, 1), active=False)]

    summary = revenue_summary(clients, bids)

    assert summary.current_fixed_revenue == Decimal("1000")
    assert summary.active_contracts == 1
    assert summary.commission_paid == Decimal("1000")
    assert summary.commission_pending == Decimal("700")


def test_shift_months_crosses_years():
    assert shift_months(date(2026, 1, 1), -1) == date(2025, 12, 1)
    assert shift_months(date(2026, 11, 1), 3) == date(2027, 2, 1)


@pytest.mark.asyncio
async def test_history_endpoint(api, make_client, make_bid):
    owner = await make_client(contract_value=Decimal("1200"))
    await make_bid(
        owner,
        date.today(),
        status=BidStatus.WON,
        final_value=Decimal("10000"),
    )

    response = await api.get("/api/v1/financial/monthly", params={"months": 3})

    assert response.status_code == 200
    months = response.json()
    assert len(months) == 3
    current = months[-1]
    assert current["month"] == date.today().replace(day=1).isoformat()
    assert Decimal(current["fixed_revenue"]) == Decimal("1200")
    assert Decimal(current["commission_revenue"]) == Decimal("1000")
    assert Decimal(current["total"]) == Decimal("2200")


@pytest.mark.asyncio
async def test_summary_endpoint(api, make_client, make_bid):
    owner = await make_client(contract_value=Decimal("1200"))
    await make_bid(owner, date(2026, 3, 1), status=BidStatus.WON, final_value=Decimal("10000"))

    response = await api.get("/api/v1/financial/summary")

    assert response.status_code == 200
    data = response.json()
    assert data["active_contracts"] == 1
    assert Decimal(data["commission_pending"]) == Decimal("1000")
    assert Decimal(data["commission_paid"]) == Decimal("0")
