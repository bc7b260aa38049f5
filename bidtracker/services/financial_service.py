"""
Revenue figures derived from current client and bid records.

There is no ledger. Historical fixed revenue is reconstructed from today's
client rows: a client counts for month M when it joined by the end of M and
is active now. A client deactivated later therefore disappears from the
months it actually paid for.
"""

import calendar
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bidtracker.models import Bid, BidStatus, Client, SettlementStatus

ZERO = Decimal("0")


@dataclass
class MonthlyRevenue:
    month: date  # first day of the month
    fixed_revenue: Decimal
    commission_revenue: Decimal

    @property
    def total(self) -> Decimal:
        return self.fixed_revenue + self.commission_revenue


@dataclass
class RevenueSummary:
    current_fixed_revenue: Decimal
    active_contracts: int
    commission_pending: Decimal
    commission_paid: Decimal


def commission_for(bid: Bid) -> Decimal:
    """final_value * commission_rate / 100 for won bids, zero otherwise."""
    return bid.commission


def month_start(day: date) -> date:
    return day.replace(day=1)


def end_of_month(month: date) -> date:
    return month.replace(day=calendar.monthrange(month.year, month.month)[1])


def shift_months(month: date, months: int) -> date:
    index = month.year * 12 + (month.month - 1) + months
    year, month_index = divmod(index, 12)
    return date(year, month_index + 1, 1)


def fixed_revenue_for_month(clients: Iterable[Client], month: date) -> Decimal:
    last_day = end_of_month(month)
    return sum(
        (
            Decimal(client.contract_value or 0)
            for client in clients
            if client.is_active and client.created_at.date() <= last_day
        ),
        ZERO,
    )


def commission_revenue_for_month(bids: Iterable[Bid], month: date) -> Decimal:
    """Won bids are booked in the month of their deadline."""
    first_day, last_day = month_start(month), end_of_month(month)
    return sum(
        (commission_for(bid) for bid in bids if first_day <= bid.deadline <= last_day),
        ZERO,
    )


def monthly_revenue(clients: list[Client], bids: list[Bid], month: date) -> MonthlyRevenue:
    month = month_start(month)
    return MonthlyRevenue(
        month=month,
        fixed_revenue=fixed_revenue_for_month(clients, month),
        commission_revenue=commission_revenue_for_month(bids, month),
    )


def revenue_summary(clients: list[Client], bids: list[Bid]) -> RevenueSummary:
    """Current totals; the pending/paid split comes from the settlement field."""
    active = [c for c in clients if c.is_active]
    won = [b for b in bids if b.status == BidStatus.WON]
    return RevenueSummary(
        current_fixed_revenue=sum((Decimal(c.contract_value or 0) for c in active), ZERO),
        active_contracts=len(active),
        commission_pending=sum(
            (commission_for(b) for b in won if b.settlement_status != SettlementStatus.PAID),
            ZERO,
        ),
        commission_paid=sum(
            (commission_for(b) for b in won if b.settlement_status == SettlementStatus.PAID),
            ZERO,
        ),
    )


class FinancialService:
    """Loads a tenant's records and runs the rollups over them."""

    async def _load(self, db: AsyncSession, tenant_id: str) -> tuple[list[Client], list[Bid]]:
        clients = await db.execute(select(Client).where(Client.tenant_id == tenant_id))
        bids = await db.execute(select(Bid).where(Bid.tenant_id == tenant_id))
        return list(clients.scalars().all()), list(bids.scalars().all())

    async def monthly_revenue(self, db: AsyncSession, tenant_id: str, month: date) -> MonthlyRevenue:
        clients, bids = await self._load(db, tenant_id)
        return monthly_revenue(clients, bids, month)

    async def revenue_history(
        self,
        db: AsyncSession,
        tenant_id: str,
        months: int,
        today: date | None = None,
    ) -> list[MonthlyRevenue]:
        """The last ``months`` months, oldest first, ending with the current one."""
        current = month_start(today or date.today())
        clients, bids = await self._load(db, tenant_id)
        return [
            monthly_revenue(clients, bids, shift_months(current, offset))
            for offset in range(-(months - 1), 1)
        ]

    async def summary(self, db: AsyncSession, tenant_id: str) -> RevenueSummary:
        clients, bids = await self._load(db, tenant_id)
        return revenue_summary(clients, bids)


# Singleton instance
financial_service = FinancialService()
