"""Board overview: bid counts per status, win rate, urgent deadlines, busiest clients."""

from collections import Counter
from dataclasses import dataclass, field
from datetime import date

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bidtracker.models import Bid, BidStatus, Client

ACTIVE_STATUSES = (BidStatus.PENDING, BidStatus.WAITING_CLIENT, BidStatus.WAITING_BID)
CRITICAL_DAYS = 3
TOP_CLIENTS = 5


@dataclass
class CriticalBid:
    id: int
    title: str
    deadline: date
    status: BidStatus
    client_id: int
    days_left: int


@dataclass
class ClientBidCount:
    client_id: int
    company: str
    bid_count: int


@dataclass
class DashboardStats:
    total_bids: int
    status_counts: dict[str, int]
    win_rate: int  # percent of Won among Won + Lost
    critical_deadlines: list[CriticalBid] = field(default_factory=list)
    top_clients: list[ClientBidCount] = field(default_factory=list)


def win_rate(won: int, lost: int) -> int:
    """Rounded percentage; 0 before any bid has been won or lost."""
    finished = won + lost
    if finished == 0:
        return 0
    return (won * 200 + finished) // (finished * 2)


def dashboard_stats(rows: list[tuple[Bid, str]], today: date) -> DashboardStats:
    """
    Overview of a tenant's bids.

    Args:
        rows: Bids paired with their client's company name
        today: Reference day for deadline distances

    Returns:
        Counts per status, win rate, active bids due within three days
        (soonest first) and the five clients with the most bids
    """
    bids = [bid for bid, _ in rows]
    by_status = Counter(bid.status for bid in bids)

    critical = []
    for bid in bids:
        days_left = (bid.deadline - today).days
        if bid.status in ACTIVE_STATUSES and 0 <= days_left <= CRITICAL_DAYS:
            critical.append(
                CriticalBid(
                    id=bid.id,
                    title=bid.title,
                    deadline=bid.deadline,
                    status=bid.status,
                    client_id=bid.client_id,
                    days_left=days_left,
                )
            )
    critical.sort(key=lambda c: (c.deadline, c.id))

    per_client = Counter((bid.client_id, company) for bid, company in rows)
    top = sorted(per_client.items(), key=lambda item: (-item[1], item[0][1], item[0][0]))

    return DashboardStats(
        total_bids=len(bids),
        status_counts={status.value: by_status.get(status, 0) for status in BidStatus},
        win_rate=win_rate(by_status.get(BidStatus.WON, 0), by_status.get(BidStatus.LOST, 0)),
        critical_deadlines=critical,
        top_clients=[
            ClientBidCount(client_id=client_id, company=company, bid_count=count)
            for (client_id, company), count in top[:TOP_CLIENTS]
        ],
    )


class DashboardService:
    """Loads a tenant's bids with client names and summarises them."""

    async def stats(self, db: AsyncSession, tenant_id: str, today: date | None = None) -> DashboardStats:
        result = await db.execute(
            select(Bid, Client.company)
            .join(Client, Bid.client_id == Client.id)
            .where(Bid.tenant_id == tenant_id)
        )
        return dashboard_stats([(bid, company) for bid, company in result.all()], today or date.today())


# Singleton instance
dashboard_service = DashboardService()
