"""Dashboard overview schemas."""

from datetime import date

from pydantic import BaseModel, ConfigDict

from bidtracker.models.bid import BidStatus


class CriticalBidResponse(BaseModel):
    id: int
    title: str
    deadline: date
    status: BidStatus
    client_id: int
    days_left: int

    model_config = ConfigDict(from_attributes=True)


class ClientBidCountResponse(BaseModel):
    client_id: int
    company: str
    bid_count: int

    model_config = ConfigDict(from_attributes=True)


class DashboardResponse(BaseModel):
    total_bids: int
    status_counts: dict[str, int]
    win_rate: int
    critical_deadlines: list[CriticalBidResponse]
    top_clients: list[ClientBidCountResponse]

    model_config = ConfigDict(from_attributes=True)
