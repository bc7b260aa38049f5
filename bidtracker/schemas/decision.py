"""Client decision schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from bidtracker.models.bid import BidDecision, BidStatus

from .bid import PortalBid
from .client import PortalClient


class DecisionRequest(BaseModel):
    """Participate / Discard answer for one bid."""

    bid_id: int
    decision: str


class DecisionResponse(BaseModel):
    """Bid state after the decision."""

    bid_id: int
    status: BidStatus
    decision: BidDecision
    decision_at: Optional[datetime] = None

    @classmethod
    def from_bid(cls, bid) -> "DecisionResponse":
        return cls(
            bid_id=bid.id,
            status=bid.status,
            decision=bid.decision,
            decision_at=bid.decision_at,
        )


class PortalResponse(BaseModel):
    """Client portal page data."""

    client: PortalClient
    bids: list[PortalBid]

    model_config = ConfigDict(from_attributes=True)
