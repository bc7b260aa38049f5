"""Bid-related Pydantic schemas."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from bidtracker.models.bid import BidDecision, BidStatus, SettlementStatus


class Attachment(BaseModel):
    """Uploaded document stored in the object store."""

    name: str
    url: str


class BidCreate(BaseModel):
    """Schema for creating a bid. Status always starts at Pending."""

    client_id: int
    title: str = Field(min_length=1, max_length=1000)
    deadline: date
    link_docs: Optional[str] = None
    attachments: list[Attachment] = []
    commission_rate: Optional[Decimal] = Field(default=None, ge=0, le=100)


class BidUpdate(BaseModel):
    """
    Schema for editing a bid.

    ``notified`` is deliberately absent: only the reminder scheduler sets it.
    """

    client_id: Optional[int] = None
    title: Optional[str] = Field(default=None, min_length=1, max_length=1000)
    deadline: Optional[date] = None
    link_docs: Optional[str] = None
    attachments: Optional[list[Attachment]] = None
    status: Optional[BidStatus] = None
    decision: Optional[BidDecision] = None
    final_value: Optional[Decimal] = Field(default=None, ge=0)
    commission_rate: Optional[Decimal] = Field(default=None, ge=0, le=100)
    settlement_status: Optional[SettlementStatus] = None


class BidStatusUpdate(BaseModel):
    """Board move."""

    status: BidStatus


class BidResponse(BaseModel):
    """Full bid response schema."""

    id: int
    client_id: int
    title: str
    deadline: date
    link_docs: Optional[str] = None
    attachments: list[Attachment] = []
    status: BidStatus
    decision: BidDecision
    decision_at: Optional[datetime] = None
    notified: bool
    reminder_sent_at: Optional[datetime] = None
    summary_sent_at: Optional[datetime] = None
    final_value: Optional[Decimal] = None
    commission_rate: Optional[Decimal] = None
    commission: Decimal
    settlement_status: SettlementStatus
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class PortalBid(BaseModel):
    """Bid as shown to the client in the portal."""

    id: int
    title: str
    deadline: date
    link_docs: Optional[str] = None
    attachments: list[Attachment] = []
    status: BidStatus
    decision: BidDecision
    decision_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
