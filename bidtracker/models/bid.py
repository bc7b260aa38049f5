"""Bid model."""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Any

from sqlalchemy import JSON, Boolean, Date, DateTime, ForeignKey, Index, Numeric, String
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import BaseModel, TenantMixin

if TYPE_CHECKING:
    from .client import Client


class BidStatus(str, Enum):
    """Bid lifecycle status."""

    PENDING = "Pending"  # Registered, client not contacted yet
    WAITING_CLIENT = "Waiting Client"  # Reminder sent, waiting for go/no-go
    WAITING_BID = "Waiting Bid"  # Client will participate
    DISCARDED = "Discarded"  # Client declined
    WON = "Won"
    LOST = "Lost"

    @property
    def is_terminal(self) -> bool:
        return self in (BidStatus.DISCARDED, BidStatus.WON, BidStatus.LOST)


class BidDecision(str, Enum):
    """Client go/no-go decision."""

    PENDING = "Pending"
    PARTICIPATE = "Participate"
    DISCARD = "Discard"


class SettlementStatus(str, Enum):
    """Invoicing state of the commission on a won bid."""

    AWAITING_INVOICE = "AwaitingInvoice"
    PENDING = "Pending"
    PAID = "Paid"


def _enum_values(enum_cls):
    return [e.value for e in enum_cls]


class Bid(BaseModel, TenantMixin):
    """
    Procurement opportunity tracked for one client.

    Lifecycle:
    1. Pending -> registered by the consultant
    2. Waiting Client -> deadline reminder sent (notified=True)
    3. Waiting Bid / Discarded -> client decision captured
    4. Won / Lost -> set manually from the board
    """

    __tablename__ = "bids"

    client_id: Mapped[int] = mapped_column(
        ForeignKey("clients.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )

    title: Mapped[str] = mapped_column(String(1000), nullable=False)
    deadline: Mapped[date] = mapped_column(Date, nullable=False)

    # Documents: historical single link plus uploaded files [{"name", "url"}]
    link_docs: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    attachments: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON,
        default=list,
        nullable=False,
    )

    status: Mapped[BidStatus] = mapped_column(
        SQLEnum(BidStatus, name="bidstatus", values_callable=_enum_values),
        default=BidStatus.PENDING,
        index=True,
        nullable=False,
    )

    # Client decision
    decision: Mapped[BidDecision] = mapped_column(
        SQLEnum(BidDecision, name="biddecision", values_callable=_enum_values),
        default=BidDecision.PENDING,
        nullable=False,
    )
    decision_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # Notification tracking (notified is never cleared)
    notified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    reminder_sent_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    summary_sent_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    # Financial outcome
    final_value: Mapped[Decimal | None] = mapped_column(Numeric(15, 2), nullable=True)
    commission_rate: Mapped[Decimal | None] = mapped_column(Numeric(5, 2), nullable=True)
    settlement_status: Mapped[SettlementStatus] = mapped_column(
        SQLEnum(SettlementStatus, name="settlementstatus", values_callable=_enum_values),
        default=SettlementStatus.AWAITING_INVOICE,
        nullable=False,
    )

    # Relationships
    client: Mapped["Client"] = relationship("Client", back_populates="bids")

    __table_args__ = (
        Index("ix_bids_reminder_scan", "status", "notified", "deadline"),
        Index("ix_bids_tenant_deadline", "tenant_id", "deadline"),
    )

    def __repr__(self) -> str:
        return f"<Bid(id={self.id}, status={self.status}, deadline={self.deadline})>"

    @property
    def commission(self) -> Decimal:
        """final_value * commission_rate / 100, only for won bids with a value."""
        if self.status != BidStatus.WON or self.final_value is None:
            return Decimal("0")
        return Decimal(self.final_value) * Decimal(self.commission_rate or 0) / Decimal(100)

    @property
    def documents(self) -> list[dict[str, str]]:
        """Attachment links, falling back to the historical single link."""
        files = [
            {"name": item.get("name") or item["url"], "url": item["url"]}
            for item in (self.attachments or [])
            if item.get("url")
        ]
        if files:
            return files
        if self.link_docs:
            return [{"name": self.title, "url": self.link_docs}]
        return []
