"""Consultant-side bid operations: creation, edits, board moves, summaries."""

import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from bidtracker.models import Bid, BidDecision, BidStatus, Client
from bidtracker.schemas.bid import BidCreate, BidUpdate

from .email_service import EmailService, email_service
from .exceptions import ConfigError, InvalidTransition
from .lifecycle import DECIDED_STATUSES, DECISION_TRIGGERS, Trigger, apply_transition
from .tenant_config import TenantConfigResolver, tenant_config_resolver

logger = logging.getLogger(__name__)


class BidService:
    """Bid changes made by the owning consultant."""

    def __init__(
        self,
        resolver: TenantConfigResolver = tenant_config_resolver,
        mailer: EmailService = email_service,
    ):
        self.resolver = resolver
        self.mailer = mailer

    async def create_bid(self, db: AsyncSession, tenant_id: str, client: Client, data: BidCreate) -> Bid:
        """New bid at Pending; the client's default rate is snapshotted unless given."""
        bid = Bid(
            tenant_id=tenant_id,
            client_id=client.id,
            title=data.title,
            deadline=data.deadline,
            link_docs=data.link_docs,
            attachments=[a.model_dump() for a in data.attachments],
            status=BidStatus.PENDING,
            decision=BidDecision.PENDING,
            notified=False,
            commission_rate=(
                data.commission_rate if data.commission_rate is not None else client.commission_rate
            ),
        )
        db.add(bid)
        await db.commit()
        await db.refresh(bid)

        logger.info(f"Bid created: {bid.id} for client {client.id} (deadline {bid.deadline})")
        return bid

    async def update_bid(
        self,
        db: AsyncSession,
        bid: Bid,
        data: BidUpdate,
        new_client: Client | None = None,
    ) -> Bid:
        """
        Apply a consultant edit.

        A status change goes through the state machine as a manual move,
        written together with any decision change. A decision edited on its
        own is only accepted while the bid waits for the client and then
        moves it like a portal answer. Re-associating the bid
        with another client snapshots that client's default rate unless a
        rate is given explicitly.

        Raises:
            InvalidTransition: Move into Won/Lost without a client decision,
                clearing the decision of a decided bid, or a decision edit
                on a bid that is not waiting for the client
            StaleState: The bid changed since it was read
        """
        fields = data.model_dump(exclude_unset=True)
        status = fields.pop("status", None)

        decision_changes = {}
        if "decision" in fields:
            decision = fields.pop("decision") or BidDecision.PENDING
            decision_changes["decision"] = decision
            if decision == BidDecision.PENDING:
                decision_changes["decision_at"] = None
            elif decision != bid.decision or bid.decision_at is None:
                decision_changes["decision_at"] = datetime.now(timezone.utc)

        if status is not None:
            await apply_transition(db, bid, Trigger.manual(status), **decision_changes)
        elif decision_changes and decision_changes["decision"] != bid.decision:
            await self._record_decision_edit(db, bid, decision_changes)

        if new_client is not None and new_client.id != bid.client_id:
            bid.client_id = new_client.id
            if fields.get("commission_rate") is None:
                fields["commission_rate"] = new_client.commission_rate
        fields.pop("client_id", None)

        if "attachments" in fields:
            fields["attachments"] = fields["attachments"] or []

        for field, value in fields.items():
            setattr(bid, field, value)

        await db.commit()
        await db.refresh(bid)

        logger.info(f"Bid updated: {bid.id}")
        return bid

    async def _record_decision_edit(self, db: AsyncSession, bid: Bid, decision_changes: dict) -> None:
        """
        Decision set by the consultant without a status change.

        Only a bid waiting on the client can take a decision this way, and
        it moves exactly as if the client had answered through the portal.
        """
        decision = decision_changes["decision"]
        if bid.status in DECIDED_STATUSES and decision == BidDecision.PENDING:
            raise InvalidTransition(
                bid.status, "edit", "A won or lost bid must keep the client decision"
            )

        trigger = DECISION_TRIGGERS.get(decision)
        if bid.status != BidStatus.WAITING_CLIENT or trigger is None:
            raise InvalidTransition(
                bid.status,
                "edit",
                f"Decision '{decision.value}' can only be recorded on a bid waiting for the "
                "client; change the status together with the decision instead",
            )
        await apply_transition(db, bid, trigger, **decision_changes)

    async def move_status(self, db: AsyncSession, bid: Bid, status: BidStatus) -> Bid:
        """Board drag-and-drop."""
        await apply_transition(db, bid, Trigger.manual(status))
        await db.commit()
        return bid

    async def send_summary(self, db: AsyncSession, bid: Bid) -> Bid:
        """
        On-demand "send now" of the bid summary to the client.

        Raises:
            ConfigError: Tenant has no mail settings or incomplete credentials
            TransportError: Mail server failure
        """
        config = await self.resolver.resolve(db, bid.tenant_id)
        if config is None:
            raise ConfigError("Configure your SMTP settings before sending e-mails")

        client = await db.get(Client, bid.client_id)
        await self.mailer.send_summary(config, bid, client)

        bid.summary_sent_at = datetime.now(timezone.utc)
        await db.commit()
        await db.refresh(bid)
        return bid


# Singleton instance
bid_service = BidService()
