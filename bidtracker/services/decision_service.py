"""Captures a client's Participate/Discard decision on a bid."""

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from bidtracker.models import Bid, BidDecision, BidStatus, Client

from .exceptions import BidNotFound, InvalidDecision, StaleDecision, StaleState, TokenInvalid
from .lifecycle import DECISION_TRIGGERS, apply_transition

logger = logging.getLogger(__name__)


class DecisionService:
    """Resolves the deciding client and folds the decision into the bid."""

    async def client_by_token(self, db: AsyncSession, token: str) -> Client:
        """
        Resolve the client of a portal link.

        Raises:
            TokenInvalid: Unknown or revoked token (no detail given either way)
        """
        if not token:
            raise TokenInvalid("Invalid access")
        result = await db.execute(select(Client).where(Client.access_token == token))
        client = result.scalar_one_or_none()
        if client is None:
            raise TokenInvalid("Invalid access")
        return client

    async def client_by_principal(self, db: AsyncSession, user_id: str) -> Client:
        """Client linked to an authenticated portal user."""
        result = await db.execute(select(Client).where(Client.auth_user_id == user_id))
        client = result.scalar_one_or_none()
        if client is None:
            raise TokenInvalid("No client is linked to this account")
        return client

    async def list_client_bids(self, db: AsyncSession, client: Client) -> list[Bid]:
        result = await db.execute(
            select(Bid).where(Bid.client_id == client.id).order_by(Bid.deadline.desc())
        )
        return list(result.scalars().all())

    async def record_decision(
        self,
        db: AsyncSession,
        client: Client,
        bid_id: int,
        decision: BidDecision | str,
    ) -> Bid:
        """
        Record Participate or Discard for a bid waiting on the client.

        Args:
            db: Database session
            client: Client resolved from token or identity
            bid_id: Bid to decide on
            decision: Participate or Discard

        Returns:
            Updated bid

        Raises:
            InvalidDecision: Decision is not Participate or Discard
            BidNotFound: Bid missing or owned by another client
            StaleDecision: Bid is not waiting for the client anymore
        """
        try:
            decision = BidDecision(decision)
        except ValueError:
            raise InvalidDecision(f"Unknown decision: {decision}") from None
        trigger = DECISION_TRIGGERS.get(decision)
        if trigger is None:
            raise InvalidDecision("Decision must be Participate or Discard")

        bid = await db.get(Bid, bid_id, populate_existing=True)
        if bid is None or bid.client_id != client.id:
            raise BidNotFound("Bid not found")

        if bid.status != BidStatus.WAITING_CLIENT:
            raise StaleDecision("This bid has already been decided")

        try:
            await apply_transition(
                db,
                bid,
                trigger,
                decision=decision,
                decision_at=datetime.now(timezone.utc),
            )
        except StaleState:
            raise StaleDecision("This bid has already been decided") from None

        await db.commit()
        logger.info(f"Client {client.id} decided '{decision.value}' on bid {bid.id}")
        return bid


# Singleton instance
decision_service = DecisionService()
