"""
Bid lifecycle state machine.

Pending -> Waiting Client -> Waiting Bid -> Won | Lost
           Waiting Client -> Discarded

Automated and client-driven triggers follow the fixed table below. Manual
board moves may jump to any status, except into Won/Lost while the client
decision is still pending.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from bidtracker.models import Bid, BidDecision, BidStatus

from .exceptions import InvalidTransition, StaleState

logger = logging.getLogger(__name__)


class TriggerKind(str, Enum):
    """What caused a status change."""

    REMINDER_SENT = "ReminderSent"
    CLIENT_PARTICIPATES = "ClientParticipates"
    CLIENT_DISCARDS = "ClientDiscards"
    MANUAL_SET_STATUS = "ManualSetStatus"


@dataclass(frozen=True)
class Trigger:
    """Transition trigger; ``target`` is only used by manual moves."""

    kind: TriggerKind
    target: BidStatus | None = None

    @classmethod
    def manual(cls, target: BidStatus | str) -> "Trigger":
        return cls(TriggerKind.MANUAL_SET_STATUS, BidStatus(target))

    def __str__(self) -> str:
        if self.target is not None:
            return f"{self.kind.value}({self.target.value})"
        return self.kind.value


REMINDER_SENT = Trigger(TriggerKind.REMINDER_SENT)
CLIENT_PARTICIPATES = Trigger(TriggerKind.CLIENT_PARTICIPATES)
CLIENT_DISCARDS = Trigger(TriggerKind.CLIENT_DISCARDS)

TRANSITIONS: dict[tuple[TriggerKind, BidStatus], BidStatus] = {
    (TriggerKind.REMINDER_SENT, BidStatus.PENDING): BidStatus.WAITING_CLIENT,
    (TriggerKind.CLIENT_PARTICIPATES, BidStatus.WAITING_CLIENT): BidStatus.WAITING_BID,
    (TriggerKind.CLIENT_DISCARDS, BidStatus.WAITING_CLIENT): BidStatus.DISCARDED,
}

DECIDED_STATUSES = (BidStatus.WON, BidStatus.LOST)

DECISION_TRIGGERS = {
    BidDecision.PARTICIPATE: CLIENT_PARTICIPATES,
    BidDecision.DISCARD: CLIENT_DISCARDS,
}


def next_status(
    status: BidStatus,
    trigger: Trigger,
    decision: BidDecision = BidDecision.PENDING,
) -> BidStatus:
    """
    Compute the status a trigger leads to.

    Args:
        status: Current bid status
        trigger: Trigger to apply
        decision: Client decision the bid will carry after the change

    Returns:
        Resulting status

    Raises:
        InvalidTransition: If the trigger is not legal from ``status``
    """
    if trigger.kind == TriggerKind.MANUAL_SET_STATUS:
        if trigger.target is None:
            raise InvalidTransition(status, trigger, "Manual status change needs a target status")
        if trigger.target in DECIDED_STATUSES and decision == BidDecision.PENDING:
            raise InvalidTransition(
                status,
                trigger,
                f"Cannot mark a bid '{trigger.target.value}' before the client has decided",
            )
        return trigger.target

    try:
        return TRANSITIONS[(trigger.kind, status)]
    except KeyError:
        raise InvalidTransition(status, trigger) from None


async def apply_transition(
    db: AsyncSession,
    bid: Bid,
    trigger: Trigger,
    *,
    conditions: tuple = (),
    **changes,
) -> Bid:
    """
    Apply a trigger as a conditional update keyed by bid id and current status.

    The write only succeeds if the row still has the status ``bid`` was read
    with (plus any extra ``conditions``), so the scheduler and a consultant
    cannot silently overwrite each other.

    Args:
        db: Database session
        bid: Bid as read by the caller
        trigger: Trigger to apply
        conditions: Extra WHERE clauses for the conditional write
        **changes: Other columns written together with the status

    Returns:
        The refreshed bid

    Raises:
        InvalidTransition: Trigger illegal for the observed status
        StaleState: The row changed since it was read; nothing written
    """
    expected = bid.status
    target = next_status(expected, trigger, changes.get("decision", bid.decision))

    result = await db.execute(
        update(Bid)
        .where(Bid.id == bid.id, Bid.status == expected, *conditions)
        .values(status=target, **changes)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        raise StaleState(expected, trigger, f"Bid {bid.id} is no longer '{expected.value}'")

    await db.refresh(bid)
    logger.info(f"Bid {bid.id}: {expected.value} -> {target.value} ({trigger})")
    return bid
