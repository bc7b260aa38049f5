"""Deadline reminder scan: picks due bids and asks clients to decide."""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from bidtracker.config import settings
from bidtracker.models import Bid, BidStatus, Client

from .email_service import EmailService, email_service
from .exceptions import DispatchError, InvalidTransition
from .lifecycle import REMINDER_SENT, apply_transition
from .tenant_config import TenantConfigResolver, tenant_config_resolver

logger = logging.getLogger(__name__)

OUTCOME_SENT = "sent"
OUTCOME_SKIPPED_NO_CONFIG = "skipped-no-config"
OUTCOME_SKIPPED_STALE = "skipped-already-handled"


def failed(reason: str) -> str:
    return f"failed-{reason}"


def add_business_days(start: date, days: int) -> date:
    """
    Date exactly ``days`` business days after ``start``.

    Walks forward one calendar day at a time and counts only Monday to
    Friday. No holiday calendar.
    """
    current = start
    added = 0
    while added < days:
        current += timedelta(days=1)
        if current.weekday() < 5:
            added += 1
    return current


@dataclass
class ReminderResult:
    bid_id: int
    outcome: str
    detail: str | None = None


@dataclass
class ReminderRunReport:
    """Outcome of one scheduler run."""

    target_date: date
    found: int = 0
    results: list[ReminderResult] = field(default_factory=list)

    def count(self, outcome: str) -> int:
        return sum(1 for r in self.results if r.outcome == outcome)

    def outcome_counts(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for result in self.results:
            counts[result.outcome] = counts.get(result.outcome, 0) + 1
        return counts

    @property
    def sent(self) -> int:
        return self.count(OUTCOME_SENT)

    @property
    def failures(self) -> list[ReminderResult]:
        return [r for r in self.results if r.outcome.startswith("failed-")]


class ReminderService:
    """
    Selects bids due for a deadline reminder and dispatches them.

    By default every pending, un-notified bid whose deadline lies after
    today and no later than the target date is selected, so a failed send
    is retried on the next run while the deadline is still ahead. With
    ``exact_date_only`` only bids due exactly on the target date qualify.
    """

    def __init__(
        self,
        resolver: TenantConfigResolver = tenant_config_resolver,
        mailer: EmailService = email_service,
        business_days: int | None = None,
        exact_date_only: bool | None = None,
        tz: str | None = None,
    ):
        self.resolver = resolver
        self.mailer = mailer
        self.business_days = business_days or settings.reminder_business_days
        self.exact_date_only = (
            settings.reminder_exact_date_only if exact_date_only is None else exact_date_only
        )
        self.tz = ZoneInfo(tz or settings.reminder_timezone)

    def today(self, now: datetime | None = None) -> date:
        now = now or datetime.now(timezone.utc)
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        return now.astimezone(self.tz).date()

    def target_date(self, now: datetime | None = None) -> date:
        return add_business_days(self.today(now), self.business_days)

    async def find_due_bids(self, db: AsyncSession, now: datetime | None = None) -> list[Bid]:
        """Pending bids without a reminder whose deadline is in the window."""
        today = self.today(now)
        target = add_business_days(today, self.business_days)

        query = (
            select(Bid)
            .where(
                Bid.status == BidStatus.PENDING,
                Bid.notified.is_(False),
            )
            .order_by(Bid.deadline, Bid.id)
        )
        if self.exact_date_only:
            query = query.where(Bid.deadline == target)
        else:
            query = query.where(Bid.deadline > today, Bid.deadline <= target)

        result = await db.execute(query)
        return list(result.scalars().all())

    async def process_bid(self, db: AsyncSession, bid: Bid) -> ReminderResult:
        """Resolve config, send, and mark one bid as notified."""
        # Re-read right before sending; a consultant may have moved it since the scan
        await db.refresh(bid)
        if bid.status != BidStatus.PENDING or bid.notified:
            return ReminderResult(bid.id, OUTCOME_SKIPPED_STALE, f"Status is '{bid.status.value}'")

        config = await self.resolver.resolve(db, bid.tenant_id)
        if config is None:
            logger.info(f"Skipping bid {bid.id}: tenant {bid.tenant_id} has no mail settings")
            return ReminderResult(bid.id, OUTCOME_SKIPPED_NO_CONFIG)

        client = await db.get(Client, bid.client_id)
        if not client.email:
            logger.warning(f"Bid {bid.id}: client {client.id} has no e-mail address")
            return ReminderResult(bid.id, failed("no-recipient"), "Client has no e-mail address")

        try:
            await self.mailer.send_reminder(config, bid, client)
        except DispatchError as e:
            logger.warning(f"Reminder for bid {bid.id} failed ({e.reason}): {e}")
            return ReminderResult(bid.id, failed(e.reason), str(e))

        sent_at = datetime.now(timezone.utc)
        try:
            await apply_transition(
                db,
                bid,
                REMINDER_SENT,
                conditions=(Bid.notified.is_(False),),
                notified=True,
                reminder_sent_at=sent_at,
            )
        except InvalidTransition as e:
            # Someone moved the bid meanwhile: keep their status, still record the send
            logger.warning(f"Bid {bid.id} changed during reminder dispatch: {e}")
            await db.execute(
                update(Bid)
                .where(Bid.id == bid.id)
                .values(notified=True, reminder_sent_at=sent_at)
                .execution_options(synchronize_session=False)
            )
        await db.commit()

        return ReminderResult(bid.id, OUTCOME_SENT)

    async def run(self, db: AsyncSession, now: datetime | None = None) -> ReminderRunReport:
        """
        One scheduler pass.

        Args:
            db: Database session
            now: Reference time (defaults to current UTC time)

        Returns:
            Report with one result per candidate bid
        """
        report = ReminderRunReport(target_date=self.target_date(now))
        bids = await self.find_due_bids(db, now)
        report.found = len(bids)
        logger.info(f"Reminder run: target date {report.target_date}, {report.found} candidate bids")

        # Ids captured up front: a rollback expires every loaded bid
        candidates = [(bid.id, bid) for bid in bids]
        for bid_id, bid in candidates:
            try:
                result = await self.process_bid(db, bid)
            except Exception as e:
                logger.error(f"Error processing reminder for bid {bid_id}: {e}")
                await db.rollback()
                result = ReminderResult(bid_id, failed("error"), str(e))
            report.results.append(result)

        if report.failures:
            logger.warning(
                f"Reminder run for {report.target_date}: {len(report.failures)} failed, "
                f"bids {[r.bid_id for r in report.failures]}"
            )
        return report


# Singleton instance
reminder_service = ReminderService()
