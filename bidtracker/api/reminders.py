"""Cron-invoked reminder trigger."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bidtracker.db import get_db
from bidtracker.scheduler.job_stats import job_stats
from bidtracker.schemas import ReminderRunResponse
from bidtracker.services.reminder_service import reminder_service

from .deps import verify_cron_secret

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(verify_cron_secret)])


@router.post("/run", response_model=ReminderRunResponse)
async def run_reminders(db: AsyncSession = Depends(get_db)):
    """
    Run one reminder pass now.

    Safe to call repeatedly: notified bids are never selected again.
    """
    job_stats.start_run("send_reminders")
    try:
        report = await reminder_service.run(db)
    except Exception as e:
        job_stats.finish_run("send_reminders", error=str(e))
        raise
    job_stats.finish_run("send_reminders", processed=report.sent, outcomes=report.outcome_counts())

    logger.info(f"Manual reminder run: {report.sent}/{report.found} sent")
    return ReminderRunResponse.model_validate(report)
