"""Scheduled jobs for the bid lifecycle."""

import logging

from bidtracker.db import get_db_context
from bidtracker.scheduler.job_stats import job_stats
from bidtracker.services.reminder_service import reminder_service

logger = logging.getLogger(__name__)

# Register jobs for stats tracking
job_stats.register_job("send_reminders", "Send Deadline Reminders")


async def send_reminders_job():
    """
    Job: Remind clients about bids due in K business days.
    Runs every ``reminder_interval_minutes``.
    """
    logger.info("Starting reminder job")
    job_stats.start_run("send_reminders")
    try:
        async with get_db_context() as db:
            report = await reminder_service.run(db)
            logger.info(
                f"Reminder job completed: {report.sent}/{report.found} sent "
                f"for target date {report.target_date}"
            )
            job_stats.finish_run(
                "send_reminders",
                processed=report.sent,
                outcomes=report.outcome_counts(),
            )
    except Exception as e:
        logger.error(f"Reminder job failed: {e}")
        job_stats.finish_run("send_reminders", error=str(e))
