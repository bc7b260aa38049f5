"""
Bidtracker - Bid Lifecycle CRM for Procurement Consultants

Main application entry point with FastAPI and APScheduler.
"""

import asyncio
import logging
import sys
from contextlib import asynccontextmanager

# Fix for Windows + asyncpg: use SelectorEventLoop instead of ProactorEventLoop
if sys.platform == 'win32':
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bidtracker.api import api_router
from bidtracker.api.health import router as health_router
from bidtracker.config import settings
from bidtracker.scheduler import send_reminders_job
from bidtracker.scheduler.job_stats import job_stats

VERSION = "1.0.0"

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger(__name__)

# Initialize scheduler
scheduler = AsyncIOScheduler()


def setup_scheduler():
    """Configure scheduled jobs."""
    if not settings.reminder_enabled:
        logger.info("Reminder job disabled, relying on external cron trigger")
        return

    # Deadline reminders, hourly by default
    scheduler.add_job(
        send_reminders_job,
        trigger=IntervalTrigger(minutes=settings.reminder_interval_minutes),
        id="send_reminders",
        name="Send Deadline Reminders",
        replace_existing=True,
        max_instances=1,
        coalesce=True,
    )

    logger.info("Scheduler jobs configured")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    # Startup
    logger.info("Starting Bidtracker application...")
    logger.info(f"Environment: {settings.app_env}")
    logger.info(f"Base URL: {settings.app_base_url}")
    logger.info(
        f"Reminders: {settings.reminder_business_days} business days ahead, "
        f"timezone {settings.reminder_timezone}"
    )

    # Setup and start scheduler
    setup_scheduler()
    scheduler.start()
    logger.info("Scheduler started")

    yield

    # Shutdown
    logger.info("Shutting down Bidtracker application...")
    scheduler.shutdown(wait=True)
    logger.info("Scheduler stopped")


# Create FastAPI application
app = FastAPI(
    title="Bidtracker",
    description="Bid lifecycle CRM and deadline notification engine",
    version=VERSION,
    lifespan=lifespan,
    docs_url="/docs" if not settings.is_production else None,
    redoc_url="/redoc" if not settings.is_production else None,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if not settings.is_production else [settings.app_base_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include health routes at root (for platform healthcheck)
app.include_router(health_router, tags=["Health"])

# Include API routes
app.include_router(api_router, prefix="/api/v1")


@app.get("/")
async def root():
    """Return API info."""
    return {
        "service": "Bidtracker",
        "version": VERSION,
        "status": "running",
        "docs": "/docs" if not settings.is_production else None,
    }


@app.get("/scheduler/status")
async def scheduler_status():
    """Get scheduler jobs status."""
    jobs = []
    for job in scheduler.get_jobs():
        jobs.append({
            "id": job.id,
            "name": job.name,
            "next_run": job.next_run_time.isoformat() if job.next_run_time else None,
            "trigger": str(job.trigger),
            "stats": job_stats.to_dict(job.id),
        })
    return {
        "jobs": jobs,
        "running": scheduler.running,
        "reminders": job_stats.to_dict("send_reminders"),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "bidtracker.main:app",
        host="0.0.0.0",
        port=8080,
        reload=not settings.is_production,
    )
