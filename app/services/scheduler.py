"""APScheduler setup for periodic cache refresh."""

import logging
from datetime import datetime
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from app.core.exceptions import NetworkUnavailableError
from app.services.feed import LogFeed
from app.services.repository import LogRepository

logger = logging.getLogger(__name__)

# Global scheduler instance
scheduler: AsyncIOScheduler | None = None


async def refresh_logs(repository: LogRepository, feed: LogFeed) -> bool:
    """Reload the log list into the feed. Returns False if nothing could be loaded."""
    try:
        result = await repository.list_logs()
    except NetworkUnavailableError as e:
        logger.warning(f"Log refresh failed and no cached logs are available: {e}")
        return False

    feed.replace(result.records, result.is_offline)
    if result.is_offline:
        logger.info(f"Server unreachable, showing {len(result.records)} cached logs")
    else:
        logger.info(f"Log refresh completed: {len(result.records)} logs")
    return True


def start_scheduler(repository: LogRepository, feed: LogFeed, interval_minutes: int):
    """Start the APScheduler with a refresh job that also runs immediately."""
    global scheduler

    if scheduler is not None:
        logger.warning("Scheduler already started")
        return

    scheduler = AsyncIOScheduler()

    scheduler.add_job(
        refresh_logs,
        IntervalTrigger(minutes=interval_minutes),
        args=[repository, feed],
        id="refresh_logs",
        name="Refresh log list from server",
        next_run_time=datetime.now(),
        replace_existing=True
    )

    scheduler.start()
    logger.info(f"Scheduler started - log refresh every {interval_minutes} min")


def stop_scheduler():
    """Stop the APScheduler."""
    global scheduler

    if scheduler is not None:
        scheduler.shutdown()
        scheduler = None
        logger.info("Scheduler stopped")
