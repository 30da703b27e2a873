"""
Sync Scheduler - Cron and On-Demand Execution

Runs the Notion sync once (default) or on a cron schedule using APScheduler.

Features:
- RUN_ONCE mode for CI / external schedulers (default)
- Cron-based scheduling (configurable via SYNC_SCHEDULE_CRON)
- Startup validation of credentials and database identifiers
- Graceful shutdown handling

Usage:
    # Run once and exit
    python -m apps.fetcher

    # Scheduled mode
    RUN_ONCE=false python -m apps.fetcher
"""

import asyncio
import logging
import signal
import sys

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from apps.fetcher.sync import run_sync
from utils.config import Settings, settings
from utils.logging import setup_logging

logger = logging.getLogger(__name__)


class SyncScheduler:
    """
    Scheduler for periodic or on-demand sync runs.

    Handles:
    - APScheduler setup and management
    - Cron-based scheduling
    - RUN_ONCE immediate execution
    - Signal handling for graceful shutdown
    """

    def __init__(self, settings: Settings, run_once: bool = True) -> None:
        """
        Initialize scheduler.

        Args:
            settings: Application settings
            run_once: If True, run the sync once and exit
        """
        self.settings = settings
        self.run_once = run_once
        self.scheduler: AsyncIOScheduler | None = None
        self.shutdown_event = asyncio.Event()

        logger.info(
            "SyncScheduler initialized",
            extra={
                "run_once": run_once,
                "cron_schedule": settings.SYNC_SCHEDULE_CRON,
            },
        )

    def validate_settings(self) -> None:
        """Warn about missing credentials and database identifiers."""
        if not self.settings.NOTION_API_KEY:
            logger.warning("NOTION_API_KEY is not set; Notion requests will be rejected")

        for feed in self.settings.missing_databases():
            logger.warning(
                "No database configured for %s feed; it will be empty",
                feed,
                extra={"feed": feed},
            )

    async def execute_sync(self) -> None:
        """Execute one sync run."""
        logger.info("Starting sync execution")

        try:
            output_file = await run_sync(self.settings)

            logger.info(
                "Sync execution completed successfully",
                extra={"output_file": str(output_file)},
            )

        except Exception as e:
            logger.error(
                "Sync execution failed",
                extra={"error": str(e)},
                exc_info=True,
            )
            raise

    def setup_signal_handlers(self) -> None:
        """Setup handlers for graceful shutdown on SIGINT/SIGTERM."""

        def signal_handler(signum: int, frame: object) -> None:
            logger.info(f"Received signal {signum}, initiating graceful shutdown")
            self.shutdown_event.set()

        signal.signal(signal.SIGINT, signal_handler)
        signal.signal(signal.SIGTERM, signal_handler)

    async def start(self) -> None:
        """
        Start scheduler or execute once.

        In RUN_ONCE mode, executes immediately and returns.
        In scheduled mode, runs continuously until shutdown signal.
        """
        self.validate_settings()

        if self.run_once:
            logger.info("Running in RUN_ONCE mode")
            await self.execute_sync()
            return

        self.setup_signal_handlers()
        logger.info("Running in scheduled mode")

        self.scheduler = AsyncIOScheduler()

        trigger = CronTrigger.from_crontab(self.settings.SYNC_SCHEDULE_CRON)
        self.scheduler.add_job(
            self.execute_sync,
            trigger=trigger,
            id="notion_sync_job",
            name="Periodic Notion Sync",
            replace_existing=True,
            max_instances=1,
        )

        # Start scheduler first to get next_run_time
        self.scheduler.start()

        job = self.scheduler.get_job("notion_sync_job")
        next_run = getattr(job, "next_run_time", None)

        logger.info(
            "Scheduled sync job",
            extra={
                "schedule": self.settings.SYNC_SCHEDULE_CRON,
                "next_run": str(next_run) if next_run is not None else None,
            },
        )

        await self.shutdown_event.wait()

        logger.info("Shutting down scheduler")
        self.scheduler.shutdown(wait=True)
        logger.info("Scheduler shutdown complete")


async def main() -> None:
    """Main entry point for the fetcher."""
    setup_logging(level=settings.LOG_LEVEL, format_type=settings.LOG_FORMAT)

    scheduler = SyncScheduler(settings, run_once=settings.RUN_ONCE)

    try:
        await scheduler.start()
    except Exception as e:
        logger.error("Fatal error", extra={"error": str(e)}, exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
