"""Scheduler para la corrida diaria del tracker."""

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from wordle_tracker.core.config import Settings
from wordle_tracker.database import Database
from wordle_tracker.services.discord_service import DiscordClient
from wordle_tracker.services.tracker_service import WordleTracker


logger = logging.getLogger(__name__)

TRACK_JOB_ID = "track_wordle_results"

# Instancia global del scheduler
scheduler = AsyncIOScheduler()


async def run_daily_tracking(settings: Settings) -> None:
    """Job diario: importa los resultados de las últimas horas y publica el reporte."""
    logger.info("Running daily Wordle tracking job")

    if not settings.discord_bot_token:
        logger.error("Discord bot token is not configured, skipping daily tracking")
        return

    async with DiscordClient(settings.discord_bot_token) as discord:
        tracker = WordleTracker(Database.get_db(), discord, settings)
        await tracker.track_wordle_results()


def start_scheduler(settings: Settings) -> None:
    """Registra el job diario y arranca el scheduler."""
    scheduler.add_job(
        run_daily_tracking,
        trigger=CronTrigger(
            hour=settings.schedule_hour,
            minute=settings.schedule_minute,
            timezone=settings.schedule_timezone,
        ),
        args=[settings],
        id=TRACK_JOB_ID,
        name="Track Wordle Results",
        replace_existing=True,
    )
    scheduler.start()
    logger.info(
        "Scheduler started: daily tracking at %02d:%02d %s",
        settings.schedule_hour, settings.schedule_minute, settings.schedule_timezone
    )


def stop_scheduler() -> None:
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped")
