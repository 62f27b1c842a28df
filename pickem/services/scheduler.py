from __future__ import annotations

import logging
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger

from pickem.core.config import get_settings
from pickem.db.session import session_scope
from pickem.services.odds import get_provider
from pickem.services.odds.importer import import_week_lines
from pickem.services.odds.weeks import current_week

logger = logging.getLogger(__name__)

_scheduler: Optional[BackgroundScheduler] = None

LINES_JOB_ID = "refresh_week_lines"


def _get_tz() -> Optional[ZoneInfo]:
    settings = get_settings()
    if settings.TIMEZONE and settings.TIMEZONE.lower() != "local":
        try:
            return ZoneInfo(settings.TIMEZONE)
        except ZoneInfoNotFoundError:
            logger.warning("Invalid TIMEZONE '%s', falling back to system local.", settings.TIMEZONE)
    return None  # system local


def refresh_current_week_lines() -> None:
    week = current_week()
    try:
        with session_scope() as db:
            import_week_lines(db, get_provider(), week)
    except Exception:
        logger.exception("Line refresh failed for week %d", week)


def _ensure_jobs(sched: BackgroundScheduler) -> None:
    settings = get_settings()
    if settings.LINES_PROVIDER == "the_odds_api" and not settings.ODDS_API_KEY:
        logger.info("No odds API key configured; line refresh job not scheduled")
        return

    trigger = IntervalTrigger(minutes=max(1, settings.LINES_REFRESH_MINUTES), timezone=_get_tz())
    existing = sched.get_job(LINES_JOB_ID)
    if existing is None:
        sched.add_job(refresh_current_week_lines, trigger=trigger, id=LINES_JOB_ID, replace_existing=True)
        logger.info("Scheduled line refresh: %s", trigger)
    else:
        existing.reschedule(trigger=trigger)
        logger.info("Rescheduled line refresh: %s", trigger)


def start_scheduler() -> None:
    global _scheduler
    if _scheduler is not None:
        return
    _scheduler = BackgroundScheduler()
    _ensure_jobs(_scheduler)
    _scheduler.start()
    logger.info("Background scheduler started")


def shutdown_scheduler(wait: bool = True) -> None:
    global _scheduler
    if _scheduler is None:
        return
    try:
        _scheduler.shutdown(wait=wait)
        logger.info("Background scheduler stopped")
    finally:
        _scheduler = None
