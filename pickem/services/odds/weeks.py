from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from pickem.core.config import EASTERN, get_settings


WEEK = timedelta(days=7)
# Weeks run Thursday through Tuesday
WEEK_SPAN = timedelta(days=5)


def season_start() -> datetime:
    start = get_settings().SEASON_START
    # A bare date in the environment means midnight Eastern
    if start.tzinfo is None:
        start = start.replace(tzinfo=EASTERN)
    return start


def clamp_week(week: int) -> int:
    return max(1, min(get_settings().MAX_WEEKS, int(week)))


def week_from_date(d: datetime) -> int:
    """Season week containing ``d``; dates before the opener count as week 1."""
    if d.tzinfo is None:
        d = d.replace(tzinfo=timezone.utc)
    elapsed = d - season_start()
    if elapsed < timedelta(0):
        return 1
    return clamp_week(elapsed // WEEK + 1)


def week_range(week: int) -> Tuple[datetime, datetime]:
    start = season_start() + (week - 1) * WEEK
    return start, start + WEEK_SPAN


def current_week(now: Optional[datetime] = None) -> int:
    return week_from_date(now or datetime.now(timezone.utc))
