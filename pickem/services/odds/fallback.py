from __future__ import annotations

from typing import List, Optional

from pickem.core.config import Settings, get_settings
from .base import LinesProvider, ProviderGame, WeekLines
from .teams import SEC_TEAMS
from .weeks import clamp_week, week_range


# Opening week slate used when the odds feed is unavailable.
# (id, away, home, date, time, home-signed spread, total)
_WEEK_ONE = [
    ("week1_texas_ohiostate", "Texas", "Ohio State", "2025-08-30", "12:00", -3.5, 52.5),
    ("week1_auburn_baylor", "Auburn", "Baylor", "2025-08-29", "20:00", 2.5, 55.5),
    ("week1_southcarolina_virginiatech", "South Carolina", "Virginia Tech", "2025-08-31", "15:00", -1.5, 48.5),
    ("week1_alabama_floridastate", "Alabama", "Florida State", "2025-08-30", "15:30", 10.5, 59.5),
    ("week1_marshall_georgia", "Marshall", "Georgia", "2025-08-30", "15:30", -28.5, 61.5),
    ("week1_utsa_texasam", "UTSA", "Texas A&M", "2025-08-30", "19:00", -21.5, 54.5),
    ("week1_charleston_vanderbilt", "Charleston Southern", "Vanderbilt", "2025-08-30", "19:00", -35.5, 58.5),
    ("week1_toledo_kentucky", "Toledo", "Kentucky", "2025-08-30", "12:45", -14.5, 52.5),
    ("week1_centralarks_missouri", "Central Arkansas", "Missouri", "2025-08-28", "19:30", -24.5, 56.5),
    ("week1_georgiastate_olemiss", "Georgia State", "Ole Miss", "2025-08-30", "19:45", -28.5, 63.5),
    ("week1_msstate_southernmiss", "Mississippi State", "Southern Miss", "2025-08-30", "12:00", 7.5, 49.5),
    ("week1_alabamaam_arkansas", "Alabama A&M", "Arkansas", "2025-08-30", "15:15", -42.5, 64.5),
    ("week1_liu_florida", "LIU", "Florida", "2025-08-30", "19:00", -48.5, 67.5),
    ("week1_illinoisstate_oklahoma", "Illinois State", "Oklahoma", "2025-08-30", "18:00", -35.5, 61.5),
    ("week1_syracuse_tennessee", "Syracuse", "Tennessee", "2025-08-30", "12:00", -17.5, 56.5),
]


def week_one_fallback(settings: Optional[Settings] = None) -> List[ProviderGame]:
    s = settings or get_settings()
    games = [
        ProviderGame(
            id=gid,
            home=home,
            away=away,
            spread=spread,
            total=total,
            date=date,
            time=time,
            is_over_under=s.OVER_UNDER_TEAM in (home, away),
            is_sec_matchup=home in SEC_TEAMS and away in SEC_TEAMS,
        )
        for gid, away, home, date, time, spread, total in _WEEK_ONE
    ]
    games.sort(key=lambda g: (g.date or "", g.time or ""))
    return games


class StaticLinesProvider(LinesProvider):
    """Offline provider: the built-in week 1 slate, nothing for later weeks."""

    def name(self) -> str:
        return "static"

    def get_week_lines(self, week: int) -> WeekLines:
        week = clamp_week(week)
        start, end = week_range(week)
        games = week_one_fallback() if week == 1 else []
        return WeekLines(week=week, games=games, source="static", date_from=start, date_to=end)
