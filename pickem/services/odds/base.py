from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass
class ProviderGame:
    id: str
    home: str
    away: str
    spread: float  # home-signed: negative = home favored
    total: float
    date: Optional[str] = None  # YYYY-MM-DD, US/Eastern
    time: Optional[str] = None  # HH:MM, US/Eastern
    is_over_under: bool = False
    is_sec_matchup: bool = False
    original_home_team: Optional[str] = None
    original_away_team: Optional[str] = None


@dataclass
class WeekLines:
    week: int
    games: List[ProviderGame] = field(default_factory=list)
    source: str = "api"  # api | fallback | error | static
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    error: Optional[str] = None


class LinesProvider:
    """Abstract provider interface for fetching a week's spreads and totals."""

    def name(self) -> str:
        raise NotImplementedError

    def get_week_lines(self, week: int) -> WeekLines:
        """Return the posted lines for a season week.

        - Spreads must be home-signed (negative = home favored).
        - Never raises for feed problems; report them via ``WeekLines.error``.
        """
        raise NotImplementedError
