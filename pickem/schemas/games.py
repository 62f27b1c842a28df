from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from pickem.models import Game
from pickem.services.odds.base import ProviderGame
from .base import CamelModel


class GameSchema(CamelModel):
    id: str = Field(min_length=1)
    home: str = Field(min_length=1)
    away: str = Field(min_length=1)
    spread: float = 0.0
    total: float = 50.0
    date: Optional[str] = None
    time: Optional[str] = None
    is_over_under: bool = False
    is_sec_matchup: bool = False
    original_home_team: Optional[str] = None
    original_away_team: Optional[str] = None

    @classmethod
    def from_provider(cls, g: ProviderGame) -> "GameSchema":
        return cls(
            id=g.id,
            home=g.home,
            away=g.away,
            spread=g.spread,
            total=g.total,
            date=g.date,
            time=g.time,
            is_over_under=g.is_over_under,
            is_sec_matchup=g.is_sec_matchup,
            original_home_team=g.original_home_team,
            original_away_team=g.original_away_team,
        )

    @classmethod
    def from_model(cls, g: Game) -> "GameSchema":
        return cls(
            id=g.id,
            home=g.home_team,
            away=g.away_team,
            spread=g.spread,
            total=g.total,
            date=g.game_date,
            time=g.game_time,
            is_over_under=bool(g.is_over_under),
            is_sec_matchup=bool(g.is_sec_matchup),
            original_home_team=g.original_home_team,
            original_away_team=g.original_away_team,
        )

    def to_provider(self) -> ProviderGame:
        return ProviderGame(
            id=self.id,
            home=self.home,
            away=self.away,
            spread=self.spread,
            total=self.total,
            date=self.date,
            time=self.time,
            is_over_under=self.is_over_under,
            is_sec_matchup=self.is_sec_matchup,
            original_home_team=self.original_home_team,
            original_away_team=self.original_away_team,
        )


class DateRange(CamelModel):
    from_: datetime = Field(alias="from")
    to: datetime


class WeekGamesOut(CamelModel):
    week: int
    games: List[GameSchema]
    source: str
    count: int
    date_range: Optional[DateRange] = None
    error: Optional[str] = None


class GamesHistoryOut(CamelModel):
    games: List[GameSchema]
    source: str = "database"
    week: int
