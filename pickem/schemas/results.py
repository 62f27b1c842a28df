from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from pickem.models import Game, Result
from .base import CamelModel


class RecordResultIn(CamelModel):
    game_id: Optional[str] = None
    home_score: Optional[int] = Field(default=None, ge=0)
    away_score: Optional[int] = Field(default=None, ge=0)
    admin_password: Optional[str] = None


class DeleteResultIn(CamelModel):
    game_id: Optional[str] = None
    admin_password: Optional[str] = None


class ResultOut(CamelModel):
    game_id: str
    home_score: int
    away_score: int
    is_final: bool
    updated_at: Optional[datetime] = None
    home_team: str
    away_team: str
    week: int

    @classmethod
    def from_rows(cls, r: Result, g: Game) -> "ResultOut":
        return cls(
            game_id=r.game_id,
            home_score=r.home_score,
            away_score=r.away_score,
            is_final=bool(r.is_final),
            updated_at=r.updated_at,
            home_team=g.home_team,
            away_team=g.away_team,
            week=g.week,
        )


class ResultLookupOut(CamelModel):
    result: Optional[ResultOut] = None


class WeekResultsOut(CamelModel):
    results: List[ResultOut]


class PendingGameOut(CamelModel):
    id: str
    week: int
    home_team: str
    away_team: str
    game_date: Optional[str] = None
    game_time: Optional[str] = None


class PendingGamesOut(CamelModel):
    pending_games: List[PendingGameOut]
