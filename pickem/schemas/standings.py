from __future__ import annotations

from typing import List, Optional

from pickem.services.standings import SkippedPick, Standing, StandingsReport
from .base import CamelModel


class StandingOut(CamelModel):
    rank: int
    name: str
    wins: int
    losses: int
    pushes: int
    pending: int
    win_percentage: Optional[int] = None
    record: str

    @classmethod
    def from_standing(cls, s: Standing) -> "StandingOut":
        return cls(
            rank=s.rank,
            name=s.name,
            wins=s.wins,
            losses=s.losses,
            pushes=s.pushes,
            pending=s.pending,
            win_percentage=s.win_percentage,
            record=s.record,
        )


class SkippedPickOut(CamelModel):
    user: str
    game_id: str
    reason: str

    @classmethod
    def from_skip(cls, s: SkippedPick) -> "SkippedPickOut":
        return cls(user=s.user, game_id=s.game_id, reason=s.reason)


class StandingsOut(CamelModel):
    standings: List[StandingOut]
    scope: str
    week: Optional[int] = None
    skipped: List[SkippedPickOut]

    @classmethod
    def from_report(cls, report: StandingsReport) -> "StandingsOut":
        return cls(
            standings=[StandingOut.from_standing(s) for s in report.standings],
            scope=report.scope.label,
            week=report.scope.week,
            skipped=[SkippedPickOut.from_skip(s) for s in report.skipped],
        )


class UserPickCountOut(CamelModel):
    name: str
    total_picks: int


class UsersOut(CamelModel):
    standings: List[UserPickCountOut]
    scope: str = "users"
