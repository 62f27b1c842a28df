from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from pickem.db.session import get_db
from pickem.models import Game
from pickem.schemas import DateRange, GameSchema, GamesHistoryOut, WeekGamesOut
from pickem.services.odds import get_provider
from pickem.services.odds.weeks import clamp_week, current_week

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/api/games", response_model=WeekGamesOut, response_model_exclude_none=True)
def week_games(week: Optional[int] = None):
    selected = clamp_week(week) if week is not None else current_week()
    try:
        lines = get_provider().get_week_lines(selected)
    except Exception as e:
        logger.exception("Error fetching lines for week %d", selected)
        return WeekGamesOut(week=selected, games=[], source="error", count=0, error=str(e))

    games = [GameSchema.from_provider(g) for g in lines.games]
    date_range = None
    if lines.date_from and lines.date_to and lines.source == "api":
        date_range = DateRange(from_=lines.date_from, to=lines.date_to)
    return WeekGamesOut(
        week=lines.week,
        games=games,
        source=lines.source,
        count=len(games),
        date_range=date_range,
        error=lines.error,
    )


@router.get("/api/games/history", response_model=GamesHistoryOut)
def games_history(week: Optional[int] = None, db: Session = Depends(get_db)):
    if not week:
        raise HTTPException(status_code=400, detail="Week parameter required")

    games = (
        db.query(Game)
        .filter(Game.week == week)
        .order_by(Game.game_date, Game.game_time)
        .all()
    )
    return GamesHistoryOut(games=[GameSchema.from_model(g) for g in games], week=week)
