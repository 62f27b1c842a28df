from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pickem.db.session import get_db
from pickem.models import Game, Pick, Result, User
from pickem.services.grading import GradablePick, Scoreline, explain_grade

router = APIRouter()
logger = logging.getLogger(__name__)


def _game_dict(g: Game) -> Dict[str, Any]:
    return {
        "id": g.id,
        "week": g.week,
        "homeTeam": g.home_team,
        "awayTeam": g.away_team,
        "spread": g.spread,
        "total": g.total,
        "gameDate": g.game_date,
        "gameTime": g.game_time,
        "isOverUnder": bool(g.is_over_under),
    }


def _result_dict(r: Result) -> Dict[str, Any]:
    return {
        "gameId": r.game_id,
        "homeScore": r.home_score,
        "awayScore": r.away_score,
        "isFinal": bool(r.is_final),
        "updatedAt": r.updated_at.isoformat() if r.updated_at else None,
    }


def _gradable(p: Pick, g: Game) -> GradablePick:
    return GradablePick(p.pick_type, p.selection, p.line, g.home_team, g.away_team)


def _scoreline(r: Optional[Result]) -> Optional[Scoreline]:
    if r is None:
        return None
    return Scoreline(r.home_score, r.away_score, bool(r.is_final))


@router.get("/api/debug-pick")
def debug_pick(
    user_name: Optional[str] = Query(default=None, alias="userName"),
    game_id: Optional[str] = Query(default=None, alias="gameId"),
    db: Session = Depends(get_db),
):
    if not user_name and not game_id:
        raise HTTPException(status_code=400, detail="Provide userName or gameId parameter")

    info: Dict[str, Any] = {}

    if game_id:
        game = db.query(Game).filter(Game.id == game_id).first()
        result = db.query(Result).filter(Result.game_id == game_id).first()
        rows = (
            db.query(Pick, User.name)
            .join(User, User.id == Pick.user_id)
            .filter(Pick.game_id == game_id)
            .order_by(User.name)
            .all()
        )
        info["game"] = _game_dict(game) if game else None
        info["result"] = _result_dict(result) if result else None
        info["picks"] = [
            {"user": name, "pickType": p.pick_type, "selection": p.selection, "line": p.line}
            for p, name in rows
        ]
        if game is not None and result is not None:
            score = _scoreline(result)
            info["calculations"] = [
                {"user": name, "picked": p.selection, **explain_grade(_gradable(p, game), score)}
                for p, name in rows
            ]

    if user_name:
        rows = (
            db.query(Pick, Game, Result)
            .join(User, User.id == Pick.user_id)
            .join(Game, Game.id == Pick.game_id)
            .join(Result, Result.game_id == Game.id)
            .filter(User.name == user_name, Result.is_final == True)  # noqa: E712
            .order_by(Game.week.desc(), Game.game_date.desc())
            .all()
        )
        info["userPicks"] = [
            {
                "gameId": g.id,
                "week": g.week,
                "homeTeam": g.home_team,
                "awayTeam": g.away_team,
                "selection": p.selection,
                "homeScore": r.home_score,
                "awayScore": r.away_score,
                **explain_grade(_gradable(p, g), _scoreline(r)),
            }
            for p, g, r in rows
        ]

    return info


@router.get("/api/test-db")
def test_db(db: Session = Depends(get_db)):
    try:
        now = db.execute(text("SELECT CURRENT_TIMESTAMP")).scalar()
    except SQLAlchemyError as e:
        logger.exception("Database probe failed")
        return JSONResponse({"success": False, "connected": False, "error": str(e)}, status_code=500)
    return {"success": True, "connected": True, "time": str(now)}
