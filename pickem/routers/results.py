from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from pickem.db.session import get_db
from pickem.deps.auth import require_admin
from pickem.schemas import (
    DeleteResultIn,
    MessageOut,
    PendingGameOut,
    PendingGamesOut,
    RecordResultIn,
    ResultLookupOut,
    ResultOut,
    WeekResultsOut,
)
from pickem.services import results as results_service

router = APIRouter()


@router.post("/api/results", response_model=MessageOut)
def record_result(body: RecordResultIn, request: Request, db: Session = Depends(get_db)):
    require_admin(request, body.admin_password)
    if not body.game_id or body.home_score is None or body.away_score is None:
        raise HTTPException(status_code=400, detail="gameId, homeScore, and awayScore required")

    try:
        results_service.record_result(db, body.game_id, body.home_score, body.away_score)
    except results_service.GameNotFoundError:
        raise HTTPException(status_code=404, detail=f"Game {body.game_id} not found")
    return MessageOut(message="Result updated")


@router.get("/api/results", response_model=None)
def get_results(
    game_id: Optional[str] = Query(default=None, alias="gameId"),
    week: Optional[int] = None,
    db: Session = Depends(get_db),
):
    if game_id:
        row = results_service.get_result(db, game_id)
        return ResultLookupOut(result=ResultOut.from_rows(*row) if row else None)

    if week:
        rows = results_service.results_for_week(db, week)
        return WeekResultsOut(results=[ResultOut.from_rows(r, g) for r, g in rows])

    games = results_service.pending_games(db)
    return PendingGamesOut(
        pending_games=[
            PendingGameOut(
                id=g.id,
                week=g.week,
                home_team=g.home_team,
                away_team=g.away_team,
                game_date=g.game_date,
                game_time=g.game_time,
            )
            for g in games
        ]
    )


@router.delete("/api/results", response_model=MessageOut)
def delete_result(body: DeleteResultIn, request: Request, db: Session = Depends(get_db)):
    require_admin(request, body.admin_password)
    if not body.game_id:
        raise HTTPException(status_code=400, detail="gameId required")

    results_service.delete_result(db, body.game_id)
    return MessageOut(message="Result deleted")
