from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from pickem.db.session import get_db
from pickem.schemas import StandingsOut, UserPickCountOut, UsersOut
from pickem.services.standings import Scope, load_standings, pick_counts

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/api/standings", response_model=None)
def standings(week: Optional[int] = None, season: Optional[str] = None, db: Session = Depends(get_db)):
    if season == "true":
        scope = Scope.for_season()
    elif week is not None:
        try:
            scope = Scope.for_week(week)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
    else:
        # No scope: everyone with how many picks they have made
        rows = pick_counts(db)
        return UsersOut(standings=[UserPickCountOut(name=n, total_picks=c) for n, c in rows])

    logger.debug("Fetching %s standings", scope.label, extra={"week": scope.week})
    report = load_standings(db, scope)
    return StandingsOut.from_report(report)
