from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from pickem.db.session import get_db
from pickem.deps.auth import require_admin
from pickem.schemas import DeleteUserIn, MessageOut, PickFailureOut, SavePicksIn, SavePicksOut, UserPicksOut
from pickem.services import picks as picks_service

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/api/picks", response_model=SavePicksOut)
def save_picks(body: SavePicksIn, db: Session = Depends(get_db)):
    logger.info("Processing picks for %s", body.user_name, extra={"week": body.week, "picks": len(body.picks)})
    saved, failures = picks_service.save_picks(
        db,
        body.user_name,
        body.week,
        [picks_service.PickSubmission(p.game_id, p.selection) for p in body.picks],
        [g.to_provider() for g in body.games] if body.games else None,
    )
    total = saved + len(failures)
    return SavePicksOut(
        message=f"Saved {saved} of {total} picks",
        saved=saved,
        failed=[PickFailureOut(game_id=f.game_id, reason=f.reason) for f in failures],
    )


@router.get("/api/picks", response_model=UserPicksOut)
def get_picks(
    user_name: Optional[str] = Query(default=None, alias="userName"),
    week: Optional[int] = None,
    db: Session = Depends(get_db),
):
    if not user_name or not week:
        raise HTTPException(status_code=400, detail="userName and week required")

    picks = picks_service.get_user_picks(db, user_name, week)
    logger.debug("Found %d picks for user %s in week %d", len(picks), user_name, week)
    return UserPicksOut(picks=picks)


@router.delete("/api/picks", response_model=MessageOut)
def delete_user(body: DeleteUserIn, request: Request, db: Session = Depends(get_db)):
    require_admin(request, body.admin_password)
    if not body.user_name:
        raise HTTPException(status_code=400, detail="userName required")

    if not picks_service.delete_user(db, body.user_name):
        raise HTTPException(status_code=404, detail="User not found")
    return MessageOut(message=f"Deleted user {body.user_name}")
