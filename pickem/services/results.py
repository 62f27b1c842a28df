from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from pickem.models import Game, Result

logger = logging.getLogger(__name__)


class GameNotFoundError(LookupError):
    pass


def _check_score(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"{name} must be a non-negative integer, got {value!r}")
    return value


def record_result(db: Session, game_id: str, home_score: int, away_score: int) -> Result:
    """Store a final score. Recording the same score again changes nothing."""
    home_score = _check_score("home_score", home_score)
    away_score = _check_score("away_score", away_score)

    game = db.query(Game).filter(Game.id == game_id).first()
    if game is None:
        raise GameNotFoundError(game_id)

    result = db.query(Result).filter(Result.game_id == game_id).first()
    if result is None:
        result = Result(game_id=game_id, home_score=home_score, away_score=away_score, is_final=True)
        db.add(result)
    elif (result.home_score, result.away_score, result.is_final) != (home_score, away_score, True):
        result.home_score = home_score
        result.away_score = away_score
        result.is_final = True
    db.commit()
    logger.info("Recorded final for game %s: %s %d - %s %d", game_id, game.away_team, away_score, game.home_team, home_score)
    return result


def get_result(db: Session, game_id: str) -> Optional[Tuple[Result, Game]]:
    return (
        db.query(Result, Game)
        .join(Game, Game.id == Result.game_id)
        .filter(Result.game_id == game_id)
        .first()
    )


def results_for_week(db: Session, week: int) -> List[Tuple[Result, Game]]:
    return (
        db.query(Result, Game)
        .join(Game, Game.id == Result.game_id)
        .filter(Game.week == week)
        .order_by(Game.game_date, Game.game_time)
        .all()
    )


def pending_games(db: Session) -> List[Game]:
    """Games with no result yet or a result not marked final."""
    return (
        db.query(Game)
        .outerjoin(Result, Result.game_id == Game.id)
        .filter((Result.game_id.is_(None)) | (Result.is_final == False))  # noqa: E712
        .order_by(Game.week, Game.game_date, Game.game_time)
        .all()
    )


def delete_result(db: Session, game_id: str) -> bool:
    result = db.query(Result).filter(Result.game_id == game_id).first()
    if result is None:
        return False
    db.delete(result)
    db.commit()
    logger.info("Deleted result for game %s", game_id)
    return True
