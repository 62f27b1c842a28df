from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from sqlalchemy.orm import Session

from pickem.models import Game, Pick, User
from pickem.services.grading import (
    TOTAL_SELECTIONS,
    GradablePick,
    MalformedPickError,
    PickType,
    validate_pick,
)
from pickem.services.odds.base import ProviderGame
from pickem.services.odds.importer import upsert_games

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PickSubmission:
    game_id: str
    selection: str


@dataclass(frozen=True)
class PickFailure:
    game_id: str
    reason: str


def get_or_create_user(db: Session, name: str) -> User:
    user = db.query(User).filter(User.name == name).first()
    if user is None:
        user = User(name=name)
        db.add(user)
        db.flush()
        logger.info("Created user %s (id=%s)", name, user.id)
    return user


def infer_pick_type(selection: str) -> PickType:
    return PickType.TOTAL if selection.strip().lower() in TOTAL_SELECTIONS else PickType.SPREAD


def frozen_line(game: Game, pick_type: PickType) -> float:
    # Spread is stored home-signed whichever side was picked
    return game.total if pick_type is PickType.TOTAL else game.spread


def _canonical_selection(game: Game, pick_type: PickType, selection: str) -> str:
    s = selection.strip()
    if pick_type is PickType.TOTAL:
        return s.lower()
    for team in (game.home_team, game.away_team):
        if s.casefold() == team.casefold():
            return team
    return s


def save_picks(
    db: Session,
    user_name: str,
    week: int,
    picks: Iterable[PickSubmission],
    games: Optional[Sequence[ProviderGame]] = None,
) -> Tuple[int, List[PickFailure]]:
    """Upsert a user's picks for a week, freezing each pick's line.

    ``games`` (the slate the user was shown) are upserted first so that
    picks against freshly fetched lines have a game to point at. Returns
    (saved count, failures). Commits.
    """
    user = get_or_create_user(db, user_name.strip())

    if games:
        inserted, updated = upsert_games(db, games, week)
        logger.debug("Ensured games for week %d", week, extra={"inserted": inserted, "updated": updated})

    # Last submission for a game wins
    by_game: Dict[str, PickSubmission] = {}
    for sub in picks:
        by_game[sub.game_id] = sub

    failures: List[PickFailure] = []
    if not by_game:
        db.commit()
        return 0, failures

    game_ids = list(by_game.keys())
    games_by_id = {g.id: g for g in db.query(Game).filter(Game.id.in_(game_ids)).all()}
    existing = {
        p.game_id: p
        for p in db.query(Pick).filter(Pick.user_id == user.id, Pick.game_id.in_(game_ids)).all()
    }

    saved = 0
    for gid, sub in by_game.items():
        game = games_by_id.get(gid)
        if game is None:
            failures.append(PickFailure(gid, "unknown game"))
            continue

        pick_type = infer_pick_type(sub.selection)
        selection = _canonical_selection(game, pick_type, sub.selection)
        line = frozen_line(game, pick_type)
        try:
            validate_pick(GradablePick(pick_type.value, selection, line, game.home_team, game.away_team))
        except MalformedPickError as e:
            failures.append(PickFailure(gid, str(e)))
            continue

        row = existing.get(gid)
        if row is None:
            db.add(Pick(user_id=user.id, game_id=gid, pick_type=pick_type.value, selection=selection, line=line))
        else:
            row.pick_type = pick_type.value
            row.selection = selection
            row.line = line
        saved += 1

    db.commit()
    for f in failures:
        logger.warning("Pick not saved user=%s game=%s: %s", user.name, f.game_id, f.reason)
    logger.info("Saved %d of %d picks for user %s (week %d)", saved, len(by_game), user.name, week)
    return saved, failures


def get_user_picks(db: Session, user_name: str, week: int) -> Dict[str, str]:
    rows = (
        db.query(Pick.game_id, Pick.selection)
        .join(User, User.id == Pick.user_id)
        .join(Game, Game.id == Pick.game_id)
        .filter(User.name == user_name, Game.week == week)
        .all()
    )
    return {gid: selection for gid, selection in rows}


def delete_user(db: Session, user_name: str) -> bool:
    """Delete a user and, by cascade, all of their picks."""
    user = db.query(User).filter(User.name == user_name).first()
    if user is None:
        return False
    db.delete(user)
    db.commit()
    logger.info("Deleted user %s and their picks", user_name)
    return True
