from __future__ import annotations

import logging
from typing import Dict, Iterable, Tuple

from sqlalchemy.orm import Session

from pickem.models import Game
from .base import LinesProvider, ProviderGame, WeekLines

logger = logging.getLogger(__name__)


def upsert_games(db: Session, games: Iterable[ProviderGame], week: int) -> Tuple[int, int]:
    """Insert new games or refresh line and kickoff on existing ones.

    Returns (inserted, updated). Only the game row changes; lines already
    frozen on picks are left alone. Flushes but does not commit.
    """
    incoming: Dict[str, ProviderGame] = {g.id: g for g in games if g.id}
    if not incoming:
        return 0, 0

    existing = {g.id: g for g in db.query(Game).filter(Game.id.in_(list(incoming.keys()))).all()}
    inserted = 0
    updated = 0
    for gid, pg in incoming.items():
        g = existing.get(gid)
        if g is None:
            db.add(
                Game(
                    id=gid,
                    week=week,
                    home_team=pg.home,
                    away_team=pg.away,
                    spread=pg.spread,
                    total=pg.total,
                    game_date=pg.date,
                    game_time=pg.time,
                    is_over_under=pg.is_over_under,
                    is_sec_matchup=pg.is_sec_matchup,
                    original_home_team=pg.original_home_team or pg.home,
                    original_away_team=pg.original_away_team or pg.away,
                )
            )
            inserted += 1
            continue

        changed = False
        for attr, value in (
            ("spread", pg.spread),
            ("total", pg.total),
            ("game_date", pg.date),
            ("game_time", pg.time),
        ):
            if getattr(g, attr) != value:
                setattr(g, attr, value)
                changed = True
        if changed:
            updated += 1

    db.flush()
    return inserted, updated


def import_week_lines(db: Session, provider: LinesProvider, week: int) -> Tuple[WeekLines, int, int]:
    """Fetch a week's lines from ``provider`` and store them. Commits."""
    lines = provider.get_week_lines(week)
    if not lines.games:
        logger.info("No lines to import for week %d (source=%s)", lines.week, lines.source)
        return lines, 0, 0
    inserted, updated = upsert_games(db, lines.games, lines.week)
    db.commit()
    logger.info(
        "Imported week %d lines from %s: %d inserted, %d updated",
        lines.week,
        provider.name(),
        inserted,
        updated,
    )
    return lines, inserted, updated
