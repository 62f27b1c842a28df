"""
Standings aggregation.

``compute_standings`` folds graded picks into per-user win/loss/push tallies
for one week or the whole season and ranks them. It is a pure function of
its inputs; ``load_standings`` is the thin database front for it and takes
the session as an explicit argument.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pickem.models import Game, Pick, Result, User
from pickem.services.grading import (
    GradablePick,
    MalformedPickError,
    Outcome,
    Scoreline,
    grade_pick,
)

logger = logging.getLogger(__name__)


class StandingsUnavailableError(RuntimeError):
    """The input data could not be read at all; no partial result exists."""


@dataclass(frozen=True)
class Scope:
    week: Optional[int] = None

    @classmethod
    def for_week(cls, week: int) -> "Scope":
        if isinstance(week, bool) or not isinstance(week, int) or week < 1:
            raise ValueError(f"week must be a positive integer, got {week!r}")
        return cls(week=week)

    @classmethod
    def for_season(cls) -> "Scope":
        return cls()

    @property
    def is_season(self) -> bool:
        return self.week is None

    @property
    def label(self) -> str:
        return "season" if self.is_season else "week"

    def includes(self, week: Optional[int]) -> bool:
        return self.is_season or week == self.week


@dataclass(frozen=True)
class PickRecord:
    """A stored pick joined with its user's name and its game."""

    user: str
    game_id: str
    week: Optional[int]
    pick_type: Any
    selection: Any
    line: Any
    home_team: str
    away_team: str

    def gradable(self) -> GradablePick:
        return GradablePick(
            pick_type=self.pick_type,
            selection=self.selection,
            line=self.line,
            home_team=self.home_team,
            away_team=self.away_team,
        )


@dataclass(frozen=True)
class SkippedPick:
    user: str
    game_id: str
    reason: str


@dataclass
class Standing:
    name: str
    wins: int = 0
    losses: int = 0
    pushes: int = 0
    pending: int = 0
    rank: int = 0

    @property
    def graded(self) -> int:
        return self.wins + self.losses + self.pushes

    @property
    def win_percentage(self) -> Optional[int]:
        return win_percentage(self.wins, self.losses)

    @property
    def record(self) -> str:
        if self.pushes:
            return f"{self.wins}-{self.losses}-{self.pushes}"
        return f"{self.wins}-{self.losses}"

    def add(self, outcome: Outcome) -> None:
        if outcome is Outcome.WIN:
            self.wins += 1
        elif outcome is Outcome.LOSS:
            self.losses += 1
        else:
            self.pushes += 1


@dataclass
class StandingsReport:
    scope: Scope
    standings: List[Standing] = field(default_factory=list)
    skipped: List[SkippedPick] = field(default_factory=list)


def win_percentage(wins: int, losses: int) -> Optional[int]:
    """Percentage of decided picks won, rounded half up; pushes are excluded.

    None when nothing has been decided yet.
    """
    decided = wins + losses
    if decided <= 0:
        return None
    return math.floor(100 * wins / decided + 0.5)


def ranking_key(standing: Standing) -> Tuple[int, int, int, str, str]:
    # Name is the last resort so the order is total
    return (-standing.wins, standing.losses, -standing.pushes, standing.name.casefold(), standing.name)


def rank_standings(standings: Iterable[Standing]) -> List[Standing]:
    """Sort standings and assign ranks; equal records share a rank."""
    ordered = sorted(standings, key=ranking_key)
    prev: Optional[Tuple[int, int, int]] = None
    for idx, s in enumerate(ordered, start=1):
        record = (s.wins, s.losses, s.pushes)
        if record != prev:
            s.rank = idx
            prev = record
        else:
            s.rank = ordered[idx - 2].rank
    return ordered


def _readable_score(value: Any) -> bool:
    if not isinstance(value, Scoreline) or not isinstance(value.is_final, bool):
        return False
    return all(
        isinstance(s, int) and not isinstance(s, bool) and s >= 0 for s in (value.home_score, value.away_score)
    )


def compute_standings(
    picks: Iterable[PickRecord],
    results: Mapping[str, Scoreline],
    scope: Scope,
) -> StandingsReport:
    """Grade every in-scope pick and rank users by their record.

    Picks whose game has no final result only count as ``pending``. Users
    with nothing graded in scope are left out of the ranking. Malformed picks
    are skipped and reported in ``StandingsReport.skipped``.
    """
    try:
        rows = list(picks)
    except TypeError as e:
        raise StandingsUnavailableError("picks are not iterable") from e
    if not isinstance(results, Mapping):
        raise StandingsUnavailableError("results must be a mapping of game id to score")
    unreadable = sorted(str(gid) for gid, score in results.items() if not _readable_score(score))
    if unreadable:
        raise StandingsUnavailableError(f"unreadable results for games: {', '.join(unreadable)}")
    bad = [r for r in rows if not isinstance(r, PickRecord)]
    if bad:
        raise StandingsUnavailableError(f"{len(bad)} pick rows are unreadable")

    in_scope = [r for r in rows if scope.includes(r.week)]
    seen = Counter((r.user, r.game_id) for r in in_scope)

    tallies: Dict[str, Standing] = {}
    skipped: List[SkippedPick] = []
    for row in in_scope:
        tally = tallies.setdefault(row.user, Standing(name=row.user))
        if seen[(row.user, row.game_id)] > 1:
            skipped.append(SkippedPick(row.user, row.game_id, "duplicate picks for the same game"))
            continue
        try:
            outcome = grade_pick(row.gradable(), results.get(row.game_id))
        except MalformedPickError as e:
            skipped.append(SkippedPick(row.user, row.game_id, str(e)))
            continue
        if outcome is None:
            tally.pending += 1
        else:
            tally.add(outcome)

    skipped.sort(key=lambda s: (s.user, s.game_id, s.reason))
    for s in skipped:
        logger.warning("Skipping pick user=%s game=%s: %s", s.user, s.game_id, s.reason)

    ranked = rank_standings(t for t in tallies.values() if t.graded > 0)
    logger.info(
        "Computed %s standings: %d ranked, %d skipped, %d picks in scope",
        scope.label,
        len(ranked),
        len(skipped),
        len(in_scope),
    )
    return StandingsReport(scope=scope, standings=ranked, skipped=skipped)


def load_pick_records(db: Session, scope: Scope) -> List[PickRecord]:
    q = (
        db.query(Pick, User.name, Game)
        .join(User, Pick.user_id == User.id)
        .join(Game, Pick.game_id == Game.id)
    )
    if not scope.is_season:
        q = q.filter(Game.week == scope.week)
    return [
        PickRecord(
            user=name,
            game_id=g.id,
            week=g.week,
            pick_type=p.pick_type,
            selection=p.selection,
            line=p.line,
            home_team=g.home_team,
            away_team=g.away_team,
        )
        for p, name, g in q.all()
    ]


def load_scores(db: Session, game_ids: Iterable[str]) -> Dict[str, Scoreline]:
    ids = list(set(game_ids))
    if not ids:
        return {}
    rows = db.query(Result).filter(Result.game_id.in_(ids)).all()
    return {r.game_id: Scoreline(r.home_score, r.away_score, bool(r.is_final)) for r in rows}


def load_standings(db: Session, scope: Scope) -> StandingsReport:
    """Read picks and results for ``scope`` in one pass and compute standings."""
    try:
        records = load_pick_records(db, scope)
        scores = load_scores(db, (r.game_id for r in records))
    except SQLAlchemyError as e:
        logger.exception("Failed to read picks/results for %s standings", scope.label)
        raise StandingsUnavailableError("could not read picks and results") from e
    return compute_standings(records, scores, scope)


def pick_counts(db: Session) -> List[Tuple[str, int]]:
    """Every user with their total number of picks, busiest first."""
    rows = (
        db.query(User.name, func.count(Pick.id))
        .outerjoin(Pick, Pick.user_id == User.id)
        .group_by(User.id, User.name)
        .order_by(func.count(Pick.id).desc(), User.name.asc())
        .all()
    )
    return [(name, int(count or 0)) for name, count in rows]
