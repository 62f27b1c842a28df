"""
Grading engine for spread and over/under picks.

Turns (pick, final score) into a win/loss/push outcome. Everything here is
pure: no database access, no clock, no logging side effects.

Sign convention: a spread ``line`` is always stored from the home team's
perspective, negative when the home team is favored. A home -3.5 line means
the home team has to win by 4 or more to cover.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional


class PickType(str, Enum):
    SPREAD = "spread"
    TOTAL = "total"


class Outcome(str, Enum):
    WIN = "win"
    LOSS = "loss"
    PUSH = "push"


OVER = "over"
UNDER = "under"
TOTAL_SELECTIONS = (OVER, UNDER)

HOME = "home"
AWAY = "away"


class MalformedPickError(ValueError):
    """Raised when a pick's own data makes it impossible to grade."""


@dataclass(frozen=True)
class GradablePick:
    """The fields of a pick that grading depends on.

    ``line`` is whatever was frozen at submission time; it is validated
    here rather than trusted, since legacy rows may hold anything.
    """

    pick_type: Any
    selection: Any
    line: Any
    home_team: str
    away_team: str


@dataclass(frozen=True)
class Scoreline:
    home_score: int
    away_score: int
    is_final: bool = True


def parse_pick_type(value: Any) -> PickType:
    try:
        return PickType(str(value).strip().lower())
    except ValueError:
        raise MalformedPickError(f"unknown pick type {value!r}") from None


def parse_line(value: Any) -> float:
    # bool is an int subclass; a True line is a data fault, not 1 point
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise MalformedPickError(f"line {value!r} is not numeric")
    line = float(value)
    if not math.isfinite(line):
        raise MalformedPickError(f"line {value!r} is not a finite number")
    return line


def _norm(name: Any) -> str:
    return str(name or "").strip().casefold()


def spread_side(pick: GradablePick) -> str:
    """Return ``"home"`` or ``"away"`` for a spread pick's selection."""
    selected = _norm(pick.selection)
    if selected in TOTAL_SELECTIONS:
        raise MalformedPickError(f"selection {pick.selection!r} is not valid for a spread pick")
    if selected and selected == _norm(pick.home_team):
        return HOME
    if selected and selected == _norm(pick.away_team):
        return AWAY
    raise MalformedPickError(
        f"selection {pick.selection!r} matches neither {pick.home_team!r} nor {pick.away_team!r}"
    )


def total_side(pick: GradablePick) -> str:
    selected = _norm(pick.selection)
    if selected not in TOTAL_SELECTIONS:
        raise MalformedPickError(f"selection {pick.selection!r} is not valid for a total pick")
    return selected


def grade_spread(side: str, line: float, home_score: int, away_score: int) -> Outcome:
    """Grade a spread pick for ``side`` against a home-signed ``line``."""
    adjusted_margin = (home_score - away_score) + line
    if adjusted_margin == 0:
        return Outcome.PUSH
    if side == HOME:
        return Outcome.WIN if adjusted_margin > 0 else Outcome.LOSS
    return Outcome.WIN if adjusted_margin < 0 else Outcome.LOSS


def grade_total(side: str, line: float, home_score: int, away_score: int) -> Outcome:
    points = home_score + away_score
    if points == line:
        return Outcome.PUSH
    if side == OVER:
        return Outcome.WIN if points > line else Outcome.LOSS
    return Outcome.WIN if points < line else Outcome.LOSS


def validate_pick(pick: GradablePick) -> tuple[PickType, str, float]:
    """Check a pick is gradable in principle; returns (type, side, line).

    Raises MalformedPickError describing the first problem found.
    """
    pick_type = parse_pick_type(pick.pick_type)
    side = spread_side(pick) if pick_type is PickType.SPREAD else total_side(pick)
    line = parse_line(pick.line)
    return pick_type, side, line


def grade_pick(pick: GradablePick, score: Optional[Scoreline]) -> Optional[Outcome]:
    """Grade one pick.

    Returns None while the game has no final score; such a pick is pending,
    never a loss. Malformed picks raise MalformedPickError whether or not the
    game is final.
    """
    pick_type, side, line = validate_pick(pick)
    if score is None or not score.is_final:
        return None
    if pick_type is PickType.SPREAD:
        return grade_spread(side, line, score.home_score, score.away_score)
    return grade_total(side, line, score.home_score, score.away_score)


def explain_grade(pick: GradablePick, score: Optional[Scoreline]) -> Dict[str, Any]:
    """Return the arithmetic behind a grade, for debugging disputed picks."""
    try:
        pick_type, side, line = validate_pick(pick)
    except MalformedPickError as e:
        return {"outcome": None, "error": str(e)}

    if score is None or not score.is_final:
        return {"pickType": pick_type.value, "side": side, "line": line, "outcome": None, "calculation": "pending"}

    outcome = grade_pick(pick, score)
    if pick_type is PickType.SPREAD:
        margin = score.home_score - score.away_score
        adjusted = margin + line
        return {
            "pickType": pick_type.value,
            "side": side,
            "line": line,
            "margin": margin,
            "adjustedMargin": adjusted,
            "outcome": outcome.value,
            "calculation": f"{margin} + ({line:g}) = {adjusted:g} -> {outcome.value} for {side}",
        }

    points = score.home_score + score.away_score
    return {
        "pickType": pick_type.value,
        "side": side,
        "line": line,
        "points": points,
        "outcome": outcome.value,
        "calculation": f"{points} vs {line:g} -> {outcome.value} for {side}",
    }
