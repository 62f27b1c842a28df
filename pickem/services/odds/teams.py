from __future__ import annotations

import re
from typing import Dict

# Tracked conference: canonical short name -> mascot as the odds feed spells it
SEC_TEAMS: Dict[str, str] = {
    "Alabama": "Crimson Tide",
    "Arkansas": "Razorbacks",
    "Auburn": "Tigers",
    "Florida": "Gators",
    "Georgia": "Bulldogs",
    "Kentucky": "Wildcats",
    "LSU": "Tigers",
    "Ole Miss": "Rebels",
    "Mississippi State": "Bulldogs",
    "Missouri": "Tigers",
    "Oklahoma": "Sooners",
    "South Carolina": "Gamecocks",
    "Tennessee": "Volunteers",
    "Texas": "Longhorns",
    "Texas A&M": "Aggies",
    "Vanderbilt": "Commodores",
}

_FULL_NAMES = {}
for _team, _mascot in SEC_TEAMS.items():
    _FULL_NAMES[_team.casefold()] = _team
    _FULL_NAMES[f"{_team} {_mascot}".casefold()] = _team

_MASCOT_SUFFIX = re.compile(
    r"\s+(?:%s)$" % "|".join(re.escape(m) for m in sorted(set(SEC_TEAMS.values()), key=len, reverse=True)),
    re.IGNORECASE,
)


def clean_team_name(raw: str) -> str:
    """Canonical short name for a feed team name.

    Tracked teams must match exactly (with or without mascot) so that e.g.
    "Georgia State Panthers" never collapses into "Georgia".
    """
    name = " ".join((raw or "").split())
    known = _FULL_NAMES.get(name.casefold())
    if known:
        return known
    if name.startswith("Miss "):
        name = "Mississippi " + name[len("Miss "):]
    return _MASCOT_SUFFIX.sub("", name).strip()


def is_tracked(name: str) -> bool:
    return name in SEC_TEAMS
