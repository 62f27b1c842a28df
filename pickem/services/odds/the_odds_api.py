from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

import httpx

from pickem.core.config import EASTERN, Settings, get_settings
from .base import LinesProvider, ProviderGame, WeekLines
from .fallback import week_one_fallback
from .teams import SEC_TEAMS, clean_team_name, is_tracked
from .weeks import clamp_week, week_range

logger = logging.getLogger(__name__)

HEADERS = {"User-Agent": "weekly-pickem/1.0", "Accept": "application/json"}


class TheOddsAPIProvider(LinesProvider):
    """Spreads and totals from The Odds API (single bookmaker).

    Only games involving a tracked team are kept. When the feed is down,
    week 1 falls back to a static slate; other weeks come back empty.
    """

    def __init__(self, settings: Optional[Settings] = None, transport: Optional[httpx.BaseTransport] = None) -> None:
        self._settings = settings or get_settings()
        self._transport = transport

    def name(self) -> str:
        return "the_odds_api"

    def get_week_lines(self, week: int) -> WeekLines:
        s = self._settings
        week = clamp_week(week)
        start, end = week_range(week)
        lines = WeekLines(week=week, date_from=start, date_to=end)

        if not s.ODDS_API_KEY:
            logger.error("PICKEM_ODDS_API_KEY not set; no lines for week %d", week)
            lines.source = "error"
            lines.error = "API key not configured"
            return lines

        url = f"{s.ODDS_API_BASE.rstrip('/')}/sports/{s.ODDS_SPORT_KEY}/odds/"
        params = {
            "apiKey": s.ODDS_API_KEY,
            "regions": s.ODDS_REGIONS,
            "markets": "spreads,totals",
            "oddsFormat": "american",
            "dateFormat": "iso",
            "bookmakers": s.ODDS_BOOKMAKERS,
            "commenceTimeFrom": _iso_utc(start),
            "commenceTimeTo": _iso_utc(end),
        }
        logger.info("Fetching lines for week %d: %s to %s", week, params["commenceTimeFrom"], params["commenceTimeTo"])

        try:
            with httpx.Client(timeout=s.ODDS_TIMEOUT_SECONDS, headers=HEADERS, transport=self._transport) as client:
                resp = client.get(url, params=params)
                resp.raise_for_status()
                data = resp.json()
            if not isinstance(data, list):
                raise ValueError(f"unexpected odds payload of type {type(data).__name__}")
            if data and not any(isinstance(ev, dict) for ev in data):
                raise ValueError("odds payload holds no event objects")
            logger.debug("Odds API returned %d events for week %d", len(data), week)
            games = transform_events(data, s)
        # Type and attribute errors here come from a malformed payload
        except (httpx.HTTPError, ValueError, TypeError, AttributeError) as e:
            logger.warning("Odds API fetch failed for week %d: %s", week, e)
            lines.error = str(e)
            if week == 1:
                lines.games = week_one_fallback(s)
                lines.source = "fallback"
            else:
                lines.source = "error"
            return lines

        lines.games = games
        lines.source = "api"
        logger.info("Week %d: %d tracked games after filtering", week, len(lines.games))
        return lines


def _iso_utc(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _parse_iso(s: str) -> datetime:
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    dt = datetime.fromisoformat(s)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def eastern_parts(iso: str) -> tuple[str, str]:
    """Kickoff as ("YYYY-MM-DD", "HH:MM") in US/Eastern."""
    local = _parse_iso(iso).astimezone(EASTERN)
    return local.strftime("%Y-%m-%d"), local.strftime("%H:%M")


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _market(bookmaker: Dict[str, Any], key: str) -> Optional[Dict[str, Any]]:
    markets = bookmaker.get("markets")
    if not isinstance(markets, list):
        return None
    return next((m for m in markets if isinstance(m, dict) and m.get("key") == key), None)


def _outcomes(market: Dict[str, Any]) -> List[Dict[str, Any]]:
    outcomes = market.get("outcomes")
    if not isinstance(outcomes, list):
        return []
    return [o for o in outcomes if isinstance(o, dict)]


def _point(outcome: Optional[Dict[str, Any]]) -> Optional[float]:
    if not outcome:
        return None
    pt = outcome.get("point")
    if isinstance(pt, bool) or not isinstance(pt, (int, float)):
        return None
    return float(pt)


def extract_lines(event: Dict[str, Any], default_total: float) -> tuple[float, float]:
    """(home-signed spread, total) from the first bookmaker on an event."""
    spread, total = 0.0, default_total
    bookmakers = event.get("bookmakers")
    if not isinstance(bookmakers, list) or not bookmakers or not isinstance(bookmakers[0], dict):
        return spread, total
    bm = bookmakers[0]

    sp = _market(bm, "spreads")
    if sp:
        home_raw = _text(event.get("home_team"))
        home_outcome = next((o for o in _outcomes(sp) if o.get("name") == home_raw), None)
        pt = _point(home_outcome)
        if pt is not None:
            spread = pt

    to = _market(bm, "totals")
    if to:
        outcomes = _outcomes(to)
        pt = _point(outcomes[0] if outcomes else None)
        if pt is not None:
            total = pt

    return spread, total


def transform_events(events: Iterable[Dict[str, Any]], settings: Optional[Settings] = None) -> List[ProviderGame]:
    s = settings or get_settings()
    games: List[ProviderGame] = []
    seen = set()
    for ev in events:
        if not isinstance(ev, dict):
            logger.debug("Skipping non-object event %r", ev)
            continue
        home_raw = _text(ev.get("home_team"))
        away_raw = _text(ev.get("away_team"))
        home = clean_team_name(home_raw)
        away = clean_team_name(away_raw)
        if not (is_tracked(home) or is_tracked(away)):
            continue
        try:
            date, time = eastern_parts(_text(ev.get("commence_time")))
        except ValueError as e:
            logger.debug("Skipping event %s with bad kickoff: %s", ev.get("id"), e)
            continue

        key = f"{home}|{away}|{date}|{time}"
        if key in seen:
            continue
        seen.add(key)

        spread, total = extract_lines(ev, s.DEFAULT_TOTAL)
        games.append(
            ProviderGame(
                id=_text(ev.get("id")) or f"{away}@{home}_{date}_{time}",
                home=home,
                away=away,
                spread=spread,
                total=total,
                date=date,
                time=time,
                is_over_under=s.OVER_UNDER_TEAM in (home, away),
                is_sec_matchup=home in SEC_TEAMS and away in SEC_TEAMS,
                original_home_team=home_raw,
                original_away_team=away_raw,
            )
        )

    games.sort(key=lambda g: (g.date or "", g.time or ""))
    return games
