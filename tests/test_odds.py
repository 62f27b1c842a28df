from __future__ import annotations

from datetime import datetime, timezone

import httpx
import pytest

from pickem.core.config import Settings
from pickem.models import Game, Pick
from pickem.services.odds.base import ProviderGame
from pickem.services.odds.fallback import StaticLinesProvider, week_one_fallback
from pickem.services.odds.importer import import_week_lines, upsert_games
from pickem.services.odds.teams import clean_team_name, is_tracked
from pickem.services.odds.the_odds_api import TheOddsAPIProvider, eastern_parts, transform_events
from pickem.services.odds.weeks import clamp_week, current_week, week_from_date, week_range
from pickem.services.picks import PickSubmission, save_picks
from pickem.services.results import record_result
from pickem.services.standings import Scope, load_standings


def event(id, home, away, commence, spread=None, total=None):
    markets = []
    if spread is not None:
        markets.append(
            {
                "key": "spreads",
                "outcomes": [{"name": away, "point": -spread}, {"name": home, "point": spread}],
            }
        )
    if total is not None:
        markets.append(
            {
                "key": "totals",
                "outcomes": [{"name": "Over", "point": total}, {"name": "Under", "point": total}],
            }
        )
    return {
        "id": id,
        "home_team": home,
        "away_team": away,
        "commence_time": commence,
        "bookmakers": [{"key": "draftkings", "markets": markets}] if markets else [],
    }


EVENTS = [
    event("e1", "Georgia Bulldogs", "Georgia State Panthers", "2025-09-06T23:30:00Z", spread=-28.5, total=55.5),
    event("e2", "Ohio State Buckeyes", "Michigan Wolverines", "2025-09-06T16:00:00Z", spread=-7, total=44.5),
    event("e3", "Clemson Tigers", "South Carolina Gamecocks", "2025-09-06T16:00:00Z", spread=-3, total=47),
    event(None, "Mississippi State Bulldogs", "Arizona State Sun Devils", "2025-09-06T20:00:00Z"),
    event("e5", "Clemson Tigers", "South Carolina Gamecocks", "2025-09-06T16:00:00Z", spread=-3, total=47),
    event("e6", "Texas Longhorns", "LSU Tigers", "2025-09-07T00:00:00Z", spread=-2.5, total=51.5),
]


def settings(**overrides):
    values = {"ODDS_API_KEY": "test-key", "LINES_PROVIDER": "the_odds_api"}
    values.update(overrides)
    return Settings(**values)


# Weeks

def test_week_boundaries():
    start, end = week_range(1)
    assert start.isoformat() == "2025-08-28T00:00:00-04:00"
    assert (end - start).days == 5
    assert week_range(2)[0].date().isoformat() == "2025-09-04"


@pytest.mark.parametrize(
    "when,expected",
    [
        (datetime(2025, 7, 1, tzinfo=timezone.utc), 1),
        (datetime(2025, 8, 30, 16, tzinfo=timezone.utc), 1),
        (datetime(2025, 9, 4, 12, tzinfo=timezone.utc), 2),
        (datetime(2025, 10, 15, tzinfo=timezone.utc), 7),
        (datetime(2026, 6, 1, tzinfo=timezone.utc), 15),
    ],
)
def test_week_from_date(when, expected):
    assert week_from_date(when) == expected
    assert current_week(when) == expected


def test_clamp_week():
    assert clamp_week(0) == 1
    assert clamp_week(99) == 15
    assert clamp_week(4) == 4


# Team names

@pytest.mark.parametrize(
    "raw,expected",
    [
        ("Georgia Bulldogs", "Georgia"),
        ("LSU Tigers", "LSU"),
        ("Texas A&M Aggies", "Texas A&M"),
        ("Ole Miss Rebels", "Ole Miss"),
        ("Mississippi State Bulldogs", "Mississippi State"),
        ("Miss State Bulldogs", "Mississippi State"),
        ("South Carolina", "South Carolina"),
        ("Memphis Tigers", "Memphis"),
    ],
)
def test_clean_team_name(raw, expected):
    assert clean_team_name(raw) == expected


def test_similar_names_are_not_collapsed():
    assert clean_team_name("Georgia State Panthers") != "Georgia"
    assert clean_team_name("Texas State Bobcats") != "Texas"
    assert not is_tracked(clean_team_name("Georgia State Panthers"))
    assert is_tracked("Georgia")


def test_eastern_parts():
    assert eastern_parts("2025-09-06T23:30:00Z") == ("2025-09-06", "19:30")
    assert eastern_parts("2025-09-07T00:00:00Z") == ("2025-09-06", "20:00")


# Feed transform

def test_transform_events():
    games = transform_events(EVENTS, settings())
    by_home = {g.home: g for g in games}

    # Non-tracked matchup dropped, duplicate Clemson game collapsed
    assert len(games) == 4
    assert "Ohio State" not in by_home

    georgia = by_home["Georgia"]
    assert georgia.id == "e1"
    assert georgia.away == "Georgia State Panthers"
    assert georgia.spread == -28.5
    assert georgia.total == 55.5
    assert (georgia.date, georgia.time) == ("2025-09-06", "19:30")
    assert georgia.original_home_team == "Georgia Bulldogs"
    assert not georgia.is_sec_matchup

    clemson = by_home["Clemson"]
    assert clemson.id == "e3"
    assert clemson.away == "South Carolina"
    assert clemson.is_over_under

    # No bookmaker: pick'em spread and the default total, synthesized id
    msu = by_home["Mississippi State"]
    assert msu.spread == 0.0
    assert msu.total == 50.0
    assert msu.id == "Arizona State Sun Devils@Mississippi State_2025-09-06_16:00"

    texas = by_home["Texas"]
    assert texas.is_sec_matchup


def test_transform_events_sorted_by_kickoff():
    games = transform_events(EVENTS, settings())
    keys = [(g.date, g.time) for g in games]
    assert keys == sorted(keys)


# Provider

def test_provider_requests_week_window():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = request.url
        return httpx.Response(200, json=EVENTS)

    provider = TheOddsAPIProvider(settings(), transport=httpx.MockTransport(handler))
    lines = provider.get_week_lines(2)

    assert lines.source == "api"
    assert lines.error is None
    assert len(lines.games) == 4
    params = seen["url"].params
    assert seen["url"].path == "/v4/sports/americanfootball_ncaaf/odds/"
    assert params["apiKey"] == "test-key"
    assert params["markets"] == "spreads,totals"
    assert params["bookmakers"] == "draftkings"
    assert params["commenceTimeFrom"] == "2025-09-04T04:00:00Z"
    assert params["commenceTimeTo"] == "2025-09-09T04:00:00Z"


def test_provider_without_key():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    provider = TheOddsAPIProvider(settings(ODDS_API_KEY=None), transport=httpx.MockTransport(handler))
    lines = provider.get_week_lines(1)
    assert lines.source == "error"
    assert lines.error == "API key not configured"
    assert lines.games == []


def test_provider_falls_back_for_week_one():
    transport = httpx.MockTransport(lambda request: httpx.Response(500, json={"message": "boom"}))
    provider = TheOddsAPIProvider(settings(), transport=transport)

    week1 = provider.get_week_lines(1)
    assert week1.source == "fallback"
    assert len(week1.games) == 15
    assert week1.error

    week3 = provider.get_week_lines(3)
    assert week3.source == "error"
    assert week3.games == []


def test_provider_rejects_unexpected_payload():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"message": "quota exceeded"}))
    lines = TheOddsAPIProvider(settings(), transport=transport).get_week_lines(4)
    assert lines.source == "error"
    assert "unexpected" in lines.error


def test_provider_falls_back_when_no_event_is_readable():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json=[None, "event", 7]))
    provider = TheOddsAPIProvider(settings(), transport=transport)

    week1 = provider.get_week_lines(1)
    assert week1.source == "fallback"
    assert len(week1.games) == 15

    week2 = provider.get_week_lines(2)
    assert week2.source == "error"
    assert week2.games == []


def test_malformed_events_are_skipped():
    bad_kickoff = event("e7", "Auburn Tigers", "Baylor Bears", "2025-09-06T16:00:00Z", spread=2.5, total=55.5)
    bad_kickoff["commence_time"] = 1757174400
    broken_books = event("e8", "Kentucky Wildcats", "Toledo Rockets", "2025-09-06T16:45:00Z")
    broken_books["bookmakers"] = [{"markets": [None, {"key": "spreads", "outcomes": "n/a"}]}]
    payload = [None, bad_kickoff, broken_books, "junk", EVENTS[0]]

    transport = httpx.MockTransport(lambda request: httpx.Response(200, json=payload))
    lines = TheOddsAPIProvider(settings(), transport=transport).get_week_lines(2)

    assert lines.source == "api"
    assert [g.id for g in lines.games] == ["e8", "e1"]
    kentucky = lines.games[0]
    assert (kentucky.home, kentucky.spread, kentucky.total) == ("Kentucky", 0.0, 50.0)


def test_week_one_fallback_is_home_signed():
    games = {g.id: g for g in week_one_fallback(settings())}
    ohio = games["week1_texas_ohiostate"]
    assert (ohio.home, ohio.away, ohio.spread) == ("Ohio State", "Texas", -3.5)
    # Florida State hosted as an underdog
    assert games["week1_alabama_floridastate"].spread == 10.5
    assert games["week1_southcarolina_virginiatech"].is_over_under
    assert not any(g.is_sec_matchup for g in games.values())


def test_static_provider():
    provider = StaticLinesProvider()
    assert provider.get_week_lines(1).source == "static"
    assert len(provider.get_week_lines(1).games) == 15
    assert provider.get_week_lines(2).games == []


# Importer

def test_upsert_games_refreshes_lines_but_not_frozen_picks(db):
    game = ProviderGame(id="e1", home="Georgia", away="Clemson", spread=-3.5, total=48.5, date="2025-09-06", time="19:30")
    assert upsert_games(db, [game], 2) == (1, 0)
    db.commit()

    save_picks(db, "Ann", 2, [PickSubmission("e1", "Clemson")])
    save_picks(db, "Bob", 2, [PickSubmission("e1", "Georgia")])

    moved = ProviderGame(id="e1", home="Georgia", away="Clemson", spread=-6.5, total=48.5, date="2025-09-06", time="19:30")
    assert upsert_games(db, [moved], 2) == (0, 1)
    assert upsert_games(db, [moved], 2) == (0, 0)
    db.commit()

    assert db.get(Game, "e1").spread == -6.5
    assert {p.line for p in db.query(Pick).all()} == {-3.5}

    # Georgia by 4 covers the -3.5 the picks were made at, not the current -6.5
    record_result(db, "e1", 24, 20)
    report = load_standings(db, Scope.for_week(2))
    rows = {s.name: (s.wins, s.losses) for s in report.standings}
    assert rows == {"Ann": (0, 1), "Bob": (1, 0)}


def test_import_week_lines(db):
    lines, inserted, updated = import_week_lines(db, StaticLinesProvider(), 1)
    assert lines.week == 1
    assert (inserted, updated) == (15, 0)
    assert db.query(Game).filter(Game.week == 1).count() == 15

    _, inserted, updated = import_week_lines(db, StaticLinesProvider(), 1)
    assert (inserted, updated) == (0, 0)

    lines, inserted, _ = import_week_lines(db, StaticLinesProvider(), 2)
    assert lines.games == [] and inserted == 0
