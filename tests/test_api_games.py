from __future__ import annotations


def test_week_one_games_from_static_slate(client):
    r = client.get("/api/games", params={"week": 1})
    assert r.status_code == 200
    body = r.json()
    assert body["week"] == 1
    assert body["source"] == "static"
    assert body["count"] == 15 == len(body["games"])
    assert "error" not in body

    game = next(g for g in body["games"] if g["id"] == "week1_texas_ohiostate")
    assert (game["home"], game["away"], game["spread"], game["total"]) == ("Ohio State", "Texas", -3.5, 52.5)


def test_week_is_clamped(client):
    body = client.get("/api/games", params={"week": 40}).json()
    assert body["week"] == 15
    assert body["count"] == 0

    body = client.get("/api/games", params={"week": 0}).json()
    assert body["week"] == 1
    assert body["count"] == 15

    assert client.get("/api/games", params={"week": -4}).json()["week"] == 1


def test_default_week(client):
    r = client.get("/api/games")
    assert r.status_code == 200
    assert 1 <= r.json()["week"] <= 15


def test_history_requires_week(client):
    r = client.get("/api/games/history")
    assert r.status_code == 400
    assert r.json() == {"error": "Week parameter required"}


def test_debug_pick_for_game(client, make_game, make_result):
    make_game("g1", "Georgia", "Clemson", spread=-3.5)
    client.post("/api/picks", json={"userName": "Ann", "week": 1, "picks": [{"gameId": "g1", "selection": "Clemson"}]})
    make_result("g1", 24, 20)

    body = client.get("/api/debug-pick", params={"gameId": "g1"}).json()
    assert body["game"]["spread"] == -3.5
    assert body["result"]["homeScore"] == 24
    assert body["picks"] == [{"user": "Ann", "pickType": "spread", "selection": "Clemson", "line": -3.5}]
    calc = body["calculations"][0]
    assert calc["user"] == "Ann"
    assert calc["outcome"] == "loss"
    assert calc["adjustedMargin"] == 0.5


def test_debug_pick_for_user(client, make_game, make_result):
    make_game("g1", "Georgia", "Clemson", spread=-3.5, total=48.5)
    make_game("g2", "Alabama", "Florida State", spread=10.5)
    client.post(
        "/api/picks",
        json={
            "userName": "Ann",
            "week": 1,
            "picks": [{"gameId": "g1", "selection": "under"}, {"gameId": "g2", "selection": "Alabama"}],
        },
    )
    make_result("g1", 24, 20)

    picks = client.get("/api/debug-pick", params={"userName": "Ann"}).json()["userPicks"]
    # Only games with a final result
    assert [p["gameId"] for p in picks] == ["g1"]
    assert picks[0]["outcome"] == "win"
    assert picks[0]["points"] == 44


def test_debug_pick_requires_a_parameter(client):
    r = client.get("/api/debug-pick")
    assert r.status_code == 400
    assert r.json() == {"error": "Provide userName or gameId parameter"}


def test_db_probe_and_health(client):
    r = client.get("/api/test-db")
    assert r.status_code == 200
    assert r.json()["connected"] is True

    r = client.get("/healthz")
    assert r.status_code == 200
    assert r.text == "ok"
