from __future__ import annotations

ADMIN_PASSWORD = "letmein"


def record(client, game_id="g1", home=24, away=20, password=ADMIN_PASSWORD):
    return client.post(
        "/api/results",
        json={"gameId": game_id, "homeScore": home, "awayScore": away, "adminPassword": password},
    )


def test_record_and_read_result(client, make_game):
    make_game("g1", "Georgia", "Clemson", spread=-3.5)

    r = record(client)
    assert r.status_code == 200
    assert r.json() == {"success": True, "message": "Result updated"}

    result = client.get("/api/results", params={"gameId": "g1"}).json()["result"]
    assert result["gameId"] == "g1"
    assert (result["homeScore"], result["awayScore"], result["isFinal"]) == (24, 20, True)
    assert (result["homeTeam"], result["awayTeam"], result["week"]) == ("Georgia", "Clemson", 1)


def test_recording_same_score_twice_is_idempotent(client, make_game):
    make_game("g1", "Georgia", "Clemson")
    record(client)
    record(client)

    results = client.get("/api/results", params={"week": 1}).json()["results"]
    assert len(results) == 1
    assert (results[0]["homeScore"], results[0]["awayScore"]) == (24, 20)


def test_correcting_a_score(client, make_game):
    make_game("g1", "Georgia", "Clemson")
    record(client)
    record(client, home=17, away=20)

    result = client.get("/api/results", params={"gameId": "g1"}).json()["result"]
    assert (result["homeScore"], result["awayScore"]) == (17, 20)


def test_pending_games(client, make_game, make_result):
    make_game("g1", "Georgia", "Clemson")
    make_game("g2", "Alabama", "Florida State", time="15:30")
    make_game("g3", "LSU", "USC", week=2)
    make_result("g1", 24, 20)
    make_result("g3", 0, 0, is_final=False)

    pending = client.get("/api/results").json()["pendingGames"]
    assert [g["id"] for g in pending] == ["g2", "g3"]
    assert pending[0]["homeTeam"] == "Alabama"


def test_record_result_errors(client, make_game):
    make_game("g1", "Georgia", "Clemson")

    r = record(client, password="nope")
    assert r.status_code == 401

    r = client.post("/api/results", json={"gameId": "g1", "adminPassword": ADMIN_PASSWORD})
    assert r.status_code == 400
    assert r.json() == {"error": "gameId, homeScore, and awayScore required"}

    r = record(client, game_id="missing")
    assert r.status_code == 404

    r = record(client, home=-1)
    assert r.status_code == 400


def test_unknown_result_is_null(client):
    assert client.get("/api/results", params={"gameId": "nope"}).json() == {"result": None}


def test_delete_result(client, make_game):
    make_game("g1", "Georgia", "Clemson")
    record(client)

    r = client.request("DELETE", "/api/results", json={"gameId": "g1", "adminPassword": "nope"})
    assert r.status_code == 401

    r = client.request("DELETE", "/api/results", json={"gameId": "g1", "adminPassword": ADMIN_PASSWORD})
    assert r.status_code == 200
    assert client.get("/api/results", params={"gameId": "g1"}).json() == {"result": None}
