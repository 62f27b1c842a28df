from __future__ import annotations

import os

# Settings are cached on first import, so configure before importing pickem
os.environ["PICKEM_ENV"] = "test"
os.environ["PICKEM_DATABASE_URL"] = "sqlite://"
os.environ["PICKEM_SCHEDULER_ENABLED"] = "false"
os.environ["PICKEM_ADMIN_PASSWORD"] = "letmein"
os.environ["PICKEM_ADMIN_PASSWORD_HASH"] = ""
os.environ["PICKEM_LINES_PROVIDER"] = "static"
os.environ["PICKEM_ODDS_API_KEY"] = ""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from pickem.db.session import enable_sqlite_foreign_keys, get_db, init_db
from pickem.main import app
from pickem.models import Game, Result

ADMIN_PASSWORD = "letmein"


@pytest.fixture()
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    enable_sqlite_foreign_keys(eng)
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture()
def db(engine):
    TestingSession = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False, future=True)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(engine):
    TestingSession = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False, future=True)

    def _get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def make_game(db):
    def _make(game_id, home, away, spread=0.0, total=50.0, week=1, date="2025-08-30", time="12:00"):
        game = Game(
            id=game_id,
            week=week,
            home_team=home,
            away_team=away,
            spread=spread,
            total=total,
            game_date=date,
            game_time=time,
        )
        db.add(game)
        db.commit()
        return game

    return _make


@pytest.fixture()
def make_result(db):
    def _make(game_id, home_score, away_score, is_final=True):
        result = Result(game_id=game_id, home_score=home_score, away_score=away_score, is_final=is_final)
        db.add(result)
        db.commit()
        return result

    return _make
