from __future__ import annotations

from datetime import datetime
from functools import lru_cache
from pathlib import Path
from typing import Literal
from zoneinfo import ZoneInfo

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parents[2]
DATA_DIR = BASE_DIR / "data"

EASTERN = ZoneInfo("America/New_York")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=(BASE_DIR / ".env"), env_prefix="PICKEM_", case_sensitive=False)

    # App
    APP_NAME: str = "Weekly Pick'em"
    ENV: Literal["development", "production", "test"] = Field(default="development")
    LOG_LEVEL: str = Field(default="INFO")
    LOG_SQL: bool = Field(default=False, description="Log every SQL statement")

    # Database
    DATABASE_URL: str = Field(default=f"sqlite:///{(DATA_DIR / 'app.db').as_posix()}")

    # Shared admin secret; the argon2 hash wins when both are set
    ADMIN_PASSWORD: str | None = Field(default=None)
    ADMIN_PASSWORD_HASH: str | None = Field(default=None)

    # Lines provider key names are defined in pickem.services.odds.factory
    LINES_PROVIDER: str = Field(default="the_odds_api")

    # Odds feed (The Odds API)
    ODDS_API_KEY: str | None = Field(default=None)
    ODDS_API_BASE: str = Field(default="https://api.the-odds-api.com/v4")
    ODDS_SPORT_KEY: str = Field(default="americanfootball_ncaaf")
    ODDS_REGIONS: str = Field(default="us")
    ODDS_BOOKMAKERS: str = Field(default="draftkings", description="Single bookmaker keeps lines consistent")
    ODDS_TIMEOUT_SECONDS: float = Field(default=30.0)

    # Season calendar
    SEASON_START: datetime = Field(default=datetime(2025, 8, 28, tzinfo=EASTERN), description="Thursday of week 1")
    MAX_WEEKS: int = Field(default=15)
    TIMEZONE: str = Field(default="America/New_York")

    # Line defaults when the feed omits a market
    DEFAULT_TOTAL: float = Field(default=50.0)
    OVER_UNDER_TEAM: str = Field(default="South Carolina", description="Games with this team are played as over/under")

    # Background jobs
    SCHEDULER_ENABLED: bool = True
    LINES_REFRESH_MINUTES: int = Field(default=30)


@lru_cache
def get_settings() -> Settings:
    settings = Settings()  # type: ignore[call-arg]

    # Ensure directories exist
    DATA_DIR.mkdir(parents=True, exist_ok=True)

    return settings
