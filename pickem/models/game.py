from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import Boolean, DateTime, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pickem.db.session import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Game(Base):
    __tablename__ = "games"

    # Feed event id, or "{away}@{home}_{date}_{time}" when the feed has none
    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    week: Mapped[int] = mapped_column(Integer, index=True)

    home_team: Mapped[str] = mapped_column(String(80))
    away_team: Mapped[str] = mapped_column(String(80))

    # Home-team perspective: negative = home favored
    spread: Mapped[float] = mapped_column(Float, default=0.0)
    total: Mapped[float] = mapped_column(Float, default=50.0)

    # Kickoff in US/Eastern, "YYYY-MM-DD" and "HH:MM"
    game_date: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    game_time: Mapped[Optional[str]] = mapped_column(String(5), nullable=True)

    is_over_under: Mapped[bool] = mapped_column(Boolean, default=False)
    is_sec_matchup: Mapped[bool] = mapped_column(Boolean, default=False)
    original_home_team: Mapped[Optional[str]] = mapped_column(String(80), nullable=True)
    original_away_team: Mapped[Optional[str]] = mapped_column(String(80), nullable=True)

    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    result: Mapped[Optional["Result"]] = relationship(back_populates="game", uselist=False, cascade="all, delete-orphan")
