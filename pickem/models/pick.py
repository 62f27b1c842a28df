from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Float, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pickem.db.session import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Pick(Base):
    __tablename__ = "picks"
    __table_args__ = (
        UniqueConstraint("user_id", "game_id", name="uq_pick_user_game"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    game_id: Mapped[str] = mapped_column(ForeignKey("games.id", ondelete="CASCADE"), index=True)

    # "spread" or "total"; kept as text so legacy rows can still be diagnosed
    pick_type: Mapped[str] = mapped_column(String(16))
    # Team name for spread picks, "over"/"under" for total picks
    selection: Mapped[str] = mapped_column(String(80))
    # Spread (home-signed) or total in effect when the pick was saved
    line: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)

    user: Mapped["User"] = relationship(back_populates="picks")
    game: Mapped["Game"] = relationship()
