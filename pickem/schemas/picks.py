from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import Field, field_validator

from .base import CamelModel
from .games import GameSchema


class PickIn(CamelModel):
    game_id: str = Field(min_length=1)
    selection: str = Field(min_length=1)


class SavePicksIn(CamelModel):
    user_name: str
    week: int = Field(ge=1)
    picks: List[PickIn]
    games: Optional[List[GameSchema]] = None

    @field_validator("user_name")
    @classmethod
    def _name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("userName must not be blank")
        return v


class PickFailureOut(CamelModel):
    game_id: str
    reason: str


class SavePicksOut(CamelModel):
    success: bool = True
    message: str
    saved: int
    failed: List[PickFailureOut] = Field(default_factory=list)


class UserPicksOut(CamelModel):
    picks: Dict[str, str]


class DeleteUserIn(CamelModel):
    user_name: Optional[str] = None
    admin_password: Optional[str] = None
