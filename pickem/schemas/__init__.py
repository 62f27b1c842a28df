from .base import CamelModel, MessageOut
from .games import DateRange, GameSchema, GamesHistoryOut, WeekGamesOut
from .picks import DeleteUserIn, PickFailureOut, PickIn, SavePicksIn, SavePicksOut, UserPicksOut
from .results import (
    DeleteResultIn,
    PendingGameOut,
    PendingGamesOut,
    RecordResultIn,
    ResultLookupOut,
    ResultOut,
    WeekResultsOut,
)
from .standings import SkippedPickOut, StandingOut, StandingsOut, UserPickCountOut, UsersOut

__all__ = [
    "CamelModel",
    "MessageOut",
    "DateRange",
    "GameSchema",
    "GamesHistoryOut",
    "WeekGamesOut",
    "DeleteUserIn",
    "PickFailureOut",
    "PickIn",
    "SavePicksIn",
    "SavePicksOut",
    "UserPicksOut",
    "DeleteResultIn",
    "PendingGameOut",
    "PendingGamesOut",
    "RecordResultIn",
    "ResultLookupOut",
    "ResultOut",
    "WeekResultsOut",
    "SkippedPickOut",
    "StandingOut",
    "StandingsOut",
    "UserPickCountOut",
    "UsersOut",
]
