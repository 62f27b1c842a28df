from .user import User
from .game import Game
from .result import Result
from .pick import Pick

__all__ = [
    "User",
    "Game",
    "Result",
    "Pick",
]
