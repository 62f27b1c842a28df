from .base import LinesProvider, ProviderGame, WeekLines
from .factory import get_provider

__all__ = [
    "LinesProvider",
    "ProviderGame",
    "WeekLines",
    "get_provider",
]
