from __future__ import annotations

from pickem.core.config import get_settings
from .base import LinesProvider
from .fallback import StaticLinesProvider
from .the_odds_api import TheOddsAPIProvider


def get_provider() -> LinesProvider:
    settings = get_settings()
    key = (settings.LINES_PROVIDER or "the_odds_api").lower()
    if key == "static":
        return StaticLinesProvider()
    return TheOddsAPIProvider(settings)
