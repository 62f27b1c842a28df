from __future__ import annotations

import logging
import sys
from typing import Dict, Optional

from pickem.core.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"

# Third-party loggers and the level they are held at
_QUIET: Dict[str, int] = {
    "uvicorn": logging.INFO,
    "uvicorn.access": logging.WARNING,
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "apscheduler": logging.WARNING,
}


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging once for the API process and background jobs.

    ``PICKEM_LOG_SQL`` turns on SQLAlchemy statement logging, which is the
    quickest way to see the queries behind a standings request.
    """
    settings = get_settings()
    log_level = getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    for name, lvl in _QUIET.items():
        logging.getLogger(name).setLevel(lvl)
    logging.getLogger("pickem").setLevel(log_level)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if settings.LOG_SQL else logging.WARNING)
