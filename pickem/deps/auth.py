from __future__ import annotations

import logging
from typing import Optional

from fastapi import HTTPException, Request

from pickem.core.security import verify_admin_password

logger = logging.getLogger(__name__)


def require_admin(request: Request, admin_password: Optional[str]) -> None:
    """Raise 401 unless ``admin_password`` matches the shared admin secret."""
    if not verify_admin_password(admin_password):
        client = request.client.host if request.client else "?"
        logger.warning("Rejected admin request %s %s from %s", request.method, request.url.path, client)
        raise HTTPException(status_code=401, detail="Invalid admin password")
