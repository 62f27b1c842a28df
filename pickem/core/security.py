from __future__ import annotations

import logging
import secrets
from typing import Optional

from passlib.context import CryptContext

from pickem.core.config import get_settings


logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)


def verify_admin_password(candidate: Optional[str]) -> bool:
    """Check a submitted admin password against the shared secret.

    ``ADMIN_PASSWORD_HASH`` (argon2) is preferred over the plain
    ``ADMIN_PASSWORD``. With neither configured every attempt is refused.
    """
    if not candidate:
        return False

    settings = get_settings()
    if settings.ADMIN_PASSWORD_HASH:
        try:
            return verify_password(candidate, settings.ADMIN_PASSWORD_HASH)
        except ValueError:
            logger.error("PICKEM_ADMIN_PASSWORD_HASH is not a recognizable hash")
            return False
    if settings.ADMIN_PASSWORD:
        return secrets.compare_digest(candidate.encode("utf-8"), settings.ADMIN_PASSWORD.encode("utf-8"))

    logger.warning("Admin password not configured; refusing admin request")
    return False
