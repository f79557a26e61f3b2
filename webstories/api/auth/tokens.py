"""Bearer tokens: a signed JWT whose subject is the user id."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from ..config import ACCESS_TOKEN_EXPIRE_DAYS, JWT_ALGORITHM, JWT_SECRET

logger = logging.getLogger(__name__)

_REQUIRED_CLAIMS = ["sub", "exp", "iat"]


def create_access_token(user_id: str, ttl: Optional[timedelta] = None) -> str:
    """Sign a token for ``user_id``; lifetime defaults to ACCESS_TOKEN_EXPIRE_DAYS."""
    if ttl is None:
        ttl = timedelta(days=ACCESS_TOKEN_EXPIRE_DAYS)

    issued_at = datetime.now(timezone.utc)
    claims = {"sub": str(user_id), "iat": issued_at, "exp": issued_at + ttl}
    return jwt.encode(claims, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[dict]:
    """Claims of a well-signed, unexpired token, or None."""
    try:
        return jwt.decode(
            token,
            JWT_SECRET,
            algorithms=[JWT_ALGORITHM],
            options={"require": _REQUIRED_CLAIMS},
        )
    except jwt.InvalidTokenError as e:
        logger.debug("Rejected bearer token: %s", e)
        return None


def user_id_from_token(token: str) -> Optional[str]:
    claims = decode_access_token(token)
    if claims is None or not claims["sub"]:
        return None
    return str(claims["sub"])
