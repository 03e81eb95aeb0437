"""
Token handling and route guards.

Tokens are HS256 JWTs carrying {"username", "isAdmin"}. A bad or missing
token never fails at extraction time; the guards decide what to reject.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import secret_key, token_ttl_minutes
from .errors import UnauthorizedError

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"

bearer_scheme = HTTPBearer(auto_error=False)


def create_token(username: str, is_admin: bool = False) -> str:
    payload: dict[str, Any] = {"username": username, "isAdmin": is_admin}
    ttl = token_ttl_minutes()
    if ttl:
        payload["exp"] = datetime.now(timezone.utc) + timedelta(minutes=ttl)
    return jwt.encode(payload, secret_key(), algorithm=ALGORITHM)


def decode_token(token: str) -> dict[str, Any] | None:
    try:
        return jwt.decode(token, secret_key(), algorithms=[ALGORITHM])
    except jwt.PyJWTError as ex:
        logger.debug("Rejected token: %s", ex)
        return None


def current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> dict[str, Any] | None:
    if credentials is None:
        return None
    return decode_token(credentials.credentials)


def ensure_admin(user: dict[str, Any] | None = Depends(current_user)) -> dict[str, Any]:
    if not user or not user.get("isAdmin"):
        raise UnauthorizedError()
    return user
