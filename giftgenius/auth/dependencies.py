from __future__ import annotations

from typing import Any

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .tokens import decode_token
from .users import get_user

bearer_scheme = HTTPBearer(auto_error=False)


def _resolve_user(token: str) -> dict[str, Any]:
    try:
        claims = decode_token(token)
        user = get_user(int(claims["sub"]))
    except (jwt.InvalidTokenError, ValueError):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid or expired token")
    if user is None:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid or expired token")
    return user


def require_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> dict[str, Any]:
    """Raise 401 if no bearer token is sent, 403 if it does not verify."""
    if credentials is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Access token required")
    return _resolve_user(credentials.credentials)


def optional_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> dict[str, Any] | None:
    """Return the user when a valid token is sent, ``None`` when none is."""
    if credentials is None:
        return None
    return _resolve_user(credentials.credentials)
