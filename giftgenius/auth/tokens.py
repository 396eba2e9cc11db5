from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from .config import DEFAULT_AUTH_CONFIG, AuthConfig


def issue_token(user: dict[str, Any], config: AuthConfig = DEFAULT_AUTH_CONFIG) -> str:
    """Sign a session token for *user* valid for ``config.token_ttl_hours``."""
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user["id"]),
        "email": user["email"],
        "iat": now,
        "exp": now + timedelta(hours=config.token_ttl_hours),
    }
    return jwt.encode(payload, config.jwt_secret, algorithm=config.jwt_algorithm)


def decode_token(token: str, config: AuthConfig = DEFAULT_AUTH_CONFIG) -> dict[str, Any]:
    """Verify *token* and return its claims.

    Raises ``jwt.InvalidTokenError`` (or a subclass such as
    ``jwt.ExpiredSignatureError``) when the token cannot be trusted.
    """
    return jwt.decode(
        token,
        config.jwt_secret,
        algorithms=[config.jwt_algorithm],
        options={"require": ["sub", "exp"]},
    )
