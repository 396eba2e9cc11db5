from __future__ import annotations

import secrets
import time
from typing import Any

from .config import DEFAULT_AUTH_CONFIG, AuthConfig

_codes: dict[str, dict[str, Any]] = {}


def generate_code() -> str:
    """Return a random six-digit verification code."""
    return str(100000 + secrets.randbelow(900000))


def save_code(email: str, code: str, config: AuthConfig = DEFAULT_AUTH_CONFIG) -> None:
    """Store *code* for *email*, replacing any earlier code."""
    _codes[email.strip().lower()] = {
        "code": code,
        "expires_at": time.time() + config.verification_code_ttl_minutes * 60,
        "used": False,
    }


def verify_code(email: str, code: str) -> bool:
    """Consume *code* if it is the current, unexpired, unused code for *email*."""
    entry = _codes.get(email.strip().lower())
    if not entry or entry["used"] or entry["code"] != code.strip():
        return False
    if time.time() >= entry["expires_at"]:
        return False
    entry["used"] = True
    return True


def clear_codes() -> None:
    _codes.clear()
