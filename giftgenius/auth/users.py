from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import bcrypt

from .config import DEFAULT_AUTH_CONFIG, AuthConfig

_users: dict[int, dict[str, Any]] = {}
_next_id: int = 1


def _hash_password(plain: str, config: AuthConfig = DEFAULT_AUTH_CONFIG) -> str:
    return bcrypt.hashpw(plain.encode(), bcrypt.gensalt(rounds=config.bcrypt_rounds)).decode()


def _verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode(), hashed.encode())


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def public_user(record: dict[str, Any]) -> dict[str, Any]:
    """Return the fields safe to expose in API responses."""
    return {"id": record["id"], "name": record["name"], "email": record["email"]}


def create_user(name: str, email: str, password: str) -> dict[str, Any]:
    """Insert a new, unverified user. The caller checks for duplicates first."""
    global _next_id
    record = {
        "id": _next_id,
        "name": name.strip(),
        "email": _normalize_email(email),
        "password_hash": _hash_password(password),
        "email_verified": False,
        "email_verified_at": None,
        "created_at": datetime.now(timezone.utc),
        "last_login": None,
        "current_plan": None,
        "plan_expires_at": None,
    }
    _users[_next_id] = record
    _next_id += 1
    return record


def get_user(user_id: int) -> dict[str, Any] | None:
    return _users.get(user_id)


def get_user_by_email(email: str) -> dict[str, Any] | None:
    target = _normalize_email(email)
    for record in _users.values():
        if record["email"] == target:
            return record
    return None


def mark_verified(email: str) -> dict[str, Any] | None:
    record = get_user_by_email(email)
    if record is None:
        return None
    record["email_verified"] = True
    record["email_verified_at"] = datetime.now(timezone.utc)
    return record


def authenticate(email: str, password: str) -> dict[str, Any] | None:
    """Verify credentials. Returns the user record or ``None``.

    Verification status is not checked here; the login route decides.
    """
    record = get_user_by_email(email)
    if record and _verify_password(password, record["password_hash"]):
        return record
    return None


def touch_login(user_id: int) -> None:
    record = _users.get(user_id)
    if record:
        record["last_login"] = datetime.now(timezone.utc)


def update_user(
    user_id: int,
    name: str,
    email: str,
    password: str | None = None,
) -> dict[str, Any] | None:
    record = _users.get(user_id)
    if record is None:
        return None
    record["name"] = name.strip()
    record["email"] = _normalize_email(email)
    if password:
        record["password_hash"] = _hash_password(password)
    return record


def set_plan(user_id: int, plan: str, expires_at: datetime) -> None:
    record = _users.get(user_id)
    if record:
        record["current_plan"] = plan
        record["plan_expires_at"] = expires_at


def count_verified_users() -> int:
    return sum(1 for record in _users.values() if record["email_verified"])


def clear_users() -> None:
    global _next_id
    _users.clear()
    _next_id = 1
