from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

_payments: list[dict[str, Any]] = []


def record_payment(
    user_id: int,
    session_id: str,
    plan: str,
    amount: int,
    status: str = "completed",
) -> dict[str, Any]:
    payment = {
        "id": len(_payments) + 1,
        "user_id": user_id,
        "session_id": session_id,
        "plan": plan,
        "amount": amount,
        "status": status,
        "created_at": datetime.now(timezone.utc),
    }
    _payments.append(payment)
    return payment


def has_session(session_id: str) -> bool:
    return any(p["session_id"] == session_id for p in _payments)


def get_payments(user_id: int | None = None) -> list[dict[str, Any]]:
    """Return payments, newest first, optionally for a single user."""
    selected = [p for p in _payments if user_id is None or p["user_id"] == user_id]
    return list(reversed(selected))


def total_spent(user_id: int) -> int:
    return sum(p["amount"] for p in _payments if p["user_id"] == user_id and p["status"] == "completed")


def total_revenue() -> int:
    return sum(p["amount"] for p in _payments if p["status"] == "completed")


def clear_payments() -> None:
    _payments.clear()
