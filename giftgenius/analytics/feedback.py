from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from .store import mark_search_satisfaction

_feedback: list[dict[str, Any]] = []


def record_feedback(
    user_id: int,
    search_id: int | None,
    rating: int,
    satisfied: bool,
    comments: str = "",
) -> None:
    _feedback.append({
        "user_id": user_id,
        "search_id": search_id,
        "rating": rating,
        "satisfied": satisfied,
        "comments": comments,
        "created_at": datetime.now(timezone.utc),
    })
    if search_id is not None:
        mark_search_satisfaction(search_id, satisfied)


def get_feedback(user_id: int | None = None) -> list[dict[str, Any]]:
    if user_id is None:
        return _feedback
    return [f for f in _feedback if f["user_id"] == user_id]


def clear_feedback() -> None:
    _feedback.clear()
