from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

_searches: list[dict[str, Any]] = []
_interactions: list[dict[str, Any]] = []


def record_search(
    user_id: int | None,
    processing_time_ms: float,
    gifts_returned: int,
    total_found: int,
    profile: dict[str, Any],
) -> int:
    """Append a gift search to the history and return its id."""
    search_id = len(_searches) + 1
    _searches.append({
        "id": search_id,
        "user_id": user_id,
        "search_time": datetime.now(timezone.utc),
        "processing_time_ms": processing_time_ms,
        "gifts_returned": gifts_returned,
        "total_found": total_found,
        "user_satisfied": None,
        "profile_data": profile,
    })
    return search_id


def get_search(search_id: int) -> dict[str, Any] | None:
    if 1 <= search_id <= len(_searches):
        return _searches[search_id - 1]
    return None


def mark_search_satisfaction(search_id: int, satisfied: bool) -> None:
    search = get_search(search_id)
    if search is not None:
        search["user_satisfied"] = satisfied


def get_searches(user_id: int | None = None, limit: int | None = None) -> list[dict[str, Any]]:
    """Return searches newest first, optionally filtered to one user."""
    selected = [s for s in reversed(_searches) if user_id is None or s["user_id"] == user_id]
    return selected[:limit] if limit is not None else selected


def record_interaction(user_id: int, gift_name: str, store: str, action: str) -> None:
    _interactions.append({
        "user_id": user_id,
        "gift_name": gift_name,
        "store": store,
        "action": action,
        "created_at": datetime.now(timezone.utc),
    })


def get_interactions() -> list[dict[str, Any]]:
    return _interactions


def clear_events() -> None:
    _searches.clear()
    _interactions.clear()
