from __future__ import annotations

from typing import Any

from ..auth.users import count_verified_users
from ..billing.payments import total_revenue
from .feedback import get_feedback
from .store import get_searches


def compute_stats() -> dict[str, Any]:
    """Site-wide counters shown on the public landing page."""
    searches = get_searches()
    times = [s["processing_time_ms"] for s in searches]
    feedback = get_feedback()
    satisfied = sum(1 for f in feedback if f["satisfied"])

    return {
        "gifts_found": sum(s["gifts_returned"] for s in searches),
        "total_searches": len(searches),
        "total_users": count_verified_users(),
        "satisfaction_rate": round(satisfied / len(feedback) * 100, 1) if feedback else 0.0,
        "avg_processing_time_ms": round(sum(times) / len(times), 1) if times else 0.0,
        "total_revenue": round(total_revenue() / 100, 2),
    }


def compute_personal_stats(user_id: int) -> dict[str, Any]:
    searches = get_searches(user_id)
    times = [s["processing_time_ms"] for s in searches]
    return {
        "total_searches": len(searches),
        "total_gifts": sum(s["gifts_returned"] for s in searches),
        "avg_processing_time_ms": round(sum(times) / len(times), 1) if times else 0.0,
        "satisfied_searches": sum(1 for s in searches if s["user_satisfied"] is True),
    }
