from __future__ import annotations

from .config import DEFAULT_RANKING_CONFIG, PlanLimits, RankingConfig
from .models import GiftCandidate, ScoredGift, SearchSpec


def resolve_plan(plan: str, config: RankingConfig = DEFAULT_RANKING_CONFIG) -> str:
    """Return *plan* if it is a known tier, else the default (lowest) tier."""
    return plan if plan in config.plans else config.default_plan


def entitled_plan(
    requested: str,
    active: str | None,
    config: RankingConfig = DEFAULT_RANKING_CONFIG,
) -> str:
    """Cap the *requested* tier at the caller's *active* subscription.

    Callers without an active plan (anonymous or expired) get the default tier.
    Asking for a lower tier than the one paid for is honoured.
    """
    allowed = resolve_plan(active, config) if active else config.default_plan
    plan = resolve_plan(requested, config)
    tiers = list(config.plans)
    return plan if tiers.index(plan) <= tiers.index(allowed) else allowed


def plan_limits(plan: str, config: RankingConfig = DEFAULT_RANKING_CONFIG) -> PlanLimits:
    """Return the result cap and keyword fan-out width for *plan*."""
    return config.plans[resolve_plan(plan, config)]


def score_gift(
    gift: GiftCandidate,
    spec: SearchSpec,
    config: RankingConfig = DEFAULT_RANKING_CONFIG,
) -> float:
    """Compute the additive heuristic score for a single candidate."""
    score = 0.0

    if spec.price_range.contains(gift.price):
        score += config.in_range_bonus

    score += gift.rating * config.rating_weight
    score += min(gift.review_count / config.review_divisor, config.review_cap)

    name_lower = gift.name.lower()
    for keyword in spec.keywords:
        if keyword.lower() in name_lower:
            score += config.keyword_bonus

    return score


def rank_gifts(
    gifts: list[GiftCandidate],
    spec: SearchSpec,
    config: RankingConfig = DEFAULT_RANKING_CONFIG,
) -> list[ScoredGift]:
    """Score every candidate and sort by descending score.

    ``sorted`` is stable, so equal scores keep their incoming order.
    """
    scored = [
        ScoredGift(**gift.model_dump(), score=round(score_gift(gift, spec, config), 4))
        for gift in gifts
    ]
    return sorted(scored, key=lambda g: g.score, reverse=True)
