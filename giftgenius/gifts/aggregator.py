from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass

from .config import DEFAULT_RANKING_CONFIG, RankingConfig
from .models import GiftCandidate, ScoredGift, SearchSpec
from .ranking import plan_limits, rank_gifts
from .stores.base import GiftProvider

logger = logging.getLogger(__name__)


@dataclass
class GiftSearchResult:
    gifts: list[ScoredGift]
    total_found: int
    max_results: int
    keywords_queried: list[str]
    elapsed_ms: float

    @property
    def selected(self) -> int:
        return len(self.gifts)


async def search_gifts(
    spec: SearchSpec,
    plan: str,
    providers: Sequence[GiftProvider],
    config: RankingConfig = DEFAULT_RANKING_CONFIG,
) -> GiftSearchResult:
    """Query every (keyword, provider) pair concurrently and rank the results.

    All queries are awaited before ranking; a provider that raises despite its
    contract is logged and contributes nothing.
    """
    start_time = time.perf_counter()
    limits = plan_limits(plan, config)
    keywords = list(spec.keywords[: limits.keyword_limit])

    queries = [
        (keyword, provider)
        for keyword in keywords
        for provider in providers
    ]
    outcomes = await asyncio.gather(
        *(provider.search(keyword, spec.price_range) for keyword, provider in queries),
        return_exceptions=True,
    )

    candidates: list[GiftCandidate] = []
    for (keyword, provider), outcome in zip(queries, outcomes):
        if isinstance(outcome, BaseException):
            logger.warning(
                "Provider %s raised for %r; treating as empty",
                getattr(provider, "name", provider), keyword,
                exc_info=outcome,
            )
            continue
        candidates.extend(outcome)

    ranked = rank_gifts(candidates, spec, config)[: limits.max_results]

    return GiftSearchResult(
        gifts=ranked,
        total_found=len(candidates),
        max_results=limits.max_results,
        keywords_queried=keywords,
        elapsed_ms=round((time.perf_counter() - start_time) * 1000, 1),
    )
