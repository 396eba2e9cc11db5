from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

PLAN_ESSENTIAL = "essential"
PLAN_SUPREMO = "supremo"


@dataclass(frozen=True)
class PlanLimits:
    max_results: int
    keyword_limit: int


@dataclass(frozen=True)
class RankingConfig:
    in_range_bonus: float = 30.0
    rating_weight: float = 10.0
    review_divisor: float = 100.0
    review_cap: float = 20.0
    keyword_bonus: float = 15.0
    # lowest tier first
    plans: dict[str, PlanLimits] = field(
        default_factory=lambda: {
            PLAN_ESSENTIAL: PlanLimits(max_results=15, keyword_limit=3),
            PLAN_SUPREMO: PlanLimits(max_results=50, keyword_limit=5),
        }
    )
    default_plan: str = PLAN_ESSENTIAL


@dataclass(frozen=True)
class StoreConfig:
    mode: str = os.getenv("GIFTGENIUS_STORE_MODE", "live")
    mercadolivre_base_url: str = os.getenv(
        "MERCADOLIVRE_BASE_URL", "https://api.mercadolibre.com"
    )
    mercadolivre_site_id: str = "MLB"
    results_per_query: int = 5
    timeout: float = 10.0
    user_agent: str = "GiftGenius/1.0"


DEFAULT_RANKING_CONFIG = RankingConfig()
DEFAULT_STORE_CONFIG = StoreConfig()
