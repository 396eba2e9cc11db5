from __future__ import annotations

import logging
from typing import Any

import httpx

from ..config import DEFAULT_STORE_CONFIG, StoreConfig
from ..models import GiftCandidate, PriceRange

logger = logging.getLogger(__name__)

STORE_NAME = "Mercado Livre"


def estimate_rating(item: dict[str, Any]) -> float:
    """Mercado Livre exposes no star rating, so derive one from sales signals."""
    rating = 3.5
    sold = item.get("sold_quantity") or 0
    if sold > 100:
        rating += 0.5
    if sold > 500:
        rating += 0.3
    if (item.get("shipping") or {}).get("free_shipping"):
        rating += 0.2
    reputation = ((item.get("seller") or {}).get("seller_reputation") or {}).get("level_id")
    if reputation == "gold":
        rating += 0.3
    return round(min(5.0, rating), 1)


def parse_item(item: dict[str, Any]) -> GiftCandidate:
    thumbnail = item.get("thumbnail") or ""
    return GiftCandidate(
        name=item["title"],
        price=float(item["price"]),
        image_url=thumbnail.replace("I.jpg", "O.jpg"),
        store_name=STORE_NAME,
        product_url=item.get("permalink") or "",
        rating=estimate_rating(item),
        review_count=int(item.get("sold_quantity") or 0),
    )


class MercadoLivreProvider:
    """Live provider backed by the public Mercado Livre search API."""

    name = STORE_NAME

    def __init__(
        self,
        config: StoreConfig = DEFAULT_STORE_CONFIG,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._transport = transport

    def _build_params(self, keyword: str, price_range: PriceRange) -> dict[str, Any]:
        return {
            "q": keyword,
            "limit": self.config.results_per_query,
            "price": f"{price_range.min:g}-{price_range.max:g}",
        }

    async def search(self, keyword: str, price_range: PriceRange) -> list[GiftCandidate]:
        url = f"{self.config.mercadolivre_base_url}/sites/{self.config.mercadolivre_site_id}/search"
        try:
            async with httpx.AsyncClient(
                timeout=self.config.timeout,
                headers={"Accept": "application/json", "User-Agent": self.config.user_agent},
                transport=self._transport,
            ) as client:
                response = await client.get(url, params=self._build_params(keyword, price_range))
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPError:
            logger.warning("Mercado Livre search failed for %r", keyword, exc_info=True)
            return []
        except ValueError:
            logger.warning("Mercado Livre returned invalid JSON for %r", keyword, exc_info=True)
            return []

        results = payload.get("results") if isinstance(payload, dict) else None
        if not isinstance(results, list):
            logger.warning("Mercado Livre response for %r has no results list", keyword)
            return []

        gifts: list[GiftCandidate] = []
        for item in results:
            try:
                gifts.append(parse_item(item))
            except (AttributeError, KeyError, TypeError, ValueError):
                logger.warning("Skipping malformed Mercado Livre item: %r", item, exc_info=True)
        return gifts
