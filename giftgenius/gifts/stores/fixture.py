from __future__ import annotations

import random
from urllib.parse import quote_plus

from ..models import GiftCandidate, PriceRange

FIXTURE_STORES: list[str] = ["Mercado Livre", "Shopee", "Magazine Luiza", "Amazon"]


class FixtureProvider:
    """Offline provider returning deterministic items for a named store.

    Items are seeded from ``(store, keyword)`` so the same query always yields
    the same gifts, priced inside the requested range.
    """

    def __init__(self, name: str, items_per_query: int = 5) -> None:
        self.name = name
        self.items_per_query = items_per_query

    async def search(self, keyword: str, price_range: PriceRange) -> list[GiftCandidate]:
        rng = random.Random(f"{self.name}:{keyword}")
        slug = quote_plus(keyword)
        items: list[GiftCandidate] = []
        for i in range(self.items_per_query):
            items.append(GiftCandidate(
                name=f"{keyword} - Produto {self.name} {i + 1}",
                price=round(rng.uniform(price_range.min, price_range.max), 2),
                image_url=f"https://images.pexels.com/photos/{1000000 + i}/pexels-photo-{1000000 + i}.jpeg",
                store_name=self.name,
                product_url=f"https://example.com/{quote_plus(self.name)}/busca?q={slug}&item={i + 1}",
                rating=round(rng.uniform(4.0, 5.0), 1),
                review_count=rng.randint(100, 1100),
            ))
        return items
