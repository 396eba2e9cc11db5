from __future__ import annotations

from typing import Protocol

from ..models import GiftCandidate, PriceRange


class GiftProvider(Protocol):
    """A storefront that can be searched for gift candidates.

    Implementations must never raise; any failure resolves to an empty list.
    """

    name: str

    async def search(self, keyword: str, price_range: PriceRange) -> list[GiftCandidate]:
        ...
