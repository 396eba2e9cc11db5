"""
Storefront providers.

Two explicit variants share the same ``search(keyword, price_range)``
capability:
- live providers that call a real storefront API;
- fixture providers that return deterministic offline data.

Which variant runs is decided by ``StoreConfig.mode``, never by a failure.
"""
from __future__ import annotations

from ..config import DEFAULT_STORE_CONFIG, StoreConfig
from .base import GiftProvider
from .fixture import FIXTURE_STORES, FixtureProvider
from .mercadolivre import MercadoLivreProvider


def build_providers(config: StoreConfig = DEFAULT_STORE_CONFIG) -> list[GiftProvider]:
    if config.mode == "fixture":
        return [FixtureProvider(name, config.results_per_query) for name in FIXTURE_STORES]
    if config.mode == "live":
        return [MercadoLivreProvider(config)]
    raise ValueError(f"Unknown store mode: {config.mode!r}")


__all__ = [
    "FIXTURE_STORES",
    "FixtureProvider",
    "GiftProvider",
    "MercadoLivreProvider",
    "build_providers",
]
