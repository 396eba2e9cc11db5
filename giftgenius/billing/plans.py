from __future__ import annotations

from dataclasses import dataclass

from ..gifts.config import PLAN_ESSENTIAL, PLAN_SUPREMO


@dataclass(frozen=True)
class Plan:
    key: str
    amount: int  # cents
    name: str
    description: str


PLANS: dict[str, Plan] = {
    PLAN_ESSENTIAL: Plan(
        key=PLAN_ESSENTIAL,
        amount=1490,
        name="GiftGenius Essencial",
        description="15 sugestões personalizadas + análise do perfil",
    ),
    PLAN_SUPREMO: Plan(
        key=PLAN_SUPREMO,
        amount=3550,
        name="GiftGenius Supremo",
        description="50 sugestões premium + busca ampliada em mais palavras-chave",
    ),
}


def get_plan(key: str) -> Plan | None:
    return PLANS.get(key)
