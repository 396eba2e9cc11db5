from __future__ import annotations

from .models import GiftProfile, PriceRange, SearchSpec


class InvalidProfile(ValueError):
    """Raised when a profile lacks the fields a gift search needs."""


# ---------------------------------------------------------------------------
# Lookup tables
# ---------------------------------------------------------------------------

# (inclusive upper age bound, categories); the last band catches everyone else
AGE_BANDS: list[tuple[int | None, list[str]]] = [
    (12, ["brinquedos", "jogos", "livros infantis"]),
    (17, ["games", "eletrônicos", "roupas", "acessórios"]),
    (35, ["tecnologia", "casa", "beleza", "esportes"]),
    (None, ["casa", "jardinagem", "livros", "saúde"]),
]

INTEREST_CATEGORIES: dict[str, list[str]] = {
    "leitura": ["livros", "e-readers", "luminárias"],
    "culinária": ["utensílios cozinha", "livros receitas", "ingredientes"],
    "tecnologia": ["eletrônicos", "gadgets", "acessórios tech"],
    "esportes": ["equipamentos esportivos", "roupas fitness", "suplementos"],
    "arte": ["materiais arte", "quadros", "decoração"],
    "música": ["instrumentos", "fones", "vinis"],
    "viagem": ["acessórios viagem", "guias", "bagagem"],
}

OCCASION_KEYWORDS: dict[str, list[str]] = {
    "aniversario": ["presente aniversário", "gift birthday"],
    "natal": ["presente natal", "christmas gift"],
    "dia-das-maes": ["presente mãe", "dia das mães"],
    "dia-dos-pais": ["presente pai", "dia dos pais"],
    "dia-dos-namorados": ["presente namorada", "presente namorado"],
}

BUDGET_RANGES: dict[str, tuple[float, float]] = {
    "ate-50": (0, 50),
    "50-100": (50, 100),
    "100-200": (100, 200),
    "200-500": (200, 500),
    "500-1000": (500, 1000),
    "1000-plus": (1000, 10000),
}
DEFAULT_BUDGET_RANGE: tuple[float, float] = (0, 1000)

PERSONALITY_PRIORITIES: dict[str, list[str]] = {
    "pratica": ["utilidade", "funcionalidade"],
    "criativa": ["arte", "DIY", "personalização"],
    "aventureira": ["esportes", "viagem", "outdoor"],
    "intelectual": ["livros", "cursos", "tecnologia"],
    "social": ["experiências", "jogos", "acessórios"],
    "elegante": ["luxo", "beleza", "moda"],
}
DEFAULT_PRIORITY: list[str] = ["geral"]


# ---------------------------------------------------------------------------
# Profile analysis
# ---------------------------------------------------------------------------


def split_interests(interests: str) -> list[str]:
    """Split the free-text interests on commas, dropping blank tokens."""
    return [token.strip() for token in interests.split(",") if token.strip()]


def _age_categories(age: int) -> list[str]:
    for upper, categories in AGE_BANDS:
        if upper is None or age <= upper:
            return categories
    return []


def get_categories(age: int, interests: list[str]) -> list[str]:
    categories = list(_age_categories(age))
    for interest in interests:
        categories.extend(INTEREST_CATEGORIES.get(interest.lower(), []))
    # dict.fromkeys keeps first-seen order
    return list(dict.fromkeys(categories))


def generate_keywords(interests: list[str], occasion: str) -> list[str]:
    """Occasion phrases first, then the interest tokens in the order given.

    The order matters: the aggregator only queries a plan-sized prefix.
    """
    keywords = list(OCCASION_KEYWORDS.get(occasion.strip(), []))
    keywords.extend(interests)
    return keywords


def get_price_range(budget: str) -> PriceRange:
    low, high = BUDGET_RANGES.get(budget.strip(), DEFAULT_BUDGET_RANGE)
    return PriceRange(min=low, max=high)


def get_priority(personality: str) -> list[str]:
    return list(PERSONALITY_PRIORITIES.get(personality.strip(), DEFAULT_PRIORITY))


def analyze(profile: GiftProfile) -> SearchSpec:
    """Map a questionnaire profile to a :class:`SearchSpec`.

    Unrecognised budget, occasion or personality tags fall back to defaults.
    Raises :class:`InvalidProfile` only when no usable interest is given.
    """
    interests = split_interests(profile.interests)
    if not interests:
        raise InvalidProfile("At least one interest is required")

    return SearchSpec(
        categories=tuple(get_categories(profile.age, interests)),
        keywords=tuple(generate_keywords(interests, profile.occasion)),
        price_range=get_price_range(profile.budget),
        priority=tuple(get_priority(profile.personality)),
    )
