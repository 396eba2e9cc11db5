from __future__ import annotations

from giftgenius.gifts.config import RankingConfig
from giftgenius.gifts.models import GiftCandidate, PriceRange, SearchSpec
from giftgenius.gifts.ranking import entitled_plan, plan_limits, rank_gifts, resolve_plan, score_gift

SPEC = SearchSpec(
    categories=("livros",),
    keywords=("presente aniversário", "leitura"),
    price_range=PriceRange(min=0, max=50),
    priority=("livros",),
)


def _gift(name: str = "Caneca", **overrides) -> GiftCandidate:
    data = {
        "name": name,
        "price": 40.0,
        "store_name": "Loja",
        "rating": 4.5,
        "review_count": 300,
    }
    data.update(overrides)
    return GiftCandidate(**data)


def test_score_example_with_and_without_keyword():
    a = _gift("Kit de Leitura Noturna")
    b = _gift("Caneca Térmica")
    assert score_gift(a, SPEC) == 93
    assert score_gift(b, SPEC) == 78
    ranked = rank_gifts([b, a], SPEC)
    assert [g.name for g in ranked] == [a.name, b.name]


def test_price_bounds_are_inclusive():
    assert score_gift(_gift(price=50.0), SPEC) == score_gift(_gift(price=0.0), SPEC)
    assert score_gift(_gift(price=50.01), SPEC) == score_gift(_gift(), SPEC) - 30


def test_review_bonus_is_capped():
    assert score_gift(_gift(review_count=2000), SPEC) == score_gift(_gift(review_count=99999), SPEC)
    assert score_gift(_gift(review_count=0), SPEC) == 30 + 45


def test_each_matching_keyword_adds_bonus():
    both = _gift("Presente Aniversário: kit leitura")
    assert score_gift(both, SPEC) == 78 + 30


def test_score_is_monotonic_in_rating_reviews_and_matches():
    base = score_gift(_gift(), SPEC)
    assert score_gift(_gift(rating=4.8), SPEC) >= base
    assert score_gift(_gift(review_count=900), SPEC) >= base
    assert score_gift(_gift("leitura"), SPEC) >= base


def test_equal_scores_keep_incoming_order():
    gifts = [_gift(f"Caneca {i}", store_name=f"Loja {i}") for i in range(5)]
    ranked = rank_gifts(gifts, SPEC)
    assert [g.name for g in ranked] == [g.name for g in gifts]


def test_custom_weights():
    config = RankingConfig(in_range_bonus=0, rating_weight=1, keyword_bonus=0)
    assert score_gift(_gift(), SPEC, config) == 4.5 + 3


def test_plan_limits():
    assert plan_limits("supremo").max_results == 50
    assert plan_limits("supremo").keyword_limit == 5
    assert plan_limits("essential").max_results == 15
    assert plan_limits("essential").keyword_limit == 3


def test_unknown_plan_falls_back_to_essential():
    assert resolve_plan("platinum") == "essential"
    assert plan_limits("platinum") == plan_limits("essential")


def test_entitled_plan_caps_request_at_active_subscription():
    assert entitled_plan("supremo", None) == "essential"
    assert entitled_plan("supremo", "essential") == "essential"
    assert entitled_plan("supremo", "supremo") == "supremo"
    assert entitled_plan("essential", "supremo") == "essential"
    assert entitled_plan("platinum", "supremo") == "essential"
    assert entitled_plan("supremo", "platinum") == "essential"
