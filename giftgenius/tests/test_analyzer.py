from __future__ import annotations

import pytest

from giftgenius.gifts.analyzer import (
    BUDGET_RANGES,
    InvalidProfile,
    analyze,
    get_price_range,
    get_priority,
)
from giftgenius.gifts.models import GiftProfile


def _profile(**overrides) -> GiftProfile:
    data = {
        "age": 8,
        "interests": "leitura",
        "budget": "ate-50",
        "occasion": "aniversario",
        "personality": "intelectual",
        "plan": "essential",
    }
    data.update(overrides)
    return GiftProfile(**data)


def test_child_reader_birthday_scenario():
    spec = analyze(_profile())
    for category in ["brinquedos", "jogos", "livros infantis", "livros", "e-readers", "luminárias"]:
        assert category in spec.categories
    assert spec.keywords[0] == "presente aniversário"
    assert spec.keywords == ("presente aniversário", "gift birthday", "leitura")
    assert spec.price_range.min == 0
    assert spec.price_range.max == 50
    assert spec.priority == ("livros", "cursos", "tecnologia")


def test_analyze_is_deterministic():
    profile = _profile(age=40, interests="arte, música, viagem", budget="200-500")
    assert analyze(profile) == analyze(profile)


@pytest.mark.parametrize(
    ("age", "expected"),
    [
        (12, "brinquedos"),
        (13, "games"),
        (17, "games"),
        (18, "tecnologia"),
        (35, "tecnologia"),
        (36, "jardinagem"),
    ],
)
def test_age_bands(age, expected):
    spec = analyze(_profile(age=age, interests="xadrez"))
    assert expected in spec.categories


def test_categories_are_deduplicated():
    # "livros" comes from both the 36+ band and the reading interest
    spec = analyze(_profile(age=50, interests="leitura, Leitura"))
    assert spec.categories.count("livros") == 1
    assert "e-readers" in spec.categories


def test_unknown_interest_adds_no_category_but_is_a_keyword():
    spec = analyze(_profile(age=20, interests="origami", occasion=""))
    assert spec.categories == ("tecnologia", "casa", "beleza", "esportes")
    assert spec.keywords == ("origami",)


def test_keywords_keep_source_order_and_trim():
    spec = analyze(_profile(interests="  tecnologia , arte,,  música ", occasion="natal"))
    assert spec.keywords == ("presente natal", "christmas gift", "tecnologia", "arte", "música")


def test_unknown_budget_defaults():
    price_range = get_price_range("muito-caro")
    assert (price_range.min, price_range.max) == (0, 1000)


def test_every_budget_bucket_is_ordered():
    for bucket in list(BUDGET_RANGES) + ["unknown"]:
        price_range = get_price_range(bucket)
        assert price_range.min <= price_range.max


def test_unknown_personality_defaults_to_generic_tag():
    assert get_priority("misteriosa") == ["geral"]


def test_blank_interests_raise_invalid_profile():
    with pytest.raises(InvalidProfile):
        analyze(_profile(interests=" , ,"))
