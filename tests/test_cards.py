from __future__ import annotations

import random
from collections import Counter

from versusbattle.engine.cards import build_card_set, build_shuffled_deck, sort_cards, sort_key
from versusbattle.engine.types import Card


def test_card_set_has_one_of_each_kind() -> None:
    cards = build_card_set()
    assert len(cards) == 34
    by_category = Counter(c.category for c in cards)
    assert by_category == {"damage": 27, "heal": 4, "percent_damage": 3}
    assert len({(c.category, c.variant, c.value) for c in cards}) == 34

    heal_values = sorted(c.value for c in cards if c.category == "heal")
    assert heal_values == [1, 2, 3, 4]
    skill_values = sorted(c.value for c in cards if c.category == "percent_damage")
    assert skill_values == [1, 2, 3]


def test_full_deck_is_four_distinct_copies() -> None:
    deck = build_shuffled_deck(random.Random(1))
    assert len(deck) == 136
    assert len({id(c) for c in deck}) == 136
    assert len({c.uid for c in deck}) == 136
    counts = Counter((c.category, c.variant, c.value) for c in deck)
    assert set(counts.values()) == {4}


def test_deck_order_depends_on_seed() -> None:
    a = [(c.variant, c.value) for c in build_shuffled_deck(random.Random(1))]
    b = [(c.variant, c.value) for c in build_shuffled_deck(random.Random(1))]
    c = [(c.variant, c.value) for c in build_shuffled_deck(random.Random(2))]
    assert a == b
    assert a != c


def test_cards_compare_by_identity() -> None:
    a = Card(category="damage", variant="dots", value=3)
    b = Card(category="damage", variant="dots", value=3)
    assert a != b
    assert a == a
    assert len({a, b}) == 2


def test_sort_order_category_then_variant_then_value() -> None:
    cards = [
        Card(category="percent_damage", variant="skill-1", value=1),
        Card(category="heal", variant="wind-2", value=2),
        Card(category="damage", variant="bamboo", value=1),
        Card(category="damage", variant="dots", value=9),
        Card(category="damage", variant="dots", value=2),
        Card(category="heal", variant="wind-1", value=1),
    ]
    labels = [c.label for c in sort_cards(cards)]
    assert labels == ["dots-2", "dots-9", "bamboo-1", "wind-1", "wind-2", "skill-1"]
    assert sort_key(cards[3]) < sort_key(cards[2])
