from __future__ import annotations

import random
from typing import Iterable

from .types import CATEGORIES, DAMAGE_SUITS, HEAL_VARIANTS, SKILL_VARIANTS, Card

COPIES_PER_CARD = 4

_VARIANT_ORDER: dict[str, int] = {
    **{v: i for i, v in enumerate(DAMAGE_SUITS)},
    **{v: i for i, v in enumerate(HEAL_VARIANTS)},
    **{v: i for i, v in enumerate(SKILL_VARIANTS)},
}


def build_card_set() -> list[Card]:
    """Return one of each of the 34 distinct cards, in catalog order."""
    cards: list[Card] = []
    for suit in DAMAGE_SUITS:
        for value in range(1, 10):
            cards.append(Card(category="damage", variant=suit, value=value))
    for i, variant in enumerate(HEAL_VARIANTS):
        cards.append(Card(category="heal", variant=variant, value=i + 1))
    for i, variant in enumerate(SKILL_VARIANTS):
        cards.append(Card(category="percent_damage", variant=variant, value=i + 1))
    return cards


def build_shuffled_deck(rng: random.Random) -> list[Card]:
    deck: list[Card] = []
    # Fresh instances per copy so every card has its own identity.
    for _ in range(COPIES_PER_CARD):
        deck.extend(build_card_set())
    rng.shuffle(deck)
    return deck


def sort_key(card: Card) -> tuple[int, int, int]:
    return (CATEGORIES.index(card.category), _VARIANT_ORDER[card.variant], card.value)


def sort_cards(cards: Iterable[Card]) -> list[Card]:
    return sorted(cards, key=sort_key)
