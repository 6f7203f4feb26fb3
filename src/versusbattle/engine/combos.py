from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from .cards import sort_cards
from .types import Card, Category

Shape = Literal["single", "pair", "triplet", "quad", "sequence"]

_SAME_GROUP_SHAPES: dict[int, Shape] = {2: "pair", 3: "triplet", 4: "quad"}

# Heal / percent-damage rates, in hundredths of the target's max health.
_RATE_HUNDREDTHS: dict[Shape, int] = {
    "single": 0,
    "pair": 2,
    "triplet": 3,
    "quad": 5,
    "sequence": 0,
}


@dataclass(frozen=True)
class Combination:
    cards: tuple[Card, ...]
    shape: Shape

    @property
    def category(self) -> Category:
        return self.cards[0].category

    def values(self) -> list[int]:
        return [c.value for c in self.cards]


def _group_key(card: Card) -> tuple[str, str, int | None]:
    # Heal and percent-damage cards group by variant only.
    if card.category == "damage":
        return (card.category, card.variant, card.value)
    return (card.category, card.variant, None)


def _make(cards: Sequence[Card], shape: Shape) -> Combination:
    return Combination(cards=tuple(sort_cards(cards)), shape=shape)


def _check_single(cards: Sequence[Card]) -> Combination | None:
    if cards[0].category != "damage":
        return None
    return _make(cards, "single")


def _check_same_group(cards: Sequence[Card]) -> Combination | None:
    keys = {_group_key(c) for c in cards}
    if len(keys) != 1:
        return None
    shape = _SAME_GROUP_SHAPES.get(len(cards))
    if shape is None:
        return None
    return _make(cards, shape)


def _check_sequence(cards: Sequence[Card]) -> Combination | None:
    if len(cards) != 3:
        return None
    if any(c.category != "damage" for c in cards):
        return None
    if len({c.variant for c in cards}) != 1:
        return None
    values = sorted(c.value for c in cards)
    if values[1] != values[0] + 1 or values[2] != values[1] + 1:
        return None
    return _make(cards, "sequence")


def validate_combination(cards: Sequence[Card]) -> Combination | None:
    """Classify a proposed play, or return None if it is not a legal one.

    Rules are tried in order: single (damage cards only), same group
    (pair / triplet / quad), then three-card same-suit damage sequence.
    """
    if not 1 <= len(cards) <= 4:
        return None
    if len({id(c) for c in cards}) != len(cards):
        return None
    if len(cards) == 1:
        return _check_single(cards)
    same = _check_same_group(cards)
    if same is not None:
        return same
    return _check_sequence(cards)


def damage(combo: Combination) -> int:
    total = sum(combo.values())
    if combo.shape == "triplet":
        return total * 2 if combo.category == "damage" else total
    if combo.shape == "sequence":
        return total * 2
    if combo.shape == "quad":
        return total * 3
    return total


def _rate_hundredths(combo: Combination, doubled_for: Category) -> int:
    rate = _RATE_HUNDREDTHS[combo.shape]
    if combo.shape == "triplet" and combo.category == doubled_for:
        rate *= 2
    return rate


def heal_percent(combo: Combination) -> float:
    return _rate_hundredths(combo, "heal") / 100


def percent_damage_percent(combo: Combination) -> float:
    return _rate_hundredths(combo, "percent_damage") / 100


def heal_amount(combo: Combination, max_health: int) -> int:
    return max_health * _rate_hundredths(combo, "heal") // 100


def percent_damage_amount(combo: Combination, max_health: int) -> int:
    return max_health * _rate_hundredths(combo, "percent_damage") // 100
