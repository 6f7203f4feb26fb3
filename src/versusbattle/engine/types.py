from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Literal

Category = Literal["damage", "heal", "percent_damage"]
DamageSuit = Literal["dots", "characters", "bamboo"]
HealVariant = Literal["wind-1", "wind-2", "wind-3", "wind-4"]
SkillVariant = Literal["skill-1", "skill-2", "skill-3"]

Side = Literal["player", "enemy"]
Mode = Literal["versus", "adventure"]
Phase = Literal["menu", "health_selection", "playing", "game_over"]
Result = Literal["ongoing", "victory", "defeat"]
EndReason = Literal["none", "health_depleted", "too_many_cards"]

CATEGORIES: tuple[Category, ...] = ("damage", "heal", "percent_damage")
DAMAGE_SUITS: tuple[DamageSuit, ...] = ("dots", "characters", "bamboo")
HEAL_VARIANTS: tuple[HealVariant, ...] = ("wind-1", "wind-2", "wind-3", "wind-4")
SKILL_VARIANTS: tuple[SkillVariant, ...] = ("skill-1", "skill-2", "skill-3")

_uids = itertools.count(1)


def _next_uid() -> int:
    return next(_uids)


@dataclass(frozen=True, eq=False)
class Card:
    """A single physical card.

    Equality and hashing are by instance: a full deck holds four cards with
    the same category/variant/value and each must stay independently
    selectable and removable.
    """

    category: Category
    variant: str
    value: int
    uid: int = field(default_factory=_next_uid)

    @property
    def label(self) -> str:
        if self.category == "damage":
            return f"{self.variant}-{self.value}"
        return self.variant

    def __repr__(self) -> str:
        return f"Card({self.label}#{self.uid})"


def opponent(side: Side) -> Side:
    return "enemy" if side == "player" else "player"
