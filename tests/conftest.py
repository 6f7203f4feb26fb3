from __future__ import annotations

import pytest

from versusbattle.engine.match import MatchState, new_game, open_health_selection, start_versus_match
from versusbattle.engine.progression import MemoryProgressStore
from versusbattle.engine.types import Card


def damage_card(suit: str, value: int) -> Card:
    return Card(category="damage", variant=suit, value=value)


def heal_card(n: int) -> Card:
    return Card(category="heal", variant=f"wind-{n}", value=n)


def skill_card(n: int) -> Card:
    return Card(category="percent_damage", variant=f"skill-{n}", value=n)


def versus_state(health: int = 1000, seed: int = 123) -> MatchState:
    """A versus match in progress with the player to act."""
    state = new_game(seed=seed, progress=MemoryProgressStore())
    open_health_selection(state)
    start_versus_match(state, health)
    state.active = "player"
    return state


@pytest.fixture
def state() -> MatchState:
    return versus_state()
