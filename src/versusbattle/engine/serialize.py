from __future__ import annotations

from .combos import Combination
from .match import MatchState, SideState
from .types import Card


def card_to_dict(c: Card) -> dict[str, object]:
    return {"category": c.category, "variant": c.variant, "value": c.value}


def _combination_to_dict(combo: Combination | None) -> dict[str, object] | None:
    if combo is None:
        return None
    return {"shape": combo.shape, "cards": [card_to_dict(c) for c in combo.cards]}


def _side_to_dict(s: SideState) -> dict[str, object]:
    return {
        "health": s.health,
        "max_health": s.max_health,
        "hand": [card_to_dict(c) for c in s.hand],
    }


def snapshot(state: MatchState) -> dict[str, object]:
    """Return a JSON-serializable canonical snapshot of the current match state.

    Card uids are left out so snapshots of equally seeded matches compare equal.
    """
    return {
        "seed": state.seed,
        "mode": state.mode,
        "phase": state.phase,
        "active": state.active,
        "level": state.level,
        "best_level": state.best_level,
        "sides": {name: _side_to_dict(s) for name, s in state.sides.items()},
        "deck_size": len(state.deck),
        "selection": sorted(c.label for c in state.selection),
        "last_combination": _combination_to_dict(state.last_combination),
        "invalid_move": state.invalid_move,
        "result": state.result,
        "end_reason": state.end_reason,
    }
