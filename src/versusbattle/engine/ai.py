from __future__ import annotations

from collections.abc import Iterator

from .combos import Combination, damage, heal_amount, percent_damage_amount, validate_combination
from .match import MatchState, StepResult, play_cards, skip_turn
from .types import Side, opponent


def iter_candidate_indices(n: int) -> Iterator[tuple[int, ...]]:
    """Yield every index tuple of size 1-4 in ascending lexicographic order."""
    for i in range(n):
        yield (i,)
        for j in range(i + 1, n):
            yield (i, j)
            for k in range(j + 1, n):
                yield (i, j, k)
                for m in range(k + 1, n):
                    yield (i, j, k, m)


def score_combination(state: MatchState, side: Side, combo: Combination) -> int:
    if combo.category == "damage":
        return damage(combo)
    if combo.category == "heal":
        own = state.sides[side]
        missing = own.max_health - own.health
        return min(heal_amount(combo, own.max_health), missing)
    # percent damage scales with the opponent's max health
    return percent_damage_amount(combo, state.sides[opponent(side)].max_health)


def find_best_combination(state: MatchState, side: Side = "enemy") -> Combination | None:
    """Exhaustive search over the side's hand.

    Ties keep the first combination found, so the result is deterministic
    for a given hand order.
    """
    hand = state.sides[side].hand
    best: Combination | None = None
    best_score = -1
    for idx in iter_candidate_indices(len(hand)):
        combo = validate_combination([hand[i] for i in idx])
        if combo is None:
            continue
        score = score_combination(state, side, combo)
        if score > best_score:
            best_score = score
            best = combo
    return best


def ai_take_turn(state: MatchState, side: Side = "enemy") -> StepResult | None:
    """Resolve one computer turn through the same entry points a human uses.

    Returns None when it is not `side`'s turn.
    """
    if not state.in_progress or state.active != side:
        return None
    combo = find_best_combination(state, side)
    if combo is None:
        return skip_turn(state)
    return play_cards(state, list(combo.cards))
