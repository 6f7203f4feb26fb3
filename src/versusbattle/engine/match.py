from __future__ import annotations

import random
from collections.abc import Sequence
from dataclasses import dataclass, field

from .actions import Action, PlayCardsAction, SkipTurnAction
from .cards import build_shuffled_deck, sort_cards
from .combos import (
    Combination,
    damage,
    heal_amount,
    percent_damage_amount,
    validate_combination,
)
from .progression import (
    MemoryProgressStore,
    ProgressStore,
    advance_level,
    enemy_health_for_level,
    load_persisted_best_level,
)
from .types import Card, EndReason, Mode, Phase, Result, Side, opponent

Event = dict[str, object]


class MatchError(RuntimeError):
    pass


@dataclass(frozen=True)
class MatchConfig:
    starting_hand: int = 8
    first_turn_deal: int = 1
    turn_deal: int = 1
    hand_limit: int = 18
    adventure_player_health: int = 1000
    adventure_enemy_base_health: int = 500
    adventure_enemy_health_step: int = 200
    versus_min_health: int = 500
    versus_max_health: int = 2500
    versus_health_step: int = 100
    versus_default_health: int = 1000


@dataclass
class SideState:
    health: int
    max_health: int
    hand: list[Card] = field(default_factory=list)


@dataclass
class StepResult:
    ok: bool
    events: list[Event]
    error: str | None = None


@dataclass
class MatchState:
    config: MatchConfig
    seed: int
    rng: random.Random
    progress: ProgressStore
    sides: dict[Side, SideState]
    mode: Mode = "versus"
    phase: Phase = "menu"
    active: Side = "player"
    deck: list[Card] = field(default_factory=list)
    selection: set[Card] = field(default_factory=set)
    last_combination: Combination | None = None
    invalid_move: bool = False
    result: Result = "ongoing"
    end_reason: EndReason = "none"
    level: int = 1
    best_level: int = 1
    event_log: list[Event] = field(default_factory=list)

    @property
    def player(self) -> SideState:
        return self.sides["player"]

    @property
    def enemy(self) -> SideState:
        return self.sides["enemy"]

    @property
    def in_progress(self) -> bool:
        return self.phase == "playing" and self.result == "ongoing"


def new_game(
    config: MatchConfig | None = None,
    seed: int = 0,
    progress: ProgressStore | None = None,
) -> MatchState:
    """Create a session sitting at the main menu."""
    cfg = config or MatchConfig()
    state = MatchState(
        config=cfg,
        seed=seed,
        rng=random.Random(seed),
        progress=progress if progress is not None else MemoryProgressStore(),
        sides={
            "player": SideState(health=cfg.versus_default_health, max_health=cfg.versus_default_health),
            "enemy": SideState(health=cfg.versus_default_health, max_health=cfg.versus_default_health),
        },
    )
    load_persisted_best_level(state)
    return state


# -------- Dealing / end conditions --------


def deal_cards(state: MatchState, side: Side, count: int) -> None:
    if len(state.deck) < count:
        state.deck = build_shuffled_deck(state.rng)
        state.event_log.append({"type": "DECK_REGENERATED", "size": len(state.deck)})

    dealt = state.deck[:count]
    del state.deck[:count]
    ss = state.sides[side]
    ss.hand.extend(dealt)
    if side == "player":
        ss.hand = sort_cards(ss.hand)
    state.event_log.append({"type": "CARDS_DEALT", "side": side, "count": len(dealt)})

    check_game_over(state)


def _end(state: MatchState, result: Result, reason: EndReason) -> None:
    state.result = result
    state.end_reason = reason
    state.phase = "game_over"
    state.selection.clear()
    state.event_log.append({"type": "GAME_ENDED", "result": result, "reason": reason})


def check_game_over(state: MatchState) -> None:
    if state.result != "ongoing" or state.phase != "playing":
        return
    limit = state.config.hand_limit
    if state.player.health <= 0:
        _end(state, "defeat", "health_depleted")
    elif state.enemy.health <= 0:
        if state.mode == "adventure":
            advance_level(state)
        else:
            _end(state, "victory", "health_depleted")
    elif len(state.player.hand) > limit:
        _end(state, "defeat", "too_many_cards")
    elif len(state.enemy.hand) > limit:
        _end(state, "victory", "too_many_cards")


# -------- Effects --------


def _damage_side(state: MatchState, side: Side, amount: int) -> None:
    ss = state.sides[side]
    dealt = min(ss.health, amount)
    ss.health = max(0, ss.health - amount)
    state.event_log.append({"type": "DAMAGE", "side": side, "amount": amount, "dealt": dealt})


def _heal_side(state: MatchState, side: Side, amount: int) -> None:
    ss = state.sides[side]
    before = ss.health
    ss.health = min(ss.max_health, ss.health + amount)
    state.event_log.append({"type": "HEAL", "side": side, "amount": ss.health - before})


def _apply_combination(state: MatchState, acting: Side, combo: Combination) -> None:
    target = opponent(acting)
    if combo.category == "damage":
        _damage_side(state, target, damage(combo))
    elif combo.category == "heal":
        _heal_side(state, acting, heal_amount(combo, state.sides[acting].max_health))
    elif combo.category == "percent_damage":
        amount = percent_damage_amount(combo, state.sides[target].max_health)
        _damage_side(state, target, amount)


def _next_turn(state: MatchState) -> None:
    state.active = opponent(state.active)
    state.event_log.append({"type": "TURN_STARTED", "side": state.active})
    deal_cards(state, state.active, state.config.turn_deal)
    check_game_over(state)


# -------- Turn engine --------


def _not_in_progress() -> StepResult:
    return StepResult(ok=False, events=[], error="Match is not in progress.")


def _reject_play(state: MatchState, cards: Sequence[Card], error: str) -> StepResult:
    state.invalid_move = True
    event: Event = {"type": "INVALID_MOVE", "side": state.active, "cards": [c.label for c in cards]}
    state.event_log.append(event)
    return StepResult(ok=False, events=[event], error=error)


def play_cards(state: MatchState, cards: Sequence[Card]) -> StepResult:
    """Play `cards` from the active side's hand.

    An illegal play only sets `state.invalid_move`; hands, health, turn and
    phase stay as they were.
    """
    if not state.in_progress:
        return _not_in_progress()
    state.invalid_move = False

    acting = state.active
    hand = state.sides[acting].hand
    if not all(any(c is h for h in hand) for c in cards):
        return _reject_play(state, cards, "Cards are not in hand.")
    combo = validate_combination(cards)
    if combo is None:
        return _reject_play(state, cards, "Invalid combination.")

    mark = len(state.event_log)
    played = {id(c) for c in cards}
    state.sides[acting].hand = [c for c in hand if id(c) not in played]
    if acting == "player":
        state.selection.difference_update(cards)
    state.last_combination = combo
    state.event_log.append(
        {
            "type": "CARDS_PLAYED",
            "side": acting,
            "shape": combo.shape,
            "cards": [c.label for c in combo.cards],
        }
    )
    _apply_combination(state, acting, combo)
    _next_turn(state)
    return StepResult(ok=True, events=state.event_log[mark:])


def skip_turn(state: MatchState) -> StepResult:
    if not state.in_progress:
        return _not_in_progress()
    mark = len(state.event_log)
    state.event_log.append({"type": "TURN_SKIPPED", "side": state.active})
    _next_turn(state)
    return StepResult(ok=True, events=state.event_log[mark:])


def step(state: MatchState, action: Action) -> StepResult:
    """Apply an index-based action for `action.side`."""
    if not state.in_progress:
        return _not_in_progress()
    if action.side != state.active:
        return StepResult(ok=False, events=[], error="Not your turn.")

    if isinstance(action, PlayCardsAction):
        hand = state.sides[action.side].hand
        idx = action.hand_indices
        if len(set(idx)) != len(idx) or any(i < 0 or i >= len(hand) for i in idx):
            return StepResult(ok=False, events=[], error="Invalid hand index.")
        return play_cards(state, [hand[i] for i in idx])
    if isinstance(action, SkipTurnAction):
        return skip_turn(state)
    return StepResult(ok=False, events=[], error="Unknown action.")


# -------- Player selection staging --------


def toggle_selection(state: MatchState, card: Card) -> bool:
    """Add or remove a player card from the selection; returns True if now selected."""
    if not any(card is c for c in state.player.hand):
        raise MatchError("Only cards in the player's hand can be selected.")
    if card in state.selection:
        state.selection.discard(card)
        return False
    state.selection.add(card)
    return True


def clear_selection(state: MatchState) -> None:
    state.selection.clear()


def play_selection(state: MatchState) -> StepResult:
    if not state.in_progress:
        return _not_in_progress()
    if state.active != "player":
        return StepResult(ok=False, events=[], error="Not your turn.")
    if not state.selection:
        return StepResult(ok=False, events=[], error="No cards selected.")
    selected = sort_cards(state.selection)
    result = play_cards(state, selected)
    if result.ok:
        state.selection.clear()
    return result


# -------- Phases / match start --------


def _require_phase(state: MatchState, allowed: Sequence[Phase], what: str) -> None:
    if state.phase not in allowed:
        raise MatchError(f"Cannot {what} from phase {state.phase!r}.")


def reset_match(state: MatchState) -> None:
    """Start a fresh deal with the current health values and mode."""
    state.deck = build_shuffled_deck(state.rng)
    for ss in state.sides.values():
        ss.hand = []
    state.selection.clear()
    state.last_combination = None
    state.invalid_move = False
    state.result = "ongoing"
    state.end_reason = "none"
    state.active = "player" if state.rng.random() < 0.5 else "enemy"
    state.phase = "playing"
    state.event_log.append(
        {"type": "MATCH_STARTED", "mode": state.mode, "level": state.level, "first": state.active}
    )

    deal_cards(state, "player", state.config.starting_hand)
    deal_cards(state, "enemy", state.config.starting_hand)
    deal_cards(state, state.active, state.config.first_turn_deal)


def validate_versus_health(config: MatchConfig, health: int) -> None:
    lo, hi, stp = config.versus_min_health, config.versus_max_health, config.versus_health_step
    if health < lo or health > hi or (health - lo) % stp != 0:
        raise ValueError(f"Health must be between {lo} and {hi} in steps of {stp}.")


def open_health_selection(state: MatchState) -> None:
    _require_phase(state, ("menu", "game_over"), "open health selection")
    state.mode = "versus"
    state.phase = "health_selection"


def return_to_menu(state: MatchState) -> None:
    _require_phase(state, ("health_selection", "playing", "game_over"), "return to menu")
    state.selection.clear()
    state.phase = "menu"


def start_versus_match(state: MatchState, health: int) -> None:
    _require_phase(state, ("health_selection",), "start a versus match")
    validate_versus_health(state.config, health)
    state.mode = "versus"
    state.level = 1
    for ss in state.sides.values():
        ss.health = health
        ss.max_health = health
    reset_match(state)


def start_adventure_match(state: MatchState) -> None:
    _require_phase(state, ("menu", "game_over"), "start an adventure match")
    cfg = state.config
    state.mode = "adventure"
    state.level = 1
    state.player.health = cfg.adventure_player_health
    state.player.max_health = cfg.adventure_player_health
    state.enemy.max_health = enemy_health_for_level(state.level, cfg)
    state.enemy.health = state.enemy.max_health
    reset_match(state)
