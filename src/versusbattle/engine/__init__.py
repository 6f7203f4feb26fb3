"""Deterministic, headless rules engine for versusbattle.

IMPORTANT: This package must never import presentation code or services.
"""

from .actions import PlayCardsAction, SkipTurnAction
from .ai import ai_take_turn, find_best_combination
from .cards import build_card_set, build_shuffled_deck
from .combos import Combination, validate_combination
from .match import (
    MatchConfig,
    MatchError,
    MatchState,
    StepResult,
    deal_cards,
    new_game,
    play_cards,
    skip_turn,
    start_adventure_match,
    start_versus_match,
    step,
)
from .progression import MemoryProgressStore, ProgressStore, load_persisted_best_level
from .types import Card, Category, Phase, Side

__all__ = [
    "Card",
    "Category",
    "Combination",
    "MatchConfig",
    "MatchError",
    "MatchState",
    "MemoryProgressStore",
    "Phase",
    "PlayCardsAction",
    "ProgressStore",
    "Side",
    "SkipTurnAction",
    "StepResult",
    "ai_take_turn",
    "build_card_set",
    "build_shuffled_deck",
    "deal_cards",
    "find_best_combination",
    "load_persisted_best_level",
    "new_game",
    "play_cards",
    "skip_turn",
    "start_adventure_match",
    "start_versus_match",
    "step",
    "validate_combination",
]
