from __future__ import annotations

from dataclasses import dataclass

from .types import Side


@dataclass(frozen=True)
class PlayCardsAction:
    side: Side
    hand_indices: tuple[int, ...]


@dataclass(frozen=True)
class SkipTurnAction:
    side: Side


Action = PlayCardsAction | SkipTurnAction
