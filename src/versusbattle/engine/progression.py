from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from .match import MatchConfig, MatchState


class ProgressStore(Protocol):
    def load_best_level(self) -> int: ...

    def save_best_level(self, level: int) -> None: ...


class MemoryProgressStore:
    """Keeps the best level in memory. Used headless and in tests."""

    def __init__(self, best_level: int = 1) -> None:
        self.best_level = best_level
        self.saves: list[int] = []

    def load_best_level(self) -> int:
        return self.best_level

    def save_best_level(self, level: int) -> None:
        self.best_level = level
        self.saves.append(level)


def enemy_health_for_level(level: int, config: MatchConfig) -> int:
    return config.adventure_enemy_base_health + (level - 1) * config.adventure_enemy_health_step


def load_persisted_best_level(state: MatchState) -> int:
    best = state.progress.load_best_level()
    state.best_level = best if best > 0 else 1
    return state.best_level


def advance_level(state: MatchState) -> None:
    """Move an adventure match to the next level without ending it."""
    from .match import reset_match

    state.level += 1
    if state.level > state.best_level:
        state.best_level = state.level
        state.progress.save_best_level(state.best_level)

    enemy = state.sides["enemy"]
    enemy.max_health = enemy_health_for_level(state.level, state.config)
    enemy.health = enemy.max_health
    state.event_log.append(
        {"type": "LEVEL_ADVANCED", "level": state.level, "enemy_health": enemy.max_health}
    )
    reset_match(state)
