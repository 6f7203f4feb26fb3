from __future__ import annotations

import argparse
from collections.abc import Sequence
from pathlib import Path

from versusbattle.engine.ai import ai_take_turn
from versusbattle.engine.match import (
    MatchConfig,
    MatchState,
    new_game,
    open_health_selection,
    start_adventure_match,
    start_versus_match,
)
from versusbattle.engine.progression import MemoryProgressStore, ProgressStore
from versusbattle.paths import get_paths
from versusbattle.services.content import ContentService
from versusbattle.services.progress import JsonProgressStore
from versusbattle.services.telemetry import TelemetryService


def run_match(
    config: MatchConfig,
    seed: int,
    *,
    health: int | None,
    adventure: bool,
    max_turns: int,
    progress: ProgressStore,
) -> tuple[MatchState, int]:
    """Play one computer-vs-computer match; both sides use the opponent search."""
    state = new_game(config, seed=seed, progress=progress)
    if adventure:
        start_adventure_match(state)
    else:
        open_health_selection(state)
        start_versus_match(state, health if health is not None else config.versus_default_health)

    turns = 0
    while state.in_progress and turns < max_turns:
        ai_take_turn(state, state.active)
        turns += 1
    return state, turns


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="versusbattle")
    sub = parser.add_subparsers(dest="command", required=True)

    sim = sub.add_parser("simulate", help="Run headless computer-vs-computer matches.")
    sim.add_argument("--matches", type=int, default=1)
    sim.add_argument("--seed", type=int, default=0)
    sim.add_argument("--health", type=int, default=None)
    sim.add_argument("--adventure", action="store_true")
    sim.add_argument("--max-turns", type=int, default=500)
    sim.add_argument("--telemetry", type=Path, default=None)
    sim.add_argument(
        "--save-progress",
        action="store_true",
        help="Persist the best adventure level to the userdata progress file.",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    paths = get_paths()
    content = ContentService(paths.data_dir, paths.schema_dir)
    config = content.load_rules()
    telemetry = TelemetryService(args.telemetry) if args.telemetry is not None else None

    progress: ProgressStore
    if args.save_progress:
        progress = JsonProgressStore(paths.progress_file, content.progress_schema())
    else:
        progress = MemoryProgressStore()

    for n in range(args.matches):
        seed = args.seed + n
        try:
            state, turns = run_match(
                config,
                seed,
                health=args.health,
                adventure=args.adventure,
                max_turns=args.max_turns,
                progress=progress,
            )
        except ValueError as e:
            print(f"versusbattle: error: {e}")
            return 2
        outcome = state.result if state.result != "ongoing" else "unfinished"
        print(
            f"match {n + 1} seed={seed} {outcome} ({state.end_reason}) turns={turns} "
            f"level={state.level} player={state.player.health}/{state.player.max_health} "
            f"enemy={state.enemy.health}/{state.enemy.max_health}"
        )
        if telemetry is not None:
            telemetry.log_match_end(state, turns)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
