from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Mapping

from versusbattle.engine.match import MatchState


@dataclass
class TelemetryService:
    path: Path

    def log(self, event_type: str, payload: Mapping[str, object]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        rec = {
            "ts": datetime.now(tz=timezone.utc).isoformat(),
            "type": event_type,
            "payload": dict(payload),
        }
        with self.path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(rec, ensure_ascii=False) + "\n")

    def log_match_end(self, state: MatchState, turns: int) -> None:
        self.log(
            "match_end",
            {
                "seed": state.seed,
                "mode": state.mode,
                "result": state.result,
                "reason": state.end_reason,
                "level": state.level,
                "turns": turns,
                "player_health": state.player.health,
                "enemy_health": state.enemy.health,
            },
        )
