from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping

from jsonschema import Draft202012Validator

from versusbattle.engine.match import MatchConfig


class ContentError(RuntimeError):
    pass


def _load_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ContentError(f"Missing content file: {path}") from e
    except json.JSONDecodeError as e:
        raise ContentError(f"Invalid JSON in {path}: {e}") from e


def load_schema(path: Path) -> object:
    return _load_json(path)


def validate_json(instance: object, schema: object, *, context: str) -> None:
    validator = Draft202012Validator(schema)
    errors = sorted(validator.iter_errors(instance), key=lambda e: [str(p) for p in e.path])
    if errors:
        lines = [f"Schema validation failed for {context}:"]
        for err in errors[:10]:
            loc = "/".join(str(p) for p in err.absolute_path)
            lines.append(f"- {loc}: {err.message}")
        raise ContentError("\n".join(lines))


def _require_int(obj: Mapping[str, object], key: str) -> int:
    v = obj.get(key)
    if not isinstance(v, int):
        raise ContentError(f"Expected int for {key}")
    return v


def _require_section(obj: Mapping[str, object], key: str) -> Mapping[str, object]:
    v = obj.get(key)
    if not isinstance(v, dict):
        raise ContentError(f"Expected object for {key}")
    return v


def parse_rules(raw: Mapping[str, object]) -> MatchConfig:
    adventure = _require_section(raw, "adventure")
    versus = _require_section(raw, "versus")
    cfg = MatchConfig(
        starting_hand=_require_int(raw, "starting_hand"),
        first_turn_deal=_require_int(raw, "first_turn_deal"),
        turn_deal=_require_int(raw, "turn_deal"),
        hand_limit=_require_int(raw, "hand_limit"),
        adventure_player_health=_require_int(adventure, "player_health"),
        adventure_enemy_base_health=_require_int(adventure, "enemy_base_health"),
        adventure_enemy_health_step=_require_int(adventure, "enemy_health_step"),
        versus_min_health=_require_int(versus, "min_health"),
        versus_max_health=_require_int(versus, "max_health"),
        versus_health_step=_require_int(versus, "health_step"),
        versus_default_health=_require_int(versus, "default_health"),
    )

    # Cross-field checks the schema cannot express
    if cfg.versus_min_health > cfg.versus_max_health:
        raise ContentError("versus.min_health must not exceed versus.max_health")
    if not cfg.versus_min_health <= cfg.versus_default_health <= cfg.versus_max_health:
        raise ContentError("versus.default_health must lie within the health range")
    if (cfg.versus_default_health - cfg.versus_min_health) % cfg.versus_health_step != 0:
        raise ContentError("versus.default_health must be on a health step")
    if cfg.starting_hand > cfg.hand_limit:
        raise ContentError("starting_hand must not exceed hand_limit")
    return cfg


class ContentService:
    def __init__(self, data_dir: Path, schema_dir: Path) -> None:
        self._data_dir = data_dir
        self._schema_dir = schema_dir

    def load_rules(self) -> MatchConfig:
        path = self._data_dir / "rules.json"
        schema = load_schema(self._schema_dir / "rules.schema.json")
        raw = _load_json(path)
        validate_json(raw, schema, context=str(path))
        if not isinstance(raw, dict):
            raise ContentError("rules.json must be an object")
        return parse_rules(raw)

    def progress_schema(self) -> object:
        return load_schema(self._schema_dir / "progress.schema.json")

    def validate_all(self) -> None:
        # Load is validation (schema + parse)
        _ = self.load_rules()
        Draft202012Validator.check_schema(self.progress_schema())
