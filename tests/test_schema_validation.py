from __future__ import annotations

import json
from pathlib import Path

import pytest

from versusbattle.engine.match import MatchConfig
from versusbattle.paths import get_paths
from versusbattle.services.content import ContentError, ContentService


def test_content_schemas_validate() -> None:
    paths = get_paths()
    content = ContentService(paths.data_dir, paths.schema_dir)
    content.validate_all()


def test_bundled_rules_match_defaults() -> None:
    paths = get_paths()
    content = ContentService(paths.data_dir, paths.schema_dir)
    assert content.load_rules() == MatchConfig()


def _write_rules(tmp_path: Path, mutate) -> ContentService:
    paths = get_paths()
    raw = json.loads((paths.data_dir / "rules.json").read_text(encoding="utf-8"))
    mutate(raw)
    (tmp_path / "rules.json").write_text(json.dumps(raw), encoding="utf-8")
    return ContentService(tmp_path, paths.schema_dir)


def test_schema_errors_are_reported(tmp_path: Path) -> None:
    content = _write_rules(tmp_path, lambda raw: raw.pop("hand_limit"))
    with pytest.raises(ContentError, match="Schema validation failed"):
        content.load_rules()


def test_cross_field_checks(tmp_path: Path) -> None:
    def off_step(raw: dict) -> None:
        raw["versus"]["default_health"] = 1050

    content = _write_rules(tmp_path, off_step)
    with pytest.raises(ContentError, match="health step"):
        content.load_rules()


def test_missing_rules_file(tmp_path: Path) -> None:
    content = ContentService(tmp_path, get_paths().schema_dir)
    with pytest.raises(ContentError, match="Missing content file"):
        content.load_rules()
