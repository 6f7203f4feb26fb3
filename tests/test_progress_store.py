from __future__ import annotations

import json
from pathlib import Path

import pytest
from conftest import damage_card

from versusbattle.engine.match import new_game, play_cards, start_adventure_match
from versusbattle.paths import get_paths
from versusbattle.services.content import ContentService
from versusbattle.services.progress import JsonProgressStore, ProgressError


def _schema() -> object:
    paths = get_paths()
    return ContentService(paths.data_dir, paths.schema_dir).progress_schema()


def test_missing_file_means_level_one(tmp_path: Path) -> None:
    store = JsonProgressStore(tmp_path / "progress.json", _schema())
    assert store.load_best_level() == 1
    assert not (tmp_path / "progress.json").exists()


def test_save_and_reload(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "progress.json"
    JsonProgressStore(path, _schema()).save_best_level(4)
    assert json.loads(path.read_text(encoding="utf-8")) == {"version": 1, "highest_level": 4}
    assert JsonProgressStore(path, _schema()).load_best_level() == 4


@pytest.mark.parametrize(
    "content",
    ["not json", "[1, 2]", json.dumps({"version": 1, "highest_level": 0})],
)
def test_bad_files_fall_back_to_level_one(tmp_path: Path, content: str) -> None:
    path = tmp_path / "progress.json"
    path.write_text(content, encoding="utf-8")
    assert JsonProgressStore(path, _schema()).load_best_level() == 1


def test_rejects_invalid_level(tmp_path: Path) -> None:
    store = JsonProgressStore(tmp_path / "progress.json")
    with pytest.raises(ProgressError):
        store.save_best_level(0)


def test_engine_persists_new_best_through_store(tmp_path: Path) -> None:
    path = tmp_path / "progress.json"
    state = new_game(seed=3, progress=JsonProgressStore(path, _schema()))
    start_adventure_match(state)
    state.active = "player"
    nine = damage_card("dots", 9)
    state.player.hand = [nine]
    state.enemy.health = 1
    play_cards(state, [nine])

    assert state.level == 2
    assert JsonProgressStore(path, _schema()).load_best_level() == 2
