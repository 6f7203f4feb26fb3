from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from jsonschema import Draft202012Validator


class ProgressError(RuntimeError):
    pass


@dataclass
class SavedProgress:
    version: int = 1
    highest_level: int = 1

    @staticmethod
    def from_dict(d: Mapping[str, object]) -> "SavedProgress":
        version = d.get("version", 1)
        level = d.get("highest_level", 1)
        return SavedProgress(
            version=version if isinstance(version, int) else 1,
            highest_level=level if isinstance(level, int) and level > 0 else 1,
        )

    def to_dict(self) -> dict[str, object]:
        return {"version": self.version, "highest_level": self.highest_level}


class JsonProgressStore:
    """File-backed best-level store, used as the engine's ProgressStore."""

    def __init__(self, path: Path, schema: object | None = None) -> None:
        self._path = path
        self._validator = Draft202012Validator(schema) if schema is not None else None
        self.progress = self._load()

    def _load(self) -> SavedProgress:
        if not self._path.exists():
            return SavedProgress()
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            # Unreadable save: start over from level 1
            return SavedProgress()
        if not isinstance(raw, dict):
            return SavedProgress()
        if self._validator is not None and not self._validator.is_valid(raw):
            return SavedProgress()
        return SavedProgress.from_dict(raw)

    def load_best_level(self) -> int:
        return self.progress.highest_level

    def save_best_level(self, level: int) -> None:
        if level < 1:
            raise ProgressError(f"Invalid level: {level}")
        self.progress.highest_level = level
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(self.progress.to_dict(), indent=2), encoding="utf-8")
        except OSError as e:
            raise ProgressError(f"Could not write progress to {self._path}: {e}") from e
