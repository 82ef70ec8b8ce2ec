from __future__ import annotations

import json
from copy import deepcopy
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from platformdirs import user_data_dir

from .config import APP_NAME

HISTORY_LIMIT = 100
SKIPPED_ANSWER = "SKIPPED"

EMPTY_HISTORY: dict[str, Any] = {
    "totalRiddlesAnswered": 0,
    "correctAnswers": 0,
    "wrongAnswers": 0,
    "riddleHistory": [],
}


def user_score_path() -> Path:
    """Return the platform-specific score file path."""
    return Path(user_data_dir(APP_NAME, APP_NAME)) / "score.json"


def user_history_path() -> Path:
    """Return the platform-specific riddle history file path."""
    return Path(user_data_dir(APP_NAME, APP_NAME)) / "riddles.json"


def _write_json(payload: Any, path: Path, label: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    except Exception as exc:  # noqa: BLE001
        print(f"Failed to save {label} ({path}): {exc}")


def load_score(*, path: Path | None = None) -> tuple[int, Path]:
    """Load the saved score, defaulting to zero on missing or bad data."""
    score_path = path or user_score_path()
    score = 0

    try:
        if score_path.exists():
            loaded = json.loads(score_path.read_text(encoding="utf-8"))
            value = loaded.get("score") if isinstance(loaded, dict) else None
            if isinstance(value, int) and not isinstance(value, bool):
                score = max(0, value)
    except Exception as exc:  # noqa: BLE001
        print(f"Failed to load score ({score_path}): {exc}")

    return score, score_path


def save_score(score: int, path: Path) -> None:
    _write_json({"score": int(score)}, path, "score")


class RiddleHistory:
    """Answer log with running totals, capped to the latest entries."""

    def __init__(self, data: dict[str, Any] | None = None, *, path: Path | None = None) -> None:
        self.data: dict[str, Any] = deepcopy(EMPTY_HISTORY)
        if data:
            self.data.update(data)
        self.path = path

    @classmethod
    def load(cls, *, path: Path | None = None) -> RiddleHistory:
        history_path = path or user_history_path()
        data: dict[str, Any] = {}
        try:
            if history_path.exists():
                loaded = json.loads(history_path.read_text(encoding="utf-8"))
                if isinstance(loaded, dict):
                    data = _sanitize_history(loaded)
        except Exception as exc:  # noqa: BLE001
            print(f"Failed to load riddle history ({history_path}): {exc}")
        return cls(data, path=history_path)

    def save(self) -> None:
        if self.path is not None:
            _write_json(self.data, self.path, "riddle history")

    @property
    def entries(self) -> list[dict[str, Any]]:
        return self.data["riddleHistory"]

    def record(
        self,
        *,
        question: str,
        correct_answer: str,
        user_answer: str,
        is_correct: bool,
        level: int,
        timestamp: datetime | None = None,
    ) -> dict[str, Any]:
        entry = {
            "question": question,
            "correctAnswer": correct_answer,
            "userAnswer": user_answer,
            "isCorrect": bool(is_correct),
            "timestamp": (timestamp or datetime.now(timezone.utc)).isoformat(),
            "level": level,
        }
        self.entries.append(entry)
        self.data["totalRiddlesAnswered"] += 1
        if is_correct:
            self.data["correctAnswers"] += 1
        else:
            self.data["wrongAnswers"] += 1
        if len(self.entries) > HISTORY_LIMIT:
            self.data["riddleHistory"] = self.entries[-HISTORY_LIMIT:]
        self.save()
        return entry

    def previous_answers(self, question: str) -> list[dict[str, Any]]:
        return [entry for entry in self.entries if entry.get("question") == question]

    def correct_count(self, question: str) -> int:
        return sum(1 for entry in self.previous_answers(question) if entry.get("isCorrect"))


def _sanitize_history(loaded: dict[str, Any]) -> dict[str, Any]:
    data: dict[str, Any] = {}
    for key in ("totalRiddlesAnswered", "correctAnswers", "wrongAnswers"):
        value = loaded.get(key)
        if isinstance(value, int) and not isinstance(value, bool):
            data[key] = max(0, value)
    history = loaded.get("riddleHistory")
    if isinstance(history, list):
        data["riddleHistory"] = [
            entry
            for entry in history
            if isinstance(entry, dict) and isinstance(entry.get("question"), str)
        ][-HISTORY_LIMIT:]
    return data
