import json
from copy import deepcopy
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Tuple

from platformdirs import user_config_dir

from .level_constants import (
    DEFAULT_CANVAS_HEIGHT,
    DEFAULT_CANVAS_WIDTH,
    DEFAULT_CELL_SIZE,
    DEFAULT_DOOR_MAX_ATTEMPTS,
    DEFAULT_PUZZLE_MAX_ATTEMPTS,
    DEFAULT_PUZZLES_PER_LEVEL,
    MIN_PLAYABLE_GRID_SIZE,
    grid_size_from_canvas,
)

APP_NAME = "DragonMaze"

RIDDLE_API_URL = "https://api.api-ninjas.com/v1/riddles"

# Defaults for all configurable options
DEFAULT_CONFIG: Dict[str, Any] = {
    "maze": {
        "cell_size": DEFAULT_CELL_SIZE,
        "canvas_width": DEFAULT_CANVAS_WIDTH,
        "canvas_height": DEFAULT_CANVAS_HEIGHT,
        "puzzles_per_level": DEFAULT_PUZZLES_PER_LEVEL,
        "puzzle_max_attempts": DEFAULT_PUZZLE_MAX_ATTEMPTS,
        "door_max_attempts": DEFAULT_DOOR_MAX_ATTEMPTS,
    },
    "game": {"starting_lives": 3, "seed": None},
    "riddles": {"api_url": RIDDLE_API_URL, "api_key": None, "timeout_s": 5.0},
    "language": "en",
}


@dataclass(frozen=True)
class MazeSettings:
    cell_size: int
    grid_width: int
    grid_height: int
    puzzles_per_level: int
    puzzle_max_attempts: int
    door_max_attempts: int


def user_config_path() -> Path:
    """Return the platform-specific config file path."""
    return Path(user_config_dir(APP_NAME, APP_NAME)) / "config.json"


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep-merge dictionaries, with override winning on conflicts."""
    merged: Dict[str, Any] = deepcopy(base)
    for key, val in override.items():
        if isinstance(val, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], val)
        else:
            merged[key] = val
    return merged


def load_config(path: Path | None = None) -> Tuple[Dict[str, Any], Path]:
    """Load config from disk, falling back to defaults on errors."""
    config_path = path or user_config_path()
    config: Dict[str, Any] = deepcopy(DEFAULT_CONFIG)

    try:
        if config_path.exists():
            loaded = json.loads(config_path.read_text(encoding="utf-8"))
            if isinstance(loaded, dict):
                config = _deep_merge(config, loaded)
    except Exception as exc:  # noqa: BLE001
        print(f"Failed to load config ({config_path}): {exc}")

    return config, config_path


def save_config(config: Dict[str, Any], path: Path | None = None) -> None:
    """Persist config to disk, creating parent dirs as needed."""
    config_path = path or user_config_path()
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(json.dumps(config, indent=2), encoding="utf-8")
    except Exception as exc:  # noqa: BLE001
        print(f"Failed to save config ({config_path}): {exc}")


def _positive_int(section: Dict[str, Any], key: str, default: int, minimum: int = 1) -> int:
    try:
        value = int(section.get(key, default))
    except (TypeError, ValueError):
        return default
    return value if value >= minimum else default


def config_section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    """Return a config section, or an empty dict when it is not an object."""
    section = config.get(name)
    return section if isinstance(section, dict) else {}


def maze_settings(config: Dict[str, Any]) -> MazeSettings:
    """Resolve maze options, replacing unusable values with defaults."""
    maze_conf = config_section(config, "maze")
    cell_size = _positive_int(maze_conf, "cell_size", DEFAULT_CELL_SIZE)
    canvas_width = _positive_int(maze_conf, "canvas_width", DEFAULT_CANVAS_WIDTH)
    canvas_height = _positive_int(maze_conf, "canvas_height", DEFAULT_CANVAS_HEIGHT)
    width, height = grid_size_from_canvas(canvas_width, canvas_height, cell_size)
    if width < MIN_PLAYABLE_GRID_SIZE or height < MIN_PLAYABLE_GRID_SIZE:
        cell_size = DEFAULT_CELL_SIZE
        width, height = grid_size_from_canvas(
            DEFAULT_CANVAS_WIDTH, DEFAULT_CANVAS_HEIGHT, DEFAULT_CELL_SIZE
        )
    return MazeSettings(
        cell_size=cell_size,
        grid_width=width,
        grid_height=height,
        puzzles_per_level=_positive_int(
            maze_conf, "puzzles_per_level", DEFAULT_PUZZLES_PER_LEVEL
        ),
        puzzle_max_attempts=_positive_int(
            maze_conf, "puzzle_max_attempts", DEFAULT_PUZZLE_MAX_ATTEMPTS
        ),
        door_max_attempts=_positive_int(
            maze_conf, "door_max_attempts", DEFAULT_DOOR_MAX_ATTEMPTS
        ),
    )
