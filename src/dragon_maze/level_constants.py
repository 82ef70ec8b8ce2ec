"""Maze and level tuning constants."""

from __future__ import annotations

DEFAULT_CANVAS_WIDTH = 800
DEFAULT_CANVAS_HEIGHT = 500
DEFAULT_CELL_SIZE = 25  # pixels per maze cell
MIN_GRID_SIZE = 5  # border plus at least one interior cell
MIN_PLAYABLE_GRID_SIZE = 7  # keeps the always-carved (3, 3) inside the marker window

START_CELL = (1, 1)
PLACEMENT_MARGIN = 2  # markers stay off the outer two rings

DEFAULT_PUZZLES_PER_LEVEL = 3
DEFAULT_PUZZLE_MAX_ATTEMPTS = 2000
DEFAULT_DOOR_MAX_ATTEMPTS = 50
DOOR_PUZZLE_SEPARATION = 2  # doors must sit farther than this from puzzles
MAX_DOORS_PER_LEVEL = 2
DOOR_BASE_COST = 150
DOOR_COST_PER_LEVEL = 50

DENSIFY_MIN_LEVEL = 3
DENSIFY_TRIALS_PER_LEVEL = 5
WALL_DENSITY_BASE = 0.2
WALL_DENSITY_STEP = 0.05
WALL_DENSITY_CAP = 0.4


def door_count(level: int) -> int:
    return min(MAX_DOORS_PER_LEVEL, level // 2 + 1)


def door_cost(level: int) -> int:
    return DOOR_BASE_COST + level * DOOR_COST_PER_LEVEL


def densify_trials(level: int) -> int:
    """Number of random loop-carving trials run after the base carve."""
    if level < DENSIFY_MIN_LEVEL:
        return 0
    return level * DENSIFY_TRIALS_PER_LEVEL


def wall_density(level: int) -> float:
    """Advisory wall density target; reported, not enforced by generation."""
    return min(WALL_DENSITY_CAP, WALL_DENSITY_BASE + (level - 1) * WALL_DENSITY_STEP)


def grid_size_from_canvas(
    canvas_width: int, canvas_height: int, cell_size: int
) -> tuple[int, int]:
    if cell_size <= 0:
        raise ValueError(f"cell_size must be positive, got {cell_size}")
    return canvas_width // cell_size, canvas_height // cell_size


__all__ = [
    "DEFAULT_CANVAS_WIDTH",
    "DEFAULT_CANVAS_HEIGHT",
    "DEFAULT_CELL_SIZE",
    "MIN_GRID_SIZE",
    "MIN_PLAYABLE_GRID_SIZE",
    "START_CELL",
    "PLACEMENT_MARGIN",
    "DEFAULT_PUZZLES_PER_LEVEL",
    "DEFAULT_PUZZLE_MAX_ATTEMPTS",
    "DEFAULT_DOOR_MAX_ATTEMPTS",
    "DOOR_PUZZLE_SEPARATION",
    "door_count",
    "door_cost",
    "densify_trials",
    "wall_density",
    "grid_size_from_canvas",
]
