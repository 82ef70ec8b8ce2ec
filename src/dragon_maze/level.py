"""A generated level: maze grid, markers and their one-shot status flags."""

from __future__ import annotations

from dataclasses import dataclass, field

from .level_constants import (
    DEFAULT_DOOR_MAX_ATTEMPTS,
    DEFAULT_PUZZLE_MAX_ATTEMPTS,
    DEFAULT_PUZZLES_PER_LEVEL,
    wall_density,
)
from .maze import MazeGrid, generate_maze
from .placement import Door, PuzzlePoint, place_doors, place_puzzle_points
from .rng import RandomSource


@dataclass
class Level:
    number: int
    grid: MazeGrid
    puzzle_points: tuple[PuzzlePoint, ...]
    doors: tuple[Door, ...]
    placement_degraded: bool = False
    _solved: dict[int, bool] = field(default_factory=dict, repr=False)
    _used: dict[int, bool] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        for point in self.puzzle_points:
            self._solved.setdefault(point.id, False)
        for door in self.doors:
            self._used.setdefault(door.id, False)

    @property
    def wall_density(self) -> float:
        return wall_density(self.number)

    def puzzle(self, point_id: int) -> PuzzlePoint:
        for point in self.puzzle_points:
            if point.id == point_id:
                return point
        raise KeyError(f"Unknown puzzle point {point_id}")

    def door(self, door_id: int) -> Door:
        for door in self.doors:
            if door.id == door_id:
                return door
        raise KeyError(f"Unknown door {door_id}")

    def puzzle_at(self, x: int, y: int) -> PuzzlePoint | None:
        """Return the first unsolved puzzle point on the cell, if any."""
        for point in self.puzzle_points:
            if point.cell == (x, y) and not self._solved[point.id]:
                return point
        return None

    def door_at(self, x: int, y: int) -> Door | None:
        """Return the first unused door on the cell, if any."""
        for door in self.doors:
            if door.cell == (x, y) and not self._used[door.id]:
                return door
        return None

    def is_puzzle_solved(self, point_id: int) -> bool:
        self.puzzle(point_id)
        return self._solved[point_id]

    def mark_puzzle_solved(self, point_id: int) -> None:
        if self.is_puzzle_solved(point_id):
            raise ValueError(f"Puzzle point {point_id} is already solved")
        self._solved[point_id] = True

    def is_door_used(self, door_id: int) -> bool:
        self.door(door_id)
        return self._used[door_id]

    def mark_door_used(self, door_id: int) -> None:
        if self.is_door_used(door_id):
            raise ValueError(f"Door {door_id} is already used")
        self._used[door_id] = True

    def unsolved_puzzles(self) -> list[PuzzlePoint]:
        return [p for p in self.puzzle_points if not self._solved[p.id]]

    def unused_doors(self) -> list[Door]:
        return [d for d in self.doors if not self._used[d.id]]


def build_level(
    number: int,
    rng: RandomSource,
    *,
    width: int,
    height: int,
    puzzle_count: int = DEFAULT_PUZZLES_PER_LEVEL,
    puzzle_max_attempts: int = DEFAULT_PUZZLE_MAX_ATTEMPTS,
    door_max_attempts: int = DEFAULT_DOOR_MAX_ATTEMPTS,
) -> Level:
    """Generate the maze, then puzzle points, then doors clear of the puzzles."""
    grid = generate_maze(width, height, number, rng)
    puzzles = place_puzzle_points(
        grid, puzzle_count, rng, max_attempts=puzzle_max_attempts
    )
    doors = place_doors(
        grid, number, puzzles.items, rng, max_attempts=door_max_attempts
    )
    return Level(
        number=number,
        grid=grid,
        puzzle_points=tuple(puzzles.items),
        doors=tuple(doors.items),
        placement_degraded=puzzles.degraded or doors.degraded,
    )


__all__ = ["Level", "build_level"]
