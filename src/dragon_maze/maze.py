# Maze generator: recursive-backtracking carve plus level-scaled loops.

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Iterator, Sequence

from .level_constants import MIN_GRID_SIZE, START_CELL, densify_trials
from .rng import RandomSource

# Legend used by to_rows()/from_rows():
# #: wall
# .: floor

# Carve directions at distance 2: up, right, down, left
_CARVE_STEPS = ((0, -2), (2, 0), (0, 2), (-2, 0))
_NEIGHBOR_STEPS = ((0, -1), (1, 0), (0, 1), (-1, 0))


class MapGenerationError(Exception):
    """Raised when a maze or its markers cannot be produced."""


class InvalidDimensions(MapGenerationError, ValueError):
    """Grid is too small to hold a wall border around an interior."""


class Cell(IntEnum):
    FLOOR = 0
    WALL = 1

    @property
    def glyph(self) -> str:
        return "." if self is Cell.FLOOR else "#"


@dataclass(frozen=True)
class MazeGrid:
    """Immutable wall/floor grid indexed as ``cells[y][x]``."""

    cells: tuple[tuple[Cell, ...], ...]

    @property
    def width(self) -> int:
        return len(self.cells[0]) if self.cells else 0

    @property
    def height(self) -> int:
        return len(self.cells)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def at(self, x: int, y: int) -> Cell:
        return self.cells[y][x]

    def is_floor(self, x: int, y: int) -> bool:
        return self.in_bounds(x, y) and self.cells[y][x] is Cell.FLOOR

    def is_wall(self, x: int, y: int) -> bool:
        return not self.is_floor(x, y)

    def floor_cells(self) -> Iterator[tuple[int, int]]:
        for y, row in enumerate(self.cells):
            for x, cell in enumerate(row):
                if cell is Cell.FLOOR:
                    yield x, y

    def border_cells(self) -> Iterator[tuple[int, int]]:
        for x in range(self.width):
            yield x, 0
            yield x, self.height - 1
        for y in range(1, self.height - 1):
            yield 0, y
            yield self.width - 1, y

    def reachable_from(self, start: tuple[int, int] = START_CELL) -> set[tuple[int, int]]:
        """Flood fill through 4-connected floor cells."""
        if not self.is_floor(*start):
            return set()
        seen = {start}
        queue = deque([start])
        while queue:
            x, y = queue.popleft()
            for dx, dy in _NEIGHBOR_STEPS:
                nxt = (x + dx, y + dy)
                if nxt not in seen and self.is_floor(*nxt):
                    seen.add(nxt)
                    queue.append(nxt)
        return seen

    def is_connected(self, start: tuple[int, int] = START_CELL) -> bool:
        return self.reachable_from(start) == set(self.floor_cells())

    def wall_ratio(self) -> float:
        total = self.width * self.height
        if total == 0:
            return 0.0
        walls = sum(1 for row in self.cells for cell in row if cell is Cell.WALL)
        return walls / total

    def to_rows(self) -> list[str]:
        return ["".join(cell.glyph for cell in row) for row in self.cells]

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> MazeGrid:
        if not rows or any(len(row) != len(rows[0]) for row in rows):
            raise InvalidDimensions("Rows must be non-empty and equally long")
        return cls(
            tuple(
                tuple(Cell.WALL if ch == "#" else Cell.FLOOR for ch in row)
                for row in rows
            )
        )


def _init_grid(width: int, height: int) -> list[list[Cell]]:
    return [[Cell.WALL for _ in range(width)] for _ in range(height)]


def _carve_passages(grid: list[list[Cell]], rng: RandomSource) -> None:
    """Depth-first carve of the odd-coordinate lattice starting at (1, 1)."""
    width, height = len(grid[0]), len(grid)
    start_x, start_y = START_CELL
    grid[start_y][start_x] = Cell.FLOOR
    visited = {START_CELL}
    stack = [START_CELL]

    while stack:
        cx, cy = stack[-1]
        candidates: list[tuple[int, int, int, int]] = []
        for dx, dy in _CARVE_STEPS:
            nx, ny = cx + dx, cy + dy
            if 0 < nx < width - 1 and 0 < ny < height - 1 and (nx, ny) not in visited:
                candidates.append((nx, ny, dx, dy))
        if not candidates:
            stack.pop()
            continue
        nx, ny, dx, dy = rng.choice(candidates)
        grid[cy + dy // 2][cx + dx // 2] = Cell.FLOOR
        grid[ny][nx] = Cell.FLOOR
        visited.add((nx, ny))
        stack.append((nx, ny))


def _floor_neighbor_count(grid: list[list[Cell]], x: int, y: int) -> int:
    return sum(1 for dx, dy in _NEIGHBOR_STEPS if grid[y + dy][x + dx] is Cell.FLOOR)


def _densify(grid: list[list[Cell]], trials: int, rng: RandomSource) -> int:
    """Open random interior walls touching one or two floors; return opened count."""
    width, height = len(grid[0]), len(grid)
    opened = 0
    for _ in range(trials):
        x = rng.randint(1, width - 2)
        y = rng.randint(1, height - 2)
        if grid[y][x] is not Cell.WALL:
            continue
        # 3+ floor neighbours would merge corridors into open rooms
        if 1 <= _floor_neighbor_count(grid, x, y) <= 2:
            grid[y][x] = Cell.FLOOR
            opened += 1
    return opened


def _seal_border(grid: list[list[Cell]]) -> None:
    width, height = len(grid[0]), len(grid)
    for x in range(width):
        grid[0][x] = Cell.WALL
        grid[height - 1][x] = Cell.WALL
    for y in range(height):
        grid[y][0] = Cell.WALL
        grid[y][width - 1] = Cell.WALL


def validate_dimensions(width: int, height: int) -> None:
    if width < MIN_GRID_SIZE or height < MIN_GRID_SIZE:
        raise InvalidDimensions(
            f"Maze must be at least {MIN_GRID_SIZE}x{MIN_GRID_SIZE}, got {width}x{height}"
        )


def generate_maze(width: int, height: int, level: int, rng: RandomSource) -> MazeGrid:
    """Generate a connected maze whose loopiness grows with ``level``."""
    validate_dimensions(width, height)
    if level < 1:
        raise ValueError(f"Level must be >= 1, got {level}")

    grid = _init_grid(width, height)
    _carve_passages(grid, rng)
    _densify(grid, densify_trials(level), rng)
    _seal_border(grid)
    return MazeGrid(tuple(tuple(row) for row in grid))


def chebyshev(a: tuple[int, int], b: tuple[int, int]) -> int:
    return max(abs(a[0] - b[0]), abs(a[1] - b[1]))


def within_distance(
    cell: tuple[int, int], others: Iterable[tuple[int, int]], distance: int
) -> bool:
    return any(chebyshev(cell, other) <= distance for other in others)


__all__ = [
    "Cell",
    "InvalidDimensions",
    "MapGenerationError",
    "MazeGrid",
    "chebyshev",
    "generate_maze",
    "validate_dimensions",
    "within_distance",
]
