"""Scatter puzzle points and doors onto floor cells of a generated maze."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, Sequence, TypeVar

from .level_constants import (
    DEFAULT_DOOR_MAX_ATTEMPTS,
    DEFAULT_PUZZLE_MAX_ATTEMPTS,
    DOOR_PUZZLE_SEPARATION,
    PLACEMENT_MARGIN,
    START_CELL,
    door_cost,
    door_count,
)
from .maze import MapGenerationError, MazeGrid, within_distance
from .rng import RandomSource

T = TypeVar("T")


class PlacementError(MapGenerationError):
    """No cell in the sampling window can hold the marker."""


@dataclass(frozen=True)
class PuzzlePoint:
    id: int
    x: int
    y: int

    @property
    def cell(self) -> tuple[int, int]:
        return self.x, self.y


@dataclass(frozen=True)
class Door:
    id: int
    x: int
    y: int
    cost: int

    @property
    def cell(self) -> tuple[int, int]:
        return self.x, self.y


@dataclass
class PlacementResult(Generic[T]):
    """Placed markers; ``degraded`` marks best-effort placements."""

    items: list[T]
    degraded: bool = False
    degraded_ids: list[int] = field(default_factory=list)


def sampling_window(grid: MazeGrid) -> tuple[int, int, int, int]:
    """Return inclusive ``(min_x, max_x, min_y, max_y)`` for marker sampling."""
    return (
        PLACEMENT_MARGIN,
        max(PLACEMENT_MARGIN, grid.width - 1 - PLACEMENT_MARGIN),
        PLACEMENT_MARGIN,
        max(PLACEMENT_MARGIN, grid.height - 1 - PLACEMENT_MARGIN),
    )


def _sample_cell(grid: MazeGrid, rng: RandomSource) -> tuple[int, int]:
    min_x, max_x, min_y, max_y = sampling_window(grid)
    return rng.randint(min_x, max_x), rng.randint(min_y, max_y)


def _is_open_cell(grid: MazeGrid, cell: tuple[int, int]) -> bool:
    return grid.is_floor(*cell) and cell != START_CELL


def _is_valid(
    grid: MazeGrid,
    cell: tuple[int, int],
    avoid: Sequence[tuple[int, int]],
    min_separation: int | None,
) -> bool:
    if not _is_open_cell(grid, cell):
        return False
    if min_separation is not None and within_distance(cell, avoid, min_separation):
        return False
    return True


def _scan_window(
    grid: MazeGrid,
    avoid: Sequence[tuple[int, int]],
    min_separation: int | None,
) -> list[tuple[int, int]]:
    min_x, max_x, min_y, max_y = sampling_window(grid)
    return [
        (x, y)
        for y in range(min_y, min(max_y, grid.height - 1) + 1)
        for x in range(min_x, min(max_x, grid.width - 1) + 1)
        if _is_valid(grid, (x, y), avoid, min_separation)
    ]


def place_points(
    grid: MazeGrid,
    count: int,
    rng: RandomSource,
    *,
    avoid: Sequence[tuple[int, int]] = (),
    min_separation: int | None = None,
    max_attempts: int = DEFAULT_PUZZLE_MAX_ATTEMPTS,
    accept_last_sample: bool = False,
) -> PlacementResult[tuple[int, int]]:
    """Pick ``count`` floor cells away from the start and from ``avoid``.

    A cell is valid when it is floor, is not the start cell, and (when
    ``min_separation`` is given) lies farther than ``min_separation`` cells,
    Chebyshev distance, from every cell in ``avoid``.

    Each point gets ``max_attempts`` uniform samples. When they run out the
    point is placed best-effort and the result is flagged degraded: with
    ``accept_last_sample`` the final sample is kept if it is at least an open
    floor cell; otherwise a valid cell is drawn from a scan of the window.
    Raises ``PlacementError`` when no acceptable cell exists at all.
    """
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")

    result: PlacementResult[tuple[int, int]] = PlacementResult(items=[])
    for index in range(count):
        cell = _sample_cell(grid, rng)
        attempts = 1
        while not _is_valid(grid, cell, avoid, min_separation) and attempts < max_attempts:
            cell = _sample_cell(grid, rng)
            attempts += 1
        if _is_valid(grid, cell, avoid, min_separation):
            result.items.append(cell)
            continue

        result.degraded = True
        result.degraded_ids.append(index)
        if accept_last_sample and _is_open_cell(grid, cell):
            result.items.append(cell)
            continue
        candidates = _scan_window(grid, avoid, min_separation)
        if not candidates and accept_last_sample:
            candidates = _scan_window(grid, avoid, None)
        if not candidates:
            raise PlacementError(
                f"No free floor cell for marker {index} in a {grid.width}x{grid.height} maze"
            )
        result.items.append(rng.choice(candidates))
    return result


def place_puzzle_points(
    grid: MazeGrid,
    count: int,
    rng: RandomSource,
    *,
    max_attempts: int = DEFAULT_PUZZLE_MAX_ATTEMPTS,
) -> PlacementResult[PuzzlePoint]:
    placed = place_points(grid, count, rng, max_attempts=max_attempts)
    if placed.degraded:
        print(
            f"Puzzle placement degraded after {max_attempts} attempts "
            f"(points {placed.degraded_ids})"
        )
    return PlacementResult(
        items=[PuzzlePoint(id=i, x=x, y=y) for i, (x, y) in enumerate(placed.items)],
        degraded=placed.degraded,
        degraded_ids=placed.degraded_ids,
    )


def place_doors(
    grid: MazeGrid,
    level: int,
    puzzle_points: Sequence[PuzzlePoint],
    rng: RandomSource,
    *,
    max_attempts: int = DEFAULT_DOOR_MAX_ATTEMPTS,
) -> PlacementResult[Door]:
    """Place this level's doors clear of the puzzle points.

    Door placement is best-effort: a door may end up inside a puzzle
    point's buffer once its attempts are spent.
    """
    placed = place_points(
        grid,
        door_count(level),
        rng,
        avoid=[point.cell for point in puzzle_points],
        min_separation=DOOR_PUZZLE_SEPARATION,
        max_attempts=max_attempts,
        accept_last_sample=True,
    )
    if placed.degraded:
        print(
            f"Door placement degraded after {max_attempts} attempts "
            f"(doors {placed.degraded_ids})"
        )
    cost = door_cost(level)
    return PlacementResult(
        items=[Door(id=i, x=x, y=y, cost=cost) for i, (x, y) in enumerate(placed.items)],
        degraded=placed.degraded,
        degraded_ids=placed.degraded_ids,
    )


__all__ = [
    "Door",
    "PlacementError",
    "PlacementResult",
    "PuzzlePoint",
    "place_doors",
    "place_points",
    "place_puzzle_points",
    "sampling_window",
]
