from __future__ import annotations

import pytest

from dragon_maze.level_constants import START_CELL, densify_trials
from dragon_maze.maze import (
    Cell,
    InvalidDimensions,
    MazeGrid,
    _densify,
    generate_maze,
)
from dragon_maze.rng import DeterministicRNG

SIZES = [(5, 5), (6, 7), (11, 9), (32, 20)]
LEVELS = [1, 2, 3, 6, 12]


def _mutable(rows: list[str]) -> list[list[Cell]]:
    return [list(row) for row in MazeGrid.from_rows(rows).cells]


@pytest.mark.parametrize("width,height", SIZES)
@pytest.mark.parametrize("level", LEVELS)
def test_border_cells_are_walls(width: int, height: int, level: int) -> None:
    for seed in range(5):
        grid = generate_maze(width, height, level, DeterministicRNG(seed))
        assert (grid.width, grid.height) == (width, height)
        assert all(grid.at(x, y) is Cell.WALL for x, y in grid.border_cells())


@pytest.mark.parametrize("width,height", SIZES)
@pytest.mark.parametrize("level", LEVELS)
def test_every_floor_cell_reachable_from_start(width: int, height: int, level: int) -> None:
    for seed in range(5):
        grid = generate_maze(width, height, level, DeterministicRNG(seed))
        assert grid.is_floor(*START_CELL)
        assert grid.reachable_from(START_CELL) == set(grid.floor_cells())
        assert grid.is_connected()


def test_low_levels_carve_a_perfect_maze() -> None:
    # 5x4 lattice nodes joined by 19 corridor cells
    grid = generate_maze(11, 9, 1, DeterministicRNG(3))
    assert len(list(grid.floor_cells())) == 39
    for y in range(grid.height - 1):
        for x in range(grid.width - 1):
            block = [grid.is_floor(x + dx, y + dy) for dx in (0, 1) for dy in (0, 1)]
            assert not all(block)


def test_levels_one_and_two_skip_densification() -> None:
    a = generate_maze(21, 15, 1, DeterministicRNG(11))
    b = generate_maze(21, 15, 2, DeterministicRNG(11))
    assert a == b


def test_densification_only_adds_floor() -> None:
    base = generate_maze(32, 20, 1, DeterministicRNG(8))
    dense = generate_maze(32, 20, 8, DeterministicRNG(8))
    base_floor = set(base.floor_cells())
    dense_floor = set(dense.floor_cells())
    assert base_floor <= dense_floor
    assert dense.wall_ratio() <= base.wall_ratio()


def test_densify_trials_grow_with_level() -> None:
    assert densify_trials(1) == 0
    assert densify_trials(2) == 0
    assert densify_trials(3) == 15
    trials = [densify_trials(level) for level in range(1, 30)]
    assert trials == sorted(trials)


def test_densify_skips_walls_touching_three_or_more_floors() -> None:
    grid = _mutable(
        [
            "#####",
            "#...#",
            "#.#.#",
            "#...#",
            "#####",
        ]
    )
    assert _densify(grid, 200, DeterministicRNG(1)) == 0
    assert grid[2][2] is Cell.WALL


def test_densify_opens_walls_next_to_a_corridor() -> None:
    grid = _mutable(
        [
            "#####",
            "#.###",
            "#####",
            "#####",
            "#####",
        ]
    )
    opened = _densify(grid, 200, DeterministicRNG(2))
    assert opened > 0
    floors = sum(1 for row in grid for cell in row if cell is Cell.FLOOR)
    assert floors == opened + 1


def test_same_seed_generates_identical_grid() -> None:
    first = generate_maze(32, 20, 5, DeterministicRNG(1234))
    second = generate_maze(32, 20, 5, DeterministicRNG(1234))
    assert first == second
    assert first.to_rows() == second.to_rows()


@pytest.mark.parametrize("width,height", [(4, 10), (10, 4), (0, 0), (3, 3)])
def test_too_small_grid_is_rejected(width: int, height: int) -> None:
    with pytest.raises(InvalidDimensions):
        generate_maze(width, height, 1, DeterministicRNG(0))


def test_invalid_dimensions_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        generate_maze(2, 2, 1, DeterministicRNG(0))


def test_level_below_one_is_rejected() -> None:
    with pytest.raises(ValueError):
        generate_maze(10, 10, 0, DeterministicRNG(0))


def test_rows_round_trip() -> None:
    rows = ["#####", "#..##", "##.##", "#####", "#####"]
    grid = MazeGrid.from_rows(rows)
    assert grid.to_rows() == rows
    assert grid.is_floor(2, 2)
    assert grid.is_wall(3, 1)
    assert grid.is_wall(-1, 0)
    assert grid.is_wall(9, 9)


def test_from_rows_rejects_ragged_input() -> None:
    with pytest.raises(InvalidDimensions):
        MazeGrid.from_rows(["###", "##"])
