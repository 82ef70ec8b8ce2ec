import pygame

from dragon_maze.colors import (
    DOOR_COLOR,
    FLOOR_COLOR,
    PLAYER_COLOR,
    PUZZLE_COLOR,
    SOLVED_PUZZLE_COLOR,
    WALL_COLOR,
)
from dragon_maze.level import Level
from dragon_maze.maze import MazeGrid
from dragon_maze.placement import Door, PuzzlePoint
from dragon_maze.render import cell_rect, draw_maze

CELL = 10


def _level() -> Level:
    grid = MazeGrid.from_rows(
        [
            "#######",
            "#.....#",
            "#.###.#",
            "#.....#",
            "#######",
        ]
    )
    return Level(
        number=1,
        grid=grid,
        puzzle_points=(PuzzlePoint(0, 2, 1),),
        doors=(Door(0, 1, 3, 200),),
    )


def _color_at_cell(screen: pygame.Surface, x: int, y: int, origin=(0, 0)) -> tuple:
    center = cell_rect(x, y, CELL, origin).center
    return tuple(screen.get_at(center))[:3]


def test_draw_maze_paints_cells_and_markers() -> None:
    screen = pygame.Surface((7 * CELL, 5 * CELL))
    level = _level()

    draw_maze(screen, level, CELL, player=(5, 1))

    assert _color_at_cell(screen, 0, 0) == WALL_COLOR
    assert _color_at_cell(screen, 3, 2) == WALL_COLOR
    assert _color_at_cell(screen, 5, 3) == FLOOR_COLOR
    assert _color_at_cell(screen, 2, 1) == PUZZLE_COLOR
    assert _color_at_cell(screen, 1, 3) == DOOR_COLOR
    assert _color_at_cell(screen, 5, 1) == PLAYER_COLOR


def test_consumed_markers_change_appearance() -> None:
    screen = pygame.Surface((7 * CELL, 5 * CELL))
    level = _level()
    level.mark_puzzle_solved(0)
    level.mark_door_used(0)

    draw_maze(screen, level, CELL)

    assert _color_at_cell(screen, 2, 1) == SOLVED_PUZZLE_COLOR
    assert _color_at_cell(screen, 1, 3) == FLOOR_COLOR


def test_draw_maze_honours_origin_offset() -> None:
    screen = pygame.Surface((7 * CELL, 5 * CELL + 20))
    screen.fill((1, 2, 3))

    draw_maze(screen, _level(), CELL, origin=(0, 20))

    assert tuple(screen.get_at((5, 5)))[:3] == (1, 2, 3)
    assert _color_at_cell(screen, 5, 3, origin=(0, 20)) == FLOOR_COLOR
