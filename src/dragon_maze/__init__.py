"""Dragon Maze: procedurally generated riddle mazes."""

from .level import Level, build_level
from .maze import Cell, InvalidDimensions, MapGenerationError, MazeGrid, generate_maze
from .placement import Door, PlacementError, PuzzlePoint

__all__ = [
    "Cell",
    "Door",
    "InvalidDimensions",
    "Level",
    "MapGenerationError",
    "MazeGrid",
    "PlacementError",
    "PuzzlePoint",
    "build_level",
    "generate_maze",
]
