from __future__ import annotations

# Basic palette
WHITE: tuple[int, int, int] = (255, 255, 255)
BLACK: tuple[int, int, int] = (0, 0, 0)
LIGHT_GRAY: tuple[int, int, int] = (200, 200, 200)
YELLOW: tuple[int, int, int] = (255, 255, 0)
RED: tuple[int, int, int] = (220, 60, 60)
GREEN: tuple[int, int, int] = (76, 175, 80)

# Maze colors
WALL_COLOR: tuple[int, int, int] = (139, 69, 19)
WALL_BORDER_COLOR: tuple[int, int, int] = (101, 50, 14)
FLOOR_COLOR: tuple[int, int, int] = (135, 206, 235)
PLAYER_COLOR: tuple[int, int, int] = GREEN
PUZZLE_COLOR: tuple[int, int, int] = (255, 215, 0)
SOLVED_PUZZLE_COLOR: tuple[int, int, int] = (160, 160, 160)
DOOR_COLOR: tuple[int, int, int] = (148, 0, 211)
OVERLAY_COLOR: tuple[int, int, int, int] = (0, 0, 0, 190)
HUD_BG_COLOR: tuple[int, int, int] = (30, 30, 40)
