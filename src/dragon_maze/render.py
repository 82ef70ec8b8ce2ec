from __future__ import annotations

from typing import Sequence

import pygame
from pygame import surface

from .colors import (
    BLACK,
    DOOR_COLOR,
    FLOOR_COLOR,
    HUD_BG_COLOR,
    OVERLAY_COLOR,
    PLAYER_COLOR,
    PUZZLE_COLOR,
    SOLVED_PUZZLE_COLOR,
    WALL_BORDER_COLOR,
    WALL_COLOR,
    WHITE,
)
from .level import Level
from .localization import translate as _
from .maze import Cell
from .session import GameSession

_FONT_CACHE: dict[int, pygame.font.Font] = {}


def load_font(size: int) -> pygame.font.Font:
    """Load and cache the default pygame font at ``size``."""
    normalized_size = max(1, int(size))
    font = _FONT_CACHE.get(normalized_size)
    if font is None:
        font = pygame.font.Font(None, normalized_size)
        _FONT_CACHE[normalized_size] = font
    return font


def cell_rect(x: int, y: int, cell_size: int, origin: tuple[int, int]) -> pygame.Rect:
    return pygame.Rect(
        origin[0] + x * cell_size,
        origin[1] + y * cell_size,
        cell_size,
        cell_size,
    )


def draw_maze(
    screen: surface.Surface,
    level: Level,
    cell_size: int,
    player: tuple[int, int] | None = None,
    *,
    origin: tuple[int, int] = (0, 0),
) -> None:
    """Draw walls, floor, markers and the player for one level."""
    for y, row in enumerate(level.grid.cells):
        for x, cell in enumerate(row):
            rect = cell_rect(x, y, cell_size, origin)
            if cell is Cell.WALL:
                pygame.draw.rect(screen, WALL_COLOR, rect)
                pygame.draw.rect(screen, WALL_BORDER_COLOR, rect, width=1)
            else:
                pygame.draw.rect(screen, FLOOR_COLOR, rect)

    radius = max(2, cell_size // 3)
    for point in level.puzzle_points:
        color = SOLVED_PUZZLE_COLOR if level.is_puzzle_solved(point.id) else PUZZLE_COLOR
        rect = cell_rect(point.x, point.y, cell_size, origin)
        pygame.draw.circle(screen, color, rect.center, radius)

    for door in level.doors:
        if level.is_door_used(door.id):
            continue
        rect = cell_rect(door.x, door.y, cell_size, origin).inflate(-4, -2)
        pygame.draw.rect(screen, DOOR_COLOR, rect, border_radius=3)

    if player is not None:
        rect = cell_rect(player[0], player[1], cell_size, origin)
        pygame.draw.circle(screen, PLAYER_COLOR, rect.center, max(2, cell_size * 2 // 5))


def draw_hud(screen: surface.Surface, session: GameSession, height: int) -> None:
    pygame.draw.rect(screen, HUD_BG_COLOR, pygame.Rect(0, 0, screen.get_width(), height))
    text = _(
        "hud.status",
        level=session.level_number,
        score=session.score,
        lives=session.lives,
        solved=session.puzzles_solved,
        total=session.settings.puzzles_per_level,
    )
    try:
        text_surface = load_font(height - 4).render(text, True, WHITE)
        screen.blit(text_surface, text_surface.get_rect(midleft=(8, height // 2)))
    except pygame.error as e:
        print(f"Error rendering HUD: {e}")


def draw_panel(
    screen: surface.Surface,
    lines: Sequence[tuple[str, tuple[int, int, int]]],
    *,
    font_size: int = 24,
    padding: int = 16,
) -> None:
    """Centered translucent panel with one rendered line per entry."""
    try:
        font = load_font(font_size)
        rendered = [font.render(text, True, color) for text, color in lines if text]
        if not rendered:
            return
        line_height = font.get_linesize()
        width = min(
            screen.get_width(),
            max(item.get_width() for item in rendered) + padding * 2,
        )
        height = line_height * len(rendered) + padding * 2
        panel = pygame.Surface((width, height), pygame.SRCALPHA)
        panel.fill(OVERLAY_COLOR)
        rect = panel.get_rect(center=screen.get_rect().center)
        screen.blit(panel, rect.topleft)
        for idx, item in enumerate(rendered):
            screen.blit(
                item,
                item.get_rect(
                    midtop=(rect.centerx, rect.top + padding + idx * line_height)
                ),
            )
    except pygame.error as e:
        print(f"Error rendering panel: {e}")


def clear(screen: surface.Surface) -> None:
    screen.fill(BLACK)
