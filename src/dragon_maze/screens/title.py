from __future__ import annotations

import pygame
from pygame import surface, time

from ..colors import LIGHT_GRAY, WHITE, YELLOW
from ..localization import translate as _
from ..render import clear, draw_panel
from . import ScreenID, ScreenTransition, present


def title_screen(
    screen: surface.Surface,
    clock: time.Clock,
    fps: int,
) -> ScreenTransition:
    """Display the title menu and return the selected transition."""

    options = [(ScreenID.GAMEPLAY, "menu.start"), (ScreenID.EXIT, "menu.quit")]
    selected = 0

    while True:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return ScreenTransition(ScreenID.EXIT)
            if event.type == pygame.KEYDOWN:
                if event.key in (pygame.K_UP, pygame.K_w):
                    selected = (selected - 1) % len(options)
                elif event.key in (pygame.K_DOWN, pygame.K_s):
                    selected = (selected + 1) % len(options)
                elif event.key in (pygame.K_RETURN, pygame.K_SPACE):
                    return ScreenTransition(options[selected][0])
                elif event.key == pygame.K_ESCAPE:
                    return ScreenTransition(ScreenID.EXIT)

        clear(screen)
        lines = [(_("game.title"), LIGHT_GRAY)]
        lines += [
            (_(key), YELLOW if idx == selected else WHITE)
            for idx, (_screen_id, key) in enumerate(options)
        ]
        lines.append((_("menu.hint"), LIGHT_GRAY))
        draw_panel(screen, lines, font_size=32)

        present(screen)
        clock.tick(fps)
