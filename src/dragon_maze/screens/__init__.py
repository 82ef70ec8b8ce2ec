"""Screen framework utilities for dragon_maze.

Each screen runs its own loop and returns a ``ScreenTransition`` naming the
screen to show next.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import pygame
from pygame import surface


class ScreenID(Enum):
    """Identifiers for the major screens in the game."""

    TITLE = "title"
    GAMEPLAY = "gameplay"
    EXIT = "exit"


@dataclass(frozen=True)
class ScreenTransition:
    """Represents the next screen to display."""

    next_screen: ScreenID


def present(screen: surface.Surface) -> None:
    """Copy the logical surface to the window and flip buffers."""
    window = pygame.display.get_surface()
    if window is None:
        return
    if window is not screen:
        window.blit(screen, (0, 0))
    pygame.display.flip()


__all__ = ["ScreenID", "ScreenTransition", "present"]
