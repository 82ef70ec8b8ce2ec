"""Screen and window related constants."""

from __future__ import annotations

HUD_HEIGHT = 24  # status bar above the maze
FPS = 60
MESSAGE_DURATION_MS = 2000

__all__ = [
    "HUD_HEIGHT",
    "FPS",
    "MESSAGE_DURATION_MS",
]
