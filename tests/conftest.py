from __future__ import annotations

import os
from typing import MutableSequence, Sequence, TypeVar

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from dragon_maze.config import MazeSettings  # noqa: E402

T = TypeVar("T")


class LowestRNG:
    """Always returns the smallest value so placement paths are predictable."""

    def random(self) -> float:
        return 0.0

    def randint(self, a: int, b: int) -> int:
        return a

    def choice(self, seq: Sequence[T]) -> T:
        return seq[0]

    def shuffle(self, seq: MutableSequence[T]) -> None:
        return None


@pytest.fixture
def lowest_rng() -> LowestRNG:
    return LowestRNG()


@pytest.fixture
def small_settings() -> MazeSettings:
    return MazeSettings(
        cell_size=10,
        grid_width=11,
        grid_height=9,
        puzzles_per_level=3,
        puzzle_max_attempts=2000,
        door_max_attempts=50,
    )
