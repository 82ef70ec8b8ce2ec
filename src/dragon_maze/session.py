"""Game rules for one run: movement, riddles, doors, scoring and lives."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path

from .config import MazeSettings
from .level import Level, build_level
from .level_constants import START_CELL
from .placement import Door, PuzzlePoint
from .progress import SKIPPED_ANSWER, RiddleHistory, save_score
from .riddles import Puzzle, RiddleSource, build_puzzle
from .rng import DeterministicRNG

PUZZLE_REWARD = 100
FIRST_SOLVE_BONUS = 25
SKIP_PENALTY = 50
LEVEL_COMPLETE_BONUS = 200
DOOR_BONUS = 50
DEFAULT_LIVES = 3


class Direction(Enum):
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)


class MoveOutcome(Enum):
    IGNORED = auto()
    BLOCKED = auto()
    MOVED = auto()
    PUZZLE = auto()
    DOOR = auto()


@dataclass(frozen=True)
class MoveResult:
    outcome: MoveOutcome
    position: tuple[int, int]
    puzzle: PuzzlePoint | None = None
    door: Door | None = None


@dataclass(frozen=True)
class DoorOffer:
    door: Door
    score: int
    next_level: int

    @property
    def can_afford(self) -> bool:
        return self.score >= self.door.cost


@dataclass(frozen=True)
class AnswerHint:
    times_seen: int
    last_answer: str
    last_correct: bool


@dataclass(frozen=True)
class AnswerResult:
    correct: bool
    answer: str
    first_solve_bonus: bool = False
    level_completed: bool = False
    game_over: bool = False


class GameSession:
    """Mutable state of a maze run; each level is rebuilt from scratch."""

    def __init__(
        self,
        settings: MazeSettings,
        rng: DeterministicRNG,
        riddles: RiddleSource,
        history: RiddleHistory,
        *,
        score: int = 0,
        score_path: Path | None = None,
        starting_lives: int = DEFAULT_LIVES,
    ) -> None:
        self.settings = settings
        self.rng = rng
        self.riddles = riddles
        self.history = history
        self.score = max(0, score)
        self.score_path = score_path
        self.starting_lives = max(1, starting_lives)
        self.lives = self.starting_lives
        self.level_number = 1
        self.puzzles_solved = 0
        self.game_over = False
        self.player = START_CELL
        self.puzzle: Puzzle | None = None
        self.hint: AnswerHint | None = None
        self._generation = 0
        self.level = self._build_level()

    @property
    def puzzle_active(self) -> bool:
        return self.puzzle is not None

    def _build_level(self) -> Level:
        self._generation += 1
        return build_level(
            self.level_number,
            self.rng.spawn(self._generation),
            width=self.settings.grid_width,
            height=self.settings.grid_height,
            puzzle_count=self.settings.puzzles_per_level,
            puzzle_max_attempts=self.settings.puzzle_max_attempts,
            door_max_attempts=self.settings.door_max_attempts,
        )

    def _persist_score(self) -> None:
        if self.score_path is not None:
            save_score(self.score, self.score_path)

    def _advance_level(self, bonus: int) -> None:
        self.level_number += 1
        self.puzzles_solved = 0
        self.score += bonus
        self._persist_score()
        self.level = self._build_level()
        self.player = START_CELL

    def restart(self) -> None:
        """Start over from level 1 with full lives; the score is kept."""
        self.level_number = 1
        self.lives = self.starting_lives
        self.puzzles_solved = 0
        self.game_over = False
        self.close_puzzle()
        self.player = START_CELL
        self.level = self._build_level()

    def move(self, direction: Direction) -> MoveResult:
        if self.puzzle_active or self.game_over:
            return MoveResult(MoveOutcome.IGNORED, self.player)
        dx, dy = direction.value
        x, y = self.player[0] + dx, self.player[1] + dy
        if not self.level.grid.is_floor(x, y):
            return MoveResult(MoveOutcome.BLOCKED, self.player)
        self.player = (x, y)

        point = self.level.puzzle_at(x, y)
        if point is not None:
            return MoveResult(MoveOutcome.PUZZLE, self.player, puzzle=point)
        door = self.level.door_at(x, y)
        if door is not None:
            return MoveResult(MoveOutcome.DOOR, self.player, door=door)
        return MoveResult(MoveOutcome.MOVED, self.player)

    def door_offer(self, door_id: int) -> DoorOffer:
        return DoorOffer(
            door=self.level.door(door_id),
            score=self.score,
            next_level=self.level_number + 1,
        )

    def pay_door(self, door_id: int) -> None:
        offer = self.door_offer(door_id)
        if self.level.is_door_used(door_id):
            raise ValueError(f"Door {door_id} is already used")
        if not offer.can_afford:
            raise ValueError(
                f"Door costs {offer.door.cost} points but the score is {self.score}"
            )
        self.score -= offer.door.cost
        self.level.mark_door_used(door_id)
        self._advance_level(DOOR_BONUS)

    def open_puzzle(self, point_id: int) -> Puzzle:
        if self.level.is_puzzle_solved(point_id):
            raise ValueError(f"Puzzle point {point_id} is already solved")
        riddle = self.riddles.fetch()
        self.puzzle = build_puzzle(riddle, point_id, self.rng)
        previous = self.history.previous_answers(riddle.question)
        if previous:
            last = previous[-1]
            self.hint = AnswerHint(
                times_seen=len(previous),
                last_answer=str(last.get("userAnswer", "")),
                last_correct=bool(last.get("isCorrect")),
            )
        else:
            self.hint = None
        return self.puzzle

    def close_puzzle(self) -> None:
        self.puzzle = None
        self.hint = None

    def _require_puzzle(self) -> Puzzle:
        if self.puzzle is None:
            raise RuntimeError("No puzzle is open")
        return self.puzzle

    def _check_level_complete(self) -> bool:
        if self.puzzles_solved >= self.settings.puzzles_per_level:
            self._advance_level(LEVEL_COMPLETE_BONUS)
            return True
        return False

    def submit_answer(self, choice_index: int) -> AnswerResult:
        puzzle = self._require_puzzle()
        if not 0 <= choice_index < len(puzzle.choices):
            raise IndexError(f"Choice {choice_index} is out of range")
        answer = puzzle.choices[choice_index]
        correct = choice_index == puzzle.correct_index
        self.history.record(
            question=puzzle.question,
            correct_answer=puzzle.answer,
            user_answer=answer,
            is_correct=correct,
            level=self.level_number,
        )
        self.close_puzzle()

        if not correct:
            self.lives -= 1
            if self.lives <= 0:
                self.game_over = True
            return AnswerResult(correct=False, answer=answer, game_over=self.game_over)

        self.level.mark_puzzle_solved(puzzle.point_id)
        self.puzzles_solved += 1
        self.score += PUZZLE_REWARD
        first_solve = self.history.correct_count(puzzle.question) == 1
        if first_solve:
            self.score += FIRST_SOLVE_BONUS
        return AnswerResult(
            correct=True,
            answer=answer,
            first_solve_bonus=first_solve,
            level_completed=self._check_level_complete(),
        )

    def skip_puzzle(self) -> bool:
        """Give up on the open puzzle; returns whether the level completed."""
        puzzle = self._require_puzzle()
        self.history.record(
            question=puzzle.question,
            correct_answer=puzzle.answer,
            user_answer=SKIPPED_ANSWER,
            is_correct=False,
            level=self.level_number,
        )
        self.close_puzzle()
        self.level.mark_puzzle_solved(puzzle.point_id)
        self.puzzles_solved += 1
        self.score = max(0, self.score - SKIP_PENALTY)
        return self._check_level_complete()


__all__ = [
    "AnswerHint",
    "AnswerResult",
    "Direction",
    "DoorOffer",
    "GameSession",
    "MoveOutcome",
    "MoveResult",
]
