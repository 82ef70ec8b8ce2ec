from __future__ import annotations

from pathlib import Path

import pytest

from dragon_maze.level import Level
from dragon_maze.level_constants import START_CELL
from dragon_maze.maze import MazeGrid
from dragon_maze.placement import Door, PuzzlePoint
from dragon_maze.progress import RiddleHistory, load_score
from dragon_maze.riddles import Riddle
from dragon_maze.rng import DeterministicRNG
from dragon_maze.session import Direction, GameSession, MoveOutcome

TOWEL = Riddle("What gets wetter the more it dries?", "towel", ("towel", "sponge", "cloth", "mop"))


class _StubRiddles:
    def __init__(self, riddle: Riddle = TOWEL) -> None:
        self.riddle = riddle

    def fetch(self) -> Riddle:
        return self.riddle


def _test_level() -> Level:
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
        puzzle_points=(PuzzlePoint(0, 2, 1), PuzzlePoint(1, 3, 1), PuzzlePoint(2, 4, 1)),
        doors=(Door(0, 1, 3, 200),),
    )


@pytest.fixture
def session(small_settings, tmp_path: Path) -> GameSession:
    game = GameSession(
        small_settings,
        DeterministicRNG(21),
        _StubRiddles(),
        RiddleHistory(),
        score=0,
        score_path=tmp_path / "score.json",
    )
    game.level = _test_level()
    return game


def _wrong_index(game: GameSession) -> int:
    assert game.puzzle is not None
    return (game.puzzle.correct_index + 1) % len(game.puzzle.choices)


def test_new_session_starts_at_level_one(small_settings) -> None:
    game = GameSession(small_settings, DeterministicRNG(3), _StubRiddles(), RiddleHistory())
    assert game.level_number == 1
    assert game.lives == 3
    assert game.player == START_CELL
    assert game.level.grid.width == 11
    assert len(game.level.puzzle_points) == 3


def test_walls_block_movement(session: GameSession) -> None:
    result = session.move(Direction.UP)
    assert result.outcome is MoveOutcome.BLOCKED
    assert session.player == START_CELL


def test_moving_onto_puzzle_reports_it(session: GameSession) -> None:
    result = session.move(Direction.RIGHT)
    assert result.outcome is MoveOutcome.PUZZLE
    assert result.puzzle == PuzzlePoint(0, 2, 1)
    assert session.player == (2, 1)


def test_moving_onto_door_reports_it(session: GameSession) -> None:
    session.move(Direction.DOWN)
    result = session.move(Direction.DOWN)
    assert result.outcome is MoveOutcome.DOOR
    assert result.door == Door(0, 1, 3, 200)


def test_plain_floor_move(session: GameSession) -> None:
    result = session.move(Direction.DOWN)
    assert result.outcome is MoveOutcome.MOVED
    assert result.position == (1, 2)


def test_movement_is_ignored_while_puzzle_open(session: GameSession) -> None:
    session.move(Direction.RIGHT)
    session.open_puzzle(0)
    assert session.move(Direction.LEFT).outcome is MoveOutcome.IGNORED
    assert session.player == (2, 1)


def test_correct_answer_awards_first_time_bonus(session: GameSession) -> None:
    puzzle = session.open_puzzle(0)
    result = session.submit_answer(puzzle.correct_index)

    assert result.correct
    assert result.first_solve_bonus
    assert session.score == 125
    assert session.puzzles_solved == 1
    assert session.level.is_puzzle_solved(0)
    assert not session.puzzle_active


def test_repeat_correct_answer_has_no_bonus(session: GameSession) -> None:
    session.submit_answer(session.open_puzzle(0).correct_index)
    result = session.submit_answer(session.open_puzzle(1).correct_index)

    assert not result.first_solve_bonus
    assert session.score == 225
    assert session.hint is None


def test_previous_answer_hint(session: GameSession) -> None:
    session.open_puzzle(0)
    session.submit_answer(_wrong_index(session))

    session.open_puzzle(0)

    assert session.hint is not None
    assert session.hint.times_seen == 1
    assert not session.hint.last_correct
    assert session.hint.last_answer != "towel"


def test_wrong_answer_costs_a_life(session: GameSession) -> None:
    session.open_puzzle(0)
    result = session.submit_answer(_wrong_index(session))

    assert not result.correct
    assert not result.game_over
    assert session.lives == 2
    assert not session.level.is_puzzle_solved(0)
    assert session.history.data["wrongAnswers"] == 1


def test_losing_all_lives_ends_the_game(session: GameSession) -> None:
    session.score = 300
    for _ in range(3):
        session.open_puzzle(0)
        result = session.submit_answer(_wrong_index(session))
    assert result.game_over
    assert session.game_over
    assert session.move(Direction.DOWN).outcome is MoveOutcome.IGNORED

    session.restart()

    assert not session.game_over
    assert session.lives == 3
    assert session.level_number == 1
    assert session.score == 300
    assert session.player == START_CELL


def test_submit_without_open_puzzle_fails(session: GameSession) -> None:
    with pytest.raises(RuntimeError):
        session.submit_answer(0)


def test_out_of_range_choice_fails(session: GameSession) -> None:
    session.open_puzzle(0)
    with pytest.raises(IndexError):
        session.submit_answer(4)


def test_skip_marks_solved_with_penalty(session: GameSession) -> None:
    session.score = 120
    session.open_puzzle(0)

    completed = session.skip_puzzle()

    assert not completed
    assert session.score == 70
    assert session.level.is_puzzle_solved(0)
    assert session.history.entries[-1]["userAnswer"] == "SKIPPED"
    assert session.history.entries[-1]["isCorrect"] is False


def test_skip_never_drops_score_below_zero(session: GameSession) -> None:
    session.open_puzzle(0)
    session.skip_puzzle()
    assert session.score == 0


def test_solving_every_puzzle_completes_the_level(session: GameSession, tmp_path: Path) -> None:
    session.player = (4, 1)
    results = [session.submit_answer(session.open_puzzle(i).correct_index) for i in range(3)]

    assert [r.level_completed for r in results] == [False, False, True]
    assert session.level_number == 2
    assert session.puzzles_solved == 0
    assert session.score == 125 + 100 + 100 + 200
    assert session.player == START_CELL
    assert session.level.number == 2
    assert load_score(path=tmp_path / "score.json")[0] == session.score


def test_door_offer_reports_affordability(session: GameSession) -> None:
    session.score = 150
    offer = session.door_offer(0)
    assert not offer.can_afford
    assert offer.next_level == 2
    session.score = 200
    assert session.door_offer(0).can_afford


def test_unaffordable_door_cannot_be_paid(session: GameSession) -> None:
    session.score = 100
    with pytest.raises(ValueError):
        session.pay_door(0)
    assert session.level_number == 1
    assert not session.level.is_door_used(0)


def test_paying_door_advances_with_bonus(session: GameSession, tmp_path: Path) -> None:
    session.score = 500
    old_level = session.level

    session.pay_door(0)

    assert old_level.is_door_used(0)
    assert session.level_number == 2
    assert session.score == 500 - 200 + 50
    assert session.level is not old_level
    assert load_score(path=tmp_path / "score.json")[0] == 350


def test_seeded_sessions_build_identical_levels(small_settings) -> None:
    a = GameSession(small_settings, DeterministicRNG(99), _StubRiddles(), RiddleHistory())
    b = GameSession(small_settings, DeterministicRNG(99), _StubRiddles(), RiddleHistory())
    assert a.level.grid == b.level.grid
    assert a.level.puzzle_points == b.level.puzzle_points
    assert a.level.doors == b.level.doors

    a.restart()
    assert a.level.grid != b.level.grid or a.level.puzzle_points != b.level.puzzle_points


def test_hint_reports_the_latest_answer(session: GameSession) -> None:
    session.open_puzzle(0)
    session.submit_answer(_wrong_index(session))
    session.submit_answer(session.open_puzzle(0).correct_index)

    session.open_puzzle(1)

    assert session.hint is not None
    assert session.hint.times_seen == 2
    assert session.hint.last_correct
    assert session.hint.last_answer == "towel"
