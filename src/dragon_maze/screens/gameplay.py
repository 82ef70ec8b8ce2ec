from __future__ import annotations

from dataclasses import dataclass, field

import pygame
from pygame import surface, time

from ..colors import GREEN, LIGHT_GRAY, RED, WHITE, YELLOW
from ..localization import translate as _
from ..placement import Door
from ..render import clear, draw_hud, draw_maze, draw_panel
from ..riddles import CHOICE_LABELS
from ..screen_constants import HUD_HEIGHT, MESSAGE_DURATION_MS
from ..session import Direction, GameSession, MoveOutcome
from . import ScreenID, ScreenTransition, present

MOVE_KEYS: dict[int, Direction] = {
    pygame.K_UP: Direction.UP,
    pygame.K_w: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_s: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_a: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_d: Direction.RIGHT,
}

CHOICE_KEYS: dict[int, int] = {
    pygame.K_1: 0,
    pygame.K_2: 1,
    pygame.K_3: 2,
    pygame.K_4: 3,
    pygame.K_a: 0,
    pygame.K_b: 1,
    pygame.K_c: 2,
    pygame.K_d: 3,
}


@dataclass
class _ScreenState:
    selected: int = -1
    door: Door | None = None
    feedback: tuple[str, tuple[int, int, int]] | None = None
    messages: list[tuple[str, int]] = field(default_factory=list)

    def post(self, text: str, now_ms: int) -> None:
        self.messages.append((text, now_ms + MESSAGE_DURATION_MS))

    def active_messages(self, now_ms: int) -> list[str]:
        self.messages = [(text, until) for text, until in self.messages if until > now_ms]
        return [text for text, _until in self.messages]


def _returns_to_title(session: GameSession, state: _ScreenState, key: int) -> bool:
    # An open puzzle has to be answered or skipped first.
    return key == pygame.K_ESCAPE and state.door is None and not session.puzzle_active


def _handle_explore_key(session: GameSession, state: _ScreenState, key: int) -> None:
    direction = MOVE_KEYS.get(key)
    if direction is None:
        return
    result = session.move(direction)
    if result.outcome is MoveOutcome.PUZZLE and result.puzzle is not None:
        session.open_puzzle(result.puzzle.id)
        state.selected = -1
        state.feedback = None
    elif result.outcome is MoveOutcome.DOOR and result.door is not None:
        state.door = result.door


def _handle_puzzle_key(
    session: GameSession, state: _ScreenState, key: int, now_ms: int
) -> None:
    if key in CHOICE_KEYS:
        state.selected = CHOICE_KEYS[key]
        return
    if key == pygame.K_s:
        level_before = session.level_number
        session.skip_puzzle()
        state.post(_("puzzle.skipped"), now_ms)
        if session.level_number != level_before:
            state.post(_("level.complete", level=level_before), now_ms)
        return
    if key not in (pygame.K_RETURN, pygame.K_SPACE):
        return
    if state.selected < 0:
        state.feedback = (_("puzzle.pick_first"), RED)
        return

    level_before = session.level_number
    correct_answer = session.puzzle.answer if session.puzzle else ""
    answer = session.submit_answer(state.selected)
    state.selected = -1
    state.feedback = None
    if answer.correct:
        key_name = "puzzle.correct_bonus" if answer.first_solve_bonus else "puzzle.correct"
        state.post(_(key_name), now_ms)
        if answer.level_completed:
            state.post(_("level.complete", level=level_before), now_ms)
    elif not answer.game_over:
        state.post(_("puzzle.wrong", answer=correct_answer), now_ms)


def _handle_door_key(
    session: GameSession, state: _ScreenState, key: int, now_ms: int
) -> None:
    door = state.door
    if door is None:
        return
    offer = session.door_offer(door.id)
    if offer.can_afford and key not in (pygame.K_y, pygame.K_n, pygame.K_ESCAPE):
        return
    state.door = None
    if offer.can_afford and key == pygame.K_y:
        session.pay_door(door.id)
        state.post(_("door.advanced", level=session.level_number), now_ms)


def _puzzle_lines(
    session: GameSession, state: _ScreenState
) -> list[tuple[str, tuple[int, int, int]]]:
    puzzle = session.puzzle
    assert puzzle is not None
    lines = [(_("puzzle.title", level=session.level_number), YELLOW)]
    lines.append((puzzle.question, WHITE))
    if session.hint is not None:
        verdict = _(
            "puzzle.verdict_correct" if session.hint.last_correct else "puzzle.verdict_wrong"
        )
        lines.append(
            (
                _(
                    "puzzle.seen_before",
                    count=session.hint.times_seen,
                    answer=session.hint.last_answer,
                    verdict=verdict,
                ),
                LIGHT_GRAY,
            )
        )
    for idx, choice in enumerate(puzzle.choices):
        color = YELLOW if idx == state.selected else WHITE
        lines.append((f"{CHOICE_LABELS[idx]}) {choice}", color))
    if state.feedback is not None:
        lines.append(state.feedback)
    lines.append((_("puzzle.controls"), LIGHT_GRAY))
    return lines


def _door_lines(
    session: GameSession, door: Door
) -> list[tuple[str, tuple[int, int, int]]]:
    offer = session.door_offer(door.id)
    return [
        (_("door.title", level=offer.next_level), YELLOW),
        (_("door.cost", cost=door.cost, score=offer.score), WHITE),
        (_("door.confirm") if offer.can_afford else _("door.too_poor"), LIGHT_GRAY),
    ]


def gameplay_screen(
    screen: surface.Surface,
    clock: time.Clock,
    fps: int,
    session: GameSession,
) -> ScreenTransition:
    """Run the maze until the player quits or returns to the title."""
    state = _ScreenState()
    cell_size = session.settings.cell_size

    while True:
        now_ms = pygame.time.get_ticks()
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return ScreenTransition(ScreenID.EXIT)
            if event.type != pygame.KEYDOWN:
                continue
            if _returns_to_title(session, state, event.key):
                return ScreenTransition(ScreenID.TITLE)
            if session.game_over:
                if event.key in (pygame.K_RETURN, pygame.K_SPACE):
                    session.restart()
                continue
            if state.door is not None:
                _handle_door_key(session, state, event.key, now_ms)
            elif session.puzzle_active:
                _handle_puzzle_key(session, state, event.key, now_ms)
            else:
                _handle_explore_key(session, state, event.key)

        clear(screen)
        draw_hud(screen, session, HUD_HEIGHT)
        draw_maze(
            screen,
            session.level,
            cell_size,
            session.player,
            origin=(0, HUD_HEIGHT),
        )
        if session.game_over:
            draw_panel(
                screen,
                [
                    (
                        _(
                            "game_over.message",
                            score=session.score,
                            level=session.level_number,
                        ),
                        RED,
                    ),
                    (_("game_over.restart"), LIGHT_GRAY),
                ],
            )
        elif state.door is not None:
            draw_panel(screen, _door_lines(session, state.door))
        elif session.puzzle_active:
            draw_panel(screen, _puzzle_lines(session, state), font_size=22)
        else:
            messages = state.active_messages(now_ms)
            if messages:
                draw_panel(screen, [(text, GREEN) for text in messages])

        present(screen)
        clock.tick(fps)
