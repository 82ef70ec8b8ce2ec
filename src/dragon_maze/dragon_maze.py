from __future__ import annotations

import sys
import traceback  # For error reporting
from typing import Any

import pygame

try:
    from .__about__ import __version__
except Exception:  # pragma: no cover - fallback version
    __version__ = "0.0.0-unknown"
from .config import config_section, load_config, maze_settings, save_config
from .localization import set_language
from .progress import RiddleHistory, load_score
from .riddles import RiddleSource
from .rng import DeterministicRNG
from .screen_constants import FPS, HUD_HEIGHT
from .screens import ScreenID, ScreenTransition
from .screens.gameplay import gameplay_screen
from .screens.title import title_screen
from .session import GameSession


def _parse_seed(argv: list[str], config: dict[str, Any]) -> int | None:
    for arg in argv:
        if arg.startswith("--seed="):
            try:
                return int(arg.split("=", 1)[1])
            except ValueError:
                print(f"Ignoring invalid seed: {arg}")
    seed = config_section(config, "game").get("seed")
    return seed if isinstance(seed, int) else None


def build_session(config: dict[str, Any], seed: int | None = None) -> GameSession:
    """Assemble a game session from config and the persisted score/history."""
    settings = maze_settings(config)
    rng = DeterministicRNG(seed)
    score, score_path = load_score()
    game_conf = config_section(config, "game")
    try:
        lives = int(game_conf.get("starting_lives", 3))
    except (TypeError, ValueError):
        lives = 3
    return GameSession(
        settings,
        rng,
        RiddleSource.from_config(config, rng),
        RiddleHistory.load(),
        score=score,
        score_path=score_path,
        starting_lives=lives,
    )


# --- Main Entry Point ---
def main() -> None:
    if "--version" in sys.argv:
        print(__version__)
        return

    config: dict[str, Any]
    config, config_path = load_config()
    if not config_path.exists():
        save_config(config, config_path)
    set_language(config.get("language"))

    pygame.init()
    try:
        pygame.font.init()
    except pygame.error as e:
        print(f"Pygame font failed to initialize: {e}")

    session = build_session(config, _parse_seed(sys.argv[1:], config))
    print(f"Dragon Maze {__version__} (seed {session.rng.seed})")
    settings = session.settings
    screen = pygame.display.set_mode(
        (
            settings.grid_width * settings.cell_size,
            settings.grid_height * settings.cell_size + HUD_HEIGHT,
        )
    )
    pygame.display.set_caption("Dragon Maze")
    clock = pygame.time.Clock()

    next_screen = ScreenID.TITLE
    while next_screen != ScreenID.EXIT:
        transition: ScreenTransition
        if next_screen == ScreenID.TITLE:
            transition = title_screen(screen, clock, FPS)
        else:
            try:
                transition = gameplay_screen(screen, clock, FPS, session)
            except Exception:
                print("An unhandled error occurred during game execution:")
                traceback.print_exc()
                break
        next_screen = transition.next_screen

    pygame.quit()  # Quit pygame only once at the very end of main
    sys.exit()


if __name__ == "__main__":
    main()
