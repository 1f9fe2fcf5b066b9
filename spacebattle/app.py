"""Window, audio and main loop of the game."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

import pygame

from spacebattle.game import Assets, Game, Key

log = logging.getLogger(__name__)

WINDOW_SIZE = 750
WINDOW_OFFSET = 50
WINDOW_TITLE = "SpaceShip-Battle"
FPS = 60
BACKGROUND = (30, 30, 30)
FRAME_COLOR = (243, 216, 63)
FRAME_RECT = (10, 10, 788, 788)
FRAME_ROUNDNESS = 0.18

_KEYMAP: dict[int, Key] = {
    pygame.K_UP: Key.UP,
    pygame.K_DOWN: Key.DOWN,
    pygame.K_LEFT: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT,
    pygame.K_RETURN: Key.ENTER,
    pygame.K_p: Key.P,
}


def key_events(events: Iterable[pygame.event.Event]) -> frozenset[Key]:
    """Return the game keys pressed down among ``events``."""
    return frozenset(
        _KEYMAP[event.key]
        for event in events
        if event.type == pygame.KEYDOWN and event.key in _KEYMAP
    )


def _held_keys(state: Sequence[bool]) -> frozenset[Key]:
    return frozenset(key for code, key in _KEYMAP.items() if state[code])


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="spacebattle", description="Play Space Battle.")
    parser.add_argument(
        "--assets",
        type=Path,
        default=Path.cwd(),
        help="directory holding the images, sounds and music",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=Path.cwd(),
        help="directory for the high score and save files",
    )
    return parser.parse_args(argv)


def _draw_frame(surface: pygame.Surface) -> None:
    x, y, width, height = FRAME_RECT
    radius = int(FRAME_ROUNDNESS * min(width, height) / 2)
    pygame.draw.rect(surface, FRAME_COLOR, FRAME_RECT, width=1, border_radius=radius)


def _run(game: Game, screen: pygame.Surface) -> None:
    clock = pygame.time.Clock()
    while game.run:
        events = pygame.event.get()
        if any(event.type == pygame.QUIT for event in events):
            break
        try:
            game.handle_input(key_events(events), _held_keys(pygame.key.get_pressed()))
            game.update()
            screen.fill(BACKGROUND)
            _draw_frame(screen)
            game.draw(screen)
            pygame.display.flip()
        except Exception:
            log.exception("Error in game loop")
        clock.tick(FPS)


def main(argv: Sequence[str] | None = None) -> int:
    """Open the window and play until it is closed."""
    args = _parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    side = WINDOW_SIZE + WINDOW_OFFSET
    pygame.init()
    try:
        screen = pygame.display.set_mode((side, side))
        pygame.display.set_caption(WINDOW_TITLE)
        if not pygame.mixer.get_init():
            pygame.mixer.init()
        assets = Assets.load(args.assets)
        game = Game(assets, side, side, data_dir=args.data_dir)
        if assets.music_path is not None:
            pygame.mixer.music.load(str(assets.music_path))
            pygame.mixer.music.play(-1)
        _run(game, screen)
    except Exception as error:
        log.error("Fatal error in main: %s", error)
        return 1
    finally:
        pygame.quit()
    return 0