"""Game state, rules, menus and persistence."""

from __future__ import annotations

import enum
import logging
import random
import struct
import time
from collections.abc import Callable, Collection
from dataclasses import dataclass, field
from pathlib import Path

import pygame

from spacebattle.shots import Laser, Obstacle, Rect
from spacebattle.ships import Alien, FighterJet, MysteryShip, Ship, SpaceShip

log = logging.getLogger(__name__)

WHITE = (255, 255, 255)
GRAY = (130, 130, 130)
YELLOW = (253, 249, 0)
RED = (230, 41, 55)
GREEN = (0, 228, 48)
BLUE = (0, 121, 241)
PINK = (255, 109, 194)
ORANGE = (255, 161, 0)

MENU_OPTIONS = ("Resume", "New Game", "Save", "Load", "Exit", "FighterJets(Currently Unavailable)")
SELECTABLE_OPTIONS = 5
MAX_SAVED_ALIENS = 1000
ALIEN_ROWS = 5
ALIEN_COLUMNS = 9
ALIEN_SPACING = 55
ALIEN_ORIGIN = (130, 170)
ALIEN_DROP = 4
ALIEN_LASER_SPEED = 6
ALIEN_KILL_SCORE = 100
MYSTERY_KILL_SCORE = 500
START_LIVES = 3

_HEADER = struct.Struct("<iiiiffQ")
_POSITION = struct.Struct("<ff")


class SaveFileError(ValueError):
    """A save file exists but its contents cannot be used."""


class GameState(enum.Enum):
    MAIN_MENU = enum.auto()
    GAME_RUNNING = enum.auto()
    GAME_PAUSED = enum.auto()
    GAME_OVER = enum.auto()


class Key(enum.Enum):
    """Keys the game reacts to."""

    UP = enum.auto()
    DOWN = enum.auto()
    LEFT = enum.auto()
    RIGHT = enum.auto()
    ENTER = enum.auto()
    P = enum.auto()


@dataclass
class Assets:
    """Images and sounds used by the game."""

    alien_images: dict[int, pygame.Surface]
    mystery_image: pygame.Surface
    spaceship_image: pygame.Surface
    fighter_image: pygame.Surface
    explosion_sound: object | None = None
    laser_sound: object | None = None
    music_path: Path | None = None
    extra: dict[str, object] = field(default_factory=dict)

    @classmethod
    def load(cls, directory: str | Path) -> Assets:
        """Load every asset file from ``directory`` (the mixer must be initialised)."""
        base = Path(directory)

        def image(name: str) -> pygame.Surface:
            return pygame.image.load(str(base / name))

        return cls(
            alien_images={kind: image(f"EnemyShip_{kind}.png") for kind in (1, 2, 3)},
            mystery_image=image("Mystery.png"),
            spaceship_image=image("FighterShip.png"),
            fighter_image=image("FighterShip_2.png"),
            explosion_sound=pygame.mixer.Sound(str(base / "Sounds_explosion.ogg")),
            laser_sound=pygame.mixer.Sound(str(base / "Sounds_laser.ogg")),
            music_path=base / "interstellar.mp3",
        )

    def alien_image(self, kind: int) -> pygame.Surface:
        return self.alien_images.get(kind, self.alien_images[1])


def load_high_score(path: str | Path) -> int:
    """Read the stored high score; 0 when the file is missing or unreadable."""
    try:
        text = Path(path).read_text()
    except OSError:
        log.warning("Failed to load high score from %s", path)
        return 0
    words = text.split()
    if not words:
        return 0
    try:
        return int(words[0])
    except ValueError:
        return 0


def save_high_score(path: str | Path, score: int) -> None:
    """Store ``score`` as the high score."""
    Path(path).write_text(str(score))


def _monotonic_clock() -> Callable[[], float]:
    start = time.monotonic()
    return lambda: time.monotonic() - start


def _erase_blocks(obstacles: list[Obstacle], target: Rect) -> bool:
    """Remove every block touching ``target``; return whether any was hit."""
    hit = False
    for obstacle in obstacles:
        kept = [block for block in obstacle.blocks if not block.rect().collides(target)]
        if len(kept) != len(obstacle.blocks):
            hit = True
            obstacle.blocks = kept
    return hit


class Game:
    """The whole game: menu, playfield, scoring and saving."""

    def __init__(
        self,
        assets: Assets,
        screen_width: int = 800,
        screen_height: int = 800,
        *,
        data_dir: str | Path | None = None,
        clock: Callable[[], float] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.assets = assets
        self.screen_width = screen_width
        self.screen_height = screen_height
        directory = Path(data_dir) if data_dir is not None else Path.cwd()
        self.high_score_path = directory / "highscore.txt"
        self.save_path = directory / "save.dat"
        self.clock = clock if clock is not None else _monotonic_clock()
        self.rng = rng if rng is not None else random.Random()
        self._fonts: dict[int, pygame.font.Font] = {}

        self.spaceship = SpaceShip(
            assets.spaceship_image, screen_width, screen_height, assets.laser_sound
        )
        self.fighter = FighterJet(assets.fighter_image, screen_width, screen_height)
        self.mystery_ship = MysteryShip(assets.mystery_image, screen_width)
        self.state = GameState.MAIN_MENU
        self.selected_menu_option = 0
        self.alien_lasers: list[Laser] = []
        self.init_game()

    # ------------------------------------------------------------------ setup

    def init_game(self) -> None:
        self.level = 1
        self.obstacles = self.create_obstacles()
        self.aliens = self.create_aliens()
        self.aliens_direction = 1
        self.time_last_alien_fired = 0.0
        self.time_last_spawn = 0.0
        self.mystery_ship_spawn_interval = float(self.rng.randint(10, 20))
        self.lives = START_LIVES
        self.score = 0
        self.high_score = load_high_score(self.high_score_path)
        self.run = True
        self.spaceship.reset()
        self.game_start_time = self.clock()

    def reset(self) -> None:
        self.spaceship.reset()
        self.alien_lasers = []
        self.level = 1
        self.obstacles = self.create_obstacles()
        self.aliens = self.create_aliens()
        self.aliens_direction = 1
        self.time_last_alien_fired = 0.0
        self.time_last_spawn = 0.0
        self.lives = START_LIVES
        self.score = 0

    def create_obstacles(self) -> list[Obstacle]:
        width = Obstacle.width()
        gap = (self.screen_width - 4 * width) // 5
        y = float(self.screen_height - 100)
        return [Obstacle(float((i + 1) * gap + i * width), y) for i in range(4)]

    def _alien_kind(self, row: int) -> int:
        if self.level == 3:
            return 3
        if self.level == 1:
            return 1 if row % 2 == 0 else 2
        if self.level == 2:
            return (1, 2, 3)[row % 3]
        return 1

    def create_aliens(self) -> list[Alien]:
        origin_x, origin_y = ALIEN_ORIGIN
        aliens = []
        for row in range(ALIEN_ROWS):
            kind = self._alien_kind(row)
            for column in range(ALIEN_COLUMNS):
                aliens.append(
                    Alien(
                        kind,
                        self.assets.alien_image(kind),
                        float(origin_x + column * ALIEN_SPACING),
                        float(origin_y + row * ALIEN_SPACING),
                    )
                )
        return aliens

    # ------------------------------------------------------------------ rules

    def move_aliens(self) -> None:
        for alien in self.aliens:
            if alien.x + alien.rect().width > self.screen_width:
                self.aliens_direction = -1
                self.move_down_aliens(ALIEN_DROP)
                break
            if alien.x < 0:
                self.aliens_direction = 1
                self.move_down_aliens(ALIEN_DROP)
                break
        for alien in self.aliens:
            alien.step(self.aliens_direction)

    def move_down_aliens(self, distance: float) -> None:
        for alien in self.aliens:
            alien.y += distance

    def alien_shoot_laser(self) -> None:
        now = self.clock()
        interval = max(0.1, 0.35 - self.level * 0.02)
        if now - self.time_last_alien_fired >= interval and self.aliens:
            shooter = self.aliens[self.rng.randint(0, len(self.aliens) - 1)]
            bounds = shooter.rect()
            self.alien_lasers.append(
                Laser(shooter.x + bounds.width / 2, shooter.y + bounds.height, ALIEN_LASER_SPEED)
            )
            self.time_last_alien_fired = now

    def delete_inactive_lasers(self) -> None:
        self.spaceship.lasers = [laser for laser in self.spaceship.lasers if laser.active]
        self.alien_lasers = [laser for laser in self.alien_lasers if laser.active]

    def _explode(self) -> None:
        if self.assets.explosion_sound is not None:
            self.assets.explosion_sound.play()

    def check_for_collisions(self) -> None:
        for laser in self.spaceship.lasers:
            bolt = laser.rect()
            survivors = []
            for alien in self.aliens:
                if alien.rect().collides(bolt):
                    self._explode()
                    laser.active = False
                    self.score += ALIEN_KILL_SCORE
                    self.check_for_high_score()
                else:
                    survivors.append(alien)
            self.aliens = survivors
            if _erase_blocks(self.obstacles, bolt):
                laser.active = False
            if self.mystery_ship.rect().collides(bolt):
                self.mystery_ship.alive = False
                laser.active = False
                self.score += MYSTERY_KILL_SCORE
                self.check_for_high_score()
                self._explode()

        for laser in self.alien_lasers:
            bolt = laser.rect()
            if bolt.collides(self.spaceship.rect()):
                laser.active = False
                self.lives -= 1
                if self.lives == 0:
                    self.game_over()
            if _erase_blocks(self.obstacles, bolt):
                laser.active = False

        for alien in self.aliens:
            body = alien.rect()
            _erase_blocks(self.obstacles, body)
            if body.collides(self.spaceship.rect()):
                self.game_over()

    def check_for_high_score(self) -> None:
        if self.score > self.high_score:
            self.high_score = self.score
            try:
                save_high_score(self.high_score_path, self.high_score)
            except OSError as error:
                log.error("Failed to save high score: %s", error)

    def game_over(self) -> None:
        self.state = GameState.GAME_OVER

    # ------------------------------------------------------------ persistence

    def save_game(self) -> None:
        """Write score, level, lives, fleet direction and positions to the save file."""
        parts = [
            _HEADER.pack(
                self.score,
                self.level,
                self.lives,
                self.aliens_direction,
                self.spaceship.x,
                self.spaceship.y,
                len(self.aliens),
            )
        ]
        parts.extend(_POSITION.pack(alien.x, alien.y) for alien in self.aliens)
        self.save_path.write_bytes(b"".join(parts))

    def load_game(self) -> None:
        """Restore a saved game; raises FileNotFoundError or SaveFileError."""
        data = self.save_path.read_bytes()
        if len(data) < _HEADER.size:
            raise SaveFileError("Save file is truncated")
        score, level, lives, direction, ship_x, ship_y, count = _HEADER.unpack_from(data)
        if count > MAX_SAVED_ALIENS:
            raise SaveFileError("Invalid alien count in save file")
        if len(data) < _HEADER.size + count * _POSITION.size:
            raise SaveFileError("Save file is truncated")
        positions = [
            _POSITION.unpack_from(data, _HEADER.size + i * _POSITION.size) for i in range(count)
        ]
        self.score, self.level, self.lives = score, level, lives
        self.aliens_direction = direction
        self.spaceship.position = (ship_x, ship_y)
        image = self.assets.alien_image(1)
        self.aliens = [Alien(1, image, x, y) for x, y in positions]

    # ------------------------------------------------------------------ frame

    def _choose_menu_option(self) -> None:
        option = self.selected_menu_option
        if option == 0 and self.lives > 0:
            self.state = GameState.GAME_RUNNING
        elif option == 1:
            self.reset()
            self.init_game()
            self.state = GameState.GAME_RUNNING
        elif option == 2:
            try:
                self.save_game()
            except OSError as error:
                log.error("Failed to save game: %s", error)
        elif option == 3:
            try:
                self.load_game()
            except (OSError, SaveFileError) as error:
                log.error("Failed to load game: %s", error)
            else:
                self.state = GameState.GAME_RUNNING
        elif option == 4:
            self.run = False

    def handle_input(self, pressed: Collection[Key], held: Collection[Key]) -> None:
        """React to keys pressed this frame and keys currently held down."""
        if self.state is GameState.MAIN_MENU:
            if Key.DOWN in pressed:
                self.selected_menu_option = (self.selected_menu_option + 1) % SELECTABLE_OPTIONS
            if Key.UP in pressed:
                self.selected_menu_option = (
                    self.selected_menu_option + SELECTABLE_OPTIONS - 1
                ) % SELECTABLE_OPTIONS
            if Key.ENTER in pressed:
                self._choose_menu_option()
            return
        if self.state is GameState.GAME_RUNNING:
            if Key.P in pressed:
                self.state = GameState.GAME_PAUSED
                return
            if Key.LEFT in held:
                self.spaceship.move_left()
            if Key.RIGHT in held:
                self.spaceship.move_right()
            if Key.UP in held:
                self.spaceship.fire_laser(self.clock())
        if self.state is GameState.GAME_PAUSED:
            if Key.P in pressed:
                self.state = GameState.GAME_RUNNING
            elif Key.ENTER in pressed:
                self.state = GameState.MAIN_MENU
        if self.state is GameState.GAME_OVER and Key.ENTER in pressed:
            self.state = GameState.MAIN_MENU

    def update(self) -> None:
        if self.state is not GameState.GAME_RUNNING:
            return
        now = self.clock()
        if now - self.time_last_spawn > self.mystery_ship_spawn_interval:
            self.mystery_ship.spawn(self.rng.randint(0, 1))
            self.time_last_spawn = now
            self.mystery_ship_spawn_interval = float(self.rng.randint(10, 20))

        ships: list[Ship] = [self.spaceship, self.mystery_ship, *self.aliens]
        for ship in ships:
            ship.update()
        self.move_aliens()
        self.alien_shoot_laser()
        self.delete_inactive_lasers()
        self.check_for_collisions()

        for laser in (*self.alien_lasers, *self.spaceship.lasers):
            laser.update(self.screen_height)

        if not self.aliens:
            self.level += 1
            self.aliens = self.create_aliens()
            self.aliens_direction = 1

    # ---------------------------------------------------------------- drawing

    def _text(
        self, surface: pygame.Surface, text: str, x: int, y: int, size: int, color: tuple
    ) -> None:
        font = self._fonts.get(size)
        if font is None:
            if not pygame.font.get_init():
                pygame.font.init()
            font = self._fonts[size] = pygame.font.Font(None, size)
        surface.blit(font.render(text, True, color), (x, y))

    def draw(self, surface: pygame.Surface) -> None:
        if self.state is GameState.MAIN_MENU:
            self._text(surface, "SPACE BATTLE", 260, 180, 30, YELLOW)
            for index, option in enumerate(MENU_OPTIONS):
                color = WHITE if index == self.selected_menu_option else GRAY
                x = 200 if index == len(MENU_OPTIONS) - 1 else 330
                self._text(surface, option, x, 250 + index * 40, 20, color)
            return

        if self.state is GameState.GAME_OVER:
            self._text(surface, "GAME OVER - Press ENTER to return to MENU", 180, 350, 20, RED)
            self._text(surface, "====GAME RESULT====", 260, 30, 25, GREEN)
            self._text(surface, f"TOTAL-SCORE: {self.score}", 285, 75, 20, YELLOW)
            self._text(surface, f"LIVES REMAINING: {self.lives}", 285, 115, 20, YELLOW)
            self._text(surface, f"LEVEL-NO: {self.level}", 285, 155, 20, YELLOW)
            self._text(surface, f"HIGH-SCORE: {self.high_score}", 285, 195, 20, BLUE)
            self._text(surface, f"TIME PLAYED: {self.game_start_time:.0f}s", 285, 235, 20, PINK)
            return

        self.spaceship.draw(surface)
        self.mystery_ship.draw(surface)
        for laser in self.spaceship.lasers:
            laser.draw(surface)
        for obstacle in self.obstacles:
            obstacle.draw(surface)
        for alien in self.aliens:
            alien.draw(surface)
        for laser in self.alien_lasers:
            laser.draw(surface)

        elapsed = self.clock() - self.game_start_time
        self._text(surface, f"SCORE: {self.score}", 60, 22, 20, YELLOW)
        self._text(surface, f"LIVES: {self.lives}", 380, 22, 20, YELLOW)
        self._text(surface, f"LEVEL: {self.level}", 220, 22, 20, YELLOW)
        self._text(surface, f"HIGH-SCORE: {self.high_score}", 60, 50, 20, RED)
        self._text(surface, f"TIME: {elapsed:.0f}s", 500, 50, 20, GREEN)
        self._text(surface, "Press P to Pause", 540, 22, 20, ORANGE)

        if self.state is GameState.GAME_PAUSED:
            self._text(surface, "GAME PAUSED", 280, 300, 30, YELLOW)
            self._text(surface, "Press P to Resume", 250, 360, 30, BLUE)
            self._text(surface, "Press ENTER to return to Menu", 155, 390, 30, BLUE)