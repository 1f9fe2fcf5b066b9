"""The player's ships, the aliens and the mystery ship."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar, Protocol

import pygame

from spacebattle.shots import Laser, Rect


class _Playable(Protocol):
    def play(self) -> object: ...


class Ship(ABC):
    """Base of every ship: an image drawn at a position."""

    def __init__(self, image: pygame.Surface, x: float = 0.0, y: float = 0.0) -> None:
        self.image = image
        self.x = x
        self.y = y

    @property
    def width(self) -> int:
        return self.image.get_width()

    @property
    def height(self) -> int:
        return self.image.get_height()

    @property
    def position(self) -> tuple[float, float]:
        return (self.x, self.y)

    @position.setter
    def position(self, value: tuple[float, float]) -> None:
        self.x, self.y = value

    def _bounds(self) -> Rect:
        return Rect(self.x, self.y, float(self.width), float(self.height))

    def _blit(self, surface: pygame.Surface) -> None:
        surface.blit(self.image, (self.x, self.y))

    @abstractmethod
    def rect(self) -> Rect:
        """The rectangle used for collisions."""

    @abstractmethod
    def update(self) -> None:
        """Advance the ship by one frame."""

    @abstractmethod
    def draw(self, surface: pygame.Surface) -> None:
        """Draw the ship onto ``surface``."""


class Alien(Ship):
    """An invader of a given kind (1, 2 or 3)."""

    def __init__(self, kind: int, image: pygame.Surface, x: float, y: float) -> None:
        super().__init__(image, x, y)
        self.kind = kind

    def step(self, direction: int) -> None:
        """Move sideways by ``direction`` pixels."""
        self.x += direction

    def update(self) -> None:
        """Aliens are moved as a fleet; nothing happens on their own."""

    def rect(self) -> Rect:
        return self._bounds()

    def draw(self, surface: pygame.Surface) -> None:
        self._blit(surface)


class MysteryShip(Ship):
    """A bonus ship crossing the top of the screen."""

    ALTITUDE: ClassVar[float] = 90
    SPEED: ClassVar[int] = 3

    def __init__(self, image: pygame.Surface, screen_width: int) -> None:
        super().__init__(image)
        self.screen_width = screen_width
        self.speed = 0
        self.alive = False

    def spawn(self, side: int) -> None:
        """Appear at the left edge (side 0) or the right edge (any other side)."""
        self.y = self.ALTITUDE
        if side == 0:
            self.x = 0
            self.speed = self.SPEED
        else:
            self.x = self.screen_width - self.width
            self.speed = -self.SPEED
        self.alive = True

    def update(self) -> None:
        if self.alive:
            self.x += self.speed
            if self.x > self.screen_width - self.width or self.x < 0:
                self.alive = False

    def rect(self) -> Rect:
        if self.alive:
            return self._bounds()
        return Rect(self.x, self.y, 0, 0)

    def draw(self, surface: pygame.Surface) -> None:
        if self.alive:
            self._blit(surface)


class SpaceShip(Ship):
    """The player's ship at the bottom of the screen."""

    STEP: ClassVar[int] = 4
    FIRE_INTERVAL: ClassVar[float] = 0.35
    LASER_SPEED: ClassVar[int] = -6

    def __init__(
        self,
        image: pygame.Surface,
        screen_width: int,
        screen_height: int,
        sound: _Playable | None = None,
    ) -> None:
        super().__init__(image)
        self.screen_width = screen_width
        self.screen_height = screen_height
        self.sound = sound
        self.x = (screen_width - self.width) // 2
        self.y = screen_height - self.height
        self.last_fire_time = 0.0
        self.lasers: list[Laser] = []

    def move_left(self) -> None:
        self.x = max(self.x - self.STEP, 0)

    def move_right(self) -> None:
        self.x = min(self.x + self.STEP, self.screen_width - self.width)

    def fire_laser(self, now: float) -> bool:
        """Fire from the nose if the cooldown has passed; return whether it fired."""
        if now - self.last_fire_time < self.FIRE_INTERVAL:
            return False
        self.lasers.append(
            Laser(self.x + self.width // 2 - 2, self.y, self.LASER_SPEED)
        )
        self.last_fire_time = now
        if self.sound is not None:
            self.sound.play()
        return True

    def reset(self) -> None:
        """Return to the centre of the bottom edge."""
        self.x = (self.screen_width - self.width) / 2
        self.y = self.screen_height - self.height

    def update(self) -> None:
        for laser in self.lasers:
            laser.update(self.screen_height)

    def rect(self) -> Rect:
        return self._bounds()

    def draw(self, surface: pygame.Surface) -> None:
        self._blit(surface)


class FighterJet(SpaceShip):
    """A faster player ship with a quicker, harder-hitting gun."""

    STEP: ClassVar[int] = 6
    FIRE_INTERVAL: ClassVar[float] = 0.25
    LASER_SPEED: ClassVar[int] = -8