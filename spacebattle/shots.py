"""Lasers, shield blocks and the obstacles built from them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar

import pygame

RGB = tuple[int, int, int]


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle in screen coordinates."""

    x: float
    y: float
    width: float
    height: float

    def collides(self, other: Rect) -> bool:
        """Return True when the two rectangles overlap (touching edges do not count)."""
        return (
            self.x < other.x + other.width
            and self.x + self.width > other.x
            and self.y < other.y + other.height
            and self.y + self.height > other.y
        )


@dataclass
class Block:
    """One small square of an obstacle."""

    SIZE: ClassVar[int] = 3
    COLOR: ClassVar[RGB] = (243, 216, 63)

    x: float
    y: float

    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.SIZE, self.SIZE)

    def draw(self, surface: pygame.Surface) -> None:
        pygame.draw.rect(
            surface, self.COLOR, pygame.Rect(int(self.x), int(self.y), self.SIZE, self.SIZE)
        )


@dataclass
class Laser:
    """A laser bolt moving vertically by ``speed`` pixels per update."""

    WIDTH: ClassVar[int] = 4
    HEIGHT: ClassVar[int] = 15
    COLOR: ClassVar[RGB] = (253, 249, 60)

    x: float
    y: float
    speed: int
    active: bool = True

    def update(self, screen_height: float) -> None:
        """Advance the bolt and deactivate it once it leaves the screen."""
        self.y += self.speed
        if self.active and (self.y > screen_height or self.y < 0):
            self.active = False

    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.WIDTH, self.HEIGHT)

    def draw(self, surface: pygame.Surface) -> None:
        if self.active:
            pygame.draw.rect(
                surface,
                self.COLOR,
                pygame.Rect(int(self.x), int(self.y), self.WIDTH, self.HEIGHT),
            )


class Obstacle:
    """A shield made of blocks laid out after ``GRID``."""

    GRID: ClassVar[tuple[str, ...]] = (
        "0" * 4 + "1" * 15 + "0" * 4,
        "0" * 3 + "1" * 17 + "0" * 3,
        "0" * 2 + "1" * 19 + "0" * 2,
        "0" + "1" * 21 + "0",
        *("1" * 23,) * 6,
        "1" * 6 + "0" * 11 + "1" * 6,
        "1" * 5 + "0" * 13 + "1" * 5,
        "1" * 4 + "0" * 15 + "1" * 4,
    )

    def __init__(self, x: float, y: float) -> None:
        self.x = x
        self.y = y
        self.blocks: list[Block] = [
            Block(x + column * Block.SIZE, y + row * Block.SIZE)
            for row, line in enumerate(self.GRID)
            for column, cell in enumerate(line)
            if cell == "1"
        ]

    @classmethod
    def width(cls) -> int:
        """Width in pixels of a freshly built obstacle."""
        return len(cls.GRID[0]) * Block.SIZE

    def draw(self, surface: pygame.Surface) -> None:
        for block in self.blocks:
            block.draw(surface)