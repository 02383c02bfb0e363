"""Data models supporting the crossword solver."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from .constants import DIRECTION_DELTAS, Direction


@dataclass(frozen=True, order=True)
class Point:
    """Integer coordinate on the unbounded letter plane."""

    x: int
    y: int

    def shifted(self, dx: int, dy: int) -> "Point":
        return Point(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class Placement:
    """A word bound to an origin point and direction."""

    word: str
    origin: Point
    direction: Direction

    @property
    def delta(self) -> Tuple[int, int]:
        return DIRECTION_DELTAS[self.direction]

    def cells(self) -> List[Point]:
        dx, dy = self.delta
        return [self.origin.shifted(i * dx, i * dy) for i in range(len(self.word))]

    @property
    def before(self) -> Point:
        dx, dy = self.delta
        return self.origin.shifted(-dx, -dy)

    @property
    def after(self) -> Point:
        dx, dy = self.delta
        length = len(self.word)
        return self.origin.shifted(dx * length, dy * length)

    def translated(self, dx: int, dy: int) -> "Placement":
        return Placement(self.word, self.origin.shifted(dx, dy), self.direction)
