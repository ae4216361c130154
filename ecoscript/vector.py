"""Immutable integer 2-D vectors used for positions and directions."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable


def _sign(n: int) -> int:
    if n > 0:
        return 1
    if n < 0:
        return -1
    return 0


@dataclass(frozen=True, slots=True)
class Vector:
    x: int
    y: int

    def __add__(self, other: Vector) -> Vector:
        return Vector(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector) -> Vector:
        return Vector(self.x - other.x, self.y - other.y)

    def __abs__(self) -> Vector:
        return self.map(abs)

    def map(self, f: Callable[[int], int]) -> Vector:
        return Vector(f(self.x), f(self.y))

    def direction(self) -> Vector:
        """Reduce to one of the eight compass steps (or the zero vector)."""
        return self.map(_sign)

    def compare(self, other: Vector) -> int:
        """Order two vectors by the sum of their components.

        Returns -1, 0 or 1. This is not a distance: (0, 3) and (2, 1) compare
        equal, and callers rely on encounter order to break such ties.
        """
        mine = self.x + self.y
        theirs = other.x + other.y
        if mine < theirs:
            return -1
        if mine > theirs:
            return 1
        return 0


DIRECTIONS: tuple[Vector, ...] = (
    Vector(0, -1),
    Vector(1, -1),
    Vector(1, 0),
    Vector(1, 1),
    Vector(0, 1),
    Vector(-1, 1),
    Vector(-1, 0),
    Vector(-1, -1),
)
