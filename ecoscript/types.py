"""Shared type aliases and errors for ecoscript."""

from __future__ import annotations

import random as _random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from ecoscript.things import Organism
    from ecoscript.vector import Vector
    from ecoscript.world import World


@dataclass(frozen=True, slots=True)
class TurnContext:
    turn_number: int
    dt: float
    elapsed: float
    population: dict[str, int]
    request_stop: Callable[[], None]
    random: _random.Random


class ConfigurationError(ValueError):
    """Raised when a legend, map, or configuration document is malformed."""


class OutOfBoundsError(IndexError):
    """Raised when a grid position lies outside the world."""

    def __init__(self, position: Vector, message: str) -> None:
        self.position = position
        super().__init__(message)


# A trait takes the acting organism, the world, and its position and reports
# whether it acted.
Trait = Callable[["Organism", "World", "Vector"], bool]

Hook = Callable[["World", TurnContext], None]
