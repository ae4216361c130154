"""Grid occupants: inert walls and energy-bearing organisms."""
from __future__ import annotations

import random as _rng_mod
from enum import Enum
from typing import TYPE_CHECKING, Callable, ClassVar, Iterable

from ecoscript.traits import TRAITS
from ecoscript.vector import DIRECTIONS, Vector

if TYPE_CHECKING:
    from ecoscript.world import World


class Kind(Enum):
    """Entity variant. Selects the pre_act policy of an organism."""

    ORGANISM = "organism"
    PLANT = "plant"
    ANIMAL = "animal"


# Fallback chains tried before the configured actions. The first trait that
# returns True ends the organism's turn.
POLICIES: dict[Kind, tuple[str, ...]] = {
    Kind.ORGANISM: (),
    Kind.PLANT: ("reproduce", "grow"),
    Kind.ANIMAL: ("avoid_predators", "reproduce", "metabolize"),
}


class Thing:
    """Base grid occupant. Inactive things are never scheduled."""

    active: ClassVar[bool] = False
    species: str = ""
    symbol: str = "?"
    diet: frozenset[str] = frozenset()

    def pre_act(self, world: World, pos: Vector) -> bool:
        return False

    def act(self, world: World, pos: Vector) -> bool:
        return False


class Wall(Thing):
    species = "wall"
    symbol = "="

    def __repr__(self) -> str:
        return f"Wall(symbol={self.symbol!r})"


class Organism(Thing):
    """An energy-bearing entity that takes one turn per world turn.

    ``energy`` is clamped to ``[0, max_energy]`` on every write, whichever
    trait performs it. ``template`` is called with an RNG to create
    offspring on reproduction.
    """

    active: ClassVar[bool] = True

    def __init__(
        self,
        species: str,
        *,
        base_energy: float,
        max_energy: float,
        kind: Kind = Kind.ORGANISM,
        growth_rate: float = 0,
        metabolism: float = 0,
        movement_cost: float = 0,
        sense_radius: int = 1,
        diet: Iterable[str] = (),
        actions: Iterable[str] = ("go",),
        dir: Vector | None = None,
        template: Callable[..., Organism] | None = None,
        rng: _rng_mod.Random | None = None,
    ) -> None:
        self.species = species
        self.kind = kind
        self.base_energy = base_energy
        self.max_energy = max_energy
        self.growth_rate = growth_rate
        self.metabolism = metabolism
        self.movement_cost = movement_cost
        self.sense_radius = sense_radius
        self.diet = frozenset(diet)
        self.actions = tuple(actions)
        self.template = template
        if dir is None:
            dir = (rng or _rng_mod).choice(DIRECTIONS)
        self.dir = dir
        self._energy: float = 0
        self.energy = base_energy

    @property
    def energy(self) -> float:
        return self._energy

    @energy.setter
    def energy(self, value: float) -> None:
        self._energy = max(0, min(value, self.max_energy))

    @property
    def alive(self) -> bool:
        return self._energy > 0

    @property
    def policy(self) -> tuple[str, ...]:
        return POLICIES[self.kind]

    def pre_act(self, world: World, pos: Vector) -> bool:
        return self._attempt(self.policy, world, pos)

    def act(self, world: World, pos: Vector) -> bool:
        return self._attempt(self.actions, world, pos)

    def _attempt(self, names: tuple[str, ...], world: World, pos: Vector) -> bool:
        for name in names:
            if TRAITS[name](self, world, pos):
                return True
        return False

    def __repr__(self) -> str:
        return (
            f"Organism(species={self.species!r}, kind={self.kind.value}, "
            f"energy={self._energy!r})"
        )
