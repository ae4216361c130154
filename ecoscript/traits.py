"""Composable organism behaviors.

Every trait has the signature ``trait(organism, world, origin) -> bool`` where
``origin`` is the organism's current position. A trait returns True when it
took an action and False when its precondition was not met; it never raises
for an unmet precondition. Organisms chain traits as fallbacks: the first
one to return True ends the turn.

Traits are registered by name in ``TRAITS`` so that configuration documents
can refer to them.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from ecoscript.types import Trait

if TYPE_CHECKING:
    from ecoscript.things import Organism
    from ecoscript.vector import Vector
    from ecoscript.world import World

logger = logging.getLogger(__name__)


# --- Helpers ---


def _reduce_by_distance(origin: Vector, vectors: list[Vector], comparison: int) -> Vector:
    best = vectors[0]
    for current in vectors[1:]:
        current_distance = abs(current - origin)
        best_distance = abs(best - origin)
        if current_distance.compare(best_distance) == comparison:
            best = current
    return best


def closest_to(origin: Vector, vectors: list[Vector]) -> Vector:
    """First vector whose absolute offset from *origin* has the lowest sum."""
    return _reduce_by_distance(origin, vectors, -1)


def furthest_from(origin: Vector, vectors: list[Vector]) -> Vector:
    """First vector whose absolute offset from *origin* has the highest sum."""
    return _reduce_by_distance(origin, vectors, 1)


def _visible(world: World, origin: Vector, radius: int) -> list[tuple[Vector, Any]]:
    result = []
    for target in world.view(origin, radius):
        thing = world.get(target)
        if thing is not None:
            result.append((target, thing))
    return result


# --- Traits ---


def grow(organism: Organism, world: World, origin: Vector) -> bool:
    organism.energy += organism.growth_rate
    return True


def eat(organism: Organism, world: World, origin: Vector) -> bool:
    """Consume the first adjacent organism whose species is in the diet.

    Gains the prey's energy or its base energy, whichever is higher.
    """
    for target in world.view(origin):
        thing = world.get(target)
        if thing is not None and thing.active and thing.species in organism.diet:
            organism.energy += max(thing.energy, thing.base_energy)
            world.kill(target)
            logger.debug("%s at %s ate %s at %s", organism.species, origin, thing.species, target)
            return True
    return False


def metabolize(organism: Organism, world: World, origin: Vector) -> bool:
    """Burn ``metabolism`` energy. Returns True only if the organism died."""
    organism.energy -= organism.metabolism
    if organism.alive:
        return False
    world.remove(origin)
    logger.debug("%s at %s starved", organism.species, origin)
    return True


def go(organism: Organism, world: World, origin: Vector) -> bool:
    dest = origin + organism.dir
    if not world.is_walkable(dest):
        options = world.view_walkable(origin)
        if not options:
            return False
        dest = world.random.choice(options)
        organism.dir = dest - origin

    world.move(origin, dest)
    organism.energy -= organism.movement_cost
    return True


def wander(organism: Organism, world: World, origin: Vector) -> bool:
    options = world.view_walkable(origin)
    if not options:
        return False
    organism.dir = world.random.choice(options) - origin
    return go(organism, world, origin)


def avoid_predators(organism: Organism, world: World, origin: Vector) -> bool:
    """Flee from the closest predator that can reach us within sense range."""
    predators = []
    for target, thing in _visible(world, origin, organism.sense_radius):
        if organism.species not in thing.diet:
            continue
        path = world.find_path(origin, target)
        if path and len(path) <= organism.sense_radius:
            predators.append(target)

    if not predators:
        return False

    closest = closest_to(origin, predators)
    away = (origin - closest).direction()
    if world.is_walkable(origin + away):
        organism.dir = away
    else:
        options = world.view_walkable(origin)
        if options:
            organism.dir = furthest_from(closest, options) - origin
    return go(organism, world, origin)


def _approach(organism: Organism, world: World, origin: Vector, targets: list[Vector]) -> bool:
    if not targets:
        return False
    path = world.find_path(origin, closest_to(origin, targets))
    if len(path) <= 1:
        return False
    organism.dir = path[0] - origin
    return go(organism, world, origin)


def herd(organism: Organism, world: World, origin: Vector) -> bool:
    flock = [
        target
        for target, thing in _visible(world, origin, organism.sense_radius)
        if thing.species == organism.species
    ]
    return _approach(organism, world, origin, flock)


def hunt(organism: Organism, world: World, origin: Vector) -> bool:
    prey = [
        target
        for target, thing in _visible(world, origin, organism.sense_radius)
        if thing.species in organism.diet
    ]
    return _approach(organism, world, origin, prey)


def reproduce(organism: Organism, world: World, origin: Vector) -> bool:
    if organism.energy < organism.max_energy or organism.template is None:
        return False
    options = world.view_walkable(origin)
    if not options:
        return False

    target = world.random.choice(options)
    organism.energy = organism.base_energy
    child = organism.template(world.random)
    child.symbol = organism.symbol
    world.set(target, child)
    logger.debug("%s at %s reproduced into %s", organism.species, origin, target)
    return True


def pass_(organism: Organism, world: World, origin: Vector) -> bool:
    return False


TRAITS: dict[str, Trait] = {
    "grow": grow,
    "eat": eat,
    "metabolize": metabolize,
    "go": go,
    "wander": wander,
    "avoid_predators": avoid_predators,
    "herd": herd,
    "hunt": hunt,
    "reproduce": reproduce,
    "pass": pass_,
}
