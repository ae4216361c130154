"""Tests for entity variants and their fallback policies."""
from __future__ import annotations

import random

from ecoscript import Kind, Organism, OrganismSpec, Vector, Wall, World
from ecoscript.things import POLICIES, Thing


def plant_spec(**kwargs) -> OrganismSpec:
    kwargs.setdefault("base_energy", 2)
    kwargs.setdefault("max_energy", 6)
    kwargs.setdefault("growth_rate", 3)
    return OrganismSpec(name="grass", kind=Kind.PLANT, species="grass", **kwargs)


def animal(species: str = "rabbit", **kwargs) -> Organism:
    kwargs.setdefault("base_energy", 5)
    kwargs.setdefault("max_energy", 20)
    kwargs.setdefault("dir", Vector(1, 0))
    return Organism(species, kind=Kind.ANIMAL, **kwargs)


class TestWall:
    def test_is_inert(self):
        wall = Wall()
        assert not wall.active
        assert wall.species == "wall"
        assert wall.symbol == "="
        assert not hasattr(wall, "energy")

    def test_never_acts(self):
        world = World([[Wall()]])
        assert Wall().pre_act(world, Vector(0, 0)) is False
        assert Wall().act(world, Vector(0, 0)) is False


class TestOrganism:
    def test_is_active_and_starts_at_base_energy(self):
        thing = Organism("t", base_energy=3, max_energy=9)
        assert thing.active
        assert thing.energy == 3
        assert thing.alive

    def test_zero_energy_is_dead_and_swept(self):
        thing = Organism("t", base_energy=3, max_energy=9)
        thing.energy = 0
        assert not thing.alive

        world = World([[thing]])
        world.turn()
        assert world.get(Vector(0, 0)) is None

    def test_defaults(self):
        thing = Organism("t", base_energy=3, max_energy=9, rng=random.Random(0))
        assert thing.kind is Kind.ORGANISM
        assert thing.actions == ("go",)
        assert thing.diet == frozenset()
        assert thing.dir.direction() == thing.dir
        assert thing.dir != Vector(0, 0)

    def test_diet_is_a_set(self):
        thing = Organism("t", base_energy=1, max_energy=2, diet=["a", "b", "a"])
        assert thing.diet == frozenset({"a", "b"})

    def test_no_policy_declines_pre_act(self):
        thing = Organism("t", base_energy=1, max_energy=2)
        world = World([[thing]])
        assert POLICIES[Kind.ORGANISM] == ()
        assert thing.pre_act(world, Vector(0, 0)) is False

    def test_act_tries_actions_in_order(self):
        thing = Organism("t", base_energy=1, max_energy=10, growth_rate=2, actions=["pass", "grow"])
        world = World([[thing]])
        assert thing.act(world, Vector(0, 0)) is True
        assert thing.energy == 3

    def test_act_declines_when_every_action_declines(self):
        thing = Organism("t", base_energy=1, max_energy=10, actions=["pass", "eat"])
        world = World([[thing]])
        assert thing.act(world, Vector(0, 0)) is False

    def test_thing_base_declines(self):
        world = World([[None]])
        assert Thing().pre_act(world, Vector(0, 0)) is False
        assert Thing().act(world, Vector(0, 0)) is False


class TestPlant:
    def test_grows_below_max_energy(self):
        plant = plant_spec()(random.Random(0))
        world = World([[plant, None]], rng=random.Random(0))

        assert plant.pre_act(world, Vector(0, 0)) is True
        assert plant.energy == 5
        assert world.get(Vector(1, 0)) is None

    def test_growth_is_clamped(self):
        plant = plant_spec()(random.Random(0))
        plant.energy = 5
        world = World([[plant]])
        assert plant.pre_act(world, Vector(0, 0)) is True
        assert plant.energy == 6

    def test_reproduces_at_max_energy(self):
        plant = plant_spec()(random.Random(0))
        plant.energy = 6
        world = World([[plant, None]], rng=random.Random(0))

        assert plant.pre_act(world, Vector(0, 0)) is True
        assert plant.energy == 2
        assert world.get(Vector(1, 0)).species == "grass"

    def test_crowded_plant_at_max_keeps_growing(self):
        plant = plant_spec()(random.Random(0))
        plant.energy = 6
        world = World([[plant]])
        assert plant.pre_act(world, Vector(0, 0)) is True
        assert plant.energy == 6


class TestAnimal:
    def test_metabolizes_and_falls_through_to_act(self):
        rabbit = animal(metabolism=1)
        world = World([[rabbit]])
        assert rabbit.pre_act(world, Vector(0, 0)) is False
        assert rabbit.energy == 4

    def test_starving_animal_ends_its_turn_removed(self):
        rabbit = animal(base_energy=1, metabolism=1)
        world = World([[rabbit]])
        assert rabbit.pre_act(world, Vector(0, 0)) is True
        assert world.get(Vector(0, 0)) is None

    def test_fleeing_comes_first(self):
        rabbit = animal(metabolism=1, sense_radius=3)
        fox = animal("fox", diet=["rabbit"])
        world = World([[None, rabbit, None, fox]])

        assert rabbit.pre_act(world, Vector(1, 0)) is True
        assert world.get(Vector(0, 0)) is rabbit
        assert rabbit.energy == 5

    def test_turn_runs_actions_after_metabolizing(self):
        rabbit = animal(metabolism=1, diet=["grass"], actions=["eat"])
        grass = plant_spec()(random.Random(0))
        world = World([[rabbit, grass]])

        world.turn()

        assert world.get(Vector(1, 0)) is None
        assert rabbit.energy == 4 + 2
