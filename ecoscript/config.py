"""Configuration documents: species templates, legend and map."""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Mapping

import yaml

from ecoscript.things import Kind, Organism, Wall
from ecoscript.traits import TRAITS
from ecoscript.types import ConfigurationError
from ecoscript.world import World

logger = logging.getLogger(__name__)

# camelCase spellings accepted for compatibility with older documents.
_ALIASES = {
    "baseEnergy": "base_energy",
    "maxEnergy": "max_energy",
    "growthRate": "growth_rate",
    "movementCost": "movement_cost",
    "senseRadius": "sense_radius",
}

DEFAULT_ACTIONS: tuple[str, ...] = ("go",)

_NUMERIC_FIELDS = ("base_energy", "max_energy", "growth_rate", "metabolism", "movement_cost")


@dataclass(frozen=True)
class OrganismSpec:
    """Template for one configured organism. Calling it creates an instance.

    Offspring are created through the same template, so they share the
    parent's configuration but start at ``base_energy``.
    """

    name: str
    kind: Kind
    species: str
    base_energy: float
    max_energy: float
    growth_rate: float = 0
    metabolism: float = 0
    movement_cost: float = 0
    sense_radius: int = 1
    diet: frozenset[str] = field(default_factory=frozenset)
    actions: tuple[str, ...] = DEFAULT_ACTIONS

    def __post_init__(self) -> None:
        for name in _NUMERIC_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigurationError(
                    f"Organism {self.name!r}: {name} must be a number, got {value!r}"
                )
        if isinstance(self.sense_radius, bool) or not isinstance(self.sense_radius, int):
            raise ConfigurationError(
                f"Organism {self.name!r}: sense_radius must be an integer, got {self.sense_radius!r}"
            )
        unknown = [a for a in self.actions if a not in TRAITS]
        if unknown:
            raise ConfigurationError(
                f"Organism {self.name!r} has unknown actions: {', '.join(unknown)}"
            )
        if self.max_energy < self.base_energy:
            raise ConfigurationError(
                f"Organism {self.name!r}: max_energy ({self.max_energy}) "
                f"is below base_energy ({self.base_energy})"
            )
        if self.sense_radius < 0:
            raise ConfigurationError(
                f"Organism {self.name!r}: sense_radius must be >= 0"
            )

    def __call__(self, rng: random.Random | None = None) -> Organism:
        return Organism(
            self.species,
            kind=self.kind,
            base_energy=self.base_energy,
            max_energy=self.max_energy,
            growth_rate=self.growth_rate,
            metabolism=self.metabolism,
            movement_cost=self.movement_cost,
            sense_radius=self.sense_radius,
            diet=self.diet,
            actions=self.actions,
            template=self,
            rng=rng,
        )


@dataclass
class WorldConfig:
    organisms: dict[str, OrganismSpec]
    legend: dict[str, str]
    world_map: list[str]

    def factories(self, rng: random.Random | None = None) -> dict[str, Callable[[], Any]]:
        """Map legend symbols to zero-argument thing factories."""
        result: dict[str, Callable[[], Any]] = {}
        for symbol, target in self.legend.items():
            if target == "wall":
                result[symbol] = Wall
            else:
                spec = self.organisms[target]
                result[symbol] = lambda spec=spec: spec(rng)
        return result

    def build(self, rng: random.Random | None = None) -> World:
        """Create the world and randomize its energies."""
        world = World.from_legend(self.factories(rng), self.world_map, rng=rng)
        world.randomize()
        logger.info(
            "Built %dx%d world with population %s",
            world.width, world.height, world.population(),
        )
        return world


def _require_mapping(value: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"{what} must be a mapping, got {type(value).__name__}")
    return value


def parse_organism(name: str, raw: Any) -> OrganismSpec:
    raw = _require_mapping(raw, f"Organism {name!r}")

    kind_name = raw.get("type", Kind.ORGANISM.value)
    try:
        kind = Kind(kind_name)
    except ValueError:
        choices = ", ".join(k.value for k in Kind)
        raise ConfigurationError(
            f"Organism {name!r} has unknown type {kind_name!r} (expected one of {choices})"
        ) from None

    actions = raw.get("actions") or DEFAULT_ACTIONS
    if isinstance(actions, str) or not isinstance(actions, (list, tuple)):
        raise ConfigurationError(f"Organism {name!r}: actions must be a list")

    props = {
        _ALIASES.get(k, k): v
        for k, v in _require_mapping(raw.get("properties") or {}, f"Organism {name!r} properties").items()
    }
    props.setdefault("species", name)
    if "diet" in props:
        diet = props["diet"] or []
        if not isinstance(diet, list) or not all(isinstance(s, str) for s in diet):
            raise ConfigurationError(f"Organism {name!r}: diet must be a list of species names")
        props["diet"] = frozenset(diet)
    for required in ("base_energy", "max_energy"):
        if required not in props:
            raise ConfigurationError(f"Organism {name!r} is missing property {required!r}")

    try:
        return OrganismSpec(name=name, kind=kind, actions=tuple(actions), **props)
    except TypeError as exc:
        raise ConfigurationError(f"Organism {name!r}: {exc}") from exc


def load_config(raw: Any) -> WorldConfig:
    """Validate a parsed configuration document."""
    raw = _require_mapping(raw, "Configuration")
    if "organisms" not in raw or "world" not in raw:
        raise ConfigurationError("Configuration needs 'organisms' and 'world' sections")

    organisms = {
        str(name): parse_organism(str(name), spec)
        for name, spec in _require_mapping(raw["organisms"], "organisms").items()
    }

    world = _require_mapping(raw["world"], "world")
    legend: dict[str, str] = {}
    for symbol, target in _require_mapping(world.get("legend") or {}, "legend").items():
        symbol = str(symbol)
        if len(symbol) != 1 or symbol == " ":
            raise ConfigurationError(f"Legend key {symbol!r} must be a single non-space character")
        if target != "wall" and target not in organisms:
            raise ConfigurationError(f"Legend entry {symbol!r} names unknown organism {target!r}")
        legend[symbol] = target

    world_map = world.get("map")
    if not isinstance(world_map, list) or not all(isinstance(row, str) for row in world_map):
        raise ConfigurationError("world.map must be a list of strings")

    return WorldConfig(organisms=organisms, legend=legend, world_map=world_map)


def load_world(text: str, rng: random.Random | None = None) -> World:
    """Parse a YAML document and build its randomized world."""
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML: {exc}") from exc
    return load_config(raw).build(rng)


def load_world_file(path: Path | str, rng: random.Random | None = None) -> World:
    logger.info("Loading world from %s", path)
    try:
        text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ConfigurationError(f"{path} is not valid UTF-8: {exc}") from exc
    return load_world(text, rng)
