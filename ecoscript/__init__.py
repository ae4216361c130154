"""ecoscript - a discrete-time ecosystem on a 2-D grid."""

from ecoscript.config import OrganismSpec, WorldConfig, load_config, load_world, load_world_file
from ecoscript.engine import Engine, simulate
from ecoscript.things import Kind, Organism, Thing, Wall
from ecoscript.traits import TRAITS
from ecoscript.types import ConfigurationError, OutOfBoundsError, TurnContext
from ecoscript.vector import DIRECTIONS, Vector
from ecoscript.world import World

__all__ = [
    "World",
    "Vector",
    "DIRECTIONS",
    "Thing",
    "Wall",
    "Organism",
    "Kind",
    "TRAITS",
    "OrganismSpec",
    "WorldConfig",
    "load_config",
    "load_world",
    "load_world_file",
    "Engine",
    "simulate",
    "TurnContext",
    "ConfigurationError",
    "OutOfBoundsError",
]
