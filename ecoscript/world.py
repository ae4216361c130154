"""World - fixed-size 2-D grid of things, and the turn scheduler."""
from __future__ import annotations

import logging
import random
from typing import Any, Callable, Iterable, Mapping

from ecoscript.pathfind import octile, pathfind
from ecoscript.types import ConfigurationError, OutOfBoundsError
from ecoscript.vector import Vector

logger = logging.getLogger(__name__)


class World:
    """A rectangular grid where every cell holds one thing or None.

    The world owns its things: a thing's position is wherever the grid holds
    it, and traits receive the world plus that position rather than a copy.
    """

    def __init__(
        self,
        things: Iterable[Iterable[Any]],
        rng: random.Random | None = None,
    ) -> None:
        self._things: list[list[Any]] = [list(row) for row in things]
        if not self._things:
            raise ConfigurationError("World needs at least one row")
        self._height = len(self._things)
        self._width = len(self._things[0])
        if any(len(row) != self._width for row in self._things):
            raise ConfigurationError(
                f"Every row must be {self._width} cells wide to match the first row"
            )
        self.random = rng if rng is not None else random.Random()

    @classmethod
    def from_legend(
        cls,
        legend: Mapping[str, Callable[[], Any]],
        world_map: Iterable[str],
        rng: random.Random | None = None,
    ) -> World:
        """Build a world from a symbol legend and rows of symbols.

        Spaces are empty cells. Every other symbol must appear in *legend*,
        whose values are called with no arguments to create the thing placed
        there. Each thing's ``symbol`` is set to its legend key so that
        ``str(world)`` reproduces the map.
        """
        rows: list[list[Any]] = []
        for y, keys in enumerate(world_map):
            row: list[Any] = []
            for x, key in enumerate(keys):
                if key == " ":
                    row.append(None)
                    continue
                factory = legend.get(key)
                if factory is None:
                    raise ConfigurationError(
                        f"Symbol {key!r} at ({x}, {y}) is not in the legend"
                    )
                thing = factory()
                thing.symbol = key
                row.append(thing)
            rows.append(row)
        return cls(rows, rng=rng)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def things(self) -> list[list[Any]]:
        return self._things

    def __str__(self) -> str:
        return "\n".join(
            "".join(" " if thing is None else thing.symbol for thing in row)
            for row in self._things
        )

    # -- Cells --

    def _check_bounds(self, pos: Vector) -> None:
        if not self.in_bounds(pos):
            raise OutOfBoundsError(
                pos, f"({pos.x}, {pos.y}) out of bounds for {self._width}x{self._height} world"
            )

    def get(self, pos: Vector) -> Any:
        self._check_bounds(pos)
        return self._things[pos.y][pos.x]

    def set(self, pos: Vector, thing: Any) -> None:
        self._check_bounds(pos)
        self._things[pos.y][pos.x] = thing

    def remove(self, pos: Vector) -> None:
        self.set(pos, None)

    def kill(self, pos: Vector) -> None:
        """Zero the occupant's energy, then vacate the cell.

        Anyone still holding the occupant (e.g. the turn snapshot) sees it
        as dead and skips its action.
        """
        thing = self.get(pos)
        if thing is not None and thing.active:
            thing.energy = 0
        self.remove(pos)

    def move(self, src: Vector, dst: Vector) -> None:
        thing = self.get(src)
        self.set(dst, thing)
        self.remove(src)

    def in_bounds(self, pos: Vector) -> bool:
        return 0 <= pos.x < self._width and 0 <= pos.y < self._height

    def is_walkable(self, pos: Vector) -> bool:
        return self.in_bounds(pos) and self._things[pos.y][pos.x] is None

    # -- Queries --

    def enumerate(self) -> list[tuple[Vector, Any]]:
        """Every (position, thing) pair in row-major order, taken now."""
        return [
            (Vector(x, y), thing)
            for y, row in enumerate(self._things)
            for x, thing in enumerate(row)
        ]

    def enumerate_symbols(self) -> list[tuple[Vector, str]]:
        return [
            (pos, " " if thing is None else thing.symbol)
            for pos, thing in self.enumerate()
        ]

    def _view(self, origin: Vector, distance: int) -> list[Vector]:
        span = range(-distance, distance + 1)
        return [
            origin + Vector(dx, dy)
            for dx in span
            for dy in span
            if dx != 0 or dy != 0
        ]

    def view(self, pos: Vector, distance: int = 1) -> list[Vector]:
        """In-bounds positions within Chebyshev *distance*, excluding *pos*."""
        return [v for v in self._view(pos, distance) if self.in_bounds(v)]

    def view_walkable(self, pos: Vector, distance: int = 1) -> list[Vector]:
        return [v for v in self._view(pos, distance) if self.is_walkable(v)]

    # -- Pathfinding --

    def neighbors(self, pos: Vector) -> list[Vector]:
        return self.view(pos)

    def heuristic(self, a: Vector, b: Vector) -> float:
        return octile(a, b)

    def find_path(self, src: Vector, dst: Vector) -> list[Vector]:
        """Shortest path over empty cells, excluding *src*, including *dst*.

        *dst* counts as walkable even when occupied, so a path can end on
        the thing being approached. Returns [] if there is no path.
        """
        self._check_bounds(src)
        self._check_bounds(dst)

        def walkable(pos: Vector) -> bool:
            return pos == dst or self._things[pos.y][pos.x] is None

        path = pathfind(self, src, dst, walkable=walkable)
        if path is None:
            return []
        return path[1:]

    # -- Turns --

    def turn(self) -> None:
        """Give every active thing one action.

        The (position, thing) pairs are captured once at the start and
        processed in row-major order against the live grid, so a thing
        handled later this turn sees everything done before it. For each
        active thing:

        1. If it is dead, vacate its position, whatever now occupies it.
        2. Otherwise call ``pre_act``; if that returns False, call ``act``.
        """
        for pos, thing in self.enumerate():
            if thing is None or not thing.active:
                continue
            if thing.alive:
                if not thing.pre_act(self, pos):
                    thing.act(self, pos)
            else:
                self.remove(pos)
                logger.debug("%s at %s died", thing.species, pos)

    def randomize(self) -> None:
        """Redraw each active thing's energy within [base_energy, max_energy].

        Run once after construction so the world starts looking as if it had
        already been running for a while.
        """
        for _, thing in self.enumerate():
            if thing is None or not thing.active:
                continue
            low, high = thing.base_energy, thing.max_energy
            if isinstance(low, int) and isinstance(high, int):
                thing.energy = self.random.randint(low, high)
            else:
                thing.energy = self.random.uniform(low, high)

    def population(self) -> dict[str, int]:
        """Count active things per species."""
        counts: dict[str, int] = {}
        for _, thing in self.enumerate():
            if thing is not None and thing.active:
                counts[thing.species] = counts.get(thing.species, 0) + 1
        return counts
