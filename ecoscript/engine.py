"""Engine - turn loop, pacing, and lifecycle hooks around a World."""

import logging
import os
import random
import time
from typing import Generator

from ecoscript.types import Hook, TurnContext
from ecoscript.world import World

logger = logging.getLogger(__name__)


def simulate(world: World) -> Generator[str, bool | None, None]:
    """Yield the rendered world, then advance one turn before each next yield.

    Never finishes on its own. ``send(True)`` stops it.
    """
    while True:
        stop = yield str(world)
        if stop:
            return
        world.turn()


class Engine:
    """Runs a World at a fixed number of turns per second.

    Hooks receive the world and a TurnContext describing the turn that just
    finished, including the population after it.
    """

    def __init__(self, world: World, tps: float = 4, seed: int | None = None) -> None:
        if tps <= 0:
            raise ValueError("tps must be positive")
        self._tps = tps
        self._dt = 1.0 / tps
        self._turn_number = 0
        self._world = world
        self._start_hooks: list[Hook] = []
        self._frame_hooks: list[Hook] = []
        self._stop_hooks: list[Hook] = []
        self._stop_requested: bool = False

        if seed is None:
            seed = int.from_bytes(os.urandom(8))
        self._seed = seed
        self._rng = random.Random(seed)
        world.random = self._rng

    @property
    def world(self) -> World:
        return self._world

    @property
    def tps(self) -> float:
        return self._tps

    @property
    def turn_number(self) -> int:
        return self._turn_number

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def random(self) -> random.Random:
        return self._rng

    def on_start(self, hook: Hook) -> None:
        self._start_hooks.append(hook)

    def on_frame(self, hook: Hook) -> None:
        """Register a hook called after every turn."""
        self._frame_hooks.append(hook)

    def on_stop(self, hook: Hook) -> None:
        self._stop_hooks.append(hook)

    def _request_stop(self) -> None:
        self._stop_requested = True

    def context(self) -> TurnContext:
        return TurnContext(
            turn_number=self._turn_number,
            dt=self._dt,
            elapsed=self._turn_number * self._dt,
            population=self._world.population(),
            request_stop=self._request_stop,
            random=self._rng,
        )

    def _call(self, hooks: list[Hook]) -> None:
        if not hooks:
            return
        ctx = self.context()
        for hook in hooks:
            hook(self._world, ctx)

    def _turn(self) -> None:
        self._turn_number += 1
        self._world.turn()
        self._call(self._frame_hooks)

    def step(self) -> None:
        self._stop_requested = False
        self._turn()

    def run(self, n: int) -> None:
        self._stop_requested = False
        logger.info("Running %d turns (seed=%d)", n, self._seed)
        self._call(self._start_hooks)

        for _ in range(n):
            self._turn()
            if self._stop_requested:
                break

        self._call(self._stop_hooks)
        logger.info("Stopped after turn %d", self._turn_number)

    def run_forever(self) -> None:
        self._stop_requested = False
        logger.info("Running at %s turns per second (seed=%d)", self._tps, self._seed)
        self._call(self._start_hooks)

        while not self._stop_requested:
            start = time.monotonic()
            self._turn()
            if self._stop_requested:
                break
            sleep_time = self._dt - (time.monotonic() - start)
            if sleep_time > 0:
                time.sleep(sleep_time)

        self._call(self._stop_hooks)
        logger.info("Stopped after turn %d", self._turn_number)
