"""ecoscript - run an ecosystem from a YAML configuration file.

Prints the initial world, then one snapshot per turn, separated by blank
lines. Without ``--turns`` it runs until interrupted.
"""
from __future__ import annotations

import argparse
import logging
import os
import random
import sys
from pathlib import Path

from ecoscript.config import load_world_file
from ecoscript.engine import Engine
from ecoscript.types import ConfigurationError, TurnContext
from ecoscript.world import World

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="ecoscript", description="Run a grid ecosystem simulation")
    p.add_argument("config", type=Path, help="YAML file with organisms, legend and map")
    p.add_argument("--turns", type=int, default=None,
                   help="Number of turns to run (default: run until interrupted)")
    p.add_argument("--tps", type=float, default=4.0, help="Turns per second (default: 4)")
    p.add_argument("--seed", type=int, default=None, help="Random seed")
    p.add_argument("--log-level", default="WARNING",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                   help="Log level for messages on stderr (default: WARNING)")
    args = p.parse_args(argv)
    if args.turns is not None and args.turns < 0:
        p.error("--turns must be >= 0")
    if args.tps <= 0:
        p.error("--tps must be positive")
    return args


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    seed = args.seed if args.seed is not None else int.from_bytes(os.urandom(8))
    try:
        world = load_world_file(args.config, rng=random.Random(seed))
    except (ConfigurationError, OSError) as exc:
        print(f"ecoscript: {exc}", file=sys.stderr)
        return 2

    engine = Engine(world, tps=args.tps, seed=seed)

    def show(world: World, ctx: TurnContext) -> None:
        print(f"{world}\n", flush=True)

    def report(world: World, ctx: TurnContext) -> None:
        logger.info("Turn %d population: %s", ctx.turn_number, ctx.population)

    engine.on_start(show)
    engine.on_frame(show)
    engine.on_frame(report)

    try:
        if args.turns is None:
            engine.run_forever()
        else:
            engine.run(args.turns)
    except KeyboardInterrupt:
        logger.info("Interrupted at turn %d", engine.turn_number)
    return 0


if __name__ == "__main__":
    sys.exit(main())
