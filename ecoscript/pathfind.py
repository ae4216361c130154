"""A* pathfinding over a walkability predicate."""
from __future__ import annotations

import heapq
from typing import Callable, Protocol

from ecoscript.vector import Vector

STRAIGHT_COST = 1.0
DIAGONAL_COST = 1.4


class Navigable(Protocol):
    def neighbors(self, pos: Vector) -> list[Vector]: ...
    def heuristic(self, a: Vector, b: Vector) -> float: ...


def step_cost(a: Vector, b: Vector) -> float:
    if a.x != b.x and a.y != b.y:
        return DIAGONAL_COST
    return STRAIGHT_COST


def octile(a: Vector, b: Vector) -> float:
    dx, dy = abs(a.x - b.x), abs(a.y - b.y)
    return STRAIGHT_COST * (dx + dy) + (DIAGONAL_COST - 2 * STRAIGHT_COST) * min(dx, dy)


def pathfind(
    index: Navigable,
    start: Vector,
    goal: Vector,
    walkable: Callable[[Vector], bool] | None = None,
    cost: Callable[[Vector, Vector], float] = step_cost,
) -> list[Vector] | None:
    """Return the cheapest path from *start* to *goal*, both included.

    *walkable* filters the cells a path may enter; *start* itself is never
    tested. Diagonal steps are taken even when both orthogonal cells beside
    them are blocked. Returns None when *goal* cannot be reached.
    """
    if walkable is not None and not walkable(goal):
        return None

    open_set: list[tuple[float, int, Vector]] = [(0.0, 0, start)]
    came_from: dict[Vector, Vector] = {}
    g_score: dict[Vector, float] = {start: 0.0}
    counter = 1

    closed: set[Vector] = set()

    while open_set:
        _, _, current = heapq.heappop(open_set)
        if current in closed:
            continue
        closed.add(current)
        if current == goal:
            path: list[Vector] = [current]
            while current in came_from:
                current = came_from[current]
                path.append(current)
            path.reverse()
            return path

        for neighbor in index.neighbors(current):
            if walkable is not None and not walkable(neighbor):
                continue
            tentative = g_score[current] + cost(current, neighbor)
            if tentative < g_score.get(neighbor, float("inf")):
                came_from[neighbor] = current
                g_score[neighbor] = tentative
                h = index.heuristic(neighbor, goal)
                heapq.heappush(open_set, (tentative + h, counter, neighbor))
                counter += 1

    return None
