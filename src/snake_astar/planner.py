"""A* shortest-path planner on the 4-connected board."""

from __future__ import annotations

import heapq
import logging
from collections.abc import Sequence

import numpy as np

from snake_astar.grid import render_board
from snake_astar.snake import Coord, Direction, Snake

logger = logging.getLogger(__name__)

# Fixed neighbour expansion order.
_MOVES: tuple[Direction, ...] = (
    Direction.UP,
    Direction.DOWN,
    Direction.LEFT,
    Direction.RIGHT,
)


def manhattan(a: Coord, b: Coord) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def _check_cell(passable: np.ndarray, cell: Coord, name: str) -> None:
    rows, cols = passable.shape
    if not (0 <= cell[0] < rows and 0 <= cell[1] < cols):
        raise ValueError(f"{name} {cell} lies outside the {rows}×{cols} grid.")


def shortest_path(
    passable: np.ndarray,
    origin: Coord,
    target: Coord,
) -> list[Coord] | None:
    """Return a minimum-length path from *origin* to *target*, both inclusive.

    *passable* is a 2-D boolean array where ``True`` marks cells that may be
    entered (empty or food). The target is always enterable; the origin is
    never re-entered. Returns ``None`` when the target cannot be reached.

    The open set is a binary heap ordered by ``(f, seq)`` where ``seq`` is an
    insertion counter, so nodes with equal ``f`` pop first-in first-out.
    """
    if passable.ndim != 2:
        raise ValueError("passable must be a 2-D array.")
    _check_cell(passable, origin, "origin")
    _check_cell(passable, target, "target")
    rows, cols = passable.shape

    g: dict[Coord, int] = {origin: 0}
    parent: dict[Coord, Coord] = {}
    closed: set[Coord] = set()
    seq = 0
    open_heap: list[tuple[int, int, Coord]] = [
        (manhattan(origin, target), seq, origin),
    ]

    while open_heap:
        _, _, current = heapq.heappop(open_heap)
        if current in closed:
            continue
        closed.add(current)

        if current == target:
            path = [current]
            while path[-1] in parent:
                path.append(parent[path[-1]])
            path.reverse()
            return path

        tentative = g[current] + 1
        for move in _MOVES:
            nr, nc = move.apply(current)
            if not (0 <= nr < rows and 0 <= nc < cols):
                continue
            neighbour = (nr, nc)
            if neighbour != target and not passable[nr, nc]:
                continue
            if neighbour in closed:
                continue
            if tentative < g.get(neighbour, tentative + 1):
                g[neighbour] = tentative
                parent[neighbour] = current
                seq += 1
                heapq.heappush(
                    open_heap,
                    (tentative + manhattan(neighbour, target), seq, neighbour),
                )

    return None


def find_path(
    passable: np.ndarray,
    origin: Coord,
    target: Coord,
) -> Direction | None:
    """Return the first step of a shortest path from *origin* to *target*.

    ``None`` means the target is unreachable or the origin already is the
    target; neither is an error.
    """
    path = shortest_path(passable, origin, target)
    if path is None or len(path) < 2:
        return None
    return Direction.between(path[0], path[1])


def passable_snapshot(
    dims: tuple[int, int], agents: Sequence[Snake],
) -> np.ndarray:
    """Boolean mask with every live agent's body cells blocked."""
    return render_board(dims, agents, None).passable_mask()


def plan_direction(
    dims: tuple[int, int],
    agents: Sequence[Snake],
    food: Coord | None,
    index: int,
) -> Direction | None:
    """Plan the next heading of ``agents[index]`` toward *food*.

    Every live agent, the planning one included, is an obstacle.
    """
    if food is None:
        return None
    agent = agents[index]
    direction = find_path(passable_snapshot(dims, agents), agent.head, food)
    if direction is None:
        logger.debug("No path from %s to food at %s.", agent.head, food)
    return direction
