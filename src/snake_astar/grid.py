"""Board projection of agents and food."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from snake_astar.snake import Coord, Snake


class CellType(enum.IntEnum):
    """Integer codes for unoccupied cells stored in the grid array.

    Occupied cells hold the occupying agent's ``AgentKind`` code.
    """

    EMPTY = 0
    FOOD = 1


def validate_dims(rows: int, cols: int) -> None:
    if rows < 1 or cols < 1:
        raise ValueError("Grid dimensions must be at least 1×1.")


class Grid:
    """NumPy-backed game board with fixed dimensions.

    The grid stores cell states as integers for O(1) lookups.
    Coordinates use (row, col) ordering consistent with NumPy indexing.
    A grid is a render cache derived from agents and food; build one with
    :func:`render_board` rather than mutating it by hand.
    """

    def __init__(self, rows: int = 20, cols: int = 20) -> None:
        validate_dims(rows, cols)
        self.rows = rows
        self.cols = cols
        self.cells = np.zeros((rows, cols), dtype=np.int8)

    def in_bounds(self, row: int, col: int) -> bool:
        """Check whether a coordinate lies within the grid."""
        return 0 <= row < self.rows and 0 <= col < self.cols

    def set(self, row: int, col: int, code: int) -> None:
        self.cells[row, col] = code

    def passable_mask(self) -> np.ndarray:
        """Boolean mask of cells an agent may travel through (empty or food)."""
        return (self.cells == CellType.EMPTY) | (self.cells == CellType.FOOD)

    def to_dict(self) -> dict:
        """Serialize grid state to a dictionary."""
        return {
            "rows": self.rows,
            "cols": self.cols,
            "cells": self.cells.tolist(),
        }


def render_board(
    dims: tuple[int, int],
    agents: Iterable[Snake],
    food: Coord | None,
) -> Grid:
    """Paint a fresh board: empty, then each live agent in order, then food.

    Where cells overlap the last painter wins.
    """
    grid = Grid(*dims)
    for agent in agents:
        if not agent.alive:
            continue
        for r, c in agent.body:
            if grid.in_bounds(r, c):
                grid.set(r, c, agent.kind)
    if food is not None:
        grid.set(food[0], food[1], CellType.FOOD)
    return grid
