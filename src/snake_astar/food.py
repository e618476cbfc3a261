"""Food placement logic."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

import numpy as np

from snake_astar.grid import validate_dims

if TYPE_CHECKING:
    from snake_astar.snake import Coord

logger = logging.getLogger(__name__)


def free_cells(
    dims: tuple[int, int], occupied_cells: Iterable[Coord],
) -> list[Coord]:
    """Return every cell not in *occupied_cells*, in row-major order."""
    rows, cols = dims
    validate_dims(rows, cols)
    free = np.ones((rows, cols), dtype=bool)
    for r, c in occupied_cells:
        if 0 <= r < rows and 0 <= c < cols:
            free[r, c] = False
    rs, cs = np.nonzero(free)
    return list(zip(rs.tolist(), cs.tolist(), strict=True))


def place_food(
    dims: tuple[int, int],
    occupied_cells: Iterable[Coord],
    rng: np.random.Generator | None = None,
) -> Coord | None:
    """Pick a uniformly random cell not covered by any agent.

    Uses the given NumPy generator so placement is reproducible under a
    fixed seed. Returns ``None`` when the board is full.
    """
    candidates = free_cells(dims, occupied_cells)
    if not candidates:
        logger.warning("No empty cells available for food placement.")
        return None
    if rng is None:
        rng = np.random.default_rng()
    return candidates[int(rng.integers(len(candidates)))]
