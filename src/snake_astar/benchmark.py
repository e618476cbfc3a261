"""Planner and simulation throughput measurement."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import numpy as np

from snake_astar.config import get_variant
from snake_astar.grid import validate_dims
from snake_astar.planner import find_path
from snake_astar.session import GameSession

logger = logging.getLogger(__name__)


@dataclass
class BenchmarkResult:
    """Results from a planner throughput run."""

    rows: int
    cols: int
    total_queries: int
    paths_found: int
    wall_time_seconds: float
    queries_per_second: float

    def summary(self) -> str:
        return (
            f"Benchmark: {self.rows}x{self.cols} grid, "
            f"{self.total_queries} queries ({self.paths_found} reachable) in "
            f"{self.wall_time_seconds:.2f}s | "
            f"{self.queries_per_second:.1f} queries/s"
        )


@dataclass
class SimulationSummary:
    """Outcome of a headless game run."""

    variant: str
    ticks: int
    deaths: int
    eaten: int
    longest: int
    game_over: bool

    def summary(self) -> str:
        return (
            f"Simulation: {self.variant}, {self.ticks} ticks, "
            f"{self.deaths} death(s), {self.eaten} food eaten, "
            f"longest snake {self.longest}"
            + (", game over" if self.game_over else "")
        )


def benchmark_planner(
    *,
    rows: int = 20,
    cols: int = 20,
    num_queries: int = 1_000,
    obstacle_density: float = 0.2,
    seed: int = 42,
) -> BenchmarkResult:
    """Measure A* throughput on random obstacle grids.

    Every query draws a fresh grid where each cell is blocked with
    probability *obstacle_density*, then plans between two random
    passable cells.
    """
    validate_dims(rows, cols)
    if num_queries < 1:
        raise ValueError("num_queries must be at least 1.")
    if not 0.0 <= obstacle_density < 1.0:
        raise ValueError("obstacle_density must be in [0, 1).")
    rng = np.random.default_rng(seed)

    queries = []
    for _ in range(num_queries):
        passable = rng.random((rows, cols)) >= obstacle_density
        origin = (int(rng.integers(rows)), int(rng.integers(cols)))
        target = (int(rng.integers(rows)), int(rng.integers(cols)))
        passable[origin] = True
        passable[target] = True
        queries.append((passable, origin, target))

    found = 0
    start = time.perf_counter()
    for passable, origin, target in queries:
        if find_path(passable, origin, target) is not None:
            found += 1
    elapsed = time.perf_counter() - start

    result = BenchmarkResult(
        rows=rows,
        cols=cols,
        total_queries=num_queries,
        paths_found=found,
        wall_time_seconds=elapsed,
        queries_per_second=num_queries / max(elapsed, 1e-9),
    )
    logger.info(result.summary())
    return result


def simulate(
    variant: str = "ai",
    *,
    ticks: int = 500,
    seed: int | None = None,
    rows: int | None = None,
    cols: int | None = None,
    session: GameSession | None = None,
) -> SimulationSummary:
    """Run a game headlessly for up to *ticks* ticks.

    Human-controlled agents keep their spawn heading throughout.
    """
    if session is None:
        session = GameSession(get_variant(variant, rows=rows, cols=cols, seed=seed))
    session.run(ticks)
    return SimulationSummary(
        variant=session.config.name,
        ticks=session.tick,
        deaths=session.deaths,
        eaten=session.eaten,
        longest=session.longest,
        game_over=session.game_over,
    )
