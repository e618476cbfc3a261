"""Snake A*: grid simulation and path planning core."""

from snake_astar.config import (
    AgentSpec,
    Controller,
    DeathPolicy,
    VariantConfig,
    get_variant,
)
from snake_astar.food import place_food
from snake_astar.grid import CellType, Grid, render_board
from snake_astar.planner import find_path, plan_direction, shortest_path
from snake_astar.session import GameSession
from snake_astar.simulation import (
    DeathReason,
    Outcome,
    OutcomeKind,
    StepResult,
    reset_agent,
    step,
)
from snake_astar.snake import AgentKind, Direction, Snake

__all__ = [
    "AgentKind",
    "AgentSpec",
    "CellType",
    "Controller",
    "DeathPolicy",
    "DeathReason",
    "Direction",
    "GameSession",
    "Grid",
    "Outcome",
    "OutcomeKind",
    "Snake",
    "StepResult",
    "VariantConfig",
    "find_path",
    "get_variant",
    "place_food",
    "plan_direction",
    "render_board",
    "reset_agent",
    "shortest_path",
    "step",
]
