"""Pure per-tick transition function for one or more snakes."""

from __future__ import annotations

import enum
import logging
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass

from snake_astar.grid import Grid, render_board, validate_dims
from snake_astar.snake import AgentKind, Coord, Direction, Snake

logger = logging.getLogger(__name__)


class OutcomeKind(enum.Enum):
    """What happened to an agent during a tick."""

    CONTINUED = "continued"
    GREW = "grew"
    DIED = "died"


class DeathReason(enum.Enum):
    """Why an agent died."""

    WALL_COLLISION = "wall_collision"
    SELF_COLLISION = "self_collision"
    AGENT_COLLISION = "agent_collision"


@dataclass(frozen=True)
class Outcome:
    """Per-agent tick result. ``reason`` is set only for deaths."""

    kind: OutcomeKind
    reason: DeathReason | None = None

    def __post_init__(self) -> None:
        if (self.kind is OutcomeKind.DIED) != (self.reason is not None):
            raise ValueError("A death reason is required for, and only for, deaths.")

    @classmethod
    def died(cls, reason: DeathReason) -> Outcome:
        return cls(OutcomeKind.DIED, reason)

    @property
    def is_death(self) -> bool:
        return self.kind is OutcomeKind.DIED

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "reason": self.reason.value if self.reason else None,
        }


CONTINUED = Outcome(OutcomeKind.CONTINUED)
GREW = Outcome(OutcomeKind.GREW)


@dataclass(frozen=True)
class StepResult:
    """Authoritative state after one tick.

    ``agents`` and ``outcomes`` are aligned with the agents passed to
    :func:`step`. The board is derived on demand.
    """

    dims: tuple[int, int]
    agents: tuple[Snake, ...]
    food: Coord | None
    outcomes: tuple[Outcome, ...]

    @property
    def board(self) -> Grid:
        return render_board(self.dims, self.agents, self.food)

    @property
    def food_consumed(self) -> bool:
        return any(o.kind is OutcomeKind.GREW for o in self.outcomes)


def reset_agent(
    kind: AgentKind,
    spawn_point: Coord,
    spawn_heading: Direction = Direction.RIGHT,
) -> Snake:
    """Return a freshly spawned, length-1 agent."""
    return Snake(kind=kind, body=(spawn_point,), direction=spawn_heading)


def step(
    dims: tuple[int, int],
    agents: Sequence[Snake],
    food: Coord | None,
    headings: Sequence[Direction],
) -> StepResult:
    """Advance every agent by one cell.

    All proposed heads are computed first, then collisions are resolved
    simultaneously against every pre-tick body and every proposed head:

    * out of bounds: ``WALL_COLLISION``
    * into the agent's own pre-tick body (tail included): ``SELF_COLLISION``
    * into another agent's pre-tick body, or onto the same cell another
      agent proposes: ``AGENT_COLLISION``

    Survivors landing on *food* grow by one and the food is consumed.
    Dead agents keep their pre-tick body.
    """
    rows, cols = dims
    validate_dims(rows, cols)
    if len(headings) != len(agents):
        raise ValueError(
            f"Expected {len(agents)} headings, got {len(headings)}."
        )
    for idx, agent in enumerate(agents):
        if not agent.alive:
            raise ValueError(f"Agent {idx} ({agent.kind.name}) is not alive.")

    # Compute next heads for all agents.
    next_heads: dict[int, Coord] = {}
    reasons: dict[int, DeathReason] = {}
    for idx, agent in enumerate(agents):
        nr, nc = agent.next_head(headings[idx])
        if not (0 <= nr < rows and 0 <= nc < cols):
            reasons[idx] = DeathReason.WALL_COLLISION
            continue
        next_heads[idx] = (nr, nc)

    head_counts: Counter[Coord] = Counter(next_heads.values())
    bodies = [set(agent.body) for agent in agents]

    for idx, pos in next_heads.items():
        if pos in bodies[idx]:
            reasons[idx] = DeathReason.SELF_COLLISION
        elif any(
            pos in body for other, body in enumerate(bodies) if other != idx
        ):
            reasons[idx] = DeathReason.AGENT_COLLISION
        elif head_counts[pos] > 1:
            reasons[idx] = DeathReason.AGENT_COLLISION

    new_agents: list[Snake] = []
    outcomes: list[Outcome] = []
    new_food = food
    for idx, agent in enumerate(agents):
        reason = reasons.get(idx)
        if reason is not None:
            logger.debug(
                "%s died (%s) at %s.", agent.kind.name, reason.value, agent.head,
            )
            new_agents.append(agent.kill())
            outcomes.append(Outcome.died(reason))
            continue

        ate = food is not None and next_heads[idx] == food
        new_agents.append(agent.advance(headings[idx], grow=ate))
        if ate:
            new_food = None
            outcomes.append(GREW)
        else:
            outcomes.append(CONTINUED)

    return StepResult(
        dims=(rows, cols),
        agents=tuple(new_agents),
        food=new_food,
        outcomes=tuple(outcomes),
    )
