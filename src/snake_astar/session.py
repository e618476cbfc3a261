"""Stateful game driver wrapping the pure simulation and planner."""

from __future__ import annotations

import logging
from itertools import chain

import numpy as np

from snake_astar.config import Controller, DeathPolicy, VariantConfig
from snake_astar.food import place_food
from snake_astar.grid import Grid, render_board
from snake_astar.planner import plan_direction
from snake_astar.simulation import Outcome, reset_agent, step
from snake_astar.snake import Direction, Snake

logger = logging.getLogger(__name__)

_ARROW_KEYS: dict[str, Direction] = {
    "ArrowUp": Direction.UP,
    "ArrowDown": Direction.DOWN,
    "ArrowLeft": Direction.LEFT,
    "ArrowRight": Direction.RIGHT,
}

_WASD_KEYS: dict[str, Direction] = {
    "w": Direction.UP,
    "s": Direction.DOWN,
    "a": Direction.LEFT,
    "d": Direction.RIGHT,
}


def key_bindings(config: VariantConfig) -> dict[str, tuple[int, Direction]]:
    """Map key names to ``(slot, direction)`` for the human-controlled slots.

    With two or more human slots the first plays on WASD and the second on
    the arrow keys; a single human slot plays on the arrow keys.
    """
    humans = config.human_slots()
    if not humans:
        return {}
    if len(humans) == 1:
        return {key: (humans[0], d) for key, d in _ARROW_KEYS.items()}
    bindings = {key: (humans[0], d) for key, d in _WASD_KEYS.items()}
    bindings.update({key: (humans[1], d) for key, d in _ARROW_KEYS.items()})
    return bindings


class GameSession:
    """One running game: agents, food and headings for a single variant.

    Each call to :meth:`tick_once` plans headings for AI-controlled agents,
    advances the simulation by one step, applies the variant's death
    policy and places food when none is on the board.
    """

    def __init__(
        self,
        config: VariantConfig | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        cfg = config or VariantConfig()
        self.config = cfg
        self.rng = rng if rng is not None else np.random.default_rng(cfg.seed)
        self.agents: list[Snake] = [
            reset_agent(spec.kind, spec.spawn, spec.heading) for spec in cfg.agents
        ]
        self.headings: list[Direction] = [spec.heading for spec in cfg.agents]
        self.bindings = key_bindings(cfg)
        self.food: tuple[int, int] | None = None
        self.last_outcomes: tuple[Outcome, ...] = ()
        self.tick = 0
        self.deaths = 0
        self.eaten = 0
        self.longest = 1
        self.game_over = False
        self._place_food_if_absent()

    @property
    def board(self) -> Grid:
        return render_board(self.config.dims, self.agents, self.food)

    def set_heading(self, slot: int, direction: Direction) -> None:
        """Record the heading a human-controlled agent takes next tick."""
        if not 0 <= slot < len(self.agents):
            raise ValueError(
                f"slot {slot} out of range [0, {len(self.agents)})."
            )
        if self.config.agents[slot].controller is not Controller.HUMAN:
            raise ValueError(f"slot {slot} is not human-controlled.")
        if self.game_over:
            return

        agent = self.agents[slot]
        if (
            self.config.block_reversal
            and len(agent) > 1
            and direction is agent.direction.opposite
        ):
            return
        self.headings[slot] = direction

    def press_key(self, key: str) -> bool:
        """Apply a raw key name. Returns False for unbound keys."""
        binding = self.bindings.get(key)
        if binding is None and len(key) == 1:
            binding = self.bindings.get(key.lower())
        if binding is None:
            return False
        slot, direction = binding
        self.set_heading(slot, direction)
        return True

    def tick_once(self) -> dict:
        """Advance the game by one tick.

        Returns the full game state as a serializable dict.
        """
        if self.game_over:
            return self.get_state()

        dims = self.config.dims
        for i, spec in enumerate(self.config.agents):
            if spec.controller is Controller.AI:
                planned = plan_direction(dims, self.agents, self.food, i)
                # Keep the last heading when no path exists.
                if planned is not None:
                    self.headings[i] = planned

        result = step(dims, self.agents, self.food, self.headings)
        self.agents = list(result.agents)
        self.food = result.food
        self.last_outcomes = result.outcomes
        self.tick += 1
        if result.food_consumed:
            self.eaten += 1

        for i, outcome in enumerate(result.outcomes):
            if outcome.is_death:
                self._handle_death(i, outcome)

        self.longest = max(self.longest, *(len(a) for a in self.agents))
        self._place_food_if_absent()
        return self.get_state()

    def run(self, ticks: int) -> dict:
        """Tick up to *ticks* times, stopping early on game over."""
        for _ in range(ticks):
            if self.game_over:
                break
            self.tick_once()
        return self.get_state()

    def _handle_death(self, slot: int, outcome: Outcome) -> None:
        agent = self.agents[slot]
        self.deaths += 1
        logger.info(
            "%s died (%s) at tick %d with length %d.",
            agent.kind.name,
            outcome.reason.value,
            self.tick,
            len(agent),
        )
        if self.config.death_policy is DeathPolicy.HALT:
            self.game_over = True
            return

        spec = self.config.agents[slot]
        self.agents[slot] = reset_agent(spec.kind, spec.spawn, spec.heading)
        self.headings[slot] = spec.heading
        logger.debug("%s respawned at %s.", spec.kind.name, spec.spawn)

    def _place_food_if_absent(self) -> None:
        if self.food is not None:
            return
        occupied = chain.from_iterable(a.body for a in self.agents if a.alive)
        self.food = place_food(self.config.dims, occupied, self.rng)

    def get_state(self) -> dict:
        """Return the full, serializable game state."""
        return {
            "tick": self.tick,
            "game_over": self.game_over,
            "variant": self.config.name,
            "deaths": self.deaths,
            "eaten": self.eaten,
            "food": list(self.food) if self.food is not None else None,
            "agents": [
                {
                    "slot": i,
                    "controller": spec.controller.value,
                    **agent.to_dict(),
                }
                for i, (spec, agent) in enumerate(
                    zip(self.config.agents, self.agents, strict=True)
                )
            ],
            "outcomes": [o.to_dict() for o in self.last_outcomes],
            "grid": self.board.to_dict(),
        }
