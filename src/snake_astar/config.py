"""Game variant configuration and presets."""

from __future__ import annotations

import enum
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from snake_astar.snake import AgentKind, Coord, Direction

logger = logging.getLogger(__name__)


class Controller(enum.Enum):
    """Who chooses an agent's heading each tick."""

    HUMAN = "human"
    AI = "ai"


class DeathPolicy(enum.Enum):
    """What the driver does when an agent dies."""

    HALT = "halt"
    RESPAWN = "respawn"


@dataclass(frozen=True)
class AgentSpec:
    """Spawn point, default heading and controller of one agent slot."""

    kind: AgentKind
    spawn: Coord
    heading: Direction = Direction.RIGHT
    controller: Controller = Controller.HUMAN

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.name.lower(),
            "spawn": list(self.spawn),
            "heading": self.heading.name.lower(),
            "controller": self.controller.value,
        }

    @classmethod
    def from_dict(cls, raw: dict) -> AgentSpec:
        row, col = raw["spawn"]
        return cls(
            kind=AgentKind[raw["kind"].upper()],
            spawn=(int(row), int(col)),
            heading=Direction[raw.get("heading", "right").upper()],
            controller=Controller(raw.get("controller", "human")),
        )


@dataclass(frozen=True)
class VariantConfig:
    """Configuration for one game variant.

    Supports JSON serialization for reproducibility.
    """

    name: str = "solo"
    rows: int = 20
    cols: int = 20
    tick_rate_ms: int = 200
    agents: tuple[AgentSpec, ...] = field(
        default_factory=lambda: (AgentSpec(AgentKind.SNAKE, (10, 10)),),
    )
    death_policy: DeathPolicy = DeathPolicy.HALT
    block_reversal: bool = False
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.rows < 1 or self.cols < 1:
            raise ValueError("rows and cols must each be at least 1.")
        if self.tick_rate_ms < 1:
            raise ValueError("tick_rate_ms must be at least 1.")
        if not self.agents:
            raise ValueError("A variant needs at least one agent.")

        seen: set[Coord] = set()
        for i, spec in enumerate(self.agents):
            r, c = spec.spawn
            if not (0 <= r < self.rows and 0 <= c < self.cols):
                raise ValueError(
                    f"spawn {spec.spawn} of agent {i} lies outside the "
                    f"{self.rows}×{self.cols} grid."
                )
            if spec.spawn in seen:
                raise ValueError(f"spawn {spec.spawn} is used by two agents.")
            seen.add(spec.spawn)

    @property
    def dims(self) -> tuple[int, int]:
        return self.rows, self.cols

    def human_slots(self) -> list[int]:
        return [
            i for i, spec in enumerate(self.agents)
            if spec.controller is Controller.HUMAN
        ]

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "rows": self.rows,
            "cols": self.cols,
            "tick_rate_ms": self.tick_rate_ms,
            "agents": [a.to_dict() for a in self.agents],
            "death_policy": self.death_policy.value,
            "block_reversal": self.block_reversal,
            "seed": self.seed,
        }

    @classmethod
    def from_dict(cls, raw: dict) -> VariantConfig:
        data = dict(raw)
        if "agents" in data:
            data["agents"] = tuple(AgentSpec.from_dict(a) for a in data["agents"])
        if "death_policy" in data:
            data["death_policy"] = DeathPolicy(data["death_policy"])
        return cls(**data)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> VariantConfig:
        """Load config from a JSON file."""
        return cls.from_dict(json.loads(Path(path).read_text()))


# (tick_rate_ms, death_policy) per variant; spawn layouts follow board size.
_VARIANT_TIMING: dict[str, tuple[int, DeathPolicy]] = {
    "solo": (200, DeathPolicy.HALT),
    "two-player": (150, DeathPolicy.RESPAWN),
    "ai": (100, DeathPolicy.RESPAWN),
    "user-vs-ai": (100, DeathPolicy.RESPAWN),
}


def _spawn_layout(name: str, rows: int, cols: int) -> tuple[AgentSpec, ...]:
    centre = (rows // 2, cols // 2)
    if name == "solo":
        return (AgentSpec(AgentKind.SNAKE, centre),)
    if name == "two-player":
        return (
            AgentSpec(AgentKind.PLAYER_ONE, (rows // 2, min(2, cols - 1))),
            AgentSpec(
                AgentKind.PLAYER_TWO, (rows // 2, max(cols - 3, 0)),
                Direction.LEFT,
            ),
        )
    if name == "ai":
        return (AgentSpec(AgentKind.SNAKE, centre, controller=Controller.AI),)
    return (
        AgentSpec(AgentKind.AI_SNAKE, centre, controller=Controller.AI),
        AgentSpec(AgentKind.USER_SNAKE, (rows - 1, cols - 1)),
    )


def get_variant(
    name: str,
    rows: int | None = None,
    cols: int | None = None,
    **overrides,
) -> VariantConfig:
    """Build the named preset, optionally resized, with *overrides* applied.

    Overrides whose value is ``None`` are ignored. Spawn points are laid out
    for the final board size.
    """
    if name not in _VARIANT_TIMING:
        raise KeyError(
            f"Unknown variant {name!r}. Expected one of {sorted(_VARIANT_TIMING)}."
        )
    tick_rate_ms, death_policy = _VARIANT_TIMING[name]
    rows = rows if rows is not None else 20
    cols = cols if cols is not None else 20
    if rows < 1 or cols < 1:
        raise ValueError("rows and cols must each be at least 1.")
    fields = {
        "name": name,
        "rows": rows,
        "cols": cols,
        "tick_rate_ms": tick_rate_ms,
        "agents": _spawn_layout(name, rows, cols),
        "death_policy": death_policy,
    }
    fields.update({k: v for k, v in overrides.items() if v is not None})
    return VariantConfig(**fields)


VARIANT_NAMES: tuple[str, ...] = tuple(_VARIANT_TIMING)
