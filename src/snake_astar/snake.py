"""Snake agents: headings, identity tags, and the immutable body value."""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace

Coord = tuple[int, int]


class Direction(enum.Enum):
    """Cardinal movement directions with (row_delta, col_delta) values.

    Declaration order is the planner's neighbour expansion order.
    """

    UP = (-1, 0)
    DOWN = (1, 0)
    LEFT = (0, -1)
    RIGHT = (0, 1)

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    def apply(self, cell: Coord) -> Coord:
        """Return the neighbour of *cell* one step in this direction."""
        dr, dc = self.value
        return cell[0] + dr, cell[1] + dc

    @classmethod
    def between(cls, origin: Coord, neighbour: Coord) -> Direction:
        """Return the direction leading from *origin* to an adjacent cell."""
        delta = (neighbour[0] - origin[0], neighbour[1] - origin[1])
        try:
            return cls(delta)
        except ValueError:
            raise ValueError(
                f"{neighbour} is not 4-adjacent to {origin}."
            ) from None


# Pairs that would cause an instant 180° reversal.
_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class AgentKind(enum.IntEnum):
    """Identity tag of an agent, also its code on the board array.

    Codes start at 2 so they never clash with ``CellType.EMPTY`` and
    ``CellType.FOOD``.
    """

    SNAKE = 2
    PLAYER_ONE = 3
    PLAYER_TWO = 4
    AI_SNAKE = 5
    USER_SNAKE = 6


def _adjacent(a: Coord, b: Coord) -> bool:
    return abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1


@dataclass(frozen=True)
class Snake:
    """A snake represented as an ordered tuple of (row, col) body segments.

    The head is ``body[0]``; the tail is ``body[-1]``. Instances are
    immutable: movement produces a new snake.
    """

    kind: AgentKind
    body: tuple[Coord, ...]
    direction: Direction = Direction.RIGHT
    alive: bool = True

    def __post_init__(self) -> None:
        body = tuple((int(r), int(c)) for r, c in self.body)
        object.__setattr__(self, "body", body)
        if not body:
            raise ValueError("Snake body must contain at least one cell.")
        if len(set(body)) != len(body):
            raise ValueError("Snake body cells must be pairwise distinct.")
        for prev, nxt in zip(body, body[1:]):
            if not _adjacent(prev, nxt):
                raise ValueError(
                    f"Snake body cells {prev} and {nxt} are not 4-adjacent."
                )

    @property
    def head(self) -> Coord:
        """Return the head coordinate."""
        return self.body[0]

    def __len__(self) -> int:
        return len(self.body)

    def next_head(self, direction: Direction | None = None) -> Coord:
        """Compute the next head position without moving."""
        return (direction or self.direction).apply(self.head)

    def advance(self, direction: Direction, grow: bool = False) -> Snake:
        """Return the snake moved one step in *direction*.

        The tail is retained when *grow* is set, dropped otherwise.
        """
        new_head = direction.apply(self.head)
        kept = self.body if grow else self.body[:-1]
        return replace(self, body=(new_head, *kept), direction=direction)

    def kill(self) -> Snake:
        return replace(self, alive=False)

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {
            "kind": self.kind.name.lower(),
            "body": [list(seg) for seg in self.body],
            "direction": self.direction.name.lower(),
            "alive": self.alive,
        }
