"""Tests for the Snake module."""

import pytest

from snake_astar.snake import AgentKind, Direction, Snake


class TestDirection:
    def test_apply(self):
        assert Direction.UP.apply((2, 2)) == (1, 2)
        assert Direction.DOWN.apply((2, 2)) == (3, 2)
        assert Direction.LEFT.apply((2, 2)) == (2, 1)
        assert Direction.RIGHT.apply((2, 2)) == (2, 3)

    def test_opposite(self):
        assert Direction.UP.opposite is Direction.DOWN
        assert Direction.LEFT.opposite is Direction.RIGHT

    def test_between_adjacent(self):
        assert Direction.between((2, 2), (2, 3)) is Direction.RIGHT
        assert Direction.between((2, 2), (1, 2)) is Direction.UP

    def test_between_rejects_non_adjacent(self):
        with pytest.raises(ValueError, match="4-adjacent"):
            Direction.between((0, 0), (1, 1))

    def test_enumeration_order(self):
        assert list(Direction) == [
            Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT,
        ]


class TestSnakeInit:
    def test_single_cell(self):
        snake = Snake(AgentKind.SNAKE, ((5, 5),))
        assert snake.head == (5, 5)
        assert len(snake) == 1
        assert snake.alive
        assert snake.direction == Direction.RIGHT

    def test_body_is_normalised_to_tuple(self):
        snake = Snake(AgentKind.SNAKE, [(5, 5), (5, 4)])
        assert snake.body == ((5, 5), (5, 4))

    def test_empty_body_rejected(self):
        with pytest.raises(ValueError, match="at least one cell"):
            Snake(AgentKind.SNAKE, ())

    def test_duplicate_cells_rejected(self):
        with pytest.raises(ValueError, match="pairwise distinct"):
            Snake(AgentKind.SNAKE, ((1, 1), (1, 2), (1, 1)))

    def test_diagonal_body_rejected(self):
        with pytest.raises(ValueError, match="4-adjacent"):
            Snake(AgentKind.SNAKE, ((1, 1), (2, 2)))


class TestSnakeMovement:
    def test_next_head_uses_current_direction(self):
        snake = Snake(AgentKind.SNAKE, ((5, 5),), Direction.RIGHT)
        assert snake.next_head() == (5, 6)
        assert snake.next_head(Direction.UP) == (4, 5)

    def test_advance_without_growth(self):
        snake = Snake(AgentKind.SNAKE, ((5, 5), (5, 4), (5, 3)))
        moved = snake.advance(Direction.RIGHT)
        assert moved.body == ((5, 6), (5, 5), (5, 4))
        assert snake.body == ((5, 5), (5, 4), (5, 3))

    def test_advance_with_growth(self):
        snake = Snake(AgentKind.SNAKE, ((5, 5), (5, 4)))
        moved = snake.advance(Direction.DOWN, grow=True)
        assert moved.body == ((6, 5), (5, 5), (5, 4))
        assert moved.direction is Direction.DOWN

    def test_kill(self):
        snake = Snake(AgentKind.SNAKE, ((5, 5),))
        dead = snake.kill()
        assert not dead.alive
        assert dead.body == snake.body
        assert snake.alive


class TestSnakeSerialization:
    def test_to_dict(self):
        snake = Snake(AgentKind.USER_SNAKE, ((5, 5), (5, 4)))
        d = snake.to_dict()
        assert d["kind"] == "user_snake"
        assert d["body"] == [[5, 5], [5, 4]]
        assert d["direction"] == "right"
        assert d["alive"] is True
