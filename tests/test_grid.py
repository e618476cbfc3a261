"""Tests for the Grid module."""

import numpy as np
import pytest

from snake_astar.grid import CellType, Grid, render_board
from snake_astar.snake import AgentKind, Snake


class TestGridInit:
    def test_default_dimensions(self):
        grid = Grid()
        assert grid.rows == 20
        assert grid.cols == 20

    def test_custom_dimensions(self):
        grid = Grid(rows=8, cols=10)
        assert (grid.rows, grid.cols) == (8, 10)
        assert grid.cells.shape == (8, 10)

    def test_single_cell_grid_allowed(self):
        grid = Grid(rows=1, cols=1)
        assert grid.cells.shape == (1, 1)

    def test_minimum_size_enforced(self):
        with pytest.raises(ValueError, match="at least 1"):
            Grid(rows=0, cols=4)
        with pytest.raises(ValueError, match="at least 1"):
            Grid(rows=4, cols=0)

    def test_all_cells_start_empty(self):
        grid = Grid(rows=5, cols=5)
        assert np.all(grid.cells == CellType.EMPTY)


class TestGridOperations:
    def test_in_bounds(self):
        grid = Grid(rows=5, cols=4)
        assert grid.in_bounds(0, 0)
        assert grid.in_bounds(4, 3)
        assert not grid.in_bounds(-1, 0)
        assert not grid.in_bounds(0, 4)
        assert not grid.in_bounds(5, 0)

    def test_passable_mask_treats_food_as_passable(self):
        grid = Grid(rows=3, cols=3)
        grid.set(0, 0, AgentKind.PLAYER_ONE)
        grid.set(2, 2, CellType.FOOD)
        mask = grid.passable_mask()
        assert not mask[0, 0]
        assert mask[2, 2]
        assert mask.sum() == 8


class TestRenderBoard:
    def test_paints_agents_and_food(self):
        one = Snake(AgentKind.PLAYER_ONE, ((0, 1), (0, 0)))
        two = Snake(AgentKind.PLAYER_TWO, ((2, 2),))
        grid = render_board((3, 3), [one, two], (1, 1))
        assert grid.cells[0, 0] == AgentKind.PLAYER_ONE
        assert grid.cells[0, 1] == AgentKind.PLAYER_ONE
        assert grid.cells[2, 2] == AgentKind.PLAYER_TWO
        assert grid.cells[1, 1] == CellType.FOOD
        assert np.count_nonzero(grid.cells == CellType.EMPTY) == 5

    def test_dead_agents_not_painted(self):
        dead = Snake(AgentKind.SNAKE, ((1, 1),), alive=False)
        grid = render_board((3, 3), [dead], None)
        assert np.all(grid.cells == CellType.EMPTY)

    def test_later_agent_wins_overlap(self):
        first = Snake(AgentKind.AI_SNAKE, ((1, 1),))
        second = Snake(AgentKind.USER_SNAKE, ((1, 1),))
        grid = render_board((3, 3), [first, second], None)
        assert grid.cells[1, 1] == AgentKind.USER_SNAKE

    def test_rebuilt_from_scratch(self):
        snake = Snake(AgentKind.SNAKE, ((0, 0),))
        before = render_board((2, 2), [snake], None)
        after = render_board((2, 2), [snake.advance(snake.direction)], None)
        assert before.cells[0, 0] == AgentKind.SNAKE
        assert after.cells[0, 0] == CellType.EMPTY
        assert after.cells[0, 1] == AgentKind.SNAKE


class TestGridSerialization:
    def test_to_dict_structure(self):
        grid = Grid(rows=5, cols=6)
        d = grid.to_dict()
        assert d["rows"] == 5
        assert d["cols"] == 6
        assert len(d["cells"]) == 5
        assert len(d["cells"][0]) == 6

    def test_to_dict_reflects_state(self):
        grid = Grid(rows=4, cols=4)
        grid.set(1, 2, CellType.FOOD)
        assert grid.to_dict()["cells"][1][2] == CellType.FOOD
