"""Tests for food placement."""

import logging

import numpy as np
import pytest

from snake_astar.food import free_cells, place_food


class TestFreeCells:
    def test_all_free(self):
        assert len(free_cells((3, 4), [])) == 12

    def test_occupied_excluded(self):
        cells = free_cells((2, 2), [(0, 0), (1, 1)])
        assert cells == [(0, 1), (1, 0)]

    def test_out_of_bounds_occupancy_ignored(self):
        assert len(free_cells((2, 2), [(5, 5)])) == 4

    def test_invalid_dims(self):
        with pytest.raises(ValueError, match="at least 1"):
            free_cells((0, 3), [])


class TestPlaceFood:
    def test_never_on_occupied_cell(self):
        occupied = {(r, c) for r in range(5) for c in range(5) if (r + c) % 2}
        rng = np.random.default_rng(0)
        for _ in range(50):
            pos = place_food((5, 5), occupied, rng)
            assert pos is not None
            assert pos not in occupied

    def test_single_free_cell_chosen(self):
        occupied = [(0, 0), (0, 1), (1, 0)]
        assert place_food((2, 2), occupied, np.random.default_rng(3)) == (1, 1)

    def test_full_board_returns_none(self, caplog):
        occupied = [(r, c) for r in range(3) for c in range(3)]
        with caplog.at_level(logging.WARNING, logger="snake_astar.food"):
            assert place_food((3, 3), occupied, np.random.default_rng(0)) is None
        assert "No empty cells" in caplog.text

    def test_deterministic_with_seed(self):
        """Same seed produces the same food position."""
        a = place_food((10, 10), [(5, 5)], np.random.default_rng(42))
        b = place_food((10, 10), [(5, 5)], np.random.default_rng(42))
        assert a == b

    def test_default_rng(self):
        pos = place_food((4, 4), [])
        assert pos is not None
        assert 0 <= pos[0] < 4 and 0 <= pos[1] < 4

    def test_roughly_uniform(self):
        rng = np.random.default_rng(7)
        counts: dict[tuple[int, int], int] = {}
        for _ in range(4000):
            pos = place_food((2, 2), [], rng)
            counts[pos] = counts.get(pos, 0) + 1
        assert set(counts) == {(0, 0), (0, 1), (1, 0), (1, 1)}
        assert all(800 < n < 1200 for n in counts.values())
