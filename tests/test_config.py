"""Tests for the variant configuration dataclasses."""

import json

import pytest

from snake_astar.config import (
    VARIANT_NAMES,
    AgentSpec,
    Controller,
    DeathPolicy,
    VariantConfig,
    get_variant,
)
from snake_astar.snake import AgentKind, Direction


class TestVariantConfig:
    def test_defaults(self):
        cfg = VariantConfig()
        assert cfg.dims == (20, 20)
        assert cfg.death_policy is DeathPolicy.HALT
        assert len(cfg.agents) == 1
        assert cfg.human_slots() == [0]

    def test_spawn_out_of_bounds(self):
        with pytest.raises(ValueError, match="outside"):
            VariantConfig(rows=5, cols=5, agents=(AgentSpec(AgentKind.SNAKE, (5, 0)),))

    def test_duplicate_spawns(self):
        with pytest.raises(ValueError, match="two agents"):
            VariantConfig(
                agents=(
                    AgentSpec(AgentKind.PLAYER_ONE, (1, 1)),
                    AgentSpec(AgentKind.PLAYER_TWO, (1, 1)),
                ),
            )

    def test_needs_agents(self):
        with pytest.raises(ValueError, match="at least one agent"):
            VariantConfig(agents=())

    def test_invalid_dims(self):
        with pytest.raises(ValueError, match="at least 1"):
            VariantConfig(rows=0)

    def test_invalid_tick_rate(self):
        with pytest.raises(ValueError, match="tick_rate_ms"):
            VariantConfig(tick_rate_ms=0)

    def test_to_dict(self):
        d = get_variant("user-vs-ai").to_dict()
        assert d["name"] == "user-vs-ai"
        assert d["agents"][0]["controller"] == "ai"
        assert d["agents"][1]["kind"] == "user_snake"
        assert d["death_policy"] == "respawn"
        json.dumps(d)

    def test_save_and_load(self, tmp_path):
        cfg = get_variant("two-player", rows=12, cols=14, seed=3)
        path = tmp_path / "variant.json"
        cfg.save(path)
        assert cfg == VariantConfig.load(path)

    def test_load_partial_file(self, tmp_path):
        path = tmp_path / "variant.json"
        path.write_text(json.dumps({
            "rows": 6,
            "cols": 6,
            "agents": [{"kind": "snake", "spawn": [1, 1], "controller": "ai"}],
        }))
        cfg = VariantConfig.load(path)
        assert cfg.agents[0].controller is Controller.AI
        assert cfg.agents[0].heading is Direction.RIGHT


class TestPresets:
    def test_names(self):
        assert set(VARIANT_NAMES) == {"solo", "two-player", "ai", "user-vs-ai"}

    def test_solo(self):
        cfg = get_variant("solo")
        assert cfg.tick_rate_ms == 200
        assert cfg.death_policy is DeathPolicy.HALT
        assert cfg.agents[0].spawn == (10, 10)

    def test_two_player(self):
        cfg = get_variant("two-player")
        assert cfg.tick_rate_ms == 150
        assert [a.spawn for a in cfg.agents] == [(10, 2), (10, 17)]
        assert [a.heading for a in cfg.agents] == [Direction.RIGHT, Direction.LEFT]
        assert cfg.human_slots() == [0, 1]

    def test_ai(self):
        cfg = get_variant("ai")
        assert cfg.tick_rate_ms == 100
        assert cfg.human_slots() == []

    def test_user_vs_ai(self):
        cfg = get_variant("user-vs-ai")
        assert cfg.agents[0].kind is AgentKind.AI_SNAKE
        assert cfg.agents[1].spawn == (19, 19)
        assert cfg.human_slots() == [1]

    def test_resized_spawns_follow_grid(self):
        cfg = get_variant("user-vs-ai", rows=6, cols=8)
        assert cfg.agents[0].spawn == (3, 4)
        assert cfg.agents[1].spawn == (5, 7)

    def test_overrides(self):
        cfg = get_variant("solo", tick_rate_ms=50, block_reversal=True, seed=None)
        assert cfg.tick_rate_ms == 50
        assert cfg.block_reversal is True
        assert cfg.seed is None

    def test_unknown_variant(self):
        with pytest.raises(KeyError, match="Unknown variant"):
            get_variant("battle-royale")
