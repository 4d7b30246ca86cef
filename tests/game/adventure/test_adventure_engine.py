"""
Unit tests for AdventureEngine node generation, resting and power rating.
"""

from dataclasses import replace
from unittest.mock import Mock

import pytest

from chibiquest.core.data import Dungeon, NodeType
from chibiquest.core.engine import BalanceConfig, make_rng
from chibiquest.core.events import EventType
from chibiquest.game.adventure import AdventureEngine, calculate_power, calculate_team_power


def dungeon(num_nodes=6):
    return Dungeon("crypt", "The Crypt", num_nodes)


class TestGenerateNodes:
    @pytest.mark.parametrize("num_nodes", [1, 2, 8])
    def test_ends_with_boss(self, rng, num_nodes):
        nodes = AdventureEngine(rng).generate_nodes(dungeon(num_nodes))

        assert len(nodes) == num_nodes
        assert nodes[-1].node_type is NodeType.BOSS
        assert nodes[-1].id == "crypt_boss"
        assert all(n.node_type is not NodeType.BOSS for n in nodes[:-1])

    def test_node_ids(self, rng):
        nodes = AdventureEngine(rng).generate_nodes(dungeon(4))

        assert [n.id for n in nodes] == ["crypt_node_0", "crypt_node_1", "crypt_node_2", "crypt_boss"]

    def test_rejects_empty_dungeon(self, rng):
        with pytest.raises(ValueError):
            AdventureEngine(rng).generate_nodes(dungeon(0))

    def test_same_seed_same_nodes(self):
        first = AdventureEngine(make_rng(3)).generate_nodes(dungeon(20))
        second = AdventureEngine(make_rng(3)).generate_nodes(dungeon(20))

        assert first == second

    def test_node_mix_follows_chances(self):
        engine = AdventureEngine(make_rng(99))

        types = [engine.roll_node_type() for _ in range(2000)]

        assert 0.25 < types.count(NodeType.EVENT) / 2000 < 0.35
        assert 0.07 < types.count(NodeType.REST) / 2000 < 0.13

    def test_all_combat_without_event_or_rest(self, rng):
        config = replace(BalanceConfig(), event_node_chance=0.0, rest_node_chance=0.0)

        nodes = AdventureEngine(rng, config).generate_nodes(dungeon(6))

        assert [n.node_type for n in nodes[:-1]] == [NodeType.COMBAT] * 5

    def test_publishes_nodes_generated(self, rng, event_manager):
        listener = Mock()
        event_manager.subscribe(EventType.NODES_GENERATED, listener)

        nodes = AdventureEngine(rng, event_manager=event_manager).generate_nodes(dungeon(3))
        event_manager.process_events()

        event = listener.call_args[0][0]
        assert event.dungeon_id == "crypt"
        assert event.node_types == tuple(n.node_type for n in nodes)


class TestRest:
    def test_heals_thirty_percent_capped(self, rng, character_factory, team_factory):
        team = team_factory([
            character_factory(card_id="low", hp=1000, current_hp=100),
            character_factory(card_id="high", hp=1000, current_hp=900),
        ])

        rested = AdventureEngine(rng).rest(team)

        assert rested.find("low").current_hp == pytest.approx(400)
        assert rested.find("high").current_hp == pytest.approx(1000)
        assert team.find("low").current_hp == 100


class TestPower:
    def test_weighted_sum(self, character_factory):
        character = character_factory(
            hp=1000, atk=100, defense=50, res=50, spd=100, crit_rate=0.1, crit_dmg=1.5
        )
        character.storyness = 2

        # 500 + 1000 + 250 + 250 + 300 + 100 + 750 + 20
        assert calculate_power(character) == pytest.approx(3170)

    def test_team_power_sums_members(self, sample_team):
        expected = sum(calculate_power(c) for c in sample_team.characters)

        assert calculate_team_power(sample_team) == pytest.approx(expected)
