"""
Adventure run helpers.

Generates the node sequence of a dungeon run, heals the party at rest nodes
and rates team strength. Routing between nodes belongs to the caller.
"""

from typing import Optional

import numpy as np

from ...core.data import AdventureNode, CombatCharacter, Dungeon, NodeType, Team
from ...core.engine.config import BalanceConfig
from ...core.events import EventEmitter, EventManager, NodesGenerated

# Weight of each stat (plus storyness) in the power rating
POWER_WEIGHTS = {
    "hp": 0.5,
    "atk": 10,
    "defense": 5,
    "res": 5,
    "spd": 3,
    "crit_rate": 1000,
    "crit_dmg": 500,
    "storyness": 10,
}


def calculate_power(character: CombatCharacter) -> float:
    """Single-number strength rating from final stats and storyness."""
    stats = character.final_stats
    return (
        stats.hp * POWER_WEIGHTS["hp"]
        + stats.atk * POWER_WEIGHTS["atk"]
        + stats.defense * POWER_WEIGHTS["defense"]
        + stats.res * POWER_WEIGHTS["res"]
        + stats.spd * POWER_WEIGHTS["spd"]
        + stats.crit_rate * POWER_WEIGHTS["crit_rate"]
        + stats.crit_dmg * POWER_WEIGHTS["crit_dmg"]
        + character.storyness * POWER_WEIGHTS["storyness"]
    )


def calculate_team_power(team: Team) -> float:
    return sum(calculate_power(character) for character in team.characters)


class AdventureEngine(EventEmitter):
    """Node generation and between-battle upkeep for a dungeon run."""

    source_name = "AdventureEngine"

    def __init__(
        self,
        rng: np.random.Generator,
        config: Optional[BalanceConfig] = None,
        event_manager: Optional[EventManager] = None,
    ):
        super().__init__(event_manager)
        self.rng = rng
        self.config = config or BalanceConfig()

    def roll_node_type(self) -> NodeType:
        """Event, rest or combat, by the configured chances."""
        value = float(self.rng.random())
        if value < self.config.event_node_chance:
            return NodeType.EVENT
        if value < self.config.event_node_chance + self.config.rest_node_chance:
            return NodeType.REST
        return NodeType.COMBAT

    def generate_nodes(self, dungeon: Dungeon) -> list[AdventureNode]:
        """Roll the node sequence for a dungeon run.

        Returns:
            ``num_nodes - 1`` rolled nodes followed by the boss node

        Raises:
            ValueError: If the dungeon has fewer than one node
        """
        if dungeon.num_nodes < 1:
            raise ValueError(f"Dungeon '{dungeon.id}' must have at least one node")

        nodes = [
            AdventureNode(id=f"{dungeon.id}_node_{i}", node_type=self.roll_node_type())
            for i in range(dungeon.num_nodes - 1)
        ]
        nodes.append(AdventureNode(id=f"{dungeon.id}_boss", node_type=NodeType.BOSS))

        self._publish(NodesGenerated(turn=0, dungeon_id=dungeon.id, node_types=tuple(n.node_type for n in nodes)))
        self._emit_log(f"Generated {len(nodes)} nodes for {dungeon.name}", category="GENERATION")
        return nodes

    def rest(self, team: Team) -> Team:
        """Heal every member by a share of max HP, capped at max HP."""
        rested = team.copy()
        for character in rested.characters:
            character.set_hp(character.current_hp + character.final_stats.hp * self.config.rest_heal_ratio)
        self._emit_log(f"{team.name} rests and recovers", category="EVENT")
        return rested
