"""Procedural enemy rosters for adventure nodes."""

from typing import Optional, Sequence

import numpy as np

from ...core.data import CharacterCard, CombatCharacter, NodeType, Position
from ...core.engine.config import BalanceConfig
from ...core.engine.rng import random_choice, random_int
from ...core.events import EnemiesGenerated, EventEmitter, EventManager
from ...core.exceptions import MissingDataError
from ..entities.character import create_enemy


class EnemyGenerator(EventEmitter):
    """Builds enemy rosters from character templates.

    Enemies are weaker copies of templates: stats are scaled per field, and
    bosses get an extra HP and attack boost plus a level bonus.
    """

    source_name = "EnemyGenerator"

    def __init__(
        self,
        rng: np.random.Generator,
        config: Optional[BalanceConfig] = None,
        event_manager: Optional[EventManager] = None,
    ):
        super().__init__(event_manager)
        self.rng = rng
        self.config = config or BalanceConfig()

    def enemy_count(self, node_type: NodeType) -> int:
        low, high = self.config.boss_enemy_count if node_type is NodeType.BOSS else self.config.enemy_count
        return random_int(self.rng, low, high)

    def generate(
        self,
        node_type: NodeType,
        team_level: int,
        templates: Sequence[CharacterCard],
        node_id: str = "node",
    ) -> list[CombatCharacter]:
        """Generate the enemy roster for a combat or boss node.

        Args:
            node_type: COMBAT or BOSS
            team_level: Player team level; enemies match it (+bonus for bosses)
            templates: Pool of character cards to draw from, with repeats
            node_id: Used to build unique enemy ids

        Returns:
            Enemies with the first ones in the front row

        Raises:
            MissingDataError: If the template pool is empty
            ValueError: If the node type does not involve combat
        """
        if node_type not in (NodeType.COMBAT, NodeType.BOSS):
            raise ValueError(f"{node_type.name} nodes have no enemies")
        if not templates:
            raise MissingDataError("enemy template pool", node_id)

        is_boss = node_type is NodeType.BOSS
        level = team_level + (self.config.boss_level_bonus if is_boss else 0)
        count = self.enemy_count(node_type)

        enemies = []
        for i in range(count):
            template = random_choice(self.rng, templates)
            position = Position.FRONT if i < self.config.enemy_front_row_size else Position.BACK
            enemies.append(
                create_enemy(
                    template,
                    enemy_id=f"enemy_{node_id}_{i}",
                    level=level,
                    position=position,
                    stat_scale=self.config.enemy_stat_scale,
                    boss_scale=self.config.boss_stat_scale if is_boss else None,
                )
            )

        self._publish(EnemiesGenerated(turn=0, node_type=node_type, enemy_ids=tuple(e.id for e in enemies), level=level))
        self._emit_log(
            f"Generated {count} level {level} enemies for {node_type.value} node {node_id}",
            category="GENERATION",
        )
        return enemies
