"""Combat character factories.

Characters enter an adventure or battle only through these factories: player
cards via ``create_combat_character`` and enemies via ``create_enemy``. Enemy
instances are built field by field from a template rather than deep-copied.
"""

from dataclasses import replace
from typing import Mapping, Optional

import numpy as np

from ...core.data import BaseStats, CharacterCard, CombatCharacter, Position, Stat


def grown_stats(card: CharacterCard) -> BaseStats:
    """Base stats with the card's growth percentage applied."""
    return BaseStats.from_array(card.base_stats.to_array() * (1 + card.growth_percent / 100))


def scale_vector(scale: Mapping[Stat, float]) -> np.ndarray:
    """Per-stat factors as a vector; stats not named keep factor 1."""
    return np.array([scale.get(stat, 1.0) for stat in Stat.fields()], dtype=np.float64)


def create_combat_character(
    card: CharacterCard,
    position: Position,
    final_stats: Optional[BaseStats] = None,
) -> CombatCharacter:
    """Bind a card to the formation at full HP and zero energy.

    Args:
        card: Character definition
        position: Formation row
        final_stats: Resolved stats; defaults to the card's grown base stats

    Returns:
        A fresh CombatCharacter
    """
    stats = final_stats if final_stats is not None else grown_stats(card)
    return CombatCharacter(
        card=card,
        position=position,
        final_stats=stats,
        current_hp=stats.hp,
    )


def create_enemy(
    template: CharacterCard,
    enemy_id: str,
    level: int,
    position: Position,
    stat_scale: Mapping[Stat, float],
    boss_scale: Optional[Mapping[Stat, float]] = None,
) -> CombatCharacter:
    """Instantiate an enemy from a character template.

    Args:
        template: Card the enemy is modelled on
        enemy_id: Unique id for this instance
        level: Enemy level
        position: Formation row
        stat_scale: Per-stat factors applied to the template's grown stats
        boss_scale: Extra per-stat factors applied after ``stat_scale``

    Returns:
        Enemy at full HP with no leader skill
    """
    vector = grown_stats(template).to_array() * scale_vector(stat_scale)
    if boss_scale:
        vector = vector * scale_vector(boss_scale)
    stats = BaseStats.from_array(vector)

    card = replace(template, id=enemy_id, level=level, exp=0, leader_skill=None)
    return CombatCharacter(card=card, position=position, final_stats=stats, current_hp=stats.hp)
