"""Game systems.

This package contains the non-combat rules of an adventure:
- stat_resolver.py: Base stats + modifiers -> final stats
- enemy_generator.py: Procedural enemy rosters for combat and boss nodes
- progression.py: Experience thresholds, level-ups and combat rewards
- reward_generator.py: Level-up reward rolls and application
- event_resolver.py: Random event requirements, selection and results
"""

from .stat_resolver import StatResolver, ModifierTotals
from .enemy_generator import EnemyGenerator
from .progression import (
    CombatRewards,
    ExperienceResult,
    exp_requirement,
    is_level_up_ready,
    gain_experience,
    calculate_combat_rewards,
)
from .reward_generator import RewardGenerator
from .event_resolver import EventResolver, EventOutcome

__all__ = [
    "StatResolver",
    "ModifierTotals",
    "EnemyGenerator",
    "CombatRewards",
    "ExperienceResult",
    "exp_requirement",
    "is_level_up_ready",
    "gain_experience",
    "calculate_combat_rewards",
    "RewardGenerator",
    "EventResolver",
    "EventOutcome",
]
