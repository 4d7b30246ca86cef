"""Team experience, level thresholds and combat rewards."""

import math
from dataclasses import dataclass
from typing import Optional, Sequence

from ...core.data import CombatCharacter, LogLevel, Team
from ...core.engine.config import BalanceConfig
from ...core.events import EventManager, LevelUp, LogMessage


@dataclass(frozen=True)
class CombatRewards:
    exp: int
    gold: int


@dataclass
class ExperienceResult:
    """Outcome of ``gain_experience``."""
    team: Team
    levels_gained: int
    exp_needed: int


def exp_requirement(level: int, config: Optional[BalanceConfig] = None) -> int:
    """Experience needed to advance past ``level``: floor(100 * level^1.2)."""
    config = config or BalanceConfig()
    return math.floor(config.exp_base * level ** config.exp_curve)


def is_level_up_ready(team: Team, config: Optional[BalanceConfig] = None) -> bool:
    return team.team_exp >= exp_requirement(team.team_level, config)


def gain_experience(
    team: Team,
    exp: int,
    config: Optional[BalanceConfig] = None,
    event_manager: Optional[EventManager] = None,
) -> ExperienceResult:
    """Add experience and level up as many times as the total allows.

    Leftover experience carries over into the next level.

    Args:
        team: Team to credit; not modified
        exp: Experience gained
        config: Balance config
        event_manager: Receives a LevelUp event per level gained

    Returns:
        ExperienceResult with the updated team copy
    """
    config = config or BalanceConfig()
    updated = team.copy()
    updated.team_exp += exp

    levels_gained = 0
    while updated.team_exp >= exp_requirement(updated.team_level, config):
        updated.team_exp -= exp_requirement(updated.team_level, config)
        updated.team_level += 1
        levels_gained += 1
        if event_manager is not None:
            event_manager.publish(LevelUp(turn=0, team_id=updated.id, new_level=updated.team_level), source="Progression")

    if event_manager is not None and levels_gained:
        event_manager.publish(
            LogMessage(
                turn=0,
                message=f"{updated.name} reached level {updated.team_level}",
                category="PROGRESSION",
                level=LogLevel.INFO,
                source="Progression",
            ),
            source="Progression",
        )

    return ExperienceResult(
        team=updated,
        levels_gained=levels_gained,
        exp_needed=exp_requirement(updated.team_level, config) - updated.team_exp,
    )


def calculate_combat_rewards(
    enemies: Sequence[CombatCharacter],
    turns_taken: int,
    config: Optional[BalanceConfig] = None,
) -> CombatRewards:
    """Experience and gold for a won battle.

    exp = 50 + 10 per enemy level, boosted for quick clears; gold is half
    the experience.
    """
    config = config or BalanceConfig()
    exp: float = config.combat_base_exp + sum(e.level * config.combat_exp_per_enemy_level for e in enemies)

    for max_turns, multiplier in config.fast_clear_bonus:
        if turns_taken <= max_turns:
            exp *= multiplier
            break

    exp_reward = math.floor(exp)
    return CombatRewards(exp=exp_reward, gold=math.floor(exp_reward * config.gold_ratio))
