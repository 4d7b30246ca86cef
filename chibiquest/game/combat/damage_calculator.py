"""
Damage calculation.

    base = atk * skill_multiplier * element_multiplier * (1 + storyness * 0.01)
    reduction = defense / (defense + 500)      # def for physical, res for magical
    final = floor(base * (1 - reduction) * (crit_dmg if critical else 1)), min 1

Single hits are computed with scalar math; area attacks compute every target
in one numpy pass.
"""
import math
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from ...core.data import CombatCharacter, DamageType, Skill
from ...core.engine.config import BalanceConfig
from .element_table import ElementMatchupTable


@dataclass(frozen=True)
class DamageRoll:
    """Outcome of one damage application."""
    damage: int
    is_critical: bool
    element_multiplier: float = 1.0


@dataclass(frozen=True)
class DamageForecast:
    """Deterministic damage preview for one attacker/defender/skill triple."""
    normal_damage: int
    critical_damage: int
    crit_chance: float
    element_multiplier: float


class DamageCalculator:
    """Applies the damage formula."""

    def __init__(self, config: Optional[BalanceConfig] = None, element_table: Optional[ElementMatchupTable] = None):
        self.config = config or BalanceConfig()
        self.element_table = element_table or ElementMatchupTable(self.config)

    def calculate_base_damage(self, attacker: CombatCharacter, defender: CombatCharacter, skill_multiplier: float) -> float:
        """Damage before defenses and critical hits."""
        element_multiplier = self.element_table.multiplier(attacker.element, defender.element)
        return (
            attacker.final_stats.atk
            * skill_multiplier
            * element_multiplier
            * self._storyness_factor(attacker)
        )

    @staticmethod
    def calculate_reduction(defense_stat: float, constant: float) -> float:
        """Fraction of damage blocked by a defensive stat."""
        return defense_stat / (defense_stat + constant)

    def defense_reduction(self, defender: CombatCharacter, damage_type: DamageType) -> float:
        if damage_type is DamageType.PHYSICAL:
            return self.calculate_reduction(defender.final_stats.defense, self.config.defense_constant)
        return self.calculate_reduction(defender.final_stats.res, self.config.resistance_constant)

    def calculate_final_damage(
        self,
        base_damage: float,
        defender: CombatCharacter,
        damage_type: DamageType,
        is_critical: bool = False,
        crit_damage: float = 1.0,
    ) -> int:
        """Apply defenses and the critical multiplier.

        Args:
            base_damage: Output of ``calculate_base_damage``
            defender: Character taking the hit
            damage_type: Selects defense (physical) or resistance (magical)
            is_critical: Whether the hit rolled a critical
            crit_damage: The attacker's critical damage multiplier

        Returns:
            Damage as an integer, never below the configured minimum
        """
        damage = base_damage * (1 - self.defense_reduction(defender, damage_type))
        if is_critical:
            damage *= crit_damage
        return max(self.config.minimum_damage, math.floor(damage))

    def roll_damage(
        self,
        attacker: CombatCharacter,
        defender: CombatCharacter,
        skill: Skill,
        rng: np.random.Generator,
    ) -> DamageRoll:
        """Full damage pipeline for one target, including the critical roll."""
        is_critical = bool(rng.random() < attacker.final_stats.crit_rate)
        base = self.calculate_base_damage(attacker, defender, skill.multiplier)
        damage = self.calculate_final_damage(
            base, defender, skill.damage_type, is_critical, attacker.final_stats.crit_dmg
        )
        return DamageRoll(
            damage=damage,
            is_critical=is_critical,
            element_multiplier=self.element_table.multiplier(attacker.element, defender.element),
        )

    def roll_area_damage(
        self,
        attacker: CombatCharacter,
        defenders: Sequence[CombatCharacter],
        skill: Skill,
        rng: np.random.Generator,
    ) -> tuple[np.ndarray, np.ndarray]:
        """Independent damage rolls against several defenders in one pass.

        Returns:
            (damages, criticals): integer damage and boolean crit arrays,
            parallel to ``defenders``
        """
        count = len(defenders)
        if count == 0:
            return np.zeros(0, dtype=np.int64), np.zeros(0, dtype=bool)

        stats = attacker.final_stats
        element_multipliers = self.element_table.multipliers_against(attacker.element, [d.element for d in defenders])
        base = stats.atk * skill.multiplier * element_multipliers * self._storyness_factor(attacker)

        if skill.damage_type is DamageType.PHYSICAL:
            defenses = np.array([d.final_stats.defense for d in defenders], dtype=np.float64)
            constant = self.config.defense_constant
        else:
            defenses = np.array([d.final_stats.res for d in defenders], dtype=np.float64)
            constant = self.config.resistance_constant

        raw = base * (1 - defenses / (defenses + constant))
        criticals = rng.random(count) < stats.crit_rate
        raw = np.where(criticals, raw * stats.crit_dmg, raw)

        damages = np.maximum(self.config.minimum_damage, np.floor(raw)).astype(np.int64)
        return damages, criticals

    def forecast(self, attacker: CombatCharacter, defender: CombatCharacter, skill: Skill) -> DamageForecast:
        """Preview normal and critical damage without rolling."""
        base = self.calculate_base_damage(attacker, defender, skill.multiplier)
        return DamageForecast(
            normal_damage=self.calculate_final_damage(base, defender, skill.damage_type),
            critical_damage=self.calculate_final_damage(
                base, defender, skill.damage_type, True, attacker.final_stats.crit_dmg
            ),
            crit_chance=attacker.final_stats.crit_rate,
            element_multiplier=self.element_table.multiplier(attacker.element, defender.element),
        )

    def _storyness_factor(self, attacker: CombatCharacter) -> float:
        return 1 + attacker.storyness * self.config.storyness_damage_bonus
