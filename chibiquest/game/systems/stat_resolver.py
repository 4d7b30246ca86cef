"""Final stat resolution.

Turns a character's base stats into combat-ready final stats:

    with_growth = base * (1 + growth_percent / 100)
    final = (with_growth + fixed) * (1 + percent) + persistent bonuses

``percent`` is the sum, per stat, of every applicable percentage modifier:
the leader skill, carried event cards, traits, active effects and the
dungeon affinity bonus. Modifiers are summed once, never compounded, so
resolving twice gives the same result.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from ...core.data import (
    BaseStats,
    CombatCharacter,
    ModifierKind,
    Stat,
    StatModifier,
    Team,
)
from ...core.engine.config import BalanceConfig
from ..entities.character import grown_stats
from ..entities.team import get_leader

_STAT_INDEX = {stat: i for i, stat in enumerate(Stat.fields())}
_CRIT_RATE = _STAT_INDEX[Stat.CRIT_RATE]


@dataclass
class ModifierTotals:
    """Per-stat sums of percentage and flat modifiers."""
    percent: np.ndarray
    fixed: np.ndarray

    @classmethod
    def zero(cls) -> "ModifierTotals":
        size = len(_STAT_INDEX)
        return cls(percent=np.zeros(size), fixed=np.zeros(size))

    def add(self, modifier: StatModifier) -> None:
        target = self.percent if modifier.kind is ModifierKind.PERCENT else self.fixed
        for stat in modifier.targets():
            target[_STAT_INDEX[stat]] += modifier.value


class StatResolver:
    """Computes final stats for characters in the context of their team."""

    def __init__(self, config: Optional[BalanceConfig] = None):
        self.config = config or BalanceConfig()

    def collect_modifiers(
        self,
        character: CombatCharacter,
        team: Team,
        dungeon_id: Optional[str] = None,
    ) -> list[StatModifier]:
        """Every modifier that applies to ``character``, conditions checked."""
        candidates: list[StatModifier] = []

        leader_skill = get_leader(team).card.leader_skill
        if leader_skill is not None:
            candidates.extend(leader_skill.effects)
        for card in team.event_cards:
            candidates.extend(card.stat_modifiers())
        for trait in character.traits:
            candidates.extend(trait.stat_modifiers)
        for effect in character.active_effects:
            candidates.extend(effect.stat_modifiers)

        modifiers = [m for m in candidates if m.applies_to(character.element, character.job)]

        if dungeon_id is not None:
            affinity = character.card.dungeon_affinities.get(dungeon_id)
            if affinity is not None:
                bonus = self.config.affinity_bonus.get(affinity, 0.0)
                modifiers.append(StatModifier(Stat.ALL, ModifierKind.PERCENT, bonus))

        return modifiers

    def resolve(
        self,
        character: CombatCharacter,
        team: Team,
        dungeon_id: Optional[str] = None,
    ) -> BaseStats:
        """Compute a fresh final stat snapshot.

        Args:
            character: Character to resolve; not modified
            team: The character's team (leader skill and event cards)
            dungeon_id: Current dungeon, for the affinity bonus

        Returns:
            Final stats, floored at zero with crit rate capped at 1

        Raises:
            InvalidTeamError: If the team's leader is not on the roster
        """
        totals = ModifierTotals.zero()
        for modifier in self.collect_modifiers(character, team, dungeon_id):
            totals.add(modifier)

        with_growth = grown_stats(character.card).to_array()
        final = (with_growth + totals.fixed) * (1 + totals.percent) + character.stat_bonuses.to_array()

        final = np.maximum(final, 0.0)
        final[_CRIT_RATE] = min(final[_CRIT_RATE], 1.0)
        return BaseStats.from_array(final)

    def resolve_team(self, team: Team, dungeon_id: Optional[str] = None) -> Team:
        """Return a copy of ``team`` with every member's final stats resolved.

        Current HP is kept but clamped to the new maximum.
        """
        resolved = team.copy()
        for original, member in zip(team.characters, resolved.characters):
            member.final_stats = self.resolve(original, team, dungeon_id)
            member.set_hp(member.current_hp)
        return resolved
