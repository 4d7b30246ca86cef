"""
Level-up reward generation and application.

A level-up offers three rewards. The first slot recruits a new character
when the roster has room and a candidate exists, otherwise it boosts a
member's stats. The other two slots favour upgrading a skill that is not yet
at max level and fall back to a stat boost.
"""

from dataclasses import replace
from typing import Optional, Sequence

import numpy as np

from ...core.data import (
    CharacterCard,
    LevelUpReward,
    MAX_TEAM_SIZE,
    Position,
    RecruitReward,
    SkillSlot,
    SkillUpgradeReward,
    Stat,
    StatBoostReward,
    Team,
)
from ...core.engine.config import BalanceConfig
from ...core.engine.rng import random_choice, random_int, roll
from ...core.events import EventEmitter, EventManager, RewardApplied
from ...core.exceptions import InvalidRewardError, InvalidTeamError
from ..entities.character import create_combat_character
from ..entities.team import get_member

REWARD_SLOTS = 3


class RewardGenerator(EventEmitter):
    """Rolls and applies level-up rewards."""

    source_name = "RewardGenerator"

    def __init__(
        self,
        rng: np.random.Generator,
        config: Optional[BalanceConfig] = None,
        event_manager: Optional[EventManager] = None,
    ):
        super().__init__(event_manager)
        self.rng = rng
        self.config = config or BalanceConfig()

    def generate(self, team: Team, available_recruits: Sequence[CharacterCard] = ()) -> list[LevelUpReward]:
        """Roll the three reward options for the team's current level.

        Args:
            team: Team that levelled up; not modified
            available_recruits: Cards that may join; members already on the
                roster are skipped

        Returns:
            Three reward options
        """
        level = team.team_level
        roster = set(team.member_ids())
        candidates = [card for card in available_recruits if card.id not in roster]

        rewards: list[LevelUpReward] = []
        if len(team.characters) < MAX_TEAM_SIZE and candidates:
            rewards.append(RecruitReward(reward_id=f"reward_{level}_1_recruit", card=random_choice(self.rng, candidates)))
        else:
            rewards.append(self._stat_boost(team, f"reward_{level}_1_stat", self.config.recruit_fallback_boost))

        for slot in range(2, REWARD_SLOTS + 1):
            member = random_choice(self.rng, team.characters)
            eligible = [s for s in SkillSlot if member.card.skill(s).can_level_up]
            if eligible and roll(self.rng, self.config.skill_upgrade_chance):
                skill_slot = random_choice(self.rng, eligible)
                rewards.append(
                    SkillUpgradeReward(
                        reward_id=f"reward_{level}_{slot}_skill",
                        character_id=member.id,
                        skill_slot=skill_slot,
                        new_level=member.card.skill(skill_slot).level + 1,
                    )
                )
            else:
                rewards.append(
                    self._stat_boost(team, f"reward_{level}_{slot}_stat", self.config.stat_boost_ranges, member.id)
                )

        return rewards

    def apply(self, team: Team, reward: LevelUpReward) -> Team:
        """Apply a chosen reward to a copy of the team.

        Raises:
            InvalidTeamError: If a recruit would overflow or duplicate the roster
            MissingDataError: If the reward names a character not on the roster
            InvalidRewardError: If a skill upgrade does not raise the skill
                exactly one level within its maximum
        """
        updated = team.copy()

        if isinstance(reward, RecruitReward):
            self._apply_recruit(updated, reward)
        elif isinstance(reward, SkillUpgradeReward):
            self._apply_skill_upgrade(updated, reward)
        elif isinstance(reward, StatBoostReward):
            member = get_member(updated, reward.character_id)
            member.final_stats = member.final_stats.add(reward.stats)
            member.stat_bonuses = member.stat_bonuses.add(reward.stats)
        else:
            raise InvalidRewardError(f"Unknown reward type: {type(reward).__name__}")

        self._publish(RewardApplied(turn=0, team_id=updated.id, reward=reward))
        self._emit_log(f"{updated.name} took reward {reward.reward_id}", category="PROGRESSION")
        return updated

    def _apply_recruit(self, team: Team, reward: RecruitReward) -> None:
        if len(team.characters) >= MAX_TEAM_SIZE:
            raise InvalidTeamError(f"Team '{team.id}' is full; cannot recruit '{reward.card.id}'")
        if team.find(reward.card.id) is not None:
            raise InvalidTeamError(f"'{reward.card.id}' is already on team '{team.id}'")

        position = Position.FRONT if len(team.characters) < self.config.front_row_size else Position.BACK
        team.characters.append(create_combat_character(reward.card, position))

    def _apply_skill_upgrade(self, team: Team, reward: SkillUpgradeReward) -> None:
        member = get_member(team, reward.character_id)
        skill = member.card.skill(reward.skill_slot)
        if reward.new_level != skill.level + 1 or reward.new_level > skill.max_level:
            raise InvalidRewardError(
                f"Cannot raise {member.name}'s {skill.name} from level {skill.level} to {reward.new_level}"
            )

        growth = (
            self.config.normal_skill_growth
            if reward.skill_slot is SkillSlot.NORMAL
            else self.config.ultimate_skill_growth
        )
        upgraded = replace(skill, level=reward.new_level, multiplier=skill.multiplier * growth)
        member.card = member.card.with_skill(reward.skill_slot, upgraded)

    def _stat_boost(
        self,
        team: Team,
        reward_id: str,
        ranges: dict[Stat, tuple[int, int]],
        character_id: Optional[str] = None,
    ) -> StatBoostReward:
        target = character_id or random_choice(self.rng, team.characters).id
        stats = {stat: float(random_int(self.rng, low, high)) for stat, (low, high) in ranges.items()}
        return StatBoostReward(reward_id=reward_id, character_id=target, stats=stats)
