"""
Skill execution.

Resolves one skill use against a defending roster: picks targets, rolls
damage, lowers HP, grants survivors energy and produces the combat log
entries. The executor mutates the defenders it is given; the turn scheduler
only ever hands it working copies.
"""

from typing import Optional, Sequence

import numpy as np

from ...core.data import ActionType, CombatCharacter, Side, Skill, TargetType
from ...core.engine.actions import CombatAction
from ...core.engine.config import BalanceConfig
from ...core.events import ActionResolved, CombatantDefeated, EventEmitter, EventManager
from .damage_calculator import DamageCalculator
from .target_selector import TargetSelector


class SkillExecutor(EventEmitter):
    """Applies skills to defenders and records what happened."""

    source_name = "SkillExecutor"

    def __init__(
        self,
        rng: np.random.Generator,
        config: Optional[BalanceConfig] = None,
        event_manager: Optional[EventManager] = None,
        damage_calculator: Optional[DamageCalculator] = None,
        target_selector: Optional[TargetSelector] = None,
    ):
        super().__init__(event_manager)
        self.rng = rng
        self.config = config or BalanceConfig()
        self.damage_calculator = damage_calculator or DamageCalculator(self.config)
        self.target_selector = target_selector or TargetSelector(rng)

    def execute(
        self,
        attacker: CombatCharacter,
        defenders: Sequence[CombatCharacter],
        skill: Skill,
        turn: int,
        action_type: ActionType = ActionType.ATTACK,
        defender_side: Side = Side.ENEMY,
    ) -> list[CombatAction]:
        """Use ``skill`` against ``defenders``.

        Args:
            attacker: Acting character
            defenders: Opposing roster; living members may be damaged in place
            skill: Skill being used
            turn: Current battle turn
            action_type: Log type for the main entry (attack or ultimate)
            defender_side: Side the defenders fight on, for defeat events

        Returns:
            The main action followed by a ``dead`` entry for each defender
            that fell. A roster with nobody alive yields a single no-op entry.
        """
        if skill.target_type is TargetType.ALL:
            actions = self._execute_area(attacker, defenders, skill, turn, action_type, defender_side)
        else:
            target = self.target_selector.select(defenders, skill.target_type)
            if target is None:
                actions = [self._no_target(attacker, turn, action_type)]
            else:
                actions = self._execute_single(attacker, target, skill, turn, action_type, defender_side)

        for action in actions:
            self._publish(ActionResolved(turn=turn, action=action))
        return actions

    def _execute_single(
        self,
        attacker: CombatCharacter,
        target: CombatCharacter,
        skill: Skill,
        turn: int,
        action_type: ActionType,
        defender_side: Side,
    ) -> list[CombatAction]:
        roll = self.damage_calculator.roll_damage(attacker, target, skill, self.rng)
        target.set_hp(target.current_hp - roll.damage)
        if target.is_alive:
            target.gain_energy(self.config.energy_per_damaged)

        actions = [
            CombatAction(
                turn=turn,
                actor_id=attacker.id,
                actor_name=attacker.name,
                action_type=action_type,
                target_id=target.id,
                target_name=target.name,
                damage=roll.damage,
                is_critical=roll.is_critical,
            )
        ]
        if not target.is_alive:
            actions.append(self._defeated(target, attacker, turn, defender_side))
        return actions

    def _execute_area(
        self,
        attacker: CombatCharacter,
        defenders: Sequence[CombatCharacter],
        skill: Skill,
        turn: int,
        action_type: ActionType,
        defender_side: Side,
    ) -> list[CombatAction]:
        targets = TargetSelector.living(defenders)
        if not targets:
            return [self._no_target(attacker, turn, action_type)]

        damages, criticals = self.damage_calculator.roll_area_damage(attacker, targets, skill, self.rng)
        current_hps = np.array([t.current_hp for t in targets], dtype=np.float64)
        new_hps = np.maximum(0, current_hps - damages)
        surviving_mask = new_hps > 0

        effects = [f"hit {len(targets)} targets"]
        for i, target in enumerate(targets):
            target.set_hp(float(new_hps[i]))
            if surviving_mask[i]:
                target.gain_energy(self.config.energy_per_damaged)
            effects.append(f"{target.name} -{int(damages[i])}")

        actions = [
            CombatAction(
                turn=turn,
                actor_id=attacker.id,
                actor_name=attacker.name,
                action_type=action_type,
                target_name="all foes",
                damage=int(damages.sum()),
                is_critical=bool(np.any(criticals)),
                effects=tuple(effects),
            )
        ]
        for i in np.where(~surviving_mask)[0]:
            actions.append(self._defeated(targets[i], attacker, turn, defender_side))
        return actions

    def _defeated(
        self,
        target: CombatCharacter,
        attacker: CombatCharacter,
        turn: int,
        defender_side: Side,
    ) -> CombatAction:
        self._publish(CombatantDefeated(turn=turn, character=target.copy(), side=defender_side, defeated_by=attacker.id))
        return CombatAction(
            turn=turn,
            actor_id=target.id,
            actor_name=target.name,
            action_type=ActionType.DEAD,
            effects=(f"defeated by {attacker.name}",),
        )

    @staticmethod
    def _no_target(attacker: CombatCharacter, turn: int, action_type: ActionType) -> CombatAction:
        return CombatAction(
            turn=turn,
            actor_id=attacker.id,
            actor_name=attacker.name,
            action_type=action_type,
            effects=("no target",),
        )
