"""
Turn scheduling.

Each call to ``execute_turn`` runs one full turn on a copy of the battle
state: turn start, every living combatant acts once in speed order, then turn
resolution checks whether the battle is over.

Ordering is a stable sort by descending speed over the player roster followed
by the enemy roster, so ties go to the player side and then to roster order.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

import numpy as np

from ...core.data import ActionType, CombatCharacter, Side
from ...core.engine.actions import CombatAction
from ...core.engine.combat_state import CombatState
from ...core.engine.config import BalanceConfig
from ...core.events import BattleFinished, EventEmitter, EventManager, TurnResolved, TurnStarted
from .skill_executor import SkillExecutor


class TurnPhase(Enum):
    """Phases of a simulated turn."""
    TURN_RESOLVED = auto()
    BATTLE_FINISHED = auto()


@dataclass
class TurnResult:
    """Outcome of one ``execute_turn`` call."""
    state: CombatState
    actions: list[CombatAction]
    phase: TurnPhase


class TurnScheduler(EventEmitter):
    """Drives battles one turn at a time."""

    source_name = "TurnScheduler"

    def __init__(
        self,
        rng: np.random.Generator,
        config: Optional[BalanceConfig] = None,
        event_manager: Optional[EventManager] = None,
        skill_executor: Optional[SkillExecutor] = None,
    ):
        super().__init__(event_manager)
        self.config = config or BalanceConfig()
        self.skill_executor = skill_executor or SkillExecutor(rng, self.config, event_manager)

    @staticmethod
    def order_combatants(state: CombatState) -> list[tuple[Side, CombatCharacter]]:
        """Everyone in the battle, fastest first."""
        entries = [(Side.PLAYER, c) for c in state.player_team] + [(Side.ENEMY, c) for c in state.enemy_team]
        return sorted(entries, key=lambda entry: -entry[1].final_stats.spd)

    @staticmethod
    def check_battle_end(state: CombatState) -> tuple[bool, Optional[Side]]:
        """Whether one roster is wiped out, and which side won if so."""
        if state.is_eliminated(Side.PLAYER):
            return True, Side.ENEMY
        if state.is_eliminated(Side.ENEMY):
            return True, Side.PLAYER
        return False, None

    def execute_turn(self, state: CombatState) -> TurnResult:
        """Simulate one turn.

        Args:
            state: Current battle state; not modified

        Returns:
            TurnResult holding the advanced state and this turn's actions.
            A finished battle is returned unchanged with no actions.
        """
        working = state.copy()
        if working.is_finished:
            return TurnResult(working, [], TurnPhase.BATTLE_FINISHED)

        turn = working.turn
        self._publish(TurnStarted(turn=turn))

        actions: list[CombatAction] = []
        for side, actor in self.order_combatants(working):
            if not actor.is_alive:
                continue
            opponent = side.opponent
            if working.is_eliminated(opponent):
                continue
            actions.extend(self._act(actor, working.roster(opponent), turn, opponent))

        self._tick_effects(working)
        working.action_log.extend(actions)
        self._publish(TurnResolved(turn=turn, actions_taken=len(actions)))

        finished, winner = self.check_battle_end(working)
        timed_out = False
        if not finished:
            working.turn += 1
            if working.turn > working.max_turns:
                finished, winner, timed_out = True, Side.ENEMY, True

        if not finished:
            return TurnResult(working, actions, TurnPhase.TURN_RESOLVED)

        working.is_finished = True
        working.winner = winner
        self._publish(BattleFinished(turn=turn, winner=winner, timed_out=timed_out))
        return TurnResult(working, actions, TurnPhase.BATTLE_FINISHED)

    def run_to_completion(self, state: CombatState) -> CombatState:
        """Execute turns until the battle is finished."""
        current = state
        while not current.is_finished:
            current = self.execute_turn(current).state
        return current

    def _act(
        self,
        actor: CombatCharacter,
        defenders: list[CombatCharacter],
        turn: int,
        defender_side: Side,
    ) -> list[CombatAction]:
        if actor.ultimate_ready:
            actor.current_energy = 0
            return self.skill_executor.execute(
                actor, defenders, actor.card.ultimate_skill, turn, ActionType.ULTIMATE, defender_side
            )

        actor.gain_energy(self.config.energy_per_action)
        return self.skill_executor.execute(
            actor, defenders, actor.card.normal_skill, turn, ActionType.ATTACK, defender_side
        )

    @staticmethod
    def _tick_effects(state: CombatState) -> None:
        for character in state.player_team + state.enemy_team:
            if character.is_alive and character.active_effects:
                ticked = (effect.tick() for effect in character.active_effects)
                character.active_effects = [effect for effect in ticked if effect is not None]
