"""
Combat orchestration.

The CombatManager strings the combat systems together for one battle:
resolve the player roster's final stats, run turns until the battle ends,
then write the results back onto the team and credit rewards on a win.
Each step is also callable on its own for callers that drive turns
themselves.
"""
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from ...core.data import CombatCharacter, Side, Team
from ...core.engine.combat_state import CombatState
from ...core.engine.config import BalanceConfig
from ...core.events import CombatStarted, EventEmitter, EventManager
from ...core.exceptions import InvalidTeamError
from ..combat.turn_scheduler import TurnScheduler
from ..entities.team import validate_team
from ..systems.progression import CombatRewards, ExperienceResult, calculate_combat_rewards, gain_experience
from ..systems.stat_resolver import StatResolver


@dataclass
class BattleReport:
    """Everything a finished battle produced."""
    state: CombatState
    team: Team
    rewards: Optional[CombatRewards] = None
    experience: Optional[ExperienceResult] = None

    @property
    def victory(self) -> bool:
        return self.state.winner is Side.PLAYER


class CombatManager(EventEmitter):
    """Runs battles between a team and an enemy roster."""

    source_name = "CombatManager"

    def __init__(
        self,
        rng: np.random.Generator,
        config: Optional[BalanceConfig] = None,
        event_manager: Optional[EventManager] = None,
    ):
        super().__init__(event_manager)
        self.config = config or BalanceConfig()
        self.stat_resolver = StatResolver(self.config)
        self.scheduler = TurnScheduler(rng, self.config, event_manager)

    def start_combat(
        self,
        team: Team,
        enemies: Sequence[CombatCharacter],
        dungeon_id: Optional[str] = None,
    ) -> CombatState:
        """Build the opening battle state.

        Player stats are resolved for the dungeon; everyone starts with zero
        energy and, when configured, the player side starts at full HP.

        Raises:
            InvalidTeamError: If the team breaks a roster invariant or there
                are no enemies
        """
        validate_team(team)
        if not enemies:
            raise InvalidTeamError("Cannot start a battle without enemies")

        players = self.stat_resolver.resolve_team(team, dungeon_id).characters
        for player in players:
            if self.config.full_heal_on_start:
                player.current_hp = player.final_stats.hp
            player.current_energy = 0

        opponents = [enemy.copy() for enemy in enemies]
        for enemy in opponents:
            enemy.current_energy = 0

        state = CombatState(player_team=players, enemy_team=opponents, max_turns=self.config.max_turns)
        self._publish(
            CombatStarted(
                turn=state.turn,
                player_ids=tuple(p.id for p in players),
                enemy_ids=tuple(e.id for e in opponents),
                max_turns=state.max_turns,
            )
        )
        self._emit_log(f"{team.name} engages {len(opponents)} enemies", turn=state.turn)
        return state

    def run_battle(self, state: CombatState) -> CombatState:
        """Execute turns until the battle ends, draining events after each."""
        current = state
        while not current.is_finished:
            current = self.scheduler.execute_turn(current).state
            if self.event_manager is not None:
                self.event_manager.process_events()
        return current

    def conclude_combat(self, team: Team, state: CombatState) -> BattleReport:
        """Write a finished battle back onto a copy of the team.

        Members keep their post-battle HP and resolved stats, energy resets,
        and a win credits experience and gold.
        """
        updated = team.copy()
        fighters = {fighter.id: fighter for fighter in state.player_team}
        for member in updated.characters:
            fighter = fighters.get(member.id)
            if fighter is not None:
                member.final_stats = fighter.final_stats
                member.current_hp = fighter.current_hp
            member.current_energy = 0

        if state.winner is not Side.PLAYER:
            return BattleReport(state=state, team=updated)

        rewards = calculate_combat_rewards(state.enemy_team, state.turn, self.config)
        experience = gain_experience(updated, rewards.exp, self.config, self.event_manager)
        self._emit_log(f"Victory: +{rewards.exp} exp, +{rewards.gold} gold", category="PROGRESSION")
        return BattleReport(state=state, team=experience.team, rewards=rewards, experience=experience)

    def fight(
        self,
        team: Team,
        enemies: Sequence[CombatCharacter],
        dungeon_id: Optional[str] = None,
    ) -> BattleReport:
        """Start, run and conclude a battle in one call."""
        state = self.run_battle(self.start_combat(team, enemies, dungeon_id))
        report = self.conclude_combat(team, state)
        if self.event_manager is not None:
            self.event_manager.process_events()
        return report
