"""Battle state snapshot.

CombatState is threaded through every turn call; the turn scheduler copies it,
advances the copy and hands it back. Nothing else holds battle state.
"""

from dataclasses import dataclass, field
from typing import Optional

from ..data.data_structures import CombatCharacter
from ..data.game_enums import Side
from .actions import CombatAction


@dataclass
class CombatState:
    """Complete state of one battle."""

    player_team: list[CombatCharacter]
    enemy_team: list[CombatCharacter]
    max_turns: int
    turn: int = 1
    action_log: list[CombatAction] = field(default_factory=list)
    is_finished: bool = False
    winner: Optional[Side] = None

    def roster(self, side: Side) -> list[CombatCharacter]:
        return self.player_team if side is Side.PLAYER else self.enemy_team

    def living(self, side: Side) -> list[CombatCharacter]:
        return [character for character in self.roster(side) if character.is_alive]

    def is_eliminated(self, side: Side) -> bool:
        return not self.living(side)

    def copy(self) -> "CombatState":
        return CombatState(
            player_team=[character.copy() for character in self.player_team],
            enemy_team=[character.copy() for character in self.enemy_team],
            max_turns=self.max_turns,
            turn=self.turn,
            action_log=list(self.action_log),
            is_finished=self.is_finished,
            winner=self.winner,
        )
