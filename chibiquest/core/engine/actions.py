"""Combat log records.

A CombatAction is one line of the combat log: an attack, a skill or ultimate
use, or a combatant falling. The log is the engine's primary output stream.
"""

from dataclasses import dataclass
from typing import Optional

from ..data.game_enums import ActionType


@dataclass(frozen=True)
class CombatAction:
    """One resolved action in a battle."""

    turn: int
    actor_id: str
    actor_name: str
    action_type: ActionType
    target_id: Optional[str] = None
    target_name: Optional[str] = None
    damage: Optional[int] = None
    is_critical: Optional[bool] = None
    effects: tuple[str, ...] = ()

    def describe(self) -> str:
        """Human-readable one-liner for logs."""
        if self.action_type is ActionType.DEAD:
            return f"{self.actor_name} has fallen"

        verb = "unleashes an ultimate on" if self.action_type is ActionType.ULTIMATE else "attacks"
        if self.target_name is None:
            return f"{self.actor_name} finds no target"

        text = f"{self.actor_name} {verb} {self.target_name}"
        if self.damage is not None:
            text += f" for {self.damage} damage"
        if self.is_critical:
            text += " (critical!)"
        if self.effects:
            text += f" [{', '.join(self.effects)}]"
        return text
