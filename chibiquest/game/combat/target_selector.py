"""Row-aware target selection.

Single-target attacks hit a random living front-row defender, falling back to
the back row once the front row is down. Random-target skills ignore rows.
"""

from typing import Optional, Sequence

import numpy as np

from ...core.data import CombatCharacter, Position, TargetType
from ...core.engine.rng import random_choice


class TargetSelector:
    """Picks defenders using the injected RNG."""

    def __init__(self, rng: np.random.Generator):
        self.rng = rng

    @staticmethod
    def living(defenders: Sequence[CombatCharacter]) -> list[CombatCharacter]:
        return [d for d in defenders if d.is_alive]

    def select(
        self,
        defenders: Sequence[CombatCharacter],
        target_type: TargetType = TargetType.SINGLE,
    ) -> Optional[CombatCharacter]:
        """Pick one target, or None when no defender is alive.

        Area skills have no single target; callers use ``living`` for them.
        """
        if target_type is TargetType.RANDOM:
            return self.select_random(defenders)
        return self.select_row_target(defenders)

    def select_row_target(self, defenders: Sequence[CombatCharacter]) -> Optional[CombatCharacter]:
        alive = self.living(defenders)
        if not alive:
            return None

        for row in (Position.FRONT, Position.BACK):
            candidates = [d for d in alive if d.position is row]
            if candidates:
                return random_choice(self.rng, candidates)
        return None

    def select_random(self, defenders: Sequence[CombatCharacter]) -> Optional[CombatCharacter]:
        alive = self.living(defenders)
        if not alive:
            return None
        return random_choice(self.rng, alive)
