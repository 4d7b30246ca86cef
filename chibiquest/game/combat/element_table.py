"""Elemental matchups.

Fire, water and wind form a triangle (fire beats wind, wind beats water,
water beats fire). Light and dark counter each other both ways with a
stronger multiplier. Every other pairing is neutral.
"""

from typing import Optional, Sequence

import numpy as np

from ...core.data import Element
from ...core.engine.config import BalanceConfig

# attacker -> element it beats
TRIANGLE_ADVANTAGE = {
    Element.FIRE: Element.WIND,
    Element.WIND: Element.WATER,
    Element.WATER: Element.FIRE,
}

# The disadvantage relation is the mirror of the advantage relation
TRIANGLE_DISADVANTAGE = {beaten: attacker for attacker, beaten in TRIANGLE_ADVANTAGE.items()}

COUNTER_PAIR = frozenset({Element.LIGHT, Element.DARK})


class ElementMatchupTable:
    """Looks up damage multipliers between elements."""

    def __init__(self, config: Optional[BalanceConfig] = None):
        self.config = config or BalanceConfig()

    def multiplier(self, attacker: Element, defender: Element) -> float:
        """Damage multiplier for ``attacker`` hitting ``defender``."""
        if attacker is not defender and {attacker, defender} == COUNTER_PAIR:
            return self.config.light_dark_multiplier
        if TRIANGLE_ADVANTAGE.get(attacker) is defender:
            return self.config.advantage_multiplier
        if TRIANGLE_DISADVANTAGE.get(attacker) is defender:
            return self.config.disadvantage_multiplier
        return 1.0

    def multipliers_against(self, attacker: Element, defenders: Sequence[Element]) -> np.ndarray:
        """Multipliers against several defenders at once."""
        return np.array([self.multiplier(attacker, defender) for defender in defenders], dtype=np.float64)

    def has_advantage(self, attacker: Element, defender: Element) -> bool:
        return self.multiplier(attacker, defender) > 1.0
