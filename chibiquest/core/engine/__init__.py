"""Core engine components.

This package contains the fundamental engine plumbing:
- config.py: Balance constants loaded from YAML
- rng.py: Injectable numpy random generator helpers
- actions.py: CombatAction log records
- combat_state.py: Battle state snapshot threaded through turns
"""

from .config import BalanceConfig, load_balance_config, DEFAULT_BALANCE_PATH
from .rng import make_rng, random_int, random_choice, roll, weighted_choice
from .actions import CombatAction
from .combat_state import CombatState

__all__ = [
    "BalanceConfig",
    "load_balance_config",
    "DEFAULT_BALANCE_PATH",
    "make_rng",
    "random_int",
    "random_choice",
    "roll",
    "weighted_choice",
    "CombatAction",
    "CombatState",
]
