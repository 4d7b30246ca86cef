"""Combat systems.

This package contains the automated battle pipeline:
- element_table.py: Elemental matchup multipliers
- damage_calculator.py: Damage formula, critical rolls and vectorized area damage
- target_selector.py: Row-aware target picking
- skill_executor.py: Applies one skill use and produces combat log entries
- turn_scheduler.py: Speed ordering and the per-turn state machine
"""

from .element_table import ElementMatchupTable
from .damage_calculator import DamageCalculator, DamageRoll, DamageForecast
from .target_selector import TargetSelector
from .skill_executor import SkillExecutor
from .turn_scheduler import TurnScheduler, TurnResult, TurnPhase

__all__ = [
    "ElementMatchupTable",
    "DamageCalculator",
    "DamageRoll",
    "DamageForecast",
    "TargetSelector",
    "SkillExecutor",
    "TurnScheduler",
    "TurnResult",
    "TurnPhase",
]
