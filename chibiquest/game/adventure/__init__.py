"""Adventure systems.

This package contains dungeon-run helpers:
- adventure_engine.py: Node generation, rest healing and power rating
"""

from .adventure_engine import AdventureEngine, calculate_power, calculate_team_power, POWER_WEIGHTS

__all__ = [
    "AdventureEngine",
    "calculate_power",
    "calculate_team_power",
    "POWER_WEIGHTS",
]
