"""Manager systems.

This package contains the classes that coordinate the engine systems and
observe them through the event-driven architecture:
- combat_manager.py: Runs a battle end to end and writes results back
- log_manager.py: Buffers categorized log output from the event bus
"""

from .combat_manager import CombatManager, BattleReport
from .log_manager import LogManager, LogLevel, LogCategory, LogEntry

__all__ = [
    "CombatManager",
    "BattleReport",
    "LogManager",
    "LogLevel",
    "LogCategory",
    "LogEntry",
]
