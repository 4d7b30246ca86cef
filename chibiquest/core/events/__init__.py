"""Event system for observing engine runs.

This package contains the event plumbing:
- event_manager.py: Queued publisher-subscriber bus and the EventEmitter mixin
- events.py: Event definitions published by engine components
"""

from .event_manager import EventManager, EventEmitter, EventPriority, QueuedEvent
from .events import (
    GameEvent,
    EventType,
    CombatStarted,
    TurnStarted,
    ActionResolved,
    CombatantDefeated,
    TurnResolved,
    BattleFinished,
    EnemiesGenerated,
    NodesGenerated,
    LevelUp,
    RewardApplied,
    EventApplied,
    LogMessage,
)

__all__ = [
    "EventManager",
    "EventEmitter",
    "EventPriority",
    "QueuedEvent",
    "GameEvent",
    "EventType",
    "CombatStarted",
    "TurnStarted",
    "ActionResolved",
    "CombatantDefeated",
    "TurnResolved",
    "BattleFinished",
    "EnemiesGenerated",
    "NodesGenerated",
    "LevelUp",
    "RewardApplied",
    "EventApplied",
    "LogMessage",
]
